from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .models import Document


class DocumentPayload(BaseModel):
	"""Document object as the registration API expects it (camelCase keys)"""
	model_config = ConfigDict(populate_by_name=True, frozen=True)

	oms_id: str = Field(alias="omsId")
	country: str
	product: str
	# Always emitted, null when unset
	description: Optional[str] = None
	serial_number: Optional[str] = Field(default=None, alias="serialNumber")

	@classmethod
	def from_domain(cls, doc: Document) -> "DocumentPayload":
		return cls(
			oms_id=doc.oms_id,
			country=doc.country,
			product=doc.product,
			description=doc.description,
			serial_number=doc.serial_number,
		)


class CreateDocumentRequest(BaseModel):
	"""Top-level request body: exactly `document` then `signature`"""
	model_config = ConfigDict(frozen=True)

	document: DocumentPayload
	signature: str

	@classmethod
	def build(cls, doc: Document, signature: str) -> "CreateDocumentRequest":
		return cls(document=DocumentPayload.from_domain(doc), signature=signature)

	def to_json(self) -> str:
		return self.model_dump_json(by_alias=True)

	def to_bytes(self) -> bytes:
		return self.to_json().encode("utf-8")
