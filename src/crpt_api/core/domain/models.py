from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional


@dataclass(frozen=True)
class DocumentOptions:
    """Optional document fields. Unset fields are sent as JSON null."""

    description: Optional[str] = None
    serial_number: Optional[str] = None


@dataclass(frozen=True)
class Document:
    oms_id: str
    country: str
    product: str
    description: Optional[str] = None
    serial_number: Optional[str] = None

    @property
    def options(self) -> DocumentOptions:
        return DocumentOptions(description=self.description, serial_number=self.serial_number)

    def with_options(self, options: DocumentOptions) -> "Document":
        return replace(self, description=options.description, serial_number=options.serial_number)

    @staticmethod
    def create(
        oms_id: str,
        country: str,
        product: str,
        options: DocumentOptions | None = None,
    ) -> "Document":
        opts = options or DocumentOptions()
        return Document(
            oms_id=oms_id,
            country=country,
            product=product,
            description=opts.description,
            serial_number=opts.serial_number,
        )
