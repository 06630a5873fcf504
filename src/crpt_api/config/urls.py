from __future__ import annotations


def get_documents_url(base_url: str) -> str:
	return f"{base_url.rstrip('/')}/documents"
