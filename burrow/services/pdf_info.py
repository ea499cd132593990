from __future__ import annotations

import io

from pypdf import PdfReader
from pypdf.errors import PdfReadError

METADATA_FIELDS = {
    "/Title": "Title",
    "/Author": "Author",
    "/Subject": "Subject",
    "/Creator": "Creator",
    "/Producer": "Producer",
    "/CreationDate": "CreationDate",
    "/ModDate": "ModDate",
    "/Keywords": "Keywords",
}

EXCERPT_LIMIT = 2000


def summarize_pdf(data: bytes, *, excerpt_limit: int = EXCERPT_LIMIT) -> dict[str, str]:
    """Page count, document metadata and a first-page text excerpt."""
    try:
        reader = PdfReader(io.BytesIO(data))
        pages = len(reader.pages)
    except (PdfReadError, ValueError, OSError) as exc:
        return {"PDF Metadata": f"Unavailable ({exc})"}

    info: dict[str, str] = {"Pages": str(pages)}
    metadata = reader.metadata or {}
    for key, label in METADATA_FIELDS.items():
        value = metadata.get(key)
        if value:
            info[label] = str(value)

    if pages:
        try:
            text = reader.pages[0].extract_text() or ""
        except Exception as exc:
            text = f"(text extraction failed: {exc})"
        text = text.strip()
        if text:
            info["Excerpt"] = text[:excerpt_limit]
    return info
