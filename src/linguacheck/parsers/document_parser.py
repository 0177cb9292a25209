"""Turn an uploaded document into one plain-text blob.

Paragraph boundaries in the output are blank lines, which is what document
mode splits on.
"""

from __future__ import annotations

import io
import re
from pathlib import Path

from linguacheck.errors import DocumentParseError

SUPPORTED_SUFFIXES = (".txt", ".md", ".docx", ".pdf")


def parse_document(file_path: str | Path) -> str:
    """Parse a document file (TXT, MD, DOCX, PDF) into clean plain text."""
    path = Path(file_path)
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise DocumentParseError(f"Cannot read {path.name}: {exc}") from exc
    return parse_document_bytes(data, path.name)


def parse_document_bytes(data: bytes, filename: str) -> str:
    """Parse raw uploaded bytes, dispatching on the filename's suffix."""
    suffix = Path(filename).suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise DocumentParseError(f"Unsupported file format: {suffix or filename}")
    try:
        if suffix == ".docx":
            raw = _parse_docx(data)
        elif suffix == ".pdf":
            raw = _parse_pdf(data)
        else:
            raw = data.decode("utf-8")
    except DocumentParseError:
        raise
    except Exception as exc:
        raise DocumentParseError(f"Could not read {filename}: {exc}") from exc
    return clean_text(raw)


def clean_text(text: str) -> str:
    """Strip invisible characters and normalise whitespace, keeping blank-line breaks."""
    text = text.lstrip("\ufeff")
    # ZWJ/ZWNJ must survive: Indic conjuncts are built from them
    text = re.sub(r"[\u200b\u00ad\u2060\ufeff]", "", text)
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    lines = [re.sub(r"[ \t]{2,}", " ", line).rstrip() for line in text.split("\n")]
    text = "\n".join(lines)
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()


def _parse_docx(data: bytes) -> str:
    from docx import Document

    doc = Document(io.BytesIO(data))
    return "\n\n".join(p.text for p in doc.paragraphs if p.text.strip())


def _parse_pdf(data: bytes) -> str:
    import fitz  # pymupdf

    doc = fitz.open(stream=data, filetype="pdf")
    try:
        # PyMuPDF "blocks" roughly follow paragraphs
        blocks = [
            block[4].strip()
            for page in doc
            for block in page.get_text("blocks")
            if block[4].strip()
        ]
    finally:
        doc.close()
    return "\n\n".join(blocks)
