from __future__ import annotations

import hashlib
import logging
import re
from pathlib import Path

from docx import Document
from pypdf import PdfReader
from pypdf.errors import PyPdfError

from .models import ParsedBlock, ParsedDoc

logger = logging.getLogger(__name__)

PDF_CONTENT_TYPE = "application/pdf"
DOCX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

_WHITESPACE_RUN = re.compile(r"\s+")


class UnsupportedDocumentError(ValueError):
    pass


def clean_text(text: str | None) -> str:
    """Collapse every whitespace run to one space and trim."""
    if not text:
        return ""
    return _WHITESPACE_RUN.sub(" ", text).strip()


def _compute_doc_id(text: str, file_path: Path) -> str:
    seed = text if text.strip() else file_path.name
    digest = hashlib.sha256(seed.encode("utf-8", errors="ignore")).hexdigest()
    return digest[:16]


def _parse_pdf(file_path: Path) -> tuple[str, list[ParsedBlock], list[str], int | None]:
    warnings: list[str] = []
    blocks: list[ParsedBlock] = []

    try:
        reader = PdfReader(str(file_path))
        text_parts: list[str] = []
        for index, page in enumerate(reader.pages, start=1):
            page_text = (page.extract_text() or "").strip()
            if page_text:
                text_parts.append(page_text)
                blocks.append(ParsedBlock(page=index, text=page_text))
        if not text_parts:
            warnings.append("No extractable text found in PDF.")
        return "\n".join(text_parts), blocks, warnings, len(reader.pages)
    except (PyPdfError, OSError, ValueError) as exc:
        warnings.append(f"PDF parsing failed: {exc}")
        return "", blocks, warnings, None


def _parse_docx(file_path: Path) -> tuple[str, list[ParsedBlock], list[str], int | None]:
    warnings: list[str] = []
    blocks: list[ParsedBlock] = []

    try:
        document = Document(str(file_path))
    except Exception as exc:  # noqa: BLE001 - python-docx raises several unrelated types for bad archives
        warnings.append(f"DOCX parsing failed: {exc}")
        return "", blocks, warnings, None

    paragraphs = [p.text.strip() for p in document.paragraphs if p.text and p.text.strip()]
    for table in document.tables:
        for row in table.rows:
            cells = [cell.text.strip() for cell in row.cells if cell.text and cell.text.strip()]
            if cells:
                paragraphs.append(" ".join(cells))
    for paragraph_text in paragraphs:
        blocks.append(ParsedBlock(page=None, text=paragraph_text))
    if not paragraphs:
        warnings.append("No extractable text found in DOCX.")
    return "\n".join(paragraphs), blocks, warnings, None


def resolve_source_type(file_path: Path, content_type: str | None = None) -> str:
    hint = (content_type or "").strip().lower()
    if "pdf" in hint:
        return "pdf"
    if "wordprocessingml" in hint or "docx" in hint:
        return "docx"

    extension = file_path.suffix.lower()
    if extension == ".pdf":
        return "pdf"
    if extension == ".docx":
        return "docx"
    raise UnsupportedDocumentError(
        f"Unsupported file type '{extension or hint or 'unknown'}'. Only PDF and DOCX files are supported."
    )


def parse_document(file_path: str, content_type: str | None = None) -> ParsedDoc:
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"Input document not found: '{path}'")

    source_type = resolve_source_type(path, content_type)
    if source_type == "pdf":
        raw_text, blocks, warnings, page_count = _parse_pdf(path)
    else:
        raw_text, blocks, warnings, page_count = _parse_docx(path)

    text = clean_text(raw_text)
    for warning in warnings:
        logger.warning("document_parse_warning file=%s source_type=%s: %s", path.name, source_type, warning)
    logger.info(
        "document_parsed source_type=%s raw_length=%s cleaned_length=%s",
        source_type,
        len(raw_text),
        len(text),
    )

    return ParsedDoc(
        doc_id=_compute_doc_id(text=text, file_path=path),
        source_type=source_type,
        text=text,
        raw_length=len(raw_text),
        page_count=page_count,
        blocks=blocks,
        parsing_warnings=warnings,
    )
