# cv_prefill/core/parsing.py
from __future__ import annotations

from io import BytesIO
from pathlib import Path
from typing import Tuple, Union

from docx import Document
from PyPDF2 import PdfReader

from .logger import get_logger

logger = get_logger(__name__)

ALLOWED_EXTENSIONS: Tuple[str, ...] = (".pdf", ".docx", ".doc", ".txt")

MIN_TEXT_CHARS = 50


class UnsupportedFileType(ValueError):
    """Upload extension is not one of ALLOWED_EXTENSIONS."""


class TextExtractionError(RuntimeError):
    """A decoder could not read the uploaded document."""


def is_allowed_file(filename: str) -> bool:
    return Path(filename or "").suffix.lower() in ALLOWED_EXTENSIONS


# ============================================================
# FILE → TEXT
# ============================================================

def extract_text_from_pdf_bytes(b: bytes) -> str:
    try:
        reader = PdfReader(BytesIO(b))
        text = "\n".join((p.extract_text() or "") for p in reader.pages)
    except Exception as e:
        raise TextExtractionError(f"Could not read PDF: {e}") from e
    logger.debug("PDF extracted text length: %d", len(text))
    return text


def extract_text_from_docx_bytes(b: bytes) -> str:
    try:
        doc = Document(BytesIO(b))
        text = "\n".join(p.text for p in doc.paragraphs)
    except Exception as e:
        raise TextExtractionError(f"Could not read Word document: {e}") from e
    logger.debug("DOCX extracted text length: %d", len(text))
    return text


def extract_text_from_txt_bytes(b: bytes) -> str:
    text = b.decode("utf-8-sig", errors="ignore")
    logger.debug("TXT extracted text length: %d", len(text))
    return text


def extract_text_from_bytes(filename: str, b: bytes) -> str:
    """
    Plain text of an uploaded CV, dispatched on the file extension.
    Returns "" for a readable document without text.

    Raises:
        UnsupportedFileType: extension is not pdf, docx, doc or txt.
        TextExtractionError: the decoder failed on the content.
    """
    suffix = Path(filename or "").suffix.lower()
    if suffix == ".pdf":
        return extract_text_from_pdf_bytes(b)
    if suffix in (".docx", ".doc"):
        return extract_text_from_docx_bytes(b)
    if suffix == ".txt":
        return extract_text_from_txt_bytes(b)
    raise UnsupportedFileType(f"Unsupported file type: {filename}")


def extract_text_from_path(path: Union[str, Path]) -> str:
    path = Path(path)
    return extract_text_from_bytes(path.name, path.read_bytes())


def has_enough_text(text: str, min_chars: int = MIN_TEXT_CHARS) -> bool:
    return bool(text) and len(text.strip()) >= min_chars
