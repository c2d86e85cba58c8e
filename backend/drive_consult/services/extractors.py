"""Format-specific text extractors keyed by MIME type.

Every extractor takes the raw payload of one file and returns plain text.
Malformed input raises ``ExtractionError`` so the caller can skip the file.
Office and PDF formats go through the ``unstructured`` partitioners.
"""
from typing import Callable, Dict, List, Union
import io

from drive_consult.core.errors import ExtractionError, UnsupportedFileType

Payload = Union[bytes, str]

TEXT_PLAIN = "text/plain"
GOOGLE_DOC = "application/vnd.google-apps.document"
DOCX = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
PPTX = "application/vnd.openxmlformats-officedocument.presentationml.presentation"
PDF = "application/pdf"
MSWORD = "application/msword"

# Listing allowlist for consultation. MSWORD is listed but never extracted.
SUPPORTED_MIME_TYPES = [TEXT_PLAIN, GOOGLE_DOC, PDF, DOCX, PPTX, MSWORD]

# Native documents are exported as text by the storage backend, not downloaded
EXPORTED_MIME_TYPES = {GOOGLE_DOC}


def _load_partitioner(mime_type: str) -> Callable:
    try:
        if mime_type == DOCX:
            from unstructured.partition.docx import partition_docx as partition
        elif mime_type == PPTX:
            from unstructured.partition.pptx import partition_pptx as partition
        else:
            from unstructured.partition.pdf import partition_pdf as partition
    except ImportError as e:
        raise ExtractionError(
            f"unstructured support for {mime_type} is not installed ({e}). "
            "Run: pip install 'unstructured[docx,pptx,pdf]'"
        ) from e
    return partition


def _partition(mime_type: str, content: bytes, **kwargs) -> list:
    """Run the unstructured partitioner for ``mime_type`` over in-memory bytes."""
    partition = _load_partitioner(mime_type)
    try:
        return partition(file=io.BytesIO(content), **kwargs)
    except Exception as e:
        raise ExtractionError(f"Failed to parse {mime_type} content: {e}") from e


def _as_bytes(payload: Payload) -> bytes:
    if isinstance(payload, str):
        return payload.encode("utf-8")
    return payload


def extract_plain_text(payload: Payload) -> str:
    if isinstance(payload, str):
        return payload
    return payload.decode("utf-8", errors="replace")


def extract_google_doc(payload: Payload) -> str:
    """Native documents arrive already exported as plain text."""
    return extract_plain_text(payload)


def extract_docx(payload: Payload) -> str:
    elements = _partition(DOCX, _as_bytes(payload))
    return "\n\n".join(str(el) for el in elements)


def extract_pptx(payload: Payload) -> str:
    """Text of each slide, slides joined by newlines in deck order."""
    elements = _partition(PPTX, _as_bytes(payload), include_slide_notes=False)

    slides: Dict[int, List[str]] = {}
    for el in elements:
        text = str(el)
        if not text:
            continue
        slide_number = getattr(el.metadata, "page_number", None) or 0
        slides.setdefault(slide_number, []).append(text)

    return "\n".join("\n".join(slides[n]) for n in sorted(slides))


def extract_pdf(payload: Payload) -> str:
    """Full text in page order. Corrupt files raise instead of reading as empty."""
    content = _as_bytes(payload)
    # The header may be preceded by junk, but must sit in the first 1024 bytes
    if b"%PDF-" not in content[:1024]:
        raise ExtractionError("Not a PDF file: missing %PDF- header")

    elements = _partition(PDF, content, strategy="fast")
    if not elements:
        raise ExtractionError("No text extracted from PDF. The file may be empty or corrupted.")
    return "\n\n".join(str(el) for el in elements)


def extract_msword(payload: Payload) -> str:
    """Legacy .doc files are recognised but not parsed."""
    return ""


EXTRACTORS: Dict[str, Callable[[Payload], str]] = {
    TEXT_PLAIN: extract_plain_text,
    GOOGLE_DOC: extract_google_doc,
    DOCX: extract_docx,
    PPTX: extract_pptx,
    PDF: extract_pdf,
    MSWORD: extract_msword,
}


def extract_text(mime_type: str, payload: Payload) -> str:
    """Dispatch ``payload`` to the extractor registered for ``mime_type``."""
    extractor = EXTRACTORS.get(mime_type)
    if extractor is None:
        raise UnsupportedFileType(f"No extractor for MIME type: {mime_type}")
    return extractor(payload)
