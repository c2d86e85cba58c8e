"""Folder consultation pipeline: list, fetch, extract and merge into one context."""
from typing import List, Optional, Sequence
import logging

from drive_consult.schemas.consult import ConsultationContext, ExtractedDocument
from drive_consult.schemas.files import FileDescriptor
from drive_consult.services import extractors
from drive_consult.services.document_source import DocumentSource

logger = logging.getLogger(__name__)

NO_SUPPORTED_FILES_ANSWER = (
    "I couldn't find any supported files (Docs, PDF, DOCX, PPTX, or text) "
    "in that folder to read."
)


async def fetch_document(source: DocumentSource, file: FileDescriptor) -> ExtractedDocument:
    """Fetch and extract one file. Failures come back as ``ok=False``."""
    logger.info("Processing file: %s (Type: %s)", file.name, file.mime_type)
    try:
        if file.mime_type == extractors.MSWORD:
            logger.info("Skipping unsupported .doc file: %s", file.name)
            return ExtractedDocument(source_name=file.name, text="")

        if file.mime_type in extractors.EXPORTED_MIME_TYPES:
            payload = await source.export_text(file.id)
        else:
            payload = await source.download_file(file.id)

        text = extractors.extract_text(file.mime_type, payload)
    except Exception as e:
        logger.error("Could not parse file %s: %s", file.name, e)
        return ExtractedDocument(source_name=file.name, text="", ok=False)

    return ExtractedDocument(source_name=file.name, text=text)


async def collect_documents(
    source: DocumentSource, files: Sequence[FileDescriptor]
) -> List[ExtractedDocument]:
    """Extract every file in listing order, one at a time."""
    documents = []
    for file in files:
        documents.append(await fetch_document(source, file))
    return documents


def merge_context(documents: Sequence[ExtractedDocument]) -> str:
    """Concatenate documents into labeled blocks, one per file."""
    blocks = []
    for doc in documents:
        if doc.ok:
            blocks.append(f"--- Content from file: {doc.source_name} ---\n{doc.text}\n\n")
        else:
            blocks.append(f"--- Could not read content from file: {doc.source_name} ---\n\n")
    return "".join(blocks)


async def build_context(source: DocumentSource, folder_id: str) -> Optional[ConsultationContext]:
    """Build the consultation context for a folder.

    Returns ``None`` when the folder holds no supported files. Listing
    failures propagate as ``BackendUnavailable``.
    """
    files = await source.list_children(folder_id, extractors.SUPPORTED_MIME_TYPES)
    if not files:
        return None

    documents = await collect_documents(source, files)
    warnings = [
        f"Could not read content from file: {doc.source_name}"
        for doc in documents
        if not doc.ok
    ]
    return ConsultationContext(
        text=merge_context(documents),
        documents=documents,
        warnings=warnings,
    )
