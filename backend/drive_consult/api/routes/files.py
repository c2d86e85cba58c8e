import logging
from typing import List

from fastapi import APIRouter, Depends

from drive_consult.api.deps import get_document_source, get_settings
from drive_consult.core.config import Settings
from drive_consult.core.errors import BackendUnavailable
from drive_consult.schemas.files import FileDescriptor
from drive_consult.services.document_source import DocumentSource

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/files", tags=["files"])


@router.get("", response_model=List[FileDescriptor])
async def list_root_files(
    settings: Settings = Depends(get_settings),
    source: DocumentSource = Depends(get_document_source),
):
    """List the contents of the configured root folder."""
    try:
        return await source.list_children(settings.root_folder_id)
    except BackendUnavailable:
        logger.exception("Error fetching root files (folder=%s)", settings.root_folder_id)
        raise


@router.get("/{folder_id}", response_model=List[FileDescriptor])
async def list_folder_files(folder_id: str, source: DocumentSource = Depends(get_document_source)):
    """List the contents of any subfolder."""
    try:
        return await source.list_children(folder_id)
    except BackendUnavailable:
        logger.exception("Error fetching files for folder %s", folder_id)
        raise
