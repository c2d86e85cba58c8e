from abc import ABC, abstractmethod
from typing import List, Optional, Sequence
from pathlib import Path

from drive_consult.core.config import Settings
from drive_consult.schemas.files import FileDescriptor


class DocumentSource(ABC):
    @abstractmethod
    async def list_children(
        self, folder_id: str, mime_types: Optional[Sequence[str]] = None
    ) -> List[FileDescriptor]:
        """List non-trashed children of a folder, folders first, then by name.

        ``mime_types`` restricts the listing to an allowlist. An empty folder
        gives an empty list; backend failures raise ``BackendUnavailable``.
        """
        ...

    @abstractmethod
    async def export_text(self, file_id: str) -> str:
        """Export a native cloud document as plain text."""
        ...

    @abstractmethod
    async def download_file(self, file_id: str) -> bytes:
        """Download the raw bytes of a stored file."""
        ...


def get_document_source(settings: Settings, credentials=None) -> DocumentSource:
    """Factory based on ``settings.document_source_mode``."""
    from drive_consult.services.local_files import LocalFileSource
    from drive_consult.services.google_drive import GoogleDriveSource

    if settings.document_source_mode == "mock":
        return LocalFileSource(Path(settings.local_docs_path), root_id=settings.root_folder_id)
    return GoogleDriveSource.from_credentials(credentials)
