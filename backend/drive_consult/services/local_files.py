from pathlib import Path
from typing import List, Optional, Sequence
import mimetypes
import hashlib

from drive_consult.core.errors import BackendUnavailable, ExtractionError
from drive_consult.schemas.files import FileDescriptor, FOLDER_MIME_TYPE
from drive_consult.services.document_source import DocumentSource
from drive_consult.services import extractors

# mimetypes tables differ across platforms for office formats
EXTENSION_MIME_TYPES = {
    ".txt": extractors.TEXT_PLAIN,
    ".md": extractors.TEXT_PLAIN,
    ".pdf": extractors.PDF,
    ".docx": extractors.DOCX,
    ".pptx": extractors.PPTX,
    ".doc": extractors.MSWORD,
}


class LocalFileSource(DocumentSource):
    """Document source that reads from local file system (mock mode)."""

    ROOT_ID = "root"

    def __init__(self, base_path: Path, root_id: str = ""):
        self.base_path = Path(base_path).resolve()
        self.root_id = root_id or self.ROOT_ID
        if not self.base_path.exists():
            self.base_path.mkdir(parents=True, exist_ok=True)

    def _path_to_id(self, path: Path) -> str:
        """Convert a path to a stable ID."""
        relative = path.relative_to(self.base_path)
        return hashlib.md5(str(relative).encode()).hexdigest()

    def _id_to_path(self, item_id: str) -> Path:
        """Find path by searching for matching ID."""
        if item_id in (self.root_id, self.ROOT_ID):
            return self.base_path
        for path in self.base_path.rglob("*"):
            if self._path_to_id(path) == item_id:
                return self._validate_path_within_base(path)
        raise ValueError(f"No path found for ID: {item_id}")

    def _validate_path_within_base(self, path: Path) -> Path:
        """Validate that a path is within the base path to prevent traversal attacks."""
        resolved = path.resolve()
        if not resolved.is_relative_to(self.base_path):
            raise ValueError("Path traversal detected")
        return resolved

    @staticmethod
    def _mime_type(path: Path) -> str:
        if path.is_dir():
            return FOLDER_MIME_TYPE
        ext = path.suffix.lower()
        if ext in EXTENSION_MIME_TYPES:
            return EXTENSION_MIME_TYPES[ext]
        mime_type, _ = mimetypes.guess_type(str(path))
        return mime_type or "application/octet-stream"

    async def list_children(
        self, folder_id: str, mime_types: Optional[Sequence[str]] = None
    ) -> List[FileDescriptor]:
        try:
            folder_path = self._id_to_path(folder_id)
            items = list(folder_path.iterdir())
        except (ValueError, OSError) as e:
            raise BackendUnavailable(f"Local listing failed for folder {folder_id}: {e}") from e

        files = []
        for item in items:
            if item.name.startswith("."):
                continue
            mime_type = self._mime_type(item)
            if mime_types and mime_type not in mime_types:
                continue
            files.append(
                FileDescriptor(
                    id=self._path_to_id(item),
                    name=item.name,
                    mime_type=mime_type,
                )
            )

        return sorted(files, key=lambda f: (not f.is_folder, f.name.lower(), f.name))

    async def export_text(self, file_id: str) -> str:
        content = await self.download_file(file_id)
        return content.decode("utf-8", errors="replace")

    async def download_file(self, file_id: str) -> bytes:
        try:
            file_path = self._id_to_path(file_id)
            return file_path.read_bytes()
        except (ValueError, OSError) as e:
            raise ExtractionError(f"Local read failed for {file_id}: {e}") from e
