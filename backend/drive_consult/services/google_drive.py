from typing import List, Optional, Sequence
import asyncio
import io
import logging

from googleapiclient.discovery import build, Resource
from googleapiclient.http import MediaIoBaseDownload

from drive_consult.core.errors import BackendUnavailable, ExtractionError
from drive_consult.schemas.files import FileDescriptor
from drive_consult.services.document_source import DocumentSource

logger = logging.getLogger(__name__)

LIST_FIELDS = "nextPageToken, files(id, name, mimeType)"
ORDER_BY = "folder,name"
PAGE_SIZE = 1000


def _quote(value: str) -> str:
    """Escape a value for use inside a single-quoted Drive query literal."""
    return value.replace("\\", "\\\\").replace("'", "\\'")


def build_children_query(folder_id: str, mime_types: Optional[Sequence[str]] = None) -> str:
    query = f"'{_quote(folder_id)}' in parents and trashed = false"
    if mime_types:
        mime_clause = " or ".join(f"mimeType='{_quote(m)}'" for m in mime_types)
        query += f" and ({mime_clause})"
    return query


class GoogleDriveSource(DocumentSource):
    """Document source that reads from Google Drive v3."""

    def __init__(self, service: Resource):
        self.service = service

    @classmethod
    def from_credentials(cls, credentials) -> "GoogleDriveSource":
        return cls(build("drive", "v3", credentials=credentials, cache_discovery=False))

    def _list_children_sync(
        self, folder_id: str, mime_types: Optional[Sequence[str]]
    ) -> List[FileDescriptor]:
        query = build_children_query(folder_id, mime_types)
        files: List[FileDescriptor] = []
        page_token = None

        while True:
            response = self.service.files().list(
                q=query,
                fields=LIST_FIELDS,
                orderBy=ORDER_BY,
                pageSize=PAGE_SIZE,
                pageToken=page_token,
            ).execute()

            for item in response.get("files", []):
                files.append(FileDescriptor(
                    id=item["id"],
                    name=item["name"],
                    mime_type=item["mimeType"],
                ))

            page_token = response.get("nextPageToken")
            if not page_token:
                break

        return files

    def _download(self, request) -> bytes:
        buffer = io.BytesIO()
        downloader = MediaIoBaseDownload(buffer, request)
        done = False
        while not done:
            _, done = downloader.next_chunk()
        return buffer.getvalue()

    async def list_children(
        self, folder_id: str, mime_types: Optional[Sequence[str]] = None
    ) -> List[FileDescriptor]:
        try:
            files = await asyncio.to_thread(self._list_children_sync, folder_id, mime_types)
        except Exception as e:
            raise BackendUnavailable(f"Drive listing failed for folder {folder_id}: {e}") from e
        logger.debug("Listed %d items in folder %s", len(files), folder_id)
        return files

    async def export_text(self, file_id: str) -> str:
        try:
            request = self.service.files().export_media(fileId=file_id, mimeType="text/plain")
            content = await asyncio.to_thread(self._download, request)
        except Exception as e:
            raise ExtractionError(f"Drive export failed for {file_id}: {e}") from e
        return content.decode("utf-8", errors="replace")

    async def download_file(self, file_id: str) -> bytes:
        try:
            request = self.service.files().get_media(fileId=file_id)
            return await asyncio.to_thread(self._download, request)
        except Exception as e:
            raise ExtractionError(f"Drive download failed for {file_id}: {e}") from e
