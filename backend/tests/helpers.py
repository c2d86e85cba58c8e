"""
In-memory fakes for the document source and consult agent.

The fakes record every call so tests can assert that a backend was (or was
not) reached.
"""
import io
from typing import Dict, List, Optional, Sequence, Union

from drive_consult.agents.base import ConsultAgent
from drive_consult.core.errors import BackendUnavailable, ExtractionError
from drive_consult.schemas.files import FileDescriptor, FOLDER_MIME_TYPE
from drive_consult.services.document_source import DocumentSource


class FakeDocumentSource(DocumentSource):
    """Document source backed by dictionaries."""

    def __init__(self):
        self.children: Dict[str, List[FileDescriptor]] = {}
        self.contents: Dict[str, Union[bytes, str]] = {}
        self.broken_folders: set = set()
        self.broken_files: set = set()
        self.list_calls: List[tuple] = []
        self.export_calls: List[str] = []
        self.download_calls: List[str] = []

    def add(self, folder_id: str, file_id: str, name: str, mime_type: str, content=None):
        self.children.setdefault(folder_id, []).append(
            FileDescriptor(id=file_id, name=name, mime_type=mime_type)
        )
        if content is not None:
            self.contents[file_id] = content

    async def list_children(
        self, folder_id: str, mime_types: Optional[Sequence[str]] = None
    ) -> List[FileDescriptor]:
        self.list_calls.append((folder_id, list(mime_types) if mime_types else None))
        if folder_id in self.broken_folders:
            raise BackendUnavailable(f"listing failed for {folder_id}")
        items = self.children.get(folder_id, [])
        if mime_types:
            items = [f for f in items if f.mime_type in mime_types]
        return sorted(items, key=lambda f: (f.mime_type != FOLDER_MIME_TYPE, f.name.lower()))

    async def export_text(self, file_id: str) -> str:
        self.export_calls.append(file_id)
        if file_id in self.broken_files:
            raise ExtractionError(f"export failed for {file_id}")
        return self.contents[file_id]

    async def download_file(self, file_id: str) -> bytes:
        self.download_calls.append(file_id)
        if file_id in self.broken_files:
            raise ExtractionError(f"download failed for {file_id}")
        return self.contents[file_id]


class FakeConsultAgent(ConsultAgent):
    def __init__(self, answer: str = "The answer is 42.", error: Optional[Exception] = None):
        self._answer = answer
        self._error = error
        self.calls: List[tuple] = []

    async def answer(self, question: str, context: str) -> str:
        self.calls.append((question, context))
        if self._error is not None:
            raise self._error
        return self._answer


class FakeElement:
    """Stand-in for an unstructured element: text plus page metadata."""

    class _Metadata:
        def __init__(self, page_number):
            self.page_number = page_number

    def __init__(self, text: str, page_number: Optional[int] = None):
        self.text = text
        self.metadata = self._Metadata(page_number)

    def __str__(self):
        return self.text


def build_pdf(page_texts: Sequence[str]) -> bytes:
    """Write a minimal PDF with one Helvetica text line per page."""
    count = len(page_texts)
    font_ref = 3 + 2 * count
    kids = " ".join(f"{3 + 2 * i} 0 R" for i in range(count))
    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        f"<< /Type /Pages /Kids [{kids}] /Count {count} >>".encode(),
    ]
    for i, text in enumerate(page_texts):
        objects.append(
            f"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] /Contents {4 + 2 * i} 0 R "
            f"/Resources << /Font << /F1 {font_ref} 0 R >> >> >>".encode()
        )
        stream = f"BT /F1 24 Tf 72 700 Td ({text}) Tj ET".encode()
        objects.append(b"<< /Length %d >>\nstream\n%s\nendstream" % (len(stream), stream))
    objects.append(b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>")

    out = io.BytesIO()
    out.write(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(out.tell())
        out.write(b"%d 0 obj\n%s\nendobj\n" % (number, body))
    xref_at = out.tell()
    # xref entries are exactly 20 bytes each
    out.write(b"xref\n0 %d\n0000000000 65535 f \n" % (len(objects) + 1))
    for offset in offsets:
        out.write(b"%010d 00000 n \n" % offset)
    out.write(b"trailer\n<< /Size %d /Root 1 0 R >>\nstartxref\n%d\n%%%%EOF\n" % (len(objects) + 1, xref_at))
    return out.getvalue()
