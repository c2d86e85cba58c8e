"""Storage tree models."""
from pydantic import BaseModel, ConfigDict, Field


FOLDER_MIME_TYPE = "application/vnd.google-apps.folder"


class FileDescriptor(BaseModel):
    """One item in the storage tree, as returned by a listing."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    name: str
    mime_type: str = Field(alias="mimeType")

    @property
    def is_folder(self) -> bool:
        return self.mime_type == FOLDER_MIME_TYPE
