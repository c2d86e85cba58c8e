"""Consultation request/response models."""
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional


class ExtractedDocument(BaseModel):
    """Outcome of extracting one file. ``ok=False`` carries empty text."""

    model_config = ConfigDict(frozen=True)

    source_name: str
    text: str = ""
    ok: bool = True


class ConsultationContext(BaseModel):
    """Labeled context blob plus the per-file results it was merged from."""

    text: str
    documents: List[ExtractedDocument]
    warnings: List[str] = []


class ConsultRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    # Optional here so a missing field is reported as a 400 by the handler
    folder_id: Optional[str] = Field(default=None, alias="folderId")
    question: Optional[str] = None


class ConsultResponse(BaseModel):
    answer: str


class ErrorResponse(BaseModel):
    error: str
