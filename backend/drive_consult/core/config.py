from functools import lru_cache
from pydantic_settings import BaseSettings
from pydantic import Field
from typing import List
from pathlib import Path
import json


SETTINGS_FILE = Path(__file__).parent.parent.parent / "settings.json"


def load_settings_from_file() -> dict:
    """Load settings from JSON file if exists."""
    if SETTINGS_FILE.exists():
        try:
            with open(SETTINGS_FILE) as f:
                return json.load(f)
        except (json.JSONDecodeError, IOError):
            pass
    return {}


class Settings(BaseSettings):
    # Document source: "live" reads Google Drive, "mock" reads a local folder
    document_source_mode: str = "live"
    root_folder_id: str = Field(default="", alias="google_drive_folder_id")
    local_docs_path: str = "./demo-docs"

    # Google service account (shared by Drive and Vertex AI)
    google_credentials_json: str = ""
    google_credentials_file: str = "credentials.json"

    # Vertex AI / Gemini
    gcp_project: str = "drive-gemini-site"
    gcp_location: str = "us-central1"
    gemini_model: str = "gemini-2.5-flash"

    # Model provider: "vertex" (Gemini) or "openai" (OpenAI-compatible gateway)
    model_provider: str = "vertex"
    openai_api_key: str = ""
    openai_base_url: str = ""
    openai_model: str = "gpt-4o-mini"

    # Server
    backend_port: int = 3001
    cors_origins: List[str] = ["http://localhost:5173", "http://localhost:3000"]
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        extra = "ignore"
        populate_by_name = True

    def __init__(self, **kwargs):
        # Load from settings file first
        file_settings = load_settings_from_file()

        # Merge: kwargs > file_settings > env vars (handled by pydantic)
        merged = {**file_settings, **kwargs}

        super().__init__(**merged)

    def get_effective_settings(self) -> dict:
        """Get current effective settings (for startup logging)."""
        return {
            "document_source_mode": self.document_source_mode,
            "root_folder_id": self.root_folder_id,
            "local_docs_path": self.local_docs_path,
            "google_credentials_json": self._mask_key(self.google_credentials_json),
            "google_credentials_file": self.google_credentials_file,
            "gcp_project": self.gcp_project,
            "gcp_location": self.gcp_location,
            "gemini_model": self.gemini_model,
            "model_provider": self.model_provider,
            "openai_api_key": self._mask_key(self.openai_api_key),
            "openai_base_url": self.openai_base_url,
            "openai_model": self.openai_model,
        }

    def _mask_key(self, key: str) -> str:
        """Mask a secret key for display."""
        if not key:
            return ""
        if len(key) <= 8:
            return "*" * len(key)
        return key[:4] + "*" * (len(key) - 8) + key[-4:]


@lru_cache
def get_settings() -> Settings:
    """Settings are read once per process."""
    return Settings()
