"""Tests for settings loading and credential resolution."""

import json
from unittest.mock import patch

import pytest

from drive_consult.core import credentials as credentials_module
from drive_consult.core.config import Settings
from drive_consult.core.credentials import SCOPES, load_google_credentials


class TestSettings:
    def test_root_folder_from_environment(self, monkeypatch):
        monkeypatch.setenv("GOOGLE_DRIVE_FOLDER_ID", "env-folder")
        assert Settings(_env_file=None).root_folder_id == "env-folder"

    def test_defaults(self, monkeypatch):
        for name in ("GOOGLE_DRIVE_FOLDER_ID", "DOCUMENT_SOURCE_MODE", "MODEL_PROVIDER", "BACKEND_PORT"):
            monkeypatch.delenv(name, raising=False)
        settings = Settings(_env_file=None)

        assert settings.document_source_mode == "live"
        assert settings.model_provider == "vertex"
        assert settings.backend_port == 3001

    def test_secrets_are_masked(self):
        settings = Settings(_env_file=None, openai_api_key="sk-1234567890abcdef")
        effective = settings.get_effective_settings()

        assert effective["openai_api_key"] == "sk-1***********cdef"
        assert "google_credentials_json" in effective


class TestCredentials:
    def test_prefers_inline_json(self, tmp_path):
        info = {"type": "service_account", "client_email": "svc@example.iam.gserviceaccount.com"}
        settings = Settings(
            _env_file=None,
            google_credentials_json=json.dumps(info),
            google_credentials_file=str(tmp_path / "unused.json"),
        )

        with patch.object(
            credentials_module.service_account.Credentials, "from_service_account_info"
        ) as from_info:
            load_google_credentials(settings)

        from_info.assert_called_once_with(info, scopes=SCOPES)

    def test_falls_back_to_file(self, tmp_path):
        cred_file = tmp_path / "credentials.json"
        cred_file.write_text("{}")
        settings = Settings(_env_file=None, google_credentials_json="", google_credentials_file=str(cred_file))

        with patch.object(
            credentials_module.service_account.Credentials, "from_service_account_file"
        ) as from_file:
            load_google_credentials(settings)

        from_file.assert_called_once_with(str(cred_file), scopes=SCOPES)

    def test_missing_credentials(self, tmp_path):
        settings = Settings(
            _env_file=None,
            google_credentials_json="",
            google_credentials_file=str(tmp_path / "absent.json"),
        )

        with pytest.raises(FileNotFoundError):
            load_google_credentials(settings)
