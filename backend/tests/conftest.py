"""Shared pytest fixtures."""
import pytest
from fastapi.testclient import TestClient

from drive_consult.core.config import Settings
from drive_consult.main import create_app
from drive_consult.services import extractors

from helpers import FakeConsultAgent, FakeDocumentSource


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        document_source_mode="mock",
        google_drive_folder_id="root-folder",
        model_provider="openai",
        openai_api_key="test-key",
    )


@pytest.fixture
def source():
    return FakeDocumentSource()


@pytest.fixture
def agent():
    return FakeConsultAgent()


@pytest.fixture
def client(settings, source, agent):
    app = create_app(settings, document_source=source, consult_agent=agent)
    return TestClient(app)


@pytest.fixture
def stub_office_extractors(monkeypatch):
    """Replace the unstructured-backed extractors with deterministic ones."""
    monkeypatch.setitem(extractors.EXTRACTORS, extractors.DOCX, lambda p: "docx: " + p.decode())
    monkeypatch.setitem(extractors.EXTRACTORS, extractors.PPTX, lambda p: "pptx: " + p.decode())
    monkeypatch.setitem(extractors.EXTRACTORS, extractors.PDF, lambda p: "pdf: " + p.decode())
