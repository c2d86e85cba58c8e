"""Dependency injection for API routes.

Service handles are built once at startup and kept on ``app.state``.
"""
from fastapi import Request

from drive_consult.agents.base import ConsultAgent
from drive_consult.core.config import Settings
from drive_consult.services.document_source import DocumentSource


def get_settings(request: Request) -> Settings:
    """Get application settings."""
    return request.app.state.settings


def get_document_source(request: Request) -> DocumentSource:
    return request.app.state.document_source


def get_consult_agent(request: Request) -> ConsultAgent:
    return request.app.state.consult_agent
