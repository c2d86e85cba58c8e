from drive_consult.agents.base import ConsultAgent
from drive_consult.core.config import Settings


def get_consult_agent(settings: Settings, credentials=None) -> ConsultAgent:
    """Factory based on ``settings.model_provider``."""
    if settings.model_provider == "openai":
        from drive_consult.agents.simple_agent import SimpleChatAgent
        return SimpleChatAgent.from_settings(settings)

    from drive_consult.agents.gemini_agent import GeminiAgent
    return GeminiAgent.from_settings(settings, credentials)
