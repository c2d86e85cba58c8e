from openai import AsyncOpenAI
import logging

from drive_consult.agents.base import ConsultAgent
from drive_consult.agents.prompts import build_consult_prompt
from drive_consult.core.config import Settings
from drive_consult.core.errors import ModelError

logger = logging.getLogger(__name__)


class SimpleChatAgent(ConsultAgent):
    """Consultation agent using an OpenAI-compatible chat completion API."""

    def __init__(self, client: AsyncOpenAI, model: str):
        self.client = client
        self.model = model

    @classmethod
    def from_settings(cls, settings: Settings) -> "SimpleChatAgent":
        # Configure client with optional gateway base URL
        client_config = {"api_key": settings.openai_api_key}
        if settings.openai_base_url:
            client_config["base_url"] = settings.openai_base_url
        return cls(AsyncOpenAI(**client_config), settings.openai_model or "gpt-4o-mini")

    async def answer(self, question: str, context: str) -> str:
        prompt = build_consult_prompt(question, context)
        logger.info("Consulting %s with %d prompt characters", self.model, len(prompt))

        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
            )
        except Exception as e:
            raise ModelError(f"Chat completion request failed: {e}") from e

        if not response.choices or not response.choices[0].message.content:
            raise ModelError("Chat completion did not return a valid response.")
        return response.choices[0].message.content
