from google import genai
import logging

from drive_consult.agents.base import ConsultAgent
from drive_consult.agents.prompts import build_consult_prompt
from drive_consult.core.config import Settings
from drive_consult.core.errors import ModelError

logger = logging.getLogger(__name__)


def first_candidate_text(response) -> str:
    """Return the first text part of the first candidate, or raise ModelError.

    Safety blocks and empty responses show up as missing candidates, missing
    content or an empty first part.
    """
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        raise ModelError("Gemini did not return any candidates.")

    content = getattr(candidates[0], "content", None)
    parts = getattr(content, "parts", None) or []
    if not parts:
        raise ModelError("Gemini did not return a valid response.")

    text = getattr(parts[0], "text", None)
    if not text:
        raise ModelError("Gemini returned an empty first part.")
    return text


class GeminiAgent(ConsultAgent):
    """Consultation agent backed by Gemini on Vertex AI."""

    def __init__(self, client: genai.Client, model: str):
        self.client = client
        self.model = model

    @classmethod
    def from_settings(cls, settings: Settings, credentials=None) -> "GeminiAgent":
        client = genai.Client(
            vertexai=True,
            project=settings.gcp_project,
            location=settings.gcp_location,
            credentials=credentials,
        )
        return cls(client, settings.gemini_model)

    async def answer(self, question: str, context: str) -> str:
        prompt = build_consult_prompt(question, context)
        logger.info("Consulting %s with %d prompt characters", self.model, len(prompt))

        try:
            response = await self.client.aio.models.generate_content(
                model=self.model,
                contents=prompt,
            )
        except Exception as e:
            raise ModelError(f"Gemini request failed: {e}") from e

        return first_candidate_text(response)
