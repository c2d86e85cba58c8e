from abc import ABC, abstractmethod


class ConsultAgent(ABC):
    @abstractmethod
    async def answer(self, question: str, context: str) -> str:
        """
        Answer a question grounded in a folder's document context.

        Args:
            question: The user's question, embedded verbatim in the prompt
            context: Labeled context blob built from the folder's documents

        Returns:
            The model's answer text

        Raises:
            ModelError: The backend failed or returned no usable candidate
        """
        ...
