"""Prompt building for folder consultations."""


def build_consult_prompt(question: str, context: str) -> str:
    """
    Build the single instruction prompt sent to the model.

    Args:
        question: The user's question, quoted literally
        context: Labeled document blocks from merge_context()

    Returns:
        Complete prompt for the LLM
    """
    return f"""Based on the following documents, please answer the user's question. If you cannot find the answer, say so.
User Question: "{question}"
Documents:
{context}"""
