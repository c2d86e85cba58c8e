import logging

from fastapi import APIRouter, Depends

from drive_consult.agents.base import ConsultAgent
from drive_consult.api.deps import get_consult_agent, get_document_source
from drive_consult.core.errors import ClientInputError, ModelError
from drive_consult.schemas.consult import ConsultRequest, ConsultResponse
from drive_consult.services.consultation import NO_SUPPORTED_FILES_ANSWER, build_context
from drive_consult.services.document_source import DocumentSource

logger = logging.getLogger(__name__)

router = APIRouter(tags=["consult"])


@router.post("/consult", response_model=ConsultResponse)
async def consult(
    body: ConsultRequest,
    source: DocumentSource = Depends(get_document_source),
    agent: ConsultAgent = Depends(get_consult_agent),
):
    """Answer a question grounded in the documents of one folder."""
    folder_id = body.folder_id
    question = body.question
    if not folder_id or not question:
        raise ClientInputError("Consult request is missing folderId or question")

    try:
        context = await build_context(source, folder_id)
        if context is None:
            return ConsultResponse(answer=NO_SUPPORTED_FILES_ANSWER)

        answer = await agent.answer(question, context.text)
    except Exception as e:
        logger.exception("Error with model consultation for folder %s", folder_id)
        raise ModelError(str(e)) from e

    return ConsultResponse(answer=answer)
