"""Reply summarization endpoint."""

import logging

from fastapi import APIRouter, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from starlette.concurrency import run_in_threadpool

from threadline.schemas.summary import SummaryResponse

from ..dependencies import ReplyRepoDep, SummaryServiceDep

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/summary", tags=["summary"])


@router.get("/{post_id}", response_model=SummaryResponse)
async def summarize_replies(
    post_id: int,
    replies: ReplyRepoDep,
    summary_service: SummaryServiceDep,
) -> SummaryResponse:
    """Summarize the replies to a post.

    Provider failures never fail the request; they yield a fallback message.
    """
    try:
        texts = await run_in_threadpool(replies.list_texts, post_id)
    except SQLAlchemyError as exc:
        logger.exception("Failed to load replies for post %s", post_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load replies",
        ) from exc

    summary = await summary_service.summarize(texts)
    return SummaryResponse(summary=summary)
