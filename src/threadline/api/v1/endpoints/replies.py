"""Reply endpoints for the Threadline API."""

from fastapi import APIRouter, status

from threadline.core.errors import DependencyNotFoundError, StorageError
from threadline.schemas.reply import ReplyCreate, ReplyResponse

from ..dependencies import ReplyRepoDep, UserRepoDep, missing_dependency, storage_failure

router = APIRouter(prefix="/replies", tags=["replies"])


@router.post("", response_model=ReplyResponse, status_code=status.HTTP_201_CREATED)
def create_reply(
    payload: ReplyCreate,
    users: UserRepoDep,
    replies: ReplyRepoDep,
) -> ReplyResponse:
    """Reply to an existing post.

    Raises:
        HTTPException: 404 if the post does not exist, 500 on storage failure.
    """
    try:
        user_id = users.resolve_or_create(payload.uid)
        reply = replies.create(post_id=payload.post_id, user_id=user_id, content=payload.content)
    except DependencyNotFoundError as exc:
        raise missing_dependency(exc) from exc
    except StorageError as exc:
        raise storage_failure(exc) from exc
    return ReplyResponse.model_validate(reply)
