"""Like endpoints for the Threadline API."""

from fastapi import APIRouter

from threadline.core.errors import DependencyNotFoundError, StorageError
from threadline.schemas.like import LikeCreate, LikeResponse

from ..dependencies import LikeRepoDep, UserRepoDep, missing_dependency, storage_failure

router = APIRouter(prefix="/likes", tags=["likes"])


@router.post("", response_model=LikeResponse)
def create_like(
    payload: LikeCreate,
    users: UserRepoDep,
    likes: LikeRepoDep,
) -> LikeResponse:
    """Like a post.

    Liking the same post twice succeeds both times and stores a single like.
    """
    try:
        user_id = users.resolve_or_create(payload.uid)
        created = likes.create(post_id=payload.post_id, user_id=user_id)
    except DependencyNotFoundError as exc:
        raise missing_dependency(exc) from exc
    except StorageError as exc:
        raise storage_failure(exc) from exc

    message = "like recorded" if created else "like already recorded"
    return LikeResponse(message=message, created=created)
