"""Post-related endpoints for the Threadline API."""

from fastapi import APIRouter, status

from threadline.core.errors import StorageError
from threadline.schemas.post import PostCreate, PostResponse
from threadline.services.feed import to_post_response

from ..dependencies import FeedServiceDep, PostRepoDep, UserRepoDep, storage_failure

router = APIRouter(prefix="/posts", tags=["posts"])


@router.get("", response_model=list[PostResponse])
def list_posts(feed: FeedServiceDep) -> list[PostResponse]:
    """List every post, newest first, with its like count and replies.

    Raises:
        HTTPException: If the posts cannot be read from the store.
    """
    try:
        return feed.list_posts_with_detail()
    except StorageError as exc:
        raise storage_failure(exc) from exc


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
def create_post(
    payload: PostCreate,
    users: UserRepoDep,
    posts: PostRepoDep,
) -> PostResponse:
    """Create a post on behalf of the user identified by `uid`.

    Args:
        payload: External user id and post content.
        users: Identity resolver; an unknown `uid` is registered on the fly.
        posts: Post accessor.

    Returns:
        The created post with no likes and no replies.

    Raises:
        HTTPException: If identity resolution or the insert fails.
    """
    try:
        user_id = users.resolve_or_create(payload.uid)
        post = posts.create(user_id=user_id, content=payload.content)
    except StorageError as exc:
        raise storage_failure(exc) from exc
    return to_post_response(post)
