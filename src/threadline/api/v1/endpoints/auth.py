"""Login endpoint mapping external identities to internal user keys."""

from fastapi import APIRouter

from threadline.core.errors import IdentityResolutionError
from threadline.schemas.user import LoginRequest, LoginResponse

from ..dependencies import UserRepoDep, storage_failure

router = APIRouter(tags=["auth"])


@router.post("/login", response_model=LoginResponse)
def login(payload: LoginRequest, users: UserRepoDep) -> LoginResponse:
    """Identify a user, registering them on first login.

    The identity in the body is trusted as-is; profile fields are stored
    only when the `uid` has not been seen before.
    """
    try:
        user_id = users.resolve_or_create(
            payload.uid,
            username=payload.username,
            email=payload.email,
        )
    except IdentityResolutionError as exc:
        raise storage_failure(exc) from exc
    return LoginResponse(user_id=user_id)
