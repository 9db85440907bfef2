import hmac
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Request

from ...config import settings
from ...models import User
from ...schemas import IdentityClaims, ProfileUpdate, UserOut
from ...storage import Storage
from ..deps import SESSION_USER_KEY, get_current_user, get_storage

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/login", response_model=UserOut)
def login(
    claims: IdentityClaims,
    request: Request,
    storage: Storage = Depends(get_storage),
    x_identity_token: Optional[str] = Header(default=None),
):
    """Identity-provider callback: upsert the user and open a session."""
    secret = settings.IDENTITY_SHARED_SECRET
    if not secret:
        # Unauthenticated logins are a local-development convenience only
        if settings.APP_ENV != "development":
            logger.error("Login refused: IDENTITY_SHARED_SECRET is not set (APP_ENV=%s)", settings.APP_ENV)
            raise HTTPException(status_code=503, detail="Identity provider not configured")
    elif not hmac.compare_digest(x_identity_token or "", secret):
        raise HTTPException(status_code=401, detail="Unauthorized")

    user = storage.upsert_user(claims.model_dump(exclude_unset=True))
    request.session[SESSION_USER_KEY] = user.id
    logger.info("User %s logged in", user.id)
    return user


@router.post("/logout")
def logout(request: Request):
    request.session.clear()
    return {"success": True}


@router.get("/auth/user", response_model=UserOut)
def current_user(user: User = Depends(get_current_user)):
    return user


@router.put("/profile", response_model=UserOut)
def update_profile(
    profile: ProfileUpdate,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    return storage.update_user_profile(user.id, profile.model_dump(exclude_unset=True))
