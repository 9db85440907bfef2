"""Request-scoped dependencies: DB session, storage, AI client, current user."""

import logging

from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session

from ..ai_client import AIClient
from ..database import get_db
from ..models import User
from ..storage import Storage

logger = logging.getLogger(__name__)

SESSION_USER_KEY = "user_id"


def get_storage(db: Session = Depends(get_db)) -> Storage:
    return Storage(db)


def get_ai_client(request: Request) -> AIClient:
    return request.app.state.ai_client


def get_current_user(request: Request, storage: Storage = Depends(get_storage)) -> User:
    """The session's user, loaded fresh from the database on every request."""
    user_id = request.session.get(SESSION_USER_KEY)
    if not user_id:
        raise HTTPException(status_code=401, detail="Unauthorized")
    user = storage.get_user(user_id)
    if user is None:
        request.session.clear()
        raise HTTPException(status_code=401, detail="Unauthorized")
    return user


def require_admin(user: User = Depends(get_current_user)) -> User:
    if not user.is_admin:
        logger.warning("Admin access denied for user %s", user.id)
        raise HTTPException(status_code=403, detail="Admin access required")
    return user
