from typing import List

from fastapi import APIRouter, Depends, HTTPException

from ...config import settings
from ...models import User
from ...schemas import (
    BadgeCreate,
    BadgeOut,
    ChallengeCreate,
    ChallengeOut,
    CodingChallengeCreate,
    CodingChallengeOut,
    RecommendationCreate,
    RecommendationOut,
    StatsOut,
    UserOut,
)
from ...storage import Storage
from ..deps import get_storage, require_admin

router = APIRouter()


@router.get("/users", response_model=List[UserOut])
def all_users(admin: User = Depends(require_admin), storage: Storage = Depends(get_storage)):
    return storage.get_all_users()


@router.get("/stats", response_model=StatsOut)
def stats(admin: User = Depends(require_admin), storage: Storage = Depends(get_storage)):
    return storage.get_total_stats(window_days=settings.ACTIVE_USER_WINDOW_DAYS)


@router.post("/recommendations", response_model=RecommendationOut)
def create_recommendation(
    body: RecommendationCreate,
    admin: User = Depends(require_admin),
    storage: Storage = Depends(get_storage),
):
    return storage.create_recommendation(body.model_dump())


@router.post("/badges", response_model=BadgeOut)
def award_badge(
    body: BadgeCreate,
    admin: User = Depends(require_admin),
    storage: Storage = Depends(get_storage),
):
    if storage.get_user(body.user_id) is None:
        raise HTTPException(status_code=404, detail="User not found")
    return storage.create_badge(body.model_dump())


@router.post("/challenges", response_model=ChallengeOut)
def create_challenge(
    body: ChallengeCreate,
    admin: User = Depends(require_admin),
    storage: Storage = Depends(get_storage),
):
    return storage.create_challenge(body.model_dump())


@router.post("/coding-challenges", response_model=CodingChallengeOut)
def create_coding_challenge(
    body: CodingChallengeCreate,
    admin: User = Depends(require_admin),
    storage: Storage = Depends(get_storage),
):
    return storage.create_coding_challenge(body.model_dump())
