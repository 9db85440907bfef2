from typing import List

from fastapi import APIRouter, Depends

from ...config import settings
from ...models import User
from ...schemas import RecommendationOut
from ...storage import Storage
from ..deps import get_current_user, get_storage

router = APIRouter()


@router.get("", response_model=List[RecommendationOut])
def list_recommendations(
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    """Whole active catalog, highest match_percentage first."""
    return storage.get_recommendations()


@router.get("/personalized", response_model=List[RecommendationOut])
def personalized_recommendations(
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    return storage.get_personalized_recommendations(user.id, limit=settings.RECOMMENDATION_LIMIT)
