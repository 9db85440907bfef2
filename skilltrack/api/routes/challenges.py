from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, HTTPException

from ...config import settings
from ...models import User
from ...schemas import ActiveChallengeOut, ChallengeProgressOut, ChallengeProgressUpdate, LeaderboardEntry
from ...storage import Storage
from ..deps import get_current_user, get_storage

router = APIRouter()


@router.get("/challenge", response_model=Optional[ActiveChallengeOut])
def active_challenge(user: User = Depends(get_current_user), storage: Storage = Depends(get_storage)):
    challenge = storage.get_active_challenge()
    if challenge is None:
        return None
    return {
        "challenge": challenge,
        "progress": storage.get_user_challenge_progress(user.id, challenge.id),
    }


@router.post("/challenge/{challenge_id}/progress", response_model=ChallengeProgressOut)
def record_progress(
    challenge_id: int,
    body: ChallengeProgressUpdate,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    if storage.get_challenge(challenge_id) is None:
        raise HTTPException(status_code=404, detail="Challenge not found")
    return storage.update_challenge_progress(user.id, challenge_id, body.progress)


@router.get("/leaderboard", response_model=List[LeaderboardEntry])
def leaderboard(
    scope: Literal["top", "all"] = "top",
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    """Top users by skill count; scope=all for the complete rankings."""
    limit = None if scope == "all" else settings.LEADERBOARD_LIMIT
    return storage.get_leaderboard(limit=limit)
