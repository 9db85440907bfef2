from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException

from ...agents.advisor_agent import career_guidance_for, check_solution
from ...ai_client import AIClient
from ...models import User
from ...schemas import (
    CareerGuidance,
    CodingChallengeOut,
    CodingLeaderboardEntry,
    CodingSubmissionCreate,
    CodingSubmissionOut,
    SubmissionResultOut,
)
from ...storage import Storage
from ..deps import get_ai_client, get_current_user, get_storage

router = APIRouter()

RAW_SUBMISSION_SCORE = 10


def _coding_challenge(storage: Storage, challenge_id: int):
    challenge = storage.get_coding_challenge(challenge_id)
    if challenge is None:
        raise HTTPException(status_code=404, detail="Coding challenge not found")
    return challenge


@router.get("/coding-challenges", response_model=List[CodingChallengeOut])
def list_coding_challenges(user: User = Depends(get_current_user), storage: Storage = Depends(get_storage)):
    return storage.get_coding_challenges()


@router.get("/coding-challenge/personalized", response_model=Optional[CodingChallengeOut])
def personalized_coding_challenge(
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    return storage.get_personalized_coding_challenge(user.id)


@router.post("/coding-submission", response_model=CodingSubmissionOut)
def submit_raw(
    body: CodingSubmissionCreate,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    """Record a solution without grading it."""
    _coding_challenge(storage, body.challenge_id)
    return storage.create_coding_submission({
        **body.model_dump(),
        "user_id": user.id,
        "status": "submitted",
        "score": RAW_SUBMISSION_SCORE,
    })


@router.get("/coding-submissions", response_model=List[CodingSubmissionOut])
def list_submissions(user: User = Depends(get_current_user), storage: Storage = Depends(get_storage)):
    return storage.get_coding_submissions(user.id)


@router.post("/coding-challenges/submit", response_model=SubmissionResultOut)
def submit_for_grading(
    body: CodingSubmissionCreate,
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
    ai: AIClient = Depends(get_ai_client),
):
    """Grade the solution with the AI advisor and store the graded submission."""
    challenge = _coding_challenge(storage, body.challenge_id)
    result = check_solution(
        ai,
        challenge.problem_statement,
        challenge.expected_output,
        body.solution,
        challenge.difficulty,
    )
    submission = storage.create_coding_submission({
        **body.model_dump(),
        "user_id": user.id,
        "score": result.score,
        "feedback": result.feedback,
        "status": "correct" if result.is_correct else "incorrect",
    })
    return {"submission": submission, "result": result}


@router.get("/coding-leaderboard", response_model=List[CodingLeaderboardEntry])
def coding_leaderboard(user: User = Depends(get_current_user), storage: Storage = Depends(get_storage)):
    return storage.get_coding_leaderboard()


@router.get("/career-guidance", response_model=CareerGuidance)
def career_guidance(
    user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
    ai: AIClient = Depends(get_ai_client),
):
    return career_guidance_for(ai, user, storage.get_user_skills(user.id))
