"""
Matching Agent
==============
Rule-based personalisation over the catalog. No model, no I/O: callers
load the user, their skills and the catalog rows, these functions only
filter and rank them.

Match score (filter only):
  +50  any recommendation tag overlaps the preferred job role
  +10  per tag that overlaps a skill name or a skill category
Overlap = case-insensitive substring in either direction.

Kept recommendations are ordered by their stored match_percentage, not by
the computed score.
"""

import random
from typing import List, Optional, Sequence

JOB_ROLE_BONUS = 50
SKILL_TAG_BONUS = 10

LEVEL_WEIGHTS = {"Beginner": 1, "Intermediate": 2, "Advanced": 3}
# Levels outside the enum (only reachable through direct DB writes) weigh as Advanced
UNKNOWN_LEVEL_WEIGHT = LEVEL_WEIGHTS["Advanced"]


def _overlaps(a: str, b: str) -> bool:
    a, b = a.lower(), b.lower()
    return a in b or b in a


def match_score(recommendation, job_role: Optional[str], skill_names: set, skill_categories: set) -> int:
    # Blank tags are ignored: "" is a substring of every role and skill
    tags = [t for t in (recommendation.tags or []) if t]
    if not tags:
        return 0

    score = 0
    if job_role and any(_overlaps(tag, job_role) for tag in tags):
        score += JOB_ROLE_BONUS

    for tag in tags:
        if any(_overlaps(tag, name) for name in skill_names) or any(
            _overlaps(tag, category) for category in skill_categories
        ):
            score += SKILL_TAG_BONUS
    return score


def personalized_recommendations(user, skills: Sequence, catalog: Sequence, limit: int = 6) -> List:
    """Active recommendations relevant to the user, top `limit` by match_percentage."""
    if user is None:
        return []

    skill_names = {s.name.lower() for s in skills if s.name}
    skill_categories = {s.category.lower() for s in skills if s.category}
    job_role = user.preferred_job_role

    relevant = [
        rec for rec in catalog
        if rec.is_active and match_score(rec, job_role, skill_names, skill_categories) > 0
    ]
    relevant.sort(key=lambda rec: rec.match_percentage or 0, reverse=True)
    return relevant[:limit]


def target_difficulty(skills: Sequence) -> str:
    levels = {(s.level or "").lower() for s in skills}
    if "advanced" in levels or "expert" in levels:
        return "advanced"
    if "intermediate" in levels:
        return "intermediate"
    return "beginner"


def personalized_coding_challenge(user, skills: Sequence, challenges: Sequence, rng=random):
    """Random active challenge at the user's level, preferring their job role."""
    if user is None:
        return None

    difficulty = target_difficulty(skills)
    pool = [c for c in challenges if c.is_active and c.difficulty == difficulty]

    job_role = user.preferred_job_role
    if job_role and pool:
        role_matches = [c for c in pool if c.job_role and _overlaps(c.job_role, job_role)]
        if role_matches:
            pool = role_matches

    if not pool:
        return None
    return rng.choice(pool)


def average_level(skills: Sequence) -> str:
    """Beginner / Intermediate / Advanced from the mean of the skill levels."""
    if not skills:
        return "Beginner"
    avg = sum(LEVEL_WEIGHTS.get(s.level, UNKNOWN_LEVEL_WEIGHT) for s in skills) / len(skills)
    if avg < 1.5:
        return "Beginner"
    if avg < 2.5:
        return "Intermediate"
    return "Advanced"
