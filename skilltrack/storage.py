"""
Persistence gateway: one method per use case over a SQLAlchemy session.

Every mutating method commits its own unit of work and refreshes the row
it returns. Aggregates (leaderboards, stats) are single grouped queries.
"""

import random
from datetime import datetime, timedelta
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from .agents import matching_agent
from .models import (
    Badge,
    Challenge,
    ChallengeProgress,
    CodingChallenge,
    CodingSubmission,
    Recommendation,
    Skill,
    User,
)

CHALLENGE_BADGE_ICON = "trophy"


class Storage:
    def __init__(self, db: Session):
        self.db = db

    def _save(self, obj):
        self.db.add(obj)
        self.db.commit()
        self.db.refresh(obj)
        return obj

    # ── Users ────────────────────────────────────────────────────────────

    def get_user(self, user_id: str) -> Optional[User]:
        return self.db.get(User, user_id)

    def upsert_user(self, claims: dict) -> User:
        """Insert the user, or refresh the identity fields of an existing row."""
        user = self.get_user(claims["sub"])
        if user is None:
            user = User(id=claims["sub"])
        for field in ("email", "first_name", "last_name", "profile_image_url"):
            if field in claims:
                setattr(user, field, claims[field])
        return self._save(user)

    def update_user_profile(self, user_id: str, profile: dict) -> Optional[User]:
        user = self.get_user(user_id)
        if user is None:
            return None
        for field, value in profile.items():
            setattr(user, field, value)
        user.updated_at = datetime.utcnow()
        return self._save(user)

    def get_all_users(self) -> List[User]:
        return self.db.query(User).order_by(User.created_at.desc()).all()

    def set_admin(self, user_id: str, is_admin: bool = True) -> Optional[User]:
        user = self.get_user(user_id)
        if user is None:
            return None
        user.is_admin = is_admin
        return self._save(user)

    # ── Skills ───────────────────────────────────────────────────────────

    def get_user_skills(self, user_id: str) -> List[Skill]:
        return (
            self.db.query(Skill)
            .filter(Skill.user_id == user_id)
            .order_by(Skill.updated_at.desc(), Skill.id.desc())
            .all()
        )

    def get_skill(self, skill_id: int, user_id: Optional[str] = None) -> Optional[Skill]:
        query = self.db.query(Skill).filter(Skill.id == skill_id)
        if user_id is not None:
            query = query.filter(Skill.user_id == user_id)
        return query.first()

    def create_skill(self, user_id: str, data: dict) -> Skill:
        return self._save(Skill(user_id=user_id, **data))

    def update_skill(self, skill: Skill, updates: dict) -> Skill:
        for field, value in updates.items():
            setattr(skill, field, value)
        skill.updated_at = datetime.utcnow()
        return self._save(skill)

    def delete_skill(self, skill: Skill):
        self.db.delete(skill)
        self.db.commit()

    # ── Badges ───────────────────────────────────────────────────────────

    def get_user_badges(self, user_id: str) -> List[Badge]:
        return (
            self.db.query(Badge)
            .filter(Badge.user_id == user_id)
            .order_by(Badge.earned_at.desc(), Badge.id.desc())
            .all()
        )

    def create_badge(self, data: dict) -> Badge:
        return self._save(Badge(**data))

    # ── Recommendations ──────────────────────────────────────────────────

    def get_recommendations(self) -> List[Recommendation]:
        return (
            self.db.query(Recommendation)
            .filter(Recommendation.is_active.is_(True))
            .order_by(Recommendation.match_percentage.desc())
            .all()
        )

    def get_personalized_recommendations(self, user_id: str, limit: int = 6) -> List[Recommendation]:
        user = self.get_user(user_id)
        if user is None:
            return []
        catalog = self.db.query(Recommendation).filter(Recommendation.is_active.is_(True)).all()
        return matching_agent.personalized_recommendations(
            user, self.get_user_skills(user_id), catalog, limit=limit
        )

    def create_recommendation(self, data: dict) -> Recommendation:
        return self._save(Recommendation(**data))

    # ── Challenges ───────────────────────────────────────────────────────

    def get_active_challenge(self) -> Optional[Challenge]:
        return (
            self.db.query(Challenge)
            .filter(Challenge.is_active.is_(True), Challenge.end_date > datetime.utcnow())
            .order_by(Challenge.start_date.desc())
            .first()
        )

    def get_challenge(self, challenge_id: int) -> Optional[Challenge]:
        return self.db.get(Challenge, challenge_id)

    def create_challenge(self, data: dict) -> Challenge:
        data = dict(data)
        if data.get("start_date") is None:
            data.pop("start_date", None)
        return self._save(Challenge(**data))

    def get_user_challenge_progress(self, user_id: str, challenge_id: int) -> Optional[ChallengeProgress]:
        return (
            self.db.query(ChallengeProgress)
            .filter(ChallengeProgress.user_id == user_id, ChallengeProgress.challenge_id == challenge_id)
            .first()
        )

    def update_challenge_progress(self, user_id: str, challenge_id: int, progress: int) -> ChallengeProgress:
        """Record progress; the first time it reaches 100 the reward badge is awarded."""
        entry = self.get_user_challenge_progress(user_id, challenge_id)
        if entry is None:
            entry = ChallengeProgress(user_id=user_id, challenge_id=challenge_id, completed=False)
            self.db.add(entry)

        was_completed = bool(entry.completed)
        entry.progress = progress
        entry.completed = progress >= 100

        if entry.completed and not was_completed:
            entry.completed_at = datetime.utcnow()
            challenge = self.get_challenge(challenge_id)
            if challenge is not None and challenge.reward_badge:
                self.db.add(Badge(
                    user_id=user_id,
                    name=challenge.reward_badge,
                    description=f"Completed the challenge: {challenge.title}",
                    icon=CHALLENGE_BADGE_ICON,
                ))
        elif not entry.completed:
            entry.completed_at = None

        return self._save(entry)

    # ── Coding challenges ────────────────────────────────────────────────

    def get_coding_challenges(self) -> List[CodingChallenge]:
        return (
            self.db.query(CodingChallenge)
            .filter(CodingChallenge.is_active.is_(True))
            .order_by(CodingChallenge.id)
            .all()
        )

    def get_coding_challenge(self, challenge_id: int) -> Optional[CodingChallenge]:
        return self.db.get(CodingChallenge, challenge_id)

    def create_coding_challenge(self, data: dict) -> CodingChallenge:
        return self._save(CodingChallenge(**data))

    def get_personalized_coding_challenge(self, user_id: str, rng=random) -> Optional[CodingChallenge]:
        user = self.get_user(user_id)
        if user is None:
            return None
        return matching_agent.personalized_coding_challenge(
            user, self.get_user_skills(user_id), self.get_coding_challenges(), rng=rng
        )

    def create_coding_submission(self, data: dict) -> CodingSubmission:
        return self._save(CodingSubmission(**data))

    def get_coding_submissions(self, user_id: str) -> List[CodingSubmission]:
        return (
            self.db.query(CodingSubmission)
            .filter(CodingSubmission.user_id == user_id)
            .order_by(CodingSubmission.submitted_at.desc(), CodingSubmission.id.desc())
            .all()
        )

    # ── Aggregates ───────────────────────────────────────────────────────

    def get_leaderboard(self, limit: Optional[int] = 10) -> List[dict]:
        """Users by number of skills; users without skills count 0 and come last."""
        skill_count = func.count(Skill.id)
        query = (
            self.db.query(User, skill_count.label("skill_count"))
            .outerjoin(Skill, Skill.user_id == User.id)
            .group_by(User.id)
            .order_by(skill_count.desc())
        )
        if limit is not None:
            query = query.limit(limit)
        return [{"user": user, "skill_count": count or 0} for user, count in query.all()]

    def get_coding_leaderboard(self) -> List[dict]:
        """Total submission score per user. Order among equal totals is unspecified."""
        total = func.coalesce(func.sum(CodingSubmission.score), 0)
        rows = (
            self.db.query(User, total.label("total_score"), func.count(CodingSubmission.id))
            .join(CodingSubmission, CodingSubmission.user_id == User.id)
            .group_by(User.id)
            .order_by(total.desc())
            .all()
        )
        return [
            {"user": user, "total_score": int(score or 0), "submission_count": count}
            for user, score, count in rows
        ]

    def get_total_stats(self, window_days: int = 7) -> dict:
        since = datetime.utcnow() - timedelta(days=window_days)
        active_users = (
            self.db.query(func.count(func.distinct(Skill.user_id)))
            .filter(Skill.updated_at > since)
            .scalar()
        )
        return {
            "total_users": self.db.query(func.count(User.id)).scalar() or 0,
            "total_skills": self.db.query(func.count(Skill.id)).scalar() or 0,
            "active_users": active_users or 0,
        }
