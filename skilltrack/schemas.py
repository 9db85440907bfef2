"""
Request and response shapes for the HTTP API.

Request bodies are validated here so the routes never touch raw JSON;
response models read straight from the ORM rows (from_attributes).
"""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

SkillLevel = Literal["Beginner", "Intermediate", "Advanced"]
RecommendationType = Literal["Course", "Internship", "Event", "Certification"]
Difficulty = Literal["beginner", "intermediate", "advanced"]


class ORMModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)


# ── Requests ─────────────────────────────────────────────────────────────────

class IdentityClaims(BaseModel):
    """Claims handed over by the identity provider after login."""
    sub: str = Field(min_length=1)
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None


class ProfileUpdate(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    college: Optional[str] = None
    course: Optional[str] = None
    graduation_year: Optional[int] = Field(default=None, ge=1900, le=2100)
    preferred_job_role: Optional[str] = None


class SkillCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    category: str = Field(min_length=1, max_length=100)
    level: SkillLevel
    progress: int = Field(default=0, ge=0, le=100)
    certificate_url: Optional[str] = None


class SkillUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    category: Optional[str] = Field(default=None, min_length=1, max_length=100)
    level: Optional[SkillLevel] = None
    progress: Optional[int] = Field(default=None, ge=0, le=100)
    certificate_url: Optional[str] = None

    @model_validator(mode="after")
    def reject_nulls(self):
        # Only certificate_url may be cleared; the other columns are NOT NULL
        for field in ("name", "category", "level", "progress"):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self


class BadgeCreate(BaseModel):
    user_id: str
    name: str = Field(min_length=1)
    description: Optional[str] = None
    icon: str = Field(min_length=1)


class RecommendationCreate(BaseModel):
    title: str = Field(min_length=1)
    description: Optional[str] = None
    type: RecommendationType
    url: Optional[str] = None
    provider: Optional[str] = None
    image_url: Optional[str] = None
    level: Optional[SkillLevel] = None
    duration: Optional[str] = None
    price: Optional[str] = None
    rating: Optional[str] = None
    review_count: Optional[str] = None
    match_percentage: Optional[int] = Field(default=None, ge=0, le=100)
    deadline: Optional[datetime] = None
    location: Optional[str] = None
    tags: List[str] = []
    is_active: bool = True


class ChallengeCreate(BaseModel):
    title: str = Field(min_length=1)
    description: Optional[str] = None
    target_count: int = Field(gt=0)
    reward_badge: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: datetime
    is_active: bool = True


class ChallengeProgressUpdate(BaseModel):
    progress: int = Field(ge=0, le=100)


class CodingChallengeCreate(BaseModel):
    title: str = Field(min_length=1)
    description: str
    difficulty: Difficulty
    category: str
    job_role: str
    problem_statement: str = Field(min_length=1)
    expected_output: Optional[str] = None
    hints: List[str] = []
    tags: List[str] = []
    points: int = Field(default=10, ge=0)
    is_active: bool = True


class CodingSubmissionCreate(BaseModel):
    challenge_id: int
    solution: str = Field(min_length=1)
    language: str = "python"


# ── Responses ────────────────────────────────────────────────────────────────

class UserOut(ORMModel):
    id: str
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None
    college: Optional[str] = None
    course: Optional[str] = None
    graduation_year: Optional[int] = None
    preferred_job_role: Optional[str] = None
    is_admin: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class SkillOut(ORMModel):
    id: int
    user_id: str
    name: str
    category: str
    level: str
    progress: int = 0
    certificate_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class BadgeOut(ORMModel):
    id: int
    user_id: str
    name: str
    description: Optional[str] = None
    icon: str
    earned_at: Optional[datetime] = None


class RecommendationOut(ORMModel):
    id: int
    title: str
    description: Optional[str] = None
    type: str
    url: Optional[str] = None
    provider: Optional[str] = None
    image_url: Optional[str] = None
    level: Optional[str] = None
    duration: Optional[str] = None
    price: Optional[str] = None
    rating: Optional[str] = None
    review_count: Optional[str] = None
    match_percentage: Optional[int] = None
    deadline: Optional[datetime] = None
    location: Optional[str] = None
    tags: List[str] = []
    is_active: bool = True
    created_at: Optional[datetime] = None


class ChallengeOut(ORMModel):
    id: int
    title: str
    description: Optional[str] = None
    target_count: int
    reward_badge: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: datetime
    is_active: bool = True


class ChallengeProgressOut(ORMModel):
    id: int
    user_id: str
    challenge_id: int
    progress: int = 0
    completed: bool = False
    completed_at: Optional[datetime] = None


class ActiveChallengeOut(BaseModel):
    challenge: ChallengeOut
    progress: Optional[ChallengeProgressOut] = None


class CodingChallengeOut(ORMModel):
    id: int
    title: str
    description: str
    difficulty: str
    category: str
    job_role: str
    problem_statement: str
    expected_output: Optional[str] = None
    hints: List[str] = []
    tags: List[str] = []
    points: int = 10
    is_active: bool = True
    created_at: Optional[datetime] = None


class CodingSubmissionOut(ORMModel):
    id: int
    user_id: str
    challenge_id: int
    solution: str
    language: str
    status: str
    score: int = 0
    feedback: Optional[str] = None
    submitted_at: Optional[datetime] = None


class LeaderboardEntry(BaseModel):
    user: UserOut
    skill_count: int


class CodingLeaderboardEntry(BaseModel):
    user: UserOut
    total_score: int
    submission_count: int


class StatsOut(BaseModel):
    total_users: int
    total_skills: int
    active_users: int


# ── AI advisory results ─────────────────────────────────────────────────────

class SolutionCheckResult(BaseModel):
    is_correct: bool = False
    score: int = Field(default=0, ge=0, le=100)
    feedback: str = "Unable to evaluate solution"
    suggestions: List[str] = []


class CareerGuidance(BaseModel):
    roadmap: List[str] = []
    suggested_skills: List[str] = []
    timeline_weeks: int = 12
    resources: List[str] = []


class SubmissionResultOut(BaseModel):
    submission: CodingSubmissionOut
    result: SolutionCheckResult
