from .user import User
from .skill import Skill, Badge
from .recommendation import Recommendation
from .challenge import Challenge, ChallengeProgress
from .coding import CodingChallenge, CodingSubmission

__all__ = [
    "User",
    "Skill",
    "Badge",
    "Recommendation",
    "Challenge",
    "ChallengeProgress",
    "CodingChallenge",
    "CodingSubmission",
]
