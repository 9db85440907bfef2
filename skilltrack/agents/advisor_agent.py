"""
Advisor Agent
=============
The two AI-backed features: grading a coding solution and drafting a
career roadmap. Both send a fixed prompt through the injected AIClient,
decode the JSON reply and coerce it field by field into a typed result.

Neither function raises. Any failure (network, SDK, unparsable reply)
is logged and replaced by a fixed fallback result, so routes have a
single code path whatever the state of the model provider.
"""

import json
import logging
from typing import List, Optional, Sequence

from ..schemas import CareerGuidance, SolutionCheckResult
from .matching_agent import average_level

logger = logging.getLogger(__name__)

GRADER_SYSTEM = """You are an expert programming instructor. Evaluate the student's code solution against the problem requirements.

Provide feedback in JSON format with:
- is_correct: boolean (true if solution meets requirements)
- score: number (0-100 based on correctness, efficiency, and code quality)
- feedback: string (detailed explanation of strengths/weaknesses)
- suggestions: array of strings (specific improvement recommendations)

Consider: correctness, efficiency, readability, best practices, and edge cases."""

CAREER_SYSTEM = """You are a career guidance expert. Create a personalized learning roadmap for students.

Provide response in JSON format with:
- roadmap: array of learning steps in order
- suggested_skills: array of skills to learn next
- timeline_weeks: estimated weeks to reach target role
- resources: array of specific learning resource types"""

CHECK_FALLBACK = SolutionCheckResult(
    is_correct=False,
    score=0,
    feedback="Error occurred while checking solution. Please try again.",
    suggestions=["Please ensure your code is properly formatted and try again."],
)

GUIDANCE_FALLBACK = CareerGuidance(
    roadmap=["Complete your profile and add more skills to get personalized guidance"],
    suggested_skills=[],
    timeline_weeks=12,
    resources=[],
)

MISSING_ROLE_GUIDANCE = CareerGuidance(
    roadmap=["Please complete your profile with preferred job role to get personalized guidance"],
    suggested_skills=[],
    timeline_weeks=12,
    resources=[],
)


def extract_json(text: str) -> dict:
    """Decode the outermost {...} in a model reply. Raises ValueError if there is none."""
    start = text.find("{")
    end = text.rfind("}") + 1
    if start < 0 or end <= start:
        raise ValueError("no JSON object in model reply")
    data = json.loads(text[start:end])
    if not isinstance(data, dict):
        raise ValueError("model reply is not a JSON object")
    return data


def _as_int(value, default: int) -> int:
    if isinstance(value, bool):
        return default
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return default


def _as_str_list(value) -> List[str]:
    if not isinstance(value, list):
        return []
    return [str(item) for item in value if item is not None and str(item).strip()]


def _clamp(value: int, low: int = 0, high: int = 100) -> int:
    return max(low, min(high, value))


def coerce_solution_result(data: dict) -> SolutionCheckResult:
    feedback = data.get("feedback")
    return SolutionCheckResult(
        is_correct=data.get("is_correct") is True,
        score=_clamp(_as_int(data.get("score"), 0)),
        feedback=feedback if isinstance(feedback, str) and feedback.strip() else "Unable to evaluate solution",
        suggestions=_as_str_list(data.get("suggestions")),
    )


def coerce_career_guidance(data: dict) -> CareerGuidance:
    weeks = _as_int(data.get("timeline_weeks"), 12)
    return CareerGuidance(
        roadmap=_as_str_list(data.get("roadmap")),
        suggested_skills=_as_str_list(data.get("suggested_skills")),
        timeline_weeks=weeks if weeks > 0 else 12,
        resources=_as_str_list(data.get("resources")),
    )


def check_solution(
    client,
    problem: str,
    expected_output: Optional[str],
    solution: str,
    difficulty: str,
) -> SolutionCheckResult:
    """Grade a student's solution. Returns CHECK_FALLBACK on any failure."""
    prompt = f"""Problem: {problem}

Expected behavior: {expected_output or "Correct implementation"}

Difficulty: {difficulty}

Student's solution:
```
{solution}
```

Please evaluate this solution and respond with JSON only."""

    try:
        reply = client.chat_single(prompt, system=GRADER_SYSTEM, json_mode=True, temperature=0.1)
        return coerce_solution_result(extract_json(reply))
    except Exception:
        logger.exception("Solution check failed, returning fallback result")
        return CHECK_FALLBACK.model_copy(deep=True)


def generate_career_guidance(
    client,
    skill_names: Sequence[str],
    target_job_role: str,
    current_level: str,
) -> CareerGuidance:
    """Learning roadmap towards target_job_role. Returns GUIDANCE_FALLBACK on any failure."""
    prompt = f"""Current skills: {', '.join(skill_names) or 'none yet'}
Target job role: {target_job_role}
Current level: {current_level}

Create a practical learning roadmap to reach the target role."""

    try:
        logger.info("Generating career guidance for role %r (%s)", target_job_role, current_level)
        reply = client.chat_single(prompt, system=CAREER_SYSTEM, json_mode=True)
        return coerce_career_guidance(extract_json(reply))
    except Exception:
        logger.exception("Career guidance failed, returning fallback roadmap")
        return GUIDANCE_FALLBACK.model_copy(deep=True)


def career_guidance_for(client, user, skills: Sequence) -> CareerGuidance:
    if user is None or not user.preferred_job_role:
        return MISSING_ROLE_GUIDANCE.model_copy(deep=True)

    return generate_career_guidance(
        client,
        [s.name for s in skills],
        user.preferred_job_role,
        average_level(skills),
    )
