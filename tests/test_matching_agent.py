import random
from types import SimpleNamespace

from skilltrack.agents.matching_agent import (
    average_level,
    match_score,
    personalized_coding_challenge,
    personalized_recommendations,
    target_difficulty,
)


def user(job_role=None):
    return SimpleNamespace(preferred_job_role=job_role)


def skill(name, category="Programming", level="Beginner"):
    return SimpleNamespace(name=name, category=category, level=level)


def rec(title, tags, match_percentage=50, is_active=True):
    return SimpleNamespace(title=title, tags=tags, match_percentage=match_percentage, is_active=is_active)


def challenge(title, difficulty="beginner", job_role="backend-developer", is_active=True):
    return SimpleNamespace(title=title, difficulty=difficulty, job_role=job_role, is_active=is_active)


class TestRecommendations:
    def test_tag_contained_in_skill_name_matches(self):
        result = personalized_recommendations(user(), [skill("React.js")], [rec("React", ["react"])])
        assert [r.title for r in result] == ["React"]

    def test_skill_name_contained_in_tag_matches(self):
        result = personalized_recommendations(user(), [skill("SQL")], [rec("DB", ["PostgreSQL Basics"])])
        assert len(result) == 1

    def test_category_matches(self):
        result = personalized_recommendations(
            user(), [skill("Figma", category="Design")], [rec("UX", ["design"])]
        )
        assert len(result) == 1

    def test_job_role_matches_without_skills(self):
        result = personalized_recommendations(
            user("Frontend Developer"), [], [rec("Intern", ["frontend"])]
        )
        assert len(result) == 1

    def test_unrelated_and_untagged_are_dropped(self):
        catalog = [rec("Cooking", ["culinary"]), rec("Empty", []), rec("None", None)]
        assert personalized_recommendations(user("Data Analyst"), [skill("Python")], catalog) == []

    def test_inactive_is_dropped(self):
        catalog = [rec("Old", ["python"], is_active=False)]
        assert personalized_recommendations(user(), [skill("Python")], catalog) == []

    def test_sorted_by_stored_percentage_not_score(self):
        # "many" scores far higher (role hit + three tag hits) but has a lower stored percentage
        catalog = [
            rec("many", ["python", "programming", "backend developer"], match_percentage=40),
            rec("one", ["python"], match_percentage=90),
            rec("unset", ["python"], match_percentage=None),
        ]
        result = personalized_recommendations(user("Backend Developer"), [skill("Python")], catalog)
        assert [r.title for r in result] == ["one", "many", "unset"]

    def test_capped_at_six(self):
        catalog = [rec(f"r{i}", ["python"], match_percentage=i) for i in range(10)]
        result = personalized_recommendations(user(), [skill("Python")], catalog)
        assert len(result) == 6
        assert [r.match_percentage for r in result] == [9, 8, 7, 6, 5, 4]

    def test_blank_tags_do_not_match_everything(self):
        catalog = [rec("Blank", ["", "culinary"])]
        assert personalized_recommendations(user("Data Analyst"), [skill("Python")], catalog) == []

    def test_no_user(self):
        assert personalized_recommendations(None, [skill("Python")], [rec("x", ["python"])]) == []

    def test_match_score_weights(self):
        r = rec("x", ["python", "web developer", "unrelated"])
        assert match_score(r, "Web Developer", {"python"}, {"programming"}) == 60
        assert match_score(r, None, {"python"}, set()) == 10


class TestCodingChallenge:
    def test_target_difficulty(self):
        assert target_difficulty([]) == "beginner"
        assert target_difficulty([skill("a", level="Beginner")]) == "beginner"
        assert target_difficulty([skill("a", level="Intermediate"), skill("b")]) == "intermediate"
        assert target_difficulty([skill("a", level="Intermediate"), skill("b", level="Advanced")]) == "advanced"
        assert target_difficulty([skill("a", level="Expert")]) == "advanced"

    def test_picks_from_matching_difficulty(self):
        pool = [challenge("easy"), challenge("hard", difficulty="advanced")]
        for seed in range(10):
            picked = personalized_coding_challenge(user(), [skill("Python")], pool, rng=random.Random(seed))
            assert picked.title == "easy"

    def test_narrows_to_job_role(self):
        pool = [
            challenge("be", job_role="backend-developer"),
            challenge("fe", job_role="frontend-developer"),
        ]
        for seed in range(10):
            picked = personalized_coding_challenge(user("Frontend"), [], pool, rng=random.Random(seed))
            assert picked.title == "fe"

    def test_keeps_wider_set_when_role_has_no_match(self):
        pool = [challenge("a"), challenge("b")]
        seen = {
            personalized_coding_challenge(user("Astronaut"), [], pool, rng=random.Random(seed)).title
            for seed in range(30)
        }
        assert seen == {"a", "b"}

    def test_skips_inactive_and_returns_none_when_empty(self):
        pool = [challenge("off", is_active=False), challenge("adv", difficulty="advanced")]
        assert personalized_coding_challenge(user(), [], pool) is None
        assert personalized_coding_challenge(None, [], [challenge("x")]) is None


def test_average_level():
    assert average_level([]) == "Beginner"
    assert average_level([skill("a"), skill("b", level="Intermediate")]) == "Intermediate"
    assert average_level([skill("a"), skill("b"), skill("c", level="Intermediate")]) == "Beginner"
    assert average_level([skill("a", level="Advanced"), skill("b", level="Intermediate")]) == "Advanced"


def test_unknown_level_weighs_as_advanced():
    assert average_level([skill("a", level="Guru")]) == "Advanced"
    assert average_level([skill("a"), skill("b", level="Guru")]) == "Intermediate"
