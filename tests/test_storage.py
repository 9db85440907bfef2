import random
from datetime import datetime, timedelta

from skilltrack.models import Badge, Skill, User
from skilltrack.seed import seed_catalog


def make_user(storage, sub, **profile):
    user = storage.upsert_user({"sub": sub, "email": f"{sub}@example.com"})
    if profile:
        user = storage.update_user_profile(sub, profile)
    return user


def add_skills(storage, user_id, *names, level="Beginner"):
    for name in names:
        storage.create_skill(user_id, {"name": name, "category": "Programming", "level": level, "progress": 10})


class TestUsers:
    def test_upsert_inserts_then_updates_identity_only(self, storage):
        storage.upsert_user({"sub": "u1", "email": "old@example.com", "first_name": "Ana"})
        storage.update_user_profile("u1", {"college": "IIT", "preferred_job_role": "Data Analyst"})
        storage.set_admin("u1")

        user = storage.upsert_user({"sub": "u1", "email": "new@example.com", "first_name": "Ana"})

        assert user.email == "new@example.com"
        assert user.is_admin is True
        assert user.college == "IIT"
        assert storage.db.query(User).count() == 1

    def test_skills_removed_with_user(self, storage, db):
        make_user(storage, "u1")
        add_skills(storage, "u1", "Python", "SQL")
        db.delete(storage.get_user("u1"))
        db.commit()
        assert db.query(Skill).count() == 0


class TestLeaderboard:
    def test_zero_skill_users_come_last(self, storage):
        make_user(storage, "none")
        make_user(storage, "two")
        make_user(storage, "one")
        add_skills(storage, "two", "Python", "SQL")
        add_skills(storage, "one", "Go")

        rows = storage.get_leaderboard()

        assert [(r["user"].id, r["skill_count"]) for r in rows] == [("two", 2), ("one", 1), ("none", 0)]

    def test_limit_and_complete_rankings(self, storage):
        for i in range(12):
            make_user(storage, f"u{i}")
            add_skills(storage, f"u{i}", *[f"s{n}" for n in range(i)])

        assert len(storage.get_leaderboard()) == 10
        assert len(storage.get_leaderboard(limit=None)) == 12
        assert storage.get_leaderboard()[0]["user"].id == "u11"

    def test_coding_leaderboard_sums_scores(self, storage):
        make_user(storage, "a")
        make_user(storage, "b")
        make_user(storage, "idle")
        challenge = storage.create_coding_challenge({
            "title": "t", "description": "d", "difficulty": "beginner", "category": "backend",
            "job_role": "backend-developer", "problem_statement": "p",
        })
        for user_id, score in [("a", 30), ("a", 50), ("b", 70)]:
            storage.create_coding_submission({
                "user_id": user_id, "challenge_id": challenge.id, "solution": "x",
                "status": "submitted", "score": score,
            })

        rows = storage.get_coding_leaderboard()

        assert [(r["user"].id, r["total_score"], r["submission_count"]) for r in rows] == [
            ("a", 80, 2),
            ("b", 70, 1),
        ]


def test_stats_active_window(storage, db):
    make_user(storage, "fresh")
    make_user(storage, "stale")
    make_user(storage, "empty")
    add_skills(storage, "fresh", "Python", "SQL")
    db.add(Skill(user_id="stale", name="Perl", category="Programming", level="Beginner",
                 updated_at=datetime.utcnow() - timedelta(days=30)))
    db.commit()

    assert storage.get_total_stats() == {"total_users": 3, "total_skills": 3, "active_users": 1}
    assert storage.get_total_stats(window_days=60)["active_users"] == 2


class TestChallengeProgress:
    def make_challenge(self, storage, **overrides):
        data = {
            "title": "Skill Sprint",
            "target_count": 5,
            "reward_badge": "Sprinter",
            "end_date": datetime.utcnow() + timedelta(days=10),
        }
        data.update(overrides)
        return storage.create_challenge(data)

    def test_completion_awards_badge_once(self, storage, db):
        make_user(storage, "u1")
        challenge = self.make_challenge(storage)

        entry = storage.update_challenge_progress("u1", challenge.id, 40)
        assert entry.completed is False
        assert db.query(Badge).count() == 0

        entry = storage.update_challenge_progress("u1", challenge.id, 100)
        assert entry.completed is True
        assert entry.completed_at is not None

        storage.update_challenge_progress("u1", challenge.id, 100)
        badges = storage.get_user_badges("u1")
        assert [b.name for b in badges] == ["Sprinter"]

    def test_active_challenge_ignores_expired(self, storage):
        self.make_challenge(storage, title="old", end_date=datetime.utcnow() - timedelta(days=1))
        assert storage.get_active_challenge() is None
        self.make_challenge(storage, title="current")
        assert storage.get_active_challenge().title == "current"


class TestPersonalisation:
    def test_recommendations_use_profile_and_skills(self, storage):
        seed_catalog(storage.db)
        make_user(storage, "u1", preferred_job_role="Frontend Developer")
        add_skills(storage, "u1", "React.js")

        titles = [r.title for r in storage.get_personalized_recommendations("u1")]

        assert "React - The Complete Guide" in titles
        assert "AWS Certified Cloud Practitioner" not in titles

    def test_unknown_user_gets_nothing(self, storage):
        assert storage.get_personalized_recommendations("ghost") == []
        assert storage.get_personalized_coding_challenge("ghost") is None

    def test_coding_challenge_matches_level_and_role(self, storage):
        seed_catalog(storage.db)
        make_user(storage, "u1", preferred_job_role="Frontend")
        add_skills(storage, "u1", "JavaScript", level="Advanced")

        picked = storage.get_personalized_coding_challenge("u1", rng=random.Random(1))

        assert picked.difficulty == "advanced"
        assert picked.job_role == "frontend-developer"


def test_seed_is_idempotent(db):
    assert seed_catalog(db) > 0
    assert seed_catalog(db) == 0
