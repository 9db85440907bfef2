#!/usr/bin/env python3
"""
SkillTrack CLI
==============
Interactive operator console for SkillTrack.
Lets you manage the database without running the web server.

Usage:
    python cli.py
"""

import os
import sys
import json
from pathlib import Path

# Ensure we can import skilltrack
sys.path.insert(0, str(Path(__file__).parent))

# Load .env
from dotenv import load_dotenv
load_dotenv()

from skilltrack.config import settings
from skilltrack.database import SessionLocal, init_db
from skilltrack.storage import Storage
from skilltrack.seed import seed_catalog
from skilltrack.ai_client import AIClient
from skilltrack.agents.advisor_agent import career_guidance_for


# ── UI helpers ──────────────────────────────────────────────────────────────

def clr():
    os.system("clear" if os.name != "nt" else "cls")

def header():
    print("\n" + "="*60)
    print("        SkillTrack  — Operator Console")
    print("="*60)

def section(title: str):
    print(f"\n{'─'*55}")
    print(f"  {title}")
    print("─"*55)

def ask(prompt: str, default: str = "") -> str:
    if default:
        val = input(f"{prompt} [{default}]: ").strip()
        return val or default
    return input(f"{prompt}: ").strip()

def print_json(data, indent: int = 2):
    print(json.dumps(data, indent=indent, ensure_ascii=False, default=str))

def user_label(user) -> str:
    name = " ".join(p for p in (user.first_name, user.last_name) if p) or user.email or user.id
    return f"{name} ({user.id})"


# ── Flows ───────────────────────────────────────────────────────────────────

def flow_init():
    section("INITIALISE DATABASE")
    init_db()
    print(f"Tables ready at {settings.DATABASE_URL}")


def flow_seed(storage: Storage):
    section("SEED CATALOG")
    added = seed_catalog(storage.db)
    print(f"Inserted {added} rows." if added else "Catalog already seeded.")


def flow_promote(storage: Storage):
    section("PROMOTE TO ADMIN")
    user_id = ask("User id")
    if not user_id:
        return
    revoke = ask("Revoke instead of grant? [y/n]", "n").lower() == "y"
    user = storage.set_admin(user_id, is_admin=not revoke)
    if user is None:
        print(f"No user with id {user_id}.")
        return
    print(f"{user_label(user)} is_admin={user.is_admin}")


def flow_leaderboards(storage: Storage):
    section("SKILL LEADERBOARD")
    rows = storage.get_leaderboard(limit=settings.LEADERBOARD_LIMIT)
    if not rows:
        print("  (no users yet)")
    for i, row in enumerate(rows, 1):
        print(f"  #{i:<3} {user_label(row['user'])} — {row['skill_count']} skills")

    section("CODING LEADERBOARD")
    rows = storage.get_coding_leaderboard()
    if not rows:
        print("  (no submissions yet)")
    for i, row in enumerate(rows, 1):
        print(f"  #{i:<3} {user_label(row['user'])} — {row['total_score']} pts "
              f"over {row['submission_count']} submissions")


def flow_stats(storage: Storage):
    section("STATS")
    print_json(storage.get_total_stats(window_days=settings.ACTIVE_USER_WINDOW_DAYS))


def flow_guidance(storage: Storage, ai: AIClient):
    section("CAREER ROADMAP")
    user_id = ask("User id")
    user = storage.get_user(user_id) if user_id else None
    if user is None:
        print("Unknown user.")
        return

    if user.preferred_job_role and not settings.OPENAI_API_KEY:
        print("\n⚠  OPENAI_API_KEY not set — the model call will fall back.")

    print("Asking the career advisor... (this may take 10-20s)")
    guidance = career_guidance_for(ai, user, storage.get_user_skills(user.id))

    print(f"\n  ROADMAP ({guidance.timeline_weeks} weeks):")
    for i, step in enumerate(guidance.roadmap, 1):
        print(f"  {i}. {step}")
    if guidance.suggested_skills:
        print(f"\n  Suggested skills: {' | '.join(guidance.suggested_skills)}")
    if guidance.resources:
        print(f"  Resources: {' | '.join(guidance.resources)}")


# ── Main ─────────────────────────────────────────────────────────────────────

def main():
    clr()
    header()
    init_db()

    db = SessionLocal()
    storage = Storage(db)
    ai = AIClient.from_settings()

    try:
        while True:
            section("MAIN MENU")
            print("  1  Initialise database")
            print("  2  Seed starter catalog")
            print("  3  Promote / demote admin")
            print("  4  Show leaderboards")
            print("  5  Show stats")
            print("  6  Generate career roadmap for a user")
            print("  0  Exit")

            try:
                choice = ask("\nChoice")
            except (KeyboardInterrupt, EOFError):
                print()
                break

            if choice == "1":
                flow_init()
            elif choice == "2":
                flow_seed(storage)
            elif choice == "3":
                flow_promote(storage)
            elif choice == "4":
                flow_leaderboards(storage)
            elif choice == "5":
                flow_stats(storage)
            elif choice == "6":
                flow_guidance(storage, ai)
            elif choice == "0":
                break
    finally:
        ai.close()
        db.close()

    print("\nGoodbye!\n")


if __name__ == "__main__":
    main()
