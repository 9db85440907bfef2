"""
Starter catalog: recommendations, coding challenges and one monthly challenge.

seed_catalog is idempotent: rows whose title already exists are skipped.
"""

import logging
from datetime import datetime, timedelta

from sqlalchemy.orm import Session

from .models import Challenge, CodingChallenge, Recommendation

logger = logging.getLogger(__name__)

RECOMMENDATIONS = [
    {
        "title": "React - The Complete Guide",
        "description": "Hooks, routing, state management and testing with modern React.",
        "type": "Course",
        "provider": "Udemy",
        "level": "Intermediate",
        "duration": "48 hours",
        "price": "$19.99",
        "rating": "4.7",
        "review_count": "210k",
        "match_percentage": 92,
        "tags": ["react", "javascript", "frontend developer"],
    },
    {
        "title": "Python for Everybody",
        "description": "Programming fundamentals, data structures and web data in Python.",
        "type": "Course",
        "provider": "Coursera",
        "level": "Beginner",
        "duration": "8 weeks",
        "price": "Free",
        "rating": "4.8",
        "review_count": "95k",
        "match_percentage": 88,
        "tags": ["python", "programming", "data analyst"],
    },
    {
        "title": "Backend Engineering Summer Internship",
        "description": "Ten-week internship building REST services and data pipelines.",
        "type": "Internship",
        "provider": "Acme Labs",
        "duration": "10 weeks",
        "location": "Remote",
        "match_percentage": 81,
        "tags": ["backend developer", "python", "sql"],
    },
    {
        "title": "Data Science Hackathon",
        "description": "48-hour hackathon on open datasets, mentors from industry.",
        "type": "Event",
        "provider": "DataFest",
        "duration": "2 days",
        "location": "Bangalore",
        "match_percentage": 74,
        "tags": ["data science", "machine learning", "python"],
    },
    {
        "title": "AWS Certified Cloud Practitioner",
        "description": "Entry-level certification covering core AWS services and billing.",
        "type": "Certification",
        "provider": "Amazon Web Services",
        "level": "Beginner",
        "price": "$100",
        "match_percentage": 69,
        "tags": ["cloud", "aws", "devops engineer"],
    },
    {
        "title": "UI/UX Design Fundamentals",
        "description": "Wireframing, prototyping and usability testing with Figma.",
        "type": "Course",
        "provider": "Google",
        "level": "Beginner",
        "duration": "6 weeks",
        "match_percentage": 63,
        "tags": ["design", "figma", "ui/ux designer"],
    },
]

CODING_CHALLENGES = [
    {
        "title": "Reverse a String",
        "description": "Warm-up string manipulation.",
        "difficulty": "beginner",
        "category": "backend",
        "job_role": "backend-developer",
        "problem_statement": "Write a function that returns the input string reversed without using built-in reverse helpers.",
        "expected_output": "reverse('hello') == 'olleh'",
        "hints": ["Iterate from the last index", "Build the result incrementally"],
        "tags": ["strings", "loops"],
        "points": 10,
    },
    {
        "title": "Toggle Button Component",
        "description": "A small stateful UI component.",
        "difficulty": "beginner",
        "category": "frontend",
        "job_role": "frontend-developer",
        "problem_statement": "Build a button component that toggles its label between 'ON' and 'OFF' each time it is clicked.",
        "expected_output": "First click shows 'ON', second click shows 'OFF'.",
        "hints": ["Keep the current state in a variable"],
        "tags": ["react", "state"],
        "points": 10,
    },
    {
        "title": "Group Sales by Region",
        "description": "Aggregate tabular data.",
        "difficulty": "intermediate",
        "category": "data-science",
        "job_role": "data-analyst",
        "problem_statement": "Given a list of (region, amount) records, return the total amount per region sorted by total descending.",
        "expected_output": "[('north', 300), ('south', 120)]",
        "hints": ["Use a dictionary to accumulate totals"],
        "tags": ["aggregation", "sorting"],
        "points": 20,
    },
    {
        "title": "Paginated REST Endpoint",
        "description": "Offset/limit pagination.",
        "difficulty": "intermediate",
        "category": "backend",
        "job_role": "backend-developer",
        "problem_statement": "Implement an endpoint handler that returns page N of a list of items with a given page size, plus the total page count.",
        "expected_output": "page(items, 2, 10) returns items 10-19 and total_pages",
        "hints": ["Validate page and size", "Handle the last partial page"],
        "tags": ["api", "pagination"],
        "points": 20,
    },
    {
        "title": "LRU Cache",
        "description": "Constant-time cache with eviction.",
        "difficulty": "advanced",
        "category": "backend",
        "job_role": "backend-developer",
        "problem_statement": "Implement an LRU cache with get and put in O(1) time and a fixed capacity.",
        "expected_output": "Least recently used key is evicted when capacity is exceeded.",
        "hints": ["Combine a hash map with a doubly linked list"],
        "tags": ["data structures", "caching"],
        "points": 30,
    },
    {
        "title": "Virtualised List",
        "description": "Render only visible rows.",
        "difficulty": "advanced",
        "category": "frontend",
        "job_role": "frontend-developer",
        "problem_statement": "Render a list of 100,000 rows so that only the rows in the viewport (plus a small buffer) exist in the DOM.",
        "expected_output": "Scrolling stays smooth; DOM node count stays bounded.",
        "hints": ["Compute the first visible index from scrollTop"],
        "tags": ["performance", "react"],
        "points": 30,
    },
]

MONTHLY_CHALLENGE = {
    "title": "Skill Sprint",
    "description": "Add and level up five skills this month.",
    "target_count": 5,
    "reward_badge": "Skill Sprinter",
}


def _missing(db: Session, model, rows: list) -> list:
    existing = {title for (title,) in db.query(model.title).all()}
    return [row for row in rows if row["title"] not in existing]


def seed_catalog(db: Session) -> int:
    """Insert the starter catalog; returns the number of rows added."""
    added = 0
    for row in _missing(db, Recommendation, RECOMMENDATIONS):
        db.add(Recommendation(**row))
        added += 1
    for row in _missing(db, CodingChallenge, CODING_CHALLENGES):
        db.add(CodingChallenge(**row))
        added += 1
    if _missing(db, Challenge, [MONTHLY_CHALLENGE]):
        now = datetime.utcnow()
        db.add(Challenge(**MONTHLY_CHALLENGE, start_date=now, end_date=now + timedelta(days=30)))
        added += 1

    db.commit()
    logger.info("Seeded %d catalog rows", added)
    return added
