from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, JSON, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
from ..database import Base


class CodingChallenge(Base):
    __tablename__ = "coding_challenges"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(300), nullable=False)
    description = Column(Text, nullable=False)
    difficulty = Column(String(50), nullable=False)  # beginner, intermediate, advanced
    category = Column(String(100), nullable=False)   # frontend, backend, fullstack, data-science
    job_role = Column(String(200), nullable=False)   # frontend-developer, data-analyst ...
    problem_statement = Column(Text, nullable=False)
    expected_output = Column(Text)
    hints = Column(JSON, default=list)
    tags = Column(JSON, default=list)
    points = Column(Integer, default=10)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    submissions = relationship(
        "CodingSubmission", back_populates="challenge", cascade="all, delete-orphan", passive_deletes=True
    )


class CodingSubmission(Base):
    __tablename__ = "coding_submissions"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(255), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    challenge_id = Column(Integer, ForeignKey("coding_challenges.id", ondelete="CASCADE"), nullable=False)
    solution = Column(Text, nullable=False)
    language = Column(String(50), nullable=False, default="python")
    status = Column(String(50), nullable=False)      # submitted, correct, incorrect
    score = Column(Integer, default=0)
    feedback = Column(Text)
    submitted_at = Column(DateTime, default=datetime.utcnow)

    user = relationship("User", back_populates="coding_submissions")
    challenge = relationship("CodingChallenge", back_populates="submissions")
