from sqlalchemy import Column, Integer, String, Boolean, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime
from ..database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(String(255), primary_key=True)   # identity-provider subject
    email = Column(String(255), unique=True, index=True)
    first_name = Column(String(100))
    last_name = Column(String(100))
    profile_image_url = Column(String(500))
    college = Column(String(200))
    course = Column(String(200))
    graduation_year = Column(Integer)
    preferred_job_role = Column(String(200))
    is_admin = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    skills = relationship("Skill", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)
    badges = relationship("Badge", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)
    challenge_progress = relationship(
        "ChallengeProgress", back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )
    coding_submissions = relationship(
        "CodingSubmission", back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )
