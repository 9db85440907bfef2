from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from datetime import datetime
from ..database import Base

SKILL_LEVELS = ("Beginner", "Intermediate", "Advanced")


class Skill(Base):
    __tablename__ = "skills"
    __table_args__ = (
        CheckConstraint("progress >= 0 AND progress <= 100", name="ck_skills_progress_range"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(255), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    category = Column(String(100), nullable=False)   # Programming, Framework, Tool, Soft Skill ...
    level = Column(String(50), nullable=False)       # Beginner, Intermediate, Advanced
    progress = Column(Integer, default=0, nullable=False)  # 0-100
    certificate_url = Column(String(500))
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = relationship("User", back_populates="skills")


class Badge(Base):
    __tablename__ = "badges"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String(255), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    description = Column(Text)
    icon = Column(String(100), nullable=False)
    earned_at = Column(DateTime, default=datetime.utcnow)

    user = relationship("User", back_populates="badges")
