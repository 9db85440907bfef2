from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, JSON
from datetime import datetime
from ..database import Base


class Recommendation(Base):
    __tablename__ = "recommendations"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(300), nullable=False)
    description = Column(Text)
    type = Column(String(50), nullable=False)    # Course, Internship, Event, Certification
    url = Column(String(500))
    provider = Column(String(200))
    image_url = Column(String(500))
    level = Column(String(50))                   # Beginner, Intermediate, Advanced
    duration = Column(String(100))
    price = Column(String(50))
    rating = Column(String(20))
    review_count = Column(String(20))
    match_percentage = Column(Integer)           # display only
    deadline = Column(DateTime)
    location = Column(String(200))
    tags = Column(JSON, default=list)            # ["react", "frontend developer"]
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)
