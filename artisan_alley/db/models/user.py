import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, Boolean, DateTime, JSON
from sqlalchemy.orm import relationship
from ..base import Base


def utcnow():
    return datetime.now(timezone.utc)


class User(Base):
    __tablename__ = 'users'

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255))
    role = Column(String(20), nullable=False, default='customer')  # customer, artist, admin
    verified_status = Column(Boolean, default=False)
    email_verified = Column(Boolean, default=False)
    is_active = Column(Boolean, default=True)
    artist_portfolio = Column(JSON)  # bio, specialty, location, avatar
    created_at = Column(DateTime(timezone=True), default=utcnow)

    # Relationships
    products = relationship("Product", back_populates="artist")
