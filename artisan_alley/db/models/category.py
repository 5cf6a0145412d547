import uuid

from sqlalchemy import Column, String, Text
from ..base import Base


class Category(Base):
    __tablename__ = 'categories'

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(100), nullable=False)
    description = Column(Text)
    slug = Column(String(100), unique=True, index=True, nullable=False)
