import uuid

from sqlalchemy import Column, Integer, String, Text, DateTime, Numeric, JSON, ForeignKey
from sqlalchemy.orm import relationship
from ..base import Base
from .authenticity_status import AuthenticityStatus
from .user import utcnow


class Product(Base):
    __tablename__ = 'products'

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    category_id = Column(String(36), ForeignKey('categories.id'), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    stock = Column(Integer, nullable=False, default=1)
    artist_id = Column(String(36), ForeignKey('users.id'), nullable=False, index=True)
    images = Column(JSON, default=list)
    story = Column(Text)
    dimensions = Column(String(100))
    medium = Column(String(255))
    year = Column(Integer)
    style = Column(String(255))
    created_at = Column(DateTime(timezone=True), default=utcnow)

    # Trust state, written only through services.trust_state
    authenticity_status = Column(String(20), nullable=False, default=AuthenticityStatus.PENDING.value, index=True)
    authenticity_score = Column(Numeric(5, 2), nullable=True)
    verification_id = Column(String(64), nullable=True)
    artist_undertaking = Column(JSON, nullable=True)

    # Optimistic concurrency stamp, bumped by the ORM on every UPDATE
    version = Column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}

    # Relationships
    artist = relationship("User", back_populates="products")
    category = relationship("Category")

    @classmethod
    def filter(cls, session, category_id=None, artist_id=None, limit=None, offset=None):
        """
        Filter Product instances by category and artist, newest first.

        Parameters:
        - session: SQLAlchemy session object
        - category_id: (Optional) only products in this category
        - artist_id: (Optional) only products by this artist
        - limit: (Optional) maximum number of rows
        - offset: (Optional) number of rows to skip

        Returns:
        - Query of matching Product instances
        """
        query = session.query(cls)

        if category_id is not None:
            query = query.filter(cls.category_id == category_id)
        if artist_id is not None:
            query = query.filter(cls.artist_id == artist_id)

        query = query.order_by(cls.created_at.desc())

        if offset:
            query = query.offset(offset)
        if limit:
            query = query.limit(limit)

        return query
