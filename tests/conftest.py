import logging
from decimal import Decimal

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from artisan_alley.db import models  # noqa: F401
from artisan_alley.db.base import Base
from artisan_alley.db.models import Category, Product, User

logger = logging.getLogger(__name__)

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def make_user(db_session):
    def _make_user(name="Test Artist", email=None, role="artist", **kwargs):
        user = User(
            name=name,
            email=email or f"{name.lower().replace(' ', '.')}@example.com",
            role=role,
            **kwargs
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user
    return _make_user


@pytest.fixture
def category(db_session):
    category = Category(name="Paintings", description="Original paintings", slug="paintings")
    db_session.add(category)
    db_session.commit()
    db_session.refresh(category)
    return category


@pytest.fixture
def artist(make_user):
    return make_user(
        name="Meera Kulkarni",
        artist_portfolio={"bio": "Oil painter from Nashik", "location": "Nashik, Maharashtra"},
    )


@pytest.fixture
def other_artist(make_user):
    return make_user(name="Rohan Deshmukh")


@pytest.fixture
def admin(make_user):
    return make_user(name="Admin User", role="admin", verified_status=True)


@pytest.fixture
def customer(make_user):
    return make_user(name="Priya Shah", role="customer")


@pytest.fixture
def make_product(db_session, category):
    def _make_product(artist_id, title="Monsoon Over Sahyadri", medium="Oil on Canvas", **kwargs):
        product = Product(
            title=title,
            description="Hand-painted landscape of the western ghats in the rains.",
            category_id=category.id,
            price=Decimal("12500.00"),
            stock=1,
            artist_id=artist_id,
            images=["https://images.example.com/monsoon-1.jpg", "https://images.example.com/monsoon-2.jpg"],
            medium=medium,
            **kwargs
        )
        db_session.add(product)
        db_session.commit()
        db_session.refresh(product)
        return product
    return _make_product


@pytest.fixture
def product(make_product, artist):
    return make_product(artist.id)
