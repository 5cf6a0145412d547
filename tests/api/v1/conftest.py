import pytest
from fastapi.testclient import TestClient

from artisan_alley.db.session import get_db
from artisan_alley.main import app
from artisan_alley.security.jwt import create_access_token, create_refresh_token


@pytest.fixture
def client(db_session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    # Not entered as a context manager, so startup table creation and seeding don't run
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    def _auth_headers(user):
        token = create_access_token(user_id=user.id, roles=[user.role])
        return {"Authorization": f"Bearer {token}"}
    return _auth_headers


@pytest.fixture
def refresh_token_for():
    def _refresh_token_for(user):
        return create_refresh_token(user_id=user.id, roles=[user.role])
    return _refresh_token_for
