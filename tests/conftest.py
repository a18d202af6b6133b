import os

# Settings are read once at import time, so the environment has to be in
# place before anything from userauth is imported
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from userauth.core.database import Base, get_db
from userauth.main import app
from userauth.models.user import User  # noqa: F401

# One in-memory database shared by every connection of a test
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session():
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def signup_payload():
    return {"email": "a@b.com", "fname": "A", "lname": "B", "password": "secret"}


@pytest.fixture
def registered(client, signup_payload):
    """Sign up the default user and return the response body"""
    response = client.post("/signup", json=signup_payload)
    assert response.status_code == 201
    return response.json()


@pytest.fixture
def auth_headers(client, registered, signup_payload):
    response = client.post(
        "/login",
        json={"email": signup_payload["email"], "password": signup_payload["password"]},
    )
    assert response.status_code == 200
    return {"Authorization": response.json()["token"]}
