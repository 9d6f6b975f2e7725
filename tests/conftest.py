# tests/conftest.py

import os

# must be set before the tracker package resolves its settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_SALT_ROUNDS"] = "4"
os.environ["JWT_SECRET"] = "test-secret"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from main import app
from tracker.database import enable_sqlite_foreign_keys, get_db, init_db
from tracker.models.admin import Admin
from tracker.models.user import User
from tracker.utils.security import ADMIN_REALM, USER_REALM, create_access_token, hash_password


@pytest.fixture()
def engine():
    """Fresh in-memory database per test, shared across connections"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(engine)
    init_db(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def make_user(db):
    def _make_user(email, user_type="employee", name=None, password="password123", department=None):
        user = User(
            name=name or email.split("@")[0].title(),
            email=email.lower(),
            password_hash=hash_password(password),
            user_type=user_type,
            department=department,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user


@pytest.fixture()
def make_admin(db):
    def _make_admin(email, role="sub_admin", name=None, parent=None, password="password123"):
        admin = Admin(
            name=name or email.split("@")[0].title(),
            email=email.lower(),
            password_hash=hash_password(password),
            role=role,
            parent_admin_id=parent.id if parent is not None else None,
        )
        db.add(admin)
        db.commit()
        db.refresh(admin)
        return admin

    return _make_admin


def auth_headers(account):
    realm = ADMIN_REALM if isinstance(account, Admin) else USER_REALM
    return {"Authorization": f"Bearer {create_access_token(account.id, realm=realm)}"}


@pytest.fixture()
def headers():
    return auth_headers


@pytest.fixture()
def admin_user(make_user):
    return make_user("boss@example.com", user_type="admin", name="Boss")


@pytest.fixture()
def assistant_user(make_user):
    return make_user("helper@example.com", user_type="assistant", name="Helper")


@pytest.fixture()
def employee(make_user):
    return make_user("worker@example.com", user_type="employee", name="Worker")
