# backend/tests/unit/conftest.py
import os

# The application engine must not need a PostgreSQL driver under test
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from expense_catalog.main import app
from expense_catalog.db import Base, get_db
from expense_catalog import models
from expense_catalog.auth import create_access_token, get_password_hash
from expense_catalog.enums import UserRole

# One in-memory DB shared across threads (TestClient) via StaticPool
engine = create_engine(
    "sqlite+pysqlite:///:memory:",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)


# Enforce FKs, and let SQLAlchemy own BEGIN so SAVEPOINTs behave under pysqlite
@event.listens_for(engine, "connect")
def _set_sqlite_pragma(dbapi_connection, _):
    dbapi_connection.isolation_level = None
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@event.listens_for(engine, "begin")
def _do_begin(conn):
    conn.exec_driver_sql("BEGIN")


# Session commits/rollbacks only touch a savepoint; the outer test transaction is rolled back
TestingSessionLocal = sessionmaker(
    bind=engine, autoflush=False, autocommit=False, join_transaction_mode="create_savepoint"
)
Base.metadata.create_all(bind=engine)

@pytest.fixture
def connection():
    conn = engine.connect()
    tx = conn.begin()
    try:
        yield conn
    finally:
        tx.rollback()
        conn.close()

@pytest.fixture
def db_session(connection):
    session = TestingSessionLocal(bind=connection)
    try:
        yield session
    finally:
        session.close()

@pytest.fixture(autouse=True)
def _override_get_db(db_session):
    def _get_db():
        yield db_session
    app.dependency_overrides[get_db] = _get_db
    yield
    app.dependency_overrides.clear()

@pytest.fixture
def client():
    return TestClient(app)

@pytest.fixture
def test_db(db_session):
    """Alias so tests written for `test_db` use the SQLite session."""
    return db_session


def _make_user(db_session, email, company=None, role=UserRole.USER):
    user = models.User(
        email=email,
        password_hash=get_password_hash("testpass123"),
        company_id=company.id if company else None,
        role=role,
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


def _headers_for(user, tenant_id=None):
    token = create_access_token(data={"sub": user.email})
    headers = {"Authorization": f"Bearer {token}"}
    if tenant_id is not None:
        headers["X-Tenant-Id"] = tenant_id
    return headers


@pytest.fixture
def company_and_user(db_session):
    """A tenant company with one regular user"""
    company = models.Company(name="Test Company")
    db_session.add(company)
    db_session.commit()
    db_session.refresh(company)
    return company, _make_user(db_session, "test@example.com", company)


@pytest.fixture
def other_company_and_user(db_session):
    """A second tenant for isolation checks"""
    company = models.Company(name="Other Company")
    db_session.add(company)
    db_session.commit()
    db_session.refresh(company)
    return company, _make_user(db_session, "other@example.com", company)


@pytest.fixture
def tenant_id(company_and_user):
    company, _ = company_and_user
    return company.tenant_id


@pytest.fixture
def other_tenant_id(other_company_and_user):
    company, _ = other_company_and_user
    return company.tenant_id


@pytest.fixture
def auth_headers(company_and_user):
    company, user = company_and_user
    return _headers_for(user, company.tenant_id)


@pytest.fixture
def other_auth_headers(other_company_and_user):
    company, user = other_company_and_user
    return _headers_for(user, company.tenant_id)


@pytest.fixture
def admin_user(db_session):
    return _make_user(db_session, "admin@example.com", role=UserRole.ADMIN)


@pytest.fixture
def admin_headers(admin_user):
    return _headers_for(admin_user)


@pytest.fixture
def make_headers():
    return _headers_for
