"""Shared pytest fixtures for the API tests."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from pembukuan.database import Base, build_engine, get_db
from pembukuan.main import app
from pembukuan.seed import DEMO_EMAIL, seed_database
from pembukuan.utils.auth_utils import create_access_token


@pytest.fixture
def engine():
    """A fresh in-memory database for each test."""
    engine = build_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    """Session on the seeded test database."""
    session = session_factory()
    seed_database(session)
    yield session
    session.close()


@pytest.fixture
def client(session_factory, db_session):
    """TestClient whose requests use the test database."""
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    token = create_access_token({"email": DEMO_EMAIL})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def omzet_payload():
    """Valid create payload for /api/omzet using seeded branch and account."""
    def _payload(**overrides):
        payload = {
            "transaction_date": "25/12/2024",
            "transaction_type": "Pemasukan",
            "reference_no": "INV-001",
            "branch_id": "branch-1",
            "account_id": "coa-3",
            "notes": "Penjualan toko",
            "total_amount": 250000,
        }
        payload.update(overrides)
        return payload
    return _payload


@pytest.fixture
def expense_payload():
    """Valid create payload for /api/pengeluaran."""
    def _payload(**overrides):
        payload = {
            "transaction_date": "10/01/2024",
            "transaction_type": "Operasional",
            "reference_no": "EXP-001",
            "branch_id": "branch-2",
            "account_id": "coa-5",
            "notes": "Sewa gudang",
            "total_amount": 1200000,
        }
        payload.update(overrides)
        return payload
    return _payload
