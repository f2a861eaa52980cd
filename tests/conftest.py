"""Pytest fixtures for testing"""

import os

# Point the app at SQLite before settings are loaded
os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")

import pytest
from datetime import date
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from debtpilot.api.main import create_app
from debtpilot.infrastructure.database.models import Base
from debtpilot.infrastructure.database.session import get_db
from debtpilot.domain.models import LoanInput


# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def sample_loans() -> list[LoanInput]:
    """A typical household loan book"""
    return [
        LoanInput(id="home", name="Home Loan", amount=2_500_000, interest_rate=8.5, tenure_months=240,
                  start_date=date(2024, 1, 10)),
        LoanInput(id="car", name="Car Loan", amount=600_000, interest_rate=9.5, tenure_months=60,
                  start_date=date(2025, 3, 5)),
        LoanInput(id="card", name="Personal Loan", amount=150_000, interest_rate=14.0, tenure_months=24,
                  start_date=date(2025, 8, 20)),
    ]
