"""Shared test fixtures."""

import os

os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient
from datetime import date, datetime
from decimal import Decimal

from txntracker.database import Base, get_db
from txntracker.dependencies import get_extractor
from txntracker.exceptions import UpstreamError
from txntracker.main import app
from txntracker.services.ai_service import ExtractedTransaction
from txntracker.services.transaction_store import TransactionStore


class FakeExtractionService:
    """Stands in for the language model: returns canned candidates."""

    def __init__(self):
        self.results = []
        self.error = None
        self.calls = []

    async def extract(self, text):
        self.calls.append(text)
        if self.error is not None:
            raise self.error
        return list(self.results)


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database for each test using in-memory SQLite."""
    # Use StaticPool to ensure all connections use the same in-memory database
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Create all tables
    Base.metadata.create_all(bind=engine)

    # Create session
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()

    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def store(db_session):
    return TransactionStore(db_session)


@pytest.fixture
def extractor():
    return FakeExtractionService()


@pytest.fixture(scope="function")
def client(db_session, extractor):
    """Create a test client with database and extraction overrides."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_extractor] = lambda: extractor
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def add_transaction(store):
    """Factory saving a transaction with an explicit creation time."""
    def _add(description, amount, txn_date, category, confidence=90, created_at=None, billing_cycle=None):
        if isinstance(txn_date, str):
            txn_date = date.fromisoformat(txn_date)
        return store.save(
            description=description,
            amount=Decimal(str(amount)),
            txn_date=txn_date,
            category=category,
            confidence=confidence,
            created_at=created_at or datetime.combine(txn_date, datetime.min.time()).replace(hour=10),
            billing_cycle=billing_cycle,
        )
    return _add


@pytest.fixture
def sample_transactions(add_transaction):
    """Two Feb 2026 cycle expenses, a Jan 2026 cycle salary and subscription."""
    return [
        add_transaction("Carrefour Grocery", "145.50", "2026-03-05", "Food & Dining",
                        created_at=datetime(2026, 3, 5, 14, 30)),
        add_transaction("Uber Ride", "35.00", "2026-02-25", "Transport", confidence=85,
                        created_at=datetime(2026, 2, 25, 9, 15)),
        add_transaction("Salary", "10000", "2026-02-01", "Income/Transfer", confidence=100,
                        created_at=datetime(2026, 2, 1, 8, 0)),
        add_transaction("Netflix", "54.99", "2026-01-30", "Entertainment", confidence=95,
                        created_at=datetime(2026, 1, 30, 20, 0)),
    ]


@pytest.fixture
def extracted():
    """Factory for extraction candidates."""
    def _make(description, amount, txn_date, category="Food & Dining", confidence=90):
        return ExtractedTransaction(
            date=txn_date,
            description=description,
            amount=amount,
            category=category,
            confidence=confidence,
        )
    return _make


@pytest.fixture
def upstream_error():
    return UpstreamError("Failed to parse transactions")
