"""Shared test fixtures."""

import os

# Keep the app's own engine off disk and the startup pass out of API tests
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("MATERIALIZE_ON_STARTUP", "false")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient
from datetime import date, datetime
from decimal import Decimal
import uuid

from app.database import Base
from app.dependencies import get_db
from app.main import app
from app.models import Transaction, TransactionType, TransactionCategory
from app.services.app_state import AppStateStore
from app.services.materializer import RecurringMaterializer
from app.services.transaction_store import TransactionStore


class FixedClock:
    """Clock that always reports the same moment."""

    def __init__(self, now: datetime):
        self.current = now

    def now(self) -> datetime:
        return self.current


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


@pytest.fixture(scope="function")
def client(db_session):
    """Create a test client with database override."""
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def transaction_store(db_session):
    return TransactionStore(db_session)


@pytest.fixture
def app_state(db_session):
    return AppStateStore(db_session)


@pytest.fixture
def materializer(transaction_store, app_state):
    return RecurringMaterializer(transaction_store, app_state)


@pytest.fixture
def make_template(db_session):
    """Factory for recurring template rows with a raw stored spec."""
    def _make(recurring_frequency, description="Template", amount="10.00",
              type_=TransactionType.expense, category=TransactionCategory.subscriptions):
        txn = Transaction(
            id=str(uuid.uuid4()),
            date=None,
            type=type_,
            category=category,
            amount=Decimal(amount),
            description=description,
            is_recurring=True,
            recurring_frequency=recurring_frequency,
        )
        db_session.add(txn)
        db_session.commit()
        db_session.refresh(txn)
        return txn
    return _make


@pytest.fixture
def sample_transaction(db_session):
    """Create a sample one-off expense."""
    txn = Transaction(
        id=str(uuid.uuid4()),
        date=date(2025, 1, 15),
        type=TransactionType.expense,
        category=TransactionCategory.groceries,
        amount=Decimal("50.00"),
        description="Whole Foods",
        is_recurring=False,
        recurring_frequency=None,
    )
    db_session.add(txn)
    db_session.commit()
    db_session.refresh(txn)
    return txn


@pytest.fixture
def sample_template(make_template):
    """Create a sample monthly salary template."""
    return make_template(
        {"frequency": "monthly", "time": {"month": None, "day": None, "date": 1}},
        description="Monthly salary",
        amount="3000.00",
        type_=TransactionType.income,
        category=TransactionCategory.salary,
    )


@pytest.fixture
def fixed_clock():
    """Factory for clocks pinned to a given moment."""
    return FixedClock
