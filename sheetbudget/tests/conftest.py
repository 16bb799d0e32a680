import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from fastapi.testclient import TestClient
import os
from unittest.mock import patch
from uuid import uuid4

from sheetbudget.app.config import Settings, get_settings
from sheetbudget.app.main import app
from sheetbudget.app.models.models import Base, ExpenseRow, BudgetRow
from sheetbudget.app.schemas.expenses import ExpenseRecord
from sheetbudget.app.services.record_store import SqlRecordStore, get_record_store
from sheetbudget.app.utils.dates import month_from_date, utc_timestamp

# Use a test database
TEST_DATABASE_URL = "sqlite:///./test_sheetbudget.db"

FAMILY_PIN = "1234"
ADMIN_PIN = "9999"

@pytest.fixture(scope="session")
def db_engine():
    engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
    Base.metadata.create_all(bind=engine)
    yield engine
    # Teardown - drop all tables
    Base.metadata.drop_all(bind=engine)
    engine.dispose()
    if os.path.exists("./test_sheetbudget.db"):
        os.remove("./test_sheetbudget.db")

@pytest.fixture(scope="function")
def db_session(db_engine):
    """Returns a fresh SQLAlchemy session for each test"""
    Session = sessionmaker(bind=db_engine)
    session = Session()

    # Clear out test data from previous run
    session.query(ExpenseRow).delete()
    session.query(BudgetRow).delete()
    session.commit()

    yield session
    session.close()

@pytest.fixture
def store(db_session):
    """Record store over the test database"""
    return SqlRecordStore(db_session)

@pytest.fixture
def test_settings(tmp_path):
    """Small archival thresholds and known PINs, isolated from any .env file"""
    return Settings(
        _env_file=None,
        family_pin=FAMILY_PIN,
        admin_pin=ADMIN_PIN,
        store_backend="sql",
        max_rows=10,
        archive_chunk=6,
        archive_dir=str(tmp_path / "archives"),
    )

@pytest.fixture
def family_headers():
    return {"X-Family-Pin": FAMILY_PIN}

@pytest.fixture
def admin_headers():
    return {"X-Family-Pin": FAMILY_PIN, "X-Admin-Pin": ADMIN_PIN}

@pytest.fixture
def mock_schedule_archival():
    """Keeps the post-insert archival task from opening the real store"""
    with patch("sheetbudget.app.api.v1.expenses.schedule_archival") as mocked:
        yield mocked

@pytest.fixture
def client(store, test_settings, mock_schedule_archival):
    """Test client wired to the test store and settings"""
    def override_get_record_store():
        yield store

    app.dependency_overrides[get_record_store] = override_get_record_store
    app.dependency_overrides[get_settings] = lambda: test_settings
    yield TestClient(app)
    app.dependency_overrides.clear()

def make_expense(date="15/06/2024", member_name="A", category="Food", amount=100.0, description="", month=None):
    """Builds an expense record without going through the budget synchronizer"""
    return ExpenseRecord(
        id=str(uuid4()),
        date=date,
        member_name=member_name,
        category=category,
        description=description,
        amount=amount,
        month=month or month_from_date(date),
        created_at=utc_timestamp()
    )

@pytest.fixture
def expense_factory():
    return make_expense
