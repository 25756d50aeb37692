import os

# Settings are read at import time, so the environment is prepared first
SQLALCHEMY_DATABASE_URL = "sqlite:///./test_rental.db"
os.environ["DATABASE_URL"] = SQLALCHEMY_DATABASE_URL
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["DB_CONNECT_RETRY_DELAY"] = "0"

# Imports for testing tools
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Import your application code
from rental_service.main import app
from rental_service.database import Base, get_db
from rental_service import models

# --- Test Database Setup ---
engine = create_engine(
    SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False}
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


# --- Database Management Fixtures ---
@pytest.fixture(scope="session", autouse=True)
def setup_db():
    """Creates and drops the test database tables."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session():
    """Provides a session on empty tables for each test."""
    session = TestingSessionLocal()
    yield session
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture
def add_equipment(db_session):
    def _add(name: str, price_per_day: float = 10000, stock: int = 1):
        equipment = models.Equipment(name=name, price_per_day=price_per_day, stock=stock)
        db_session.add(equipment)
        db_session.commit()
        return equipment
    return _add


@pytest.fixture
def add_booking(db_session):
    def _add(code: str, items, rent_date, return_date,
             status: models.BookingStatus = models.BookingStatus.PENDING_PAYMENT,
             raw_items: str | None = None):
        booking = models.Booking(
            booking_code=code,
            user_name="tester",
            items=raw_items if raw_items is not None else models.encode_items(items),
            rent_date=rent_date,
            return_date=return_date,
            payment_method="cash",
            total_price=0,
            status=status,
        )
        db_session.add(booking)
        db_session.commit()
        return booking
    return _add


# --- API Test Client Fixture ---
@pytest.fixture(scope="function")
def client(db_session):
    """Provides a TestClient for the rental service."""
    def override_get_db():
        """Overrides the get_db dependency for tests."""
        yield db_session

    # Apply the database override
    app.dependency_overrides[get_db] = override_get_db

    # Create and yield the TestClient
    with TestClient(app) as c:
        yield c

    # Clean up overrides
    app.dependency_overrides.clear()
