"""Pytest configuration and fixtures."""

import os

# Must be set before the application modules read their settings
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"
os.environ.setdefault("LOG_LEVEL", "WARNING")

from contextlib import contextmanager
from typing import Dict, List

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database import get_session
from dependencies import get_availability_service
from exceptions import UpstreamReadError
from main import app
from models import Base, PropertyMeta, RtoRate, TowerMeta
from services.availability_service import AvailabilityService

AVAILABILITY_RANGE = "Database!A1:L"
LOG_RANGE = "Process Log!A1:D"

SHEET_HEADER = [
     "Property", "Building Unit", "Tower", "Floor", "Status", "Type",
     "Gross Area(SQM)", "Amenities", "Facing", "RFO Date", "List Price", "per SQM",
]


class FakeSheets:
     """In-memory spreadsheet keyed by range; ranges in `failing` raise."""

     def __init__(self, values: Dict[str, List[List[str]]], failing=()):
          self.values = values
          self.failing = set(failing)
          self.calls: List[str] = []

     def get_values(self, range_name: str) -> List[List[str]]:
          self.calls.append(range_name)
          if range_name in self.failing:
               raise UpstreamReadError(f"Sheets API returned 500 for range {range_name!r}")
          return self.values.get(range_name, [])


class FakeReferences:
     """Reference tables held in lists."""

     def __init__(self, properties=None, towers=None, error=None):
          self.properties = properties or []
          self.towers = towers or []
          self.error = error

     def load_properties(self):
          if self.error:
               raise self.error
          return list(self.properties)

     def load_towers(self):
          return list(self.towers)


@pytest.fixture
def sheet_values() -> Dict[str, List[List[str]]]:
     """Availability and process-log ranges as the Sheets API returns them."""
     return {
          AVAILABILITY_RANGE: [
               SHEET_HEADER,
               ["AGP", "C-Amina 1204", "AGP-00A", "12", "Avail.", "2BR", "57.5", "Front", "North", "Dec 2026", "₱3,000,000.00", "52,173.91"],
               ["amina grand park", "C-Amina 1805", "AGP-00A", "18", "Avail.", "1BR", "35", "Rear", "South", "2026-06-30", "₱2,100,000", "60,000"],
               ["Mystery Place", "M 101", "MP-1", "1", "OnHold", "STUDIO", "24", "", "East", "RFO", "TBD", ""],
               ["AGP", "C-Bayani 0301", "AGP-00B", "3", "Avail.", "2BR", "60", "Front", "West", "Mar 2027", "2,800,000", "46,666.67"],
               ["AGP", "C-Amina 0902", "AGP-00A", "9", "Avail."],
          ],
          LOG_RANGE: [
               ["Timestamp", "Match Type", "File Name", "Rows Copied"],
               ["25/08/2025 09:00:00", "exact", "inventory_0825.xlsx", "118"],
               ["26/08/2025 12:52:09", "exact", "inventory_0826.xlsx", "120"],
          ],
     }


@pytest.fixture
def property_rows() -> List[PropertyMeta]:
     return [
          PropertyMeta(code="AGP", name="Amina Grand Park", city="Taguig", address="C5 Road", active=True),
          PropertyMeta(code="BLR", name="Bayleaf Residences", city="Pasay", address="Macapagal Ave", active=True),
     ]


@pytest.fixture
def tower_rows() -> List[TowerMeta]:
     return [
          TowerMeta(property_code="AGP", tower_code="AGP-00A", tower_name="Amina Tower"),
          TowerMeta(property_code="AGP", tower_code="AGP-00B", tower_name="Bayani Tower"),
     ]


@pytest.fixture
def fake_sheets(sheet_values) -> FakeSheets:
     return FakeSheets(sheet_values)


@pytest.fixture
def fake_references(property_rows, tower_rows) -> FakeReferences:
     return FakeReferences(property_rows, tower_rows)


@pytest.fixture
def availability_service(fake_sheets, fake_references) -> AvailabilityService:
     return AvailabilityService(
          sheets=fake_sheets,
          references=fake_references,
          availability_range=AVAILABILITY_RANGE,
          log_range=LOG_RANGE,
          timeout=5,
     )


@pytest.fixture
def engine():
     """Fresh in-memory SQLite database with all tables."""
     test_engine = create_engine(
          "sqlite://",
          connect_args={"check_same_thread": False},
          poolclass=StaticPool,
     )
     Base.metadata.create_all(bind=test_engine)
     yield test_engine
     test_engine.dispose()


@pytest.fixture
def session_factory(engine):
     return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db_session(session_factory):
     session = session_factory()
     yield session
     session.close()


@pytest.fixture
def session_scope(session_factory):
     """Context-manager factory shaped like database.get_session_context."""

     @contextmanager
     def scope():
          session = session_factory()
          try:
               yield session
               session.commit()
          finally:
               session.close()

     return scope


@pytest.fixture
def rate_rows(db_session) -> List[RtoRate]:
     rows = [
          RtoRate(project_code="AGP", unit_type="2BR", area_min=0, area_max=100, monthly_rate=17000, memo_ref="MEMO-WIDE", is_active=True),
          RtoRate(project_code="AGP", unit_type="2BR", area_min=50, area_max=60, monthly_rate=18500, memo_ref="MEMO-2025-014", is_active=True),
          RtoRate(project_code="AGP", unit_type="2BR", area_min=54, area_max=56, monthly_rate=99999, memo_ref="MEMO-RETIRED", is_active=False),
          RtoRate(project_code="AGP", unit_type="1BR", area_min=None, area_max=40, monthly_rate=12000, memo_ref=None, is_active=True),
     ]
     db_session.add_all(rows)
     db_session.commit()
     return rows


def make_token(role: str = "AGENT", secret: str = "test-secret") -> str:
     return jwt.encode({"id": 1, "role": role}, secret, algorithm="HS256")


@pytest.fixture
def staff_headers() -> Dict[str, str]:
     return {"Authorization": f"Bearer {make_token('AGENT')}"}


@pytest.fixture
def client(availability_service, db_session):
     """API client wired to the fake sources and the test database."""

     def override_session():
          yield db_session

     app.dependency_overrides[get_session] = override_session
     app.dependency_overrides[get_availability_service] = lambda: availability_service
     with TestClient(app) as test_client:
          yield test_client
     app.dependency_overrides.clear()
