"""
Tests for the event HTTP routes
"""

import pytest
from datetime import datetime
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from main import app
from event_api.core.db import Base, get_db
from event_api.models import Event, Role, User, UserEvent
from event_api.utils.security import create_access_token, hash_password

# Test database setup
SQLALCHEMY_DATABASE_URL = "sqlite:///./test_events_api.db"
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()

@pytest.fixture
def db_session():
    """Create test database session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)

@pytest.fixture
def client(db_session):
    """Test client bound to the test database"""
    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()

@pytest.fixture
def accounts(db_session):
    """An admin (id 1) and two users (ids 7 and 8)"""
    db_session.add_all([
        User(id=1, email="admin@example.com", password=hash_password("admin@123"),
             role=Role.ADMIN, is_email_verified=True),
        User(id=7, email="seven@example.com", password="x", role=Role.USER),
        User(id=8, email="eight@example.com", password="x", role=Role.USER),
    ])
    db_session.commit()

def auth(user_id: int) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user_id)}"}

ADMIN = 1

SAMPLE_EVENT = {
    "name": "Sample Event",
    "description": "d",
    "date": "2024-05-18T00:00:00.000Z",
    "location": "L",
}

@pytest.fixture
def sample_event(client, accounts):
    response = client.post("/events", json=SAMPLE_EVENT, headers=auth(ADMIN))
    assert response.status_code == 201
    return response.json()

def test_end_to_end_booking_flow(client, accounts, db_session):
    """Test create as admin, book as user 7, and list as users 7 and 8"""
    response = client.post("/events", json=SAMPLE_EVENT, headers=auth(ADMIN))
    assert response.status_code == 201
    created = response.json()
    assert created["name"] == "Sample Event"
    assert created["description"] == "d"
    assert created["location"] == "L"
    assert created["date"] == "2024-05-18T00:00:00Z"

    response = client.post(f"/events/{created['id']}/book", headers=auth(7))
    assert response.status_code == 200
    booking = response.json()
    assert booking["userId"] == 7
    assert booking["eventId"] == created["id"]
    assert booking["status"] == "BOOKED"
    assert booking["createdAt"].endswith("Z")

    listed_for_seven = client.get("/events", headers=auth(7)).json()
    listed_for_eight = client.get("/events", headers=auth(8)).json()
    assert [(e["id"], e["isBooked"]) for e in listed_for_seven] == [(created["id"], True)]
    assert [(e["id"], e["isBooked"]) for e in listed_for_eight] == [(created["id"], False)]

    rows = db_session.query(UserEvent).all()
    assert [(row.user_id, row.event_id, row.status.value) for row in rows] == [(7, created["id"], "BOOKED")]

def test_login_returns_usable_token(client, accounts):
    """Test that the seeded admin can log in and call admin routes"""
    response = client.post("/auth/login", json={"email": "admin@example.com", "password": "admin@123"})
    assert response.status_code == 200
    token = response.json()["access_token"]

    response = client.post("/events", json=SAMPLE_EVENT, headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 201

def test_login_wrong_password(client, accounts):
    response = client.post("/auth/login", json={"email": "admin@example.com", "password": "nope"})
    assert response.status_code == 401
    assert response.json()["error_code"] == "UNAUTHORIZED"

def test_list_events_requires_token(client, accounts):
    """Test missing, malformed and invalid Authorization headers"""
    assert client.get("/events").status_code == 401
    assert client.get("/events", headers={"Authorization": "Token abc"}).status_code == 400
    assert client.get("/events", headers={"Authorization": "Bearer abc.def.ghi"}).status_code == 401

def test_token_for_unknown_user_rejected(client, accounts):
    assert client.get("/events", headers=auth(4242)).status_code == 401

def test_list_events_query_validation(client, accounts):
    """Test that bad paging and sorting parameters are rejected with 400"""
    for query in ["limit=0", "page=0", "limit=-3", "sortBy=password", "sortType=sideways", "name=", "location="]:
        response = client.get(f"/events?{query}", headers=auth(7))
        assert response.status_code == 400, query
        assert response.json()["error_code"] == "VALIDATION_ERROR"

def test_list_events_paging_and_filters(client, accounts, db_session):
    """Test paging, sorting and filters through query parameters"""
    db_session.add_all([
        Event(name=f"Event {i:02d}", date=datetime(2024, 6, i), location="Hall A" if i % 2 else "Hall B")
        for i in range(1, 13)
    ])
    db_session.commit()

    page = client.get("/events?sortBy=name&sortType=asc&limit=5&page=3", headers=auth(7)).json()
    assert [e["name"] for e in page] == ["Event 11", "Event 12"]

    newest = client.get("/events?sortBy=date&limit=1", headers=auth(7)).json()
    assert [e["name"] for e in newest] == ["Event 12"]

    by_date = client.get("/events?date=2024-06-04T00:00:00.000Z", headers=auth(7)).json()
    assert [e["name"] for e in by_date] == ["Event 04"]

    by_location = client.get("/events?location=Hall%20B&limit=50", headers=auth(7)).json()
    assert len(by_location) == 6

def test_create_event_validation(client, accounts):
    """Test missing name and bad date"""
    response = client.post("/events", json={"date": "2024-05-18T00:00:00Z"}, headers=auth(ADMIN))
    assert response.status_code == 400

    response = client.post("/events", json={"name": "", "date": "2024-05-18T00:00:00Z"}, headers=auth(ADMIN))
    assert response.status_code == 400

    response = client.post("/events", json={"name": "X", "date": "not a date"}, headers=auth(ADMIN))
    assert response.status_code == 400

def test_create_event_allows_empty_optional_fields(client, accounts):
    body = {"name": "Bare", "description": "", "date": "2024-05-18T00:00:00Z", "location": None}
    response = client.post("/events", json=body, headers=auth(ADMIN))
    assert response.status_code == 201
    assert response.json()["description"] == ""
    assert response.json()["location"] is None

def test_user_role_cannot_mutate(client, accounts, sample_event, db_session):
    """Test that USER is rejected with 403 before anything is written"""
    response = client.post("/events", json=SAMPLE_EVENT, headers=auth(7))
    assert response.status_code == 403
    assert response.json()["error_code"] == "FORBIDDEN"

    response = client.patch(f"/events/{sample_event['id']}", json={"name": "Hijacked"}, headers=auth(7))
    assert response.status_code == 403

    response = client.delete(f"/events/{sample_event['id']}", headers=auth(7))
    assert response.status_code == 403

    events = db_session.query(Event).all()
    assert [(e.id, e.name) for e in events] == [(sample_event["id"], "Sample Event")]

def test_get_event(client, accounts, sample_event):
    """Test reading one event as a USER and a missing one"""
    response = client.get(f"/events/{sample_event['id']}", headers=auth(7))
    assert response.status_code == 200
    assert response.json() == sample_event

    response = client.get("/events/999", headers=auth(7))
    assert response.status_code == 404
    assert response.json()["message"] == "Event not found"

def test_get_event_requires_token(client, accounts, sample_event):
    assert client.get(f"/events/{sample_event['id']}").status_code == 401

def test_update_event(client, accounts, sample_event):
    """Test partial update"""
    response = client.patch(f"/events/{sample_event['id']}", json={"location": "X"}, headers=auth(ADMIN))
    assert response.status_code == 200
    updated = response.json()
    assert updated["location"] == "X"
    assert updated["name"] == sample_event["name"]
    assert updated["description"] == sample_event["description"]
    assert updated["date"] == sample_event["date"]

def test_update_event_rejections(client, accounts, sample_event):
    """Test empty body, missing event, nulls for required fields and empty strings"""
    response = client.patch(f"/events/{sample_event['id']}", json={}, headers=auth(ADMIN))
    assert response.status_code == 400

    response = client.patch("/events/999", json={"name": "Ghost"}, headers=auth(ADMIN))
    assert response.status_code == 404

    for body in [{"date": None}, {"name": None}, {"location": ""}, {"description": ""}]:
        response = client.patch(f"/events/{sample_event['id']}", json=body, headers=auth(ADMIN))
        assert response.status_code == 400, body
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    unchanged = client.get(f"/events/{sample_event['id']}", headers=auth(ADMIN)).json()
    assert unchanged == sample_event

def test_update_event_clears_optional_fields(client, accounts, sample_event):
    response = client.patch(
        f"/events/{sample_event['id']}", json={"location": None, "description": None}, headers=auth(ADMIN)
    )
    assert response.status_code == 200
    assert response.json()["location"] is None
    assert response.json()["description"] is None

def test_event_dates_are_returned_in_utc(client, accounts):
    """Test that offsets are normalized and responses carry a Z suffix"""
    body = dict(SAMPLE_EVENT, date="2024-05-18T02:00:00+02:00")
    created = client.post("/events", json=body, headers=auth(ADMIN)).json()
    assert created["date"] == "2024-05-18T00:00:00Z"

    listed = client.get("/events", headers=auth(7)).json()
    assert [e["date"] for e in listed] == ["2024-05-18T00:00:00Z"]

    found = client.get("/events?date=2024-05-18T00:00:00.000Z", headers=auth(7)).json()
    assert [e["id"] for e in found] == [created["id"]]

def test_delete_event(client, accounts, sample_event):
    """Test delete returns 204 and the event is gone"""
    response = client.delete(f"/events/{sample_event['id']}", headers=auth(ADMIN))
    assert response.status_code == 204
    assert response.content == b""

    assert client.get(f"/events/{sample_event['id']}", headers=auth(ADMIN)).status_code == 404
    assert client.delete(f"/events/{sample_event['id']}", headers=auth(ADMIN)).status_code == 404

def test_book_missing_event(client, accounts, db_session):
    """Test booking a missing event returns 404 and writes nothing"""
    response = client.post("/events/999/book", headers=auth(7))
    assert response.status_code == 404
    assert db_session.query(UserEvent).count() == 0

def test_book_event_requires_token(client, accounts, sample_event):
    assert client.post(f"/events/{sample_event['id']}/book").status_code == 401

def test_non_integer_event_id(client, accounts):
    assert client.get("/events/abc", headers=auth(ADMIN)).status_code == 400

def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}
