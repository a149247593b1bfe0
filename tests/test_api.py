"""
HTTP-level tests against the FastAPI app with the storage swapped for
the in-memory test database
"""

from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from app.api.deps import get_cache, get_storage
from app.schemas.event import EventCreate
from app.schemas.guest import GuestCreate
from main import app

@pytest.fixture
def client(storage, user_cache):
    app.dependency_overrides[get_storage] = lambda: storage
    app.dependency_overrides[get_cache] = lambda: user_cache
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()

def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}

def test_create_and_fetch_event(client, owner, template):
    response = client.post("/admin/events", json={
        "name": "Anniversary",
        "date": "2024-10-01T18:00:00",
        "location": "Lake House",
        "card_template_id": template.id,
        "user_id": owner.id,
    })

    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    event_id = body["data"]["id"]
    assert body["data"]["scanned_count"] == 0

    fetched = client.get(f"/admin/events/{event_id}").json()["data"]
    assert fetched["name"] == "Anniversary"
    assert fetched["user"] == {"username": "alice"}
    assert fetched["card_template"] == {"image_path": template.image_path}

def test_create_event_for_unknown_owner(client):
    response = client.post("/admin/events", json={
        "name": "Nobody's Party",
        "date": "2024-10-01T18:00:00",
        "user_id": 999,
    })

    assert response.status_code == 400
    assert response.json()["error_code"] == "validation_error"

def test_create_event_with_guests(client, owner):
    response = client.post("/admin/events/with-guests", json={
        "name": "Reunion",
        "date": "2024-08-10T12:00:00",
        "user_id": owner.id,
        "guests": [{"name": "John Doe"}, {"name": "Jane Smith", "type": "vip"}],
    })

    assert response.status_code == 201
    data = response.json()["data"]
    assert len(data["guests"]) == 2

    listing = client.get(f"/admin/events/{data['event']['id']}/guests", params={"sort": "asc"})
    assert [g["name"] for g in listing.json()["data"]] == ["John Doe", "Jane Smith"]

def test_missing_event_is_404(client):
    response = client.get("/admin/events/999")

    assert response.status_code == 404
    body = response.json()
    assert body["success"] is False
    assert body["error_code"] == "not_found"
    assert "999" in body["message"]

def test_delete_missing_guest_is_404(client):
    assert client.delete("/admin/guests/999").status_code == 404

@pytest.mark.parametrize("params", [
    {"sort": "upward"},
    {"limit": "-1"},
    {"limit": "101"},
    {"offset": "x"},
])
def test_bad_listing_parameters_are_400(client, event, params):
    response = client.get(f"/admin/events/{event.id}/guests", params=params)

    assert response.status_code == 400
    assert response.json()["error_code"] == "validation_error"

def test_guest_listing_search_and_pagination(client, storage, event):
    for name in ["John Doe", "Jane Smith", "Bob Johnson", "Alice Brown"]:
        storage.guests.create(GuestCreate(name=name, event_id=event.id))

    newest = client.get(f"/admin/events/{event.id}/guests", params={"limit": "2"}).json()["data"]
    assert [g["name"] for g in newest] == ["Alice Brown", "Bob Johnson"]

    found = client.get(f"/admin/events/{event.id}/guests", params={"search": "JOHN"}).json()["data"]
    assert {g["name"] for g in found} == {"John Doe", "Bob Johnson"}

def test_patch_event_keeps_unset_fields(client, event):
    response = client.patch(f"/admin/events/{event.id}", json={"location": "Annex"})

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["location"] == "Annex"
    assert data["name"] == "Test Wedding"

def test_patch_guest_status(client, storage, event):
    guest = storage.guests.create(GuestCreate(name="John Doe", event_id=event.id))

    response = client.patch(f"/admin/guests/{guest.id}", json={"status": "confirmed"})

    assert response.status_code == 200
    assert response.json()["data"]["status"] == "confirmed"

def test_invalid_body_is_422(client, owner):
    response = client.post("/admin/events", json={"name": "", "user_id": owner.id})

    assert response.status_code == 422
    assert response.json()["success"] is False

def test_guest_check_in(client, storage, event):
    guest = storage.guests.create(GuestCreate(name="John Doe", event_id=event.id))

    first = client.post(f"/guest/{guest.id}/check-in").json()
    second = client.post(f"/guest/{guest.id}/check-in").json()

    assert first["data"]["scanned_count"] == 1
    assert first["data"]["was_already_checked_in"] is False
    assert second["data"]["was_already_checked_in"] is True
    assert second["data"]["scanned_count"] == 1

def test_issue_and_search_cards(client, storage, event):
    guest = storage.guests.create(GuestCreate(name="John Doe", phone_number="+15550001", event_id=event.id))

    response = client.post("/admin/cards", json={
        "event_id": event.id,
        "guest_id": guest.id,
        "image_path": "cards/john.png",
    })
    assert response.status_code == 201

    cards = client.get("/admin/cards", params={"search": "5550001"}).json()["data"]
    assert [c["image_path"] for c in cards] == ["cards/john.png"]
    assert cards[0]["guest"]["name"] == "John Doe"

def test_card_templates_crud(client):
    created = client.post("/admin/card-templates", json={"image_path": "templates/floral.png"})
    assert created.status_code == 201
    template_id = created.json()["data"]["id"]

    listed = client.get("/admin/card-templates", params={"search": "floral"}).json()["data"]
    assert [t["id"] for t in listed] == [template_id]

    assert client.delete(f"/admin/card-templates/{template_id}").status_code == 200
    assert client.get(f"/admin/card-templates/{template_id}").status_code == 404

def test_user_profile(client, owner, event):
    response = client.get(f"/admin/users/{owner.id}/profile")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["user"]["username"] == "alice"
    assert data["event_count"] == 1

@pytest.mark.parametrize("field", ["name", "date", "location"])
def test_patch_event_rejects_null_required_field(client, event, field):
    response = client.patch(f"/admin/events/{event.id}", json={field: None})

    assert response.status_code == 422
    assert response.json()["error_code"] == "validation_error"
    assert client.get(f"/admin/events/{event.id}").json()["data"]["name"] == "Test Wedding"

@pytest.mark.parametrize("field", ["name", "phone_number", "status", "type"])
def test_patch_guest_rejects_null_required_field(client, storage, event, field):
    guest = storage.guests.create(GuestCreate(name="John Doe", event_id=event.id))

    response = client.patch(f"/admin/guests/{guest.id}", json={field: None})

    assert response.status_code == 422
    assert client.get(f"/admin/guests/{guest.id}").json()["data"]["status"] == "invited"

def test_patch_template_rejects_null_image(client, template):
    response = client.patch(f"/admin/card-templates/{template.id}", json={"image_path": None})

    assert response.status_code == 422

def test_patch_event_nullable_template_can_be_cleared(client, event):
    response = client.patch(f"/admin/events/{event.id}", json={"card_template_id": None})

    assert response.status_code == 200
    assert response.json()["data"]["card_template"] is None

def test_card_delete_and_reassign_keep_guest_links(client, storage, event, other_owner):
    john = storage.guests.create(GuestCreate(name="John Doe", event_id=event.id))
    card_id = client.post("/admin/cards", json={
        "event_id": event.id, "guest_id": john.id, "image_path": "cards/john.png",
    }).json()["data"]["id"]

    other_event = storage.events.create(EventCreate(
        name="Other Event", date=datetime(2024, 3, 3), user_id=other_owner.id
    ))
    outsider = storage.guests.create(GuestCreate(name="Outsider", event_id=other_event.id))

    rejected = client.patch(f"/admin/cards/{card_id}", json={"guest_id": outsider.id})
    assert rejected.status_code == 400
    assert storage.guests.get_by_id(outsider.id).card_id is None

    null_image = client.patch(f"/admin/cards/{card_id}", json={"image_path": None})
    assert null_image.status_code == 422

    assert client.delete(f"/admin/cards/{card_id}").status_code == 200
    assert client.get(f"/admin/guests/{john.id}").json()["data"]["card_id"] is None
    assert client.delete(f"/admin/cards/{card_id}").status_code == 404
