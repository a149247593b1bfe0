"""
Admin API routes for events, guests and user profiles
"""

from fastapi import APIRouter, Depends, status

from app.api.deps import (
    get_event_service,
    get_paginated_query,
    get_storage,
    get_user_service,
)
from app.schemas.common import PaginatedQuery
from app.schemas.event import EventCreate, EventUpdate, EventWithGuestsCreate
from app.schemas.guest import GuestDraft, GuestCreate, GuestUpdate
from app.services.event_service import EventService
from app.services.storage import Storage
from app.services.user_service import UserService
from app.utils.responses import success_response

router = APIRouter()

# -------- Events --------

@router.post("/events")
def create_event(
    event_data: EventCreate,
    events: EventService = Depends(get_event_service),
):
    """Create a new event"""
    event = events.create_event(event_data)
    return success_response(
        message="Event created successfully",
        data=event,
        status_code=status.HTTP_201_CREATED
    )

@router.post("/events/with-guests")
def create_event_with_guests(
    event_data: EventWithGuestsCreate,
    events: EventService = Depends(get_event_service),
):
    """Create an event and its guest list in one step"""
    event, guests = events.create_event_with_guests(event_data)
    return success_response(
        message=f"Event created successfully. {len(guests)} guests imported.",
        data={"event": event, "guests": guests},
        status_code=status.HTTP_201_CREATED
    )

@router.get("/events")
def list_events(
    query: PaginatedQuery = Depends(get_paginated_query),
    storage: Storage = Depends(get_storage),
):
    """List events, newest first by default"""
    events = storage.events.list(query)
    return success_response(message="Events retrieved successfully", data=events)

@router.get("/events/{event_id}")
def get_event(event_id: int, storage: Storage = Depends(get_storage)):
    """Get event information"""
    event = storage.events.get_by_id(event_id)
    return success_response(message="Event details retrieved", data=event)

@router.patch("/events/{event_id}")
def update_event(
    event_id: int,
    event_update: EventUpdate,
    storage: Storage = Depends(get_storage),
    events: EventService = Depends(get_event_service),
):
    """Update event information"""
    event = storage.events.get_by_id(event_id)
    changes = event_update.model_dump(exclude_unset=True)
    updated = events.update_event(event.model_copy(update=changes))
    return success_response(message="Event updated successfully", data=updated)

@router.delete("/events/{event_id}")
def delete_event(event_id: int, events: EventService = Depends(get_event_service)):
    """Delete an event together with its guests and cards"""
    events.delete_event(event_id)
    return success_response(
        message="Event deleted successfully",
        data={"deleted_event_id": event_id}
    )

# -------- Guests --------

@router.get("/events/{event_id}/guests")
def list_guests(
    event_id: int,
    query: PaginatedQuery = Depends(get_paginated_query),
    storage: Storage = Depends(get_storage),
):
    """Search and list guests for an event"""
    guests = storage.guests.list(event_id, query)
    return success_response(message="Guests retrieved successfully", data=guests)

@router.post("/events/{event_id}/guests")
def create_guest(
    event_id: int,
    guest_data: GuestDraft,
    storage: Storage = Depends(get_storage),
):
    """Add a guest to an event"""
    guest = storage.guests.create(GuestCreate(**guest_data.model_dump(), event_id=event_id))
    return success_response(
        message="Guest created successfully",
        data=guest,
        status_code=status.HTTP_201_CREATED
    )

@router.get("/guests/{guest_id}")
def get_guest(guest_id: int, storage: Storage = Depends(get_storage)):
    """Get guest information"""
    guest = storage.guests.get_by_id(guest_id)
    return success_response(message="Guest retrieved successfully", data=guest)

@router.patch("/guests/{guest_id}")
def update_guest(
    guest_id: int,
    guest_update: GuestUpdate,
    storage: Storage = Depends(get_storage),
):
    """Update guest information"""
    guest = storage.guests.get_by_id(guest_id)
    updated = storage.guests.update(guest.model_copy(update=guest_update.model_dump(exclude_unset=True)))
    return success_response(message="Guest updated successfully", data=updated)

@router.delete("/guests/{guest_id}")
def delete_guest(guest_id: int, storage: Storage = Depends(get_storage)):
    """Delete a guest; any card issued to them becomes unassigned"""
    storage.guests.delete(guest_id)
    return success_response(
        message="Guest deleted successfully",
        data={"deleted_guest_id": guest_id}
    )

# -------- Users --------

@router.get("/users/{user_id}/profile")
def get_user_profile(user_id: int, users: UserService = Depends(get_user_service)):
    """Get a user's event totals"""
    profile = users.get_profile(user_id)
    return success_response(message="User profile retrieved", data=profile)
