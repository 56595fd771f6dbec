"""
Events API endpoints
"""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from typing import List
import structlog

from sportsbar.api.errors import not_found, storage_error
from sportsbar.core.dependencies import get_current_admin, get_storage
from sportsbar.core.timeutils import to_storage_time
from sportsbar.schemas.schedule import EventCreate, EventResponse, EventUpdate
from sportsbar.storage.base import Storage
from sportsbar.storage.errors import StorageError

logger = structlog.get_logger(__name__)
router = APIRouter()
admin_router = APIRouter(dependencies=[Depends(get_current_admin)])


@router.get("", response_model=List[EventResponse])
def list_events(storage: Storage = Depends(get_storage)):
    """List events by start date"""
    try:
        return storage.get_events()
    except (StorageError, SQLAlchemyError) as e:
        logger.error(f"Error listing events: {e}")
        return []


@router.get("/slug/{slug}", response_model=EventResponse)
def get_event_by_slug(slug: str, storage: Storage = Depends(get_storage)):
    """Get an event by its URL slug"""
    event = storage.get_event_by_slug(slug)
    if event is None:
        raise not_found("Event", slug)
    return event


@router.get("/{event_id}", response_model=EventResponse)
def get_event(event_id: str, storage: Storage = Depends(get_storage)):
    """Get a specific event"""
    event = storage.get_event(event_id)
    if event is None:
        raise not_found("Event", event_id)
    return event


@admin_router.post("", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
def create_event(event_data: EventCreate, storage: Storage = Depends(get_storage)):
    """Create a new event"""
    try:
        event = storage.create_event(event_data)
    except StorageError as e:
        raise storage_error(e)
    logger.info(f"Created event {event.id} ({event.slug})")
    return event


@admin_router.put("/{event_id}", response_model=EventResponse)
def update_event(event_id: str, event_data: EventUpdate, storage: Storage = Depends(get_storage)):
    """Update an event"""
    current = storage.get_event(event_id)
    if current is None:
        raise not_found("Event", event_id)
    start = to_storage_time(event_data.start_date or current.start_date)
    end = to_storage_time(event_data.end_date or current.end_date)
    if end < start:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="end_date must not be before start_date",
        )

    try:
        event = storage.update_event(event_id, event_data)
    except StorageError as e:
        raise storage_error(e)
    if event is None:
        raise not_found("Event", event_id)
    logger.info(f"Updated event {event_id}")
    return event


@admin_router.delete("/{event_id}")
def delete_event(event_id: str, storage: Storage = Depends(get_storage)):
    """Delete an event"""
    if not storage.delete_event(event_id):
        raise not_found("Event", event_id)
    logger.info(f"Deleted event {event_id}")
    return {"success": True}
