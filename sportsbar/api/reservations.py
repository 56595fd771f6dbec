"""
Reservations API endpoints

Guests submit requests publicly; listing and status changes are admin-only.
"""

from fastapi import APIRouter, Depends, status
from typing import List
import structlog

from sportsbar.api.errors import not_found, storage_error
from sportsbar.core.dependencies import get_current_admin, get_storage
from sportsbar.schemas.reservation import ReservationCreate, ReservationResponse, ReservationUpdate
from sportsbar.storage.base import Storage
from sportsbar.storage.errors import StorageError

logger = structlog.get_logger(__name__)
router = APIRouter()
admin_router = APIRouter(dependencies=[Depends(get_current_admin)])


@router.post("", response_model=ReservationResponse, status_code=status.HTTP_201_CREATED)
def create_reservation(reservation_data: ReservationCreate, storage: Storage = Depends(get_storage)):
    """Submit a reservation request"""
    try:
        reservation = storage.create_reservation(reservation_data)
    except StorageError as e:
        raise storage_error(e)
    logger.info(f"Reservation {reservation.id} requested for party of {reservation.party_size}")
    return reservation


@admin_router.get("", response_model=List[ReservationResponse])
def list_reservations(storage: Storage = Depends(get_storage)):
    """List reservations, oldest request first"""
    return storage.get_reservations()


@admin_router.get("/{reservation_id}", response_model=ReservationResponse)
def get_reservation(reservation_id: str, storage: Storage = Depends(get_storage)):
    reservation = storage.get_reservation(reservation_id)
    if reservation is None:
        raise not_found("Reservation", reservation_id)
    return reservation


@admin_router.patch("/{reservation_id}", response_model=ReservationResponse)
def update_reservation(
    reservation_id: str,
    reservation_data: ReservationUpdate,
    storage: Storage = Depends(get_storage)
):
    """Confirm or cancel a reservation"""
    reservation = storage.update_reservation(reservation_id, reservation_data)
    if reservation is None:
        raise not_found("Reservation", reservation_id)
    logger.info(f"Reservation {reservation_id} is now {reservation.status.value}")
    return reservation


@admin_router.delete("/{reservation_id}")
def delete_reservation(reservation_id: str, storage: Storage = Depends(get_storage)):
    if not storage.delete_reservation(reservation_id):
        raise not_found("Reservation", reservation_id)
    logger.info(f"Deleted reservation {reservation_id}")
    return {"success": True}
