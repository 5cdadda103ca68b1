from fastapi import APIRouter, Depends
from datetime import datetime, timezone
from typing import List, Optional
import logging
from freightdesk.api.deps import domain_errors, get_actor
from freightdesk.core.filters import equals_or_any, search_matches
from freightdesk.core.notifier import emit_notification
from freightdesk.core.workflow import ensure_can
from freightdesk.db.memory import STATE_LOCK, add_record, get_record, next_id, rows, update_record
from freightdesk.schemas.booking import Booking, BookingCreate, BookingService, BookingStatus, CarrierRef
from freightdesk.schemas.notification import AlertType, Severity

router = APIRouter(tags=["bookings"])
logger = logging.getLogger(__name__)


def transition_booking(booking_id: str, action: str, status: BookingStatus, actor: str) -> Booking:
    def change(b: Booking):
        ensure_can("booking", b.id, action, b.status)
        return {"status": status}

    booking = update_record("bookings", booking_id, "Booking", change)
    logger.info(f"Booking {booking.id} -> {booking.status.value} by {actor}")
    return booking


@router.get("/bookings", response_model=List[Booking])
async def list_bookings(
    q: Optional[str] = None,
    status: Optional[BookingStatus] = None,
    service: Optional[BookingService] = None,
):
    return [
        b for b in rows("bookings")
        if search_matches(q, b.id, b.customer, b.carrier, b.origin_name, b.destination_name)
        and equals_or_any(b.status, status)
        and equals_or_any(b.service, service)
    ]


@router.post("/bookings", response_model=Booking, status_code=201)
async def create_booking(payload: BookingCreate, actor: str = Depends(get_actor)):
    now = datetime.now(timezone.utc)
    with STATE_LOCK:
        booking = Booking(
            id=next_id("bookings", "BK", stamp=now.strftime("%y%m%d")),
            created_at=now,
            **payload.model_dump(),
        )
        add_record("bookings", booking)
    logger.info(f"Booking {booking.id} created by {actor}: {booking.service.value} {booking.origin_code} -> {booking.destination_code}")
    return booking


@router.get("/bookings/{booking_id}", response_model=Booking)
async def get_booking(booking_id: str):
    with domain_errors():
        return get_record("bookings", booking_id, "Booking")


@router.post("/bookings/{booking_id}/confirm", response_model=Booking)
async def confirm_booking(booking_id: str, actor: str = Depends(get_actor)):
    with domain_errors():
        return transition_booking(booking_id, "confirm", BookingStatus.CONFIRMED, actor)


@router.post("/bookings/{booking_id}/sail", response_model=Booking)
async def mark_sailed(booking_id: str, actor: str = Depends(get_actor)):
    with domain_errors():
        booking = transition_booking(booking_id, "sail", BookingStatus.SAILED, actor)
    emit_notification(
        "Shipment Sailed",
        f"{booking.id} has sailed from {booking.origin_code}.",
        AlertType.SHIPMENT,
        Severity.INFO,
        related_id=booking.id,
        related_path="/bookings",
    )
    return booking


@router.post("/bookings/{booking_id}/deliver", response_model=Booking)
async def mark_delivered(booking_id: str, actor: str = Depends(get_actor)):
    with domain_errors():
        return transition_booking(booking_id, "deliver", BookingStatus.DELIVERED, actor)


@router.post("/bookings/{booking_id}/cancel", response_model=Booking)
async def cancel_booking(booking_id: str, actor: str = Depends(get_actor)):
    with domain_errors():
        return transition_booking(booking_id, "cancel", BookingStatus.CANCELLED, actor)


@router.put("/bookings/{booking_id}/ref", response_model=Booking)
async def set_carrier_ref(booking_id: str, body: CarrierRef):
    with domain_errors():
        booking = update_record("bookings", booking_id, "Booking", lambda _: {"ref": body.ref})
    logger.info(f"Booking {booking.id} carrier ref set to {booking.ref}")
    return booking
