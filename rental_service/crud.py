import datetime
import logging
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from . import models
from .exceptions import BookingNotFoundError, DuplicateBookingCodeError

logger = logging.getLogger("rental_service")


def list_equipment(db: Session) -> list[models.Equipment]:
    return db.query(models.Equipment).order_by(models.Equipment.name).all()


def get_inventory(db: Session) -> dict[str, models.Equipment]:
    """
    Snapshot of the inventory keyed by exact equipment name.
    """
    return {equipment.name: equipment for equipment in list_equipment(db)}


def list_active_bookings(db: Session) -> list[models.Booking]:
    """
    Bookings whose status still holds stock.
    """
    return db.query(models.Booking).filter(
        models.Booking.status.in_(models.ACTIVE_STATUSES)
    ).all()


def list_bookings(db: Session) -> list[models.Booking]:
    return db.query(models.Booking).order_by(
        models.Booking.created_at.desc(), models.Booking.id.desc()
    ).all()


def get_booking_by_code(db: Session, booking_code: str) -> models.Booking:
    db_booking = db.query(models.Booking).filter(models.Booking.booking_code == booking_code).first()
    if db_booking is None:
        raise BookingNotFoundError(booking_code)
    return db_booking


def insert_booking(
        db: Session,
        booking_code: str,
        user_name: str,
        items: list[str],
        rent_date: datetime.date,
        return_date: datetime.date,
        payment_method: str,
        total_price: float,
        status: models.BookingStatus,
) -> models.Booking:
    """
    Persists a priced booking. A booking code that already exists raises
    DuplicateBookingCodeError and leaves the session rolled back.
    """
    db_booking = models.Booking(
        booking_code=booking_code,
        user_name=user_name,
        items=models.encode_items(items),
        rent_date=rent_date,
        return_date=return_date,
        payment_method=payment_method,
        total_price=total_price,
        status=status,
    )
    db.add(db_booking)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        # Only a clash on the unique booking code is a duplicate; other violations propagate
        existing = db.query(models.Booking.id).filter(models.Booking.booking_code == booking_code).first()
        if existing is None:
            raise
        logger.info(f"Rejected duplicate booking code {booking_code}: {e.orig}")
        raise DuplicateBookingCodeError(booking_code) from e

    db.refresh(db_booking)
    return db_booking
