import logging
from collections import Counter

from sqlalchemy.orm import Session

from . import availability, crud, models, pricing, schemas, validation
from .config import settings
from .exceptions import InsufficientStockError

logger = logging.getLogger("rental_service")


def price_and_validate_booking(db: Session, booking: schemas.BookingCreate) -> schemas.PriceQuote:
    """
    Validates a booking request and computes its price without saving it.
    """
    period = validation.validate_booking(booking)
    inventory = crud.get_inventory(db)
    total_price = pricing.quote_total_price(booking.items, period, inventory, settings.MAX_RENTAL_DAYS)
    return schemas.PriceQuote(total_price=total_price, rental_days=period.days)


def create_booking(db: Session, booking: schemas.BookingCreate) -> models.Booking:
    """
    Validates, prices and stores a booking. Bookings created in a status that
    holds stock must fit in what is still available for their dates.

    The stock check and the insert are not atomic: two concurrent requests for
    the last unit can both pass the check.
    """
    period = validation.validate_booking(booking)
    inventory = crud.get_inventory(db)
    total_price = pricing.quote_total_price(booking.items, period, inventory, settings.MAX_RENTAL_DAYS)

    if booking.status in models.ACTIVE_STATUSES:
        requested = Counter(booking.items)
        reservations = availability.reservations_from_bookings(crud.list_active_bookings(db))
        stock_status = availability.compute_stock(requested, period, inventory, reservations)
        for name, count in requested.items():
            if count > stock_status[name].available_stock:
                raise InsufficientStockError(name, count, stock_status[name].available_stock)

    db_booking = crud.insert_booking(
        db=db,
        booking_code=booking.booking_code,
        user_name=booking.user_name,
        items=booking.items,
        rent_date=period.start,
        return_date=period.end,
        payment_method=booking.payment_method,
        total_price=total_price,
        status=booking.status,
    )
    logger.info(f"Created booking {db_booking.booking_code} for {len(booking.items)} item(s), "
                f"total {total_price}.")
    return db_booking
