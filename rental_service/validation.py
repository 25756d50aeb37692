"""
Request checks that run before any business logic. Each check fails with its
own message and the first failing check wins, in this order: shape, date
format, calendar validity, date ordering.
"""
import datetime
import re

from . import schemas
from .exceptions import BookingValidationError
from .periods import RentalPeriod

DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def _require_items(items: list[str]):
    if not items:
        raise BookingValidationError("At least one item is required.")
    if any(not name for name in items):
        raise BookingValidationError("Item names must not be empty.")


def parse_period(rent_date: str, return_date: str) -> RentalPeriod:
    if not DATE_PATTERN.fullmatch(rent_date) or not DATE_PATTERN.fullmatch(return_date):
        raise BookingValidationError("Invalid date format. Please use YYYY-MM-DD.")

    parsed = {}
    for field, value in (("rent_date", rent_date), ("return_date", return_date)):
        try:
            parsed[field] = datetime.date.fromisoformat(value)
        except ValueError:
            raise BookingValidationError(f"{field} {value} is not a valid calendar date.")

    if parsed["return_date"] < parsed["rent_date"]:
        raise BookingValidationError("Return date cannot be before rent date.")
    return RentalPeriod(parsed["rent_date"], parsed["return_date"])


def validate_stock_check(request: schemas.StockCheckRequest) -> RentalPeriod:
    _require_items(request.items)
    return parse_period(request.rent_date, request.return_date)


def validate_booking(booking: schemas.BookingCreate) -> RentalPeriod:
    for field in ("booking_code", "user_name", "payment_method"):
        if not getattr(booking, field).strip():
            raise BookingValidationError(f"{field} is required.")
    _require_items(booking.items)
    return parse_period(booking.rent_date, booking.return_date)
