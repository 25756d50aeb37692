import datetime
import json
import logging
from enum import Enum as PyEnum

from sqlalchemy import Column, Integer, String, Float, Text, Date, TIMESTAMP, Index
from sqlalchemy import Enum as SQLEnum

from .database import Base

logger = logging.getLogger("rental_service")


class BookingStatus(PyEnum):
    PENDING_PAYMENT = "PendingPayment"
    PENDING_PICKUP = "PendingPickup"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


# Only these statuses hold equipment stock
ACTIVE_STATUSES = frozenset({BookingStatus.PENDING_PAYMENT, BookingStatus.PENDING_PICKUP})


class Equipment(Base):
    __tablename__ = "equipment"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), unique=True, nullable=False)
    price_per_day = Column(Float, nullable=False, default=0)
    stock = Column(Integer, nullable=False, default=0)


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    booking_code = Column(String(64), unique=True, nullable=False)
    user_name = Column(String(255), nullable=False)

    # JSON array of equipment names, one entry per reserved unit
    items = Column(Text, nullable=False)

    rent_date = Column(Date, nullable=False)
    return_date = Column(Date, nullable=False)
    payment_method = Column(String(64), nullable=False)
    total_price = Column(Float, nullable=False)
    status = Column(SQLEnum(BookingStatus), nullable=False)

    created_at = Column(TIMESTAMP, default=datetime.datetime.utcnow)

    # The availability query filters on status
    __table_args__ = (
        Index('ix_bookings_status', 'status'),
    )

    @property
    def item_list(self) -> list[str]:
        return decode_items(self.items, self.booking_code)


def encode_items(items: list[str]) -> str:
    return json.dumps(list(items))


def decode_items(raw, booking_code=None) -> list[str]:
    """
    Parses the stored items column. Malformed data never raises: it is logged
    as a data-integrity problem and read as an empty list.
    """
    try:
        items = json.loads(raw)
    except (TypeError, ValueError) as e:
        logger.warning(f"Data integrity: booking {booking_code} has unparseable items {raw!r}: {e}. "
                       f"Treating it as reserving nothing.")
        return []

    if not isinstance(items, list) or not all(isinstance(item, str) for item in items):
        logger.warning(f"Data integrity: booking {booking_code} items is not a list of names: {raw!r}. "
                       f"Treating it as reserving nothing.")
        return []
    return items
