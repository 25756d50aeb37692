"""
Stock availability over date ranges.

Every active booking whose period overlaps the requested one holds one unit
of an item per occurrence of that item in its list. What remains of the
inventory stock is available.
"""
import logging
from dataclasses import dataclass
from typing import Iterable, Mapping

from sqlalchemy.orm import Session

from . import crud, models, schemas
from .periods import RentalPeriod

logger = logging.getLogger("rental_service")

ITEM_NOT_FOUND_MESSAGE = "Equipment not found."


@dataclass(frozen=True)
class Reservation:
    period: RentalPeriod
    items: tuple[str, ...]


def reservations_from_bookings(bookings: Iterable[models.Booking]) -> list[Reservation]:
    # Items are decoded once per booking; malformed lists come back empty
    return [
        Reservation(RentalPeriod(b.rent_date, b.return_date), tuple(b.item_list))
        for b in bookings
    ]


def count_booked_units(item_name: str, period: RentalPeriod, reservations: Iterable[Reservation]) -> int:
    """
    Units of item_name held by reservations overlapping period.
    """
    return sum(
        reservation.items.count(item_name)
        for reservation in reservations
        if reservation.period.overlaps(period)
    )


def compute_stock(
        item_names: Iterable[str],
        period: RentalPeriod,
        inventory: Mapping[str, models.Equipment],
        reservations: list[Reservation],
) -> dict[str, schemas.StockStatus]:
    stock_status = {}
    for name in item_names:
        if name in stock_status:
            continue

        equipment = inventory.get(name)
        if equipment is None:
            stock_status[name] = schemas.StockStatus(
                is_available=False, available_stock=0, message=ITEM_NOT_FOUND_MESSAGE
            )
            continue

        booked = count_booked_units(name, period, reservations)
        available = equipment.stock - booked
        if available < 0:
            logger.warning(f"Equipment {name} is overbooked for {period.start}..{period.end}: "
                           f"stock {equipment.stock}, booked {booked}.")
        stock_status[name] = schemas.StockStatus(is_available=available > 0, available_stock=available)
    return stock_status


def check_stock(db: Session, item_names: Iterable[str], period: RentalPeriod) -> dict[str, schemas.StockStatus]:
    """
    Availability of each requested item over period. Unknown items are
    reported as unavailable rather than failing the whole request.
    """
    inventory = crud.get_inventory(db)
    reservations = reservations_from_bookings(crud.list_active_bookings(db))
    return compute_stock(item_names, period, inventory, reservations)
