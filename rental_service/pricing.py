from typing import Mapping

from . import models
from .exceptions import BookingValidationError, ItemNotFoundError
from .periods import RentalPeriod


def quote_total_price(
        item_names: list[str],
        period: RentalPeriod,
        inventory: Mapping[str, models.Equipment],
        max_days: int,
) -> float:
    """
    Total rental price: each item occurrence costs its daily price times the
    number of rental days. Nothing is priced unless every item exists.
    """
    days = period.days
    if days > max_days:
        raise BookingValidationError(f"The maximum rental period is {max_days} days.")

    for name in item_names:
        if name not in inventory:
            raise ItemNotFoundError(name)

    return sum(inventory[name].price_per_day * days for name in item_names)
