"""Calendar-day rental periods, free of any time-of-day or timezone."""
import datetime
from dataclasses import dataclass


@dataclass(frozen=True)
class RentalPeriod:
    start: datetime.date
    end: datetime.date

    @property
    def days(self) -> int:
        """Number of rental days, counting both the rent and the return day."""
        return abs((self.end - self.start).days) + 1

    def overlaps(self, other: "RentalPeriod") -> bool:
        # Touching endpoints overlap: a return on day X blocks a rental starting on day X
        return self.start <= other.end and self.end >= other.start
