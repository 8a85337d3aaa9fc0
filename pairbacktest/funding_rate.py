"""Funding-rate data ordered by time."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Iterator, Optional, Tuple

from sortedcontainers import SortedDict


def _normalize_to_minute(time: datetime) -> datetime:
    return time.replace(second=0, microsecond=0)


@dataclass(frozen=True)
class FundingRateUnit:
    """One funding-rate observation.

    A positive rate means longs pay shorts; a negative rate, shorts pay longs.
    """

    time: datetime
    funding_rate: Decimal


class FundingRateData:
    """Funding rates keyed and ordered by time."""

    def __init__(self) -> None:
        self.data: SortedDict = SortedDict()

    def insert(self, time: datetime, funding_rate: Decimal) -> None:
        """Add a rate; the time is truncated to the minute."""
        time = _normalize_to_minute(time)
        self.data[time] = FundingRateUnit(time, funding_rate)

    def insert_unit(self, unit: FundingRateUnit) -> None:
        """Add a rate keyed by its time as given."""
        self.data[unit.time] = unit

    def get(self, time: datetime) -> Optional[Decimal]:
        """The rate at the minute containing time, if any."""
        unit = self.data.get(_normalize_to_minute(time))
        return None if unit is None else unit.funding_rate

    def range(
        self, start: datetime, end: datetime
    ) -> Iterator[Tuple[datetime, FundingRateUnit]]:
        """(time, unit) pairs with start <= time <= end, in order."""
        for key in self.data.irange(start, end):
            yield key, self.data[key]

    def __iter__(self) -> Iterator[Tuple[datetime, FundingRateUnit]]:
        """(time, unit) pairs in order of time."""
        return iter(self.data.items())

    def __len__(self) -> int:
        return len(self.data)