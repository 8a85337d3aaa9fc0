"""Candlestick (kline) data ordered by open time."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Iterator, Optional, Tuple

from sortedcontainers import SortedDict


def _normalize_to_minute(time: datetime) -> datetime:
    return time.replace(second=0, microsecond=0)


@dataclass(frozen=True)
class KlineUnit:
    """One candle."""

    open_time: datetime
    close_time: datetime
    open_price: Decimal
    close_price: Decimal
    high_price: Decimal
    low_price: Decimal
    volume: Decimal


class KlineData:
    """Candles keyed and ordered by open time."""

    def __init__(self) -> None:
        self.data: SortedDict = SortedDict()

    def insert(
        self,
        open_time: datetime,
        close_time: datetime,
        open_price: Decimal,
        close_price: Decimal,
        high_price: Decimal,
        low_price: Decimal,
        volume: Decimal,
    ) -> None:
        """Add a candle; its open time is truncated to the minute."""
        open_time = _normalize_to_minute(open_time)
        self.data[open_time] = KlineUnit(
            open_time, close_time, open_price, close_price, high_price, low_price, volume
        )

    def insert_unit(self, unit: KlineUnit) -> None:
        """Add a candle keyed by its open time as given."""
        self.data[unit.open_time] = unit

    def get(self, time: datetime) -> Optional[KlineUnit]:
        """The candle opening exactly at time, if any."""
        return self.data.get(time)

    def range(self, start: datetime, end: datetime) -> Iterator[Tuple[datetime, KlineUnit]]:
        """(open time, candle) pairs with start <= open time <= end, in order."""
        for key in self.data.irange(start, end):
            yield key, self.data[key]

    def __iter__(self) -> Iterator[Tuple[datetime, KlineUnit]]:
        """(open time, candle) pairs in order of open time."""
        return iter(self.data.items())

    def __len__(self) -> int:
        return len(self.data)