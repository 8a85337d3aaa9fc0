"""Kline rows as stored from Binance, and their conversion to kline data."""

import math
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal
from typing import Iterable

from pairbacktest.kline import KlineData, KlineUnit

BTC_USDT_1M_TABLE_NAME = "kline_btc_usdt_1m"
BTC_MARGINED_FUTURE_BTC_1M_TABLE_NAME = "kline_btc_margined_future_btc_1m"


def _to_local(timestamp: int) -> datetime:
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).astimezone()


def _to_decimal(value: float) -> Decimal:
    if not math.isfinite(value):
        raise ValueError(f"cannot convert {value!r} to a decimal")
    return Decimal(repr(float(value)))


@dataclass(frozen=True)
class BinanceKlineRow:
    """A spot or futures kline row; times are Unix seconds."""

    open_time: int
    open_price: float
    high_price: float
    low_price: float
    close_price: float
    volume: float
    close_time: int
    quote_asset_volume: float
    num_of_trades: float
    taker_buy_base_volume: float
    taker_buy_quote_volume: float

    def to_kline_unit(self) -> KlineUnit:
        """The row as a candle with local-time timestamps and decimal prices."""
        return KlineUnit(
            open_time=_to_local(self.open_time),
            close_time=_to_local(self.close_time),
            open_price=_to_decimal(self.open_price),
            close_price=_to_decimal(self.close_price),
            high_price=_to_decimal(self.high_price),
            low_price=_to_decimal(self.low_price),
            volume=_to_decimal(self.volume),
        )


def rows_to_kline_data(rows: Iterable[BinanceKlineRow]) -> KlineData:
    """Collect rows into kline data keyed by open time."""
    result = KlineData()
    for row in rows:
        result.insert_unit(row.to_kline_unit())
    return result