"""Static configuration: fees, trading-pair limits, user defaults and back-test period."""

from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal

# Fees
TAKER_ORDER_FEE = Decimal("0.0005")
"""Taker fee: 0.05%."""

MAKER_ORDER_FEE = Decimal("0.0002")
"""Maker fee: 0.02%."""

# Trading pairs
BTC_USDT_MIN_QUANTITY = Decimal("0.00001")
"""Minimum spot trade size, in BTC."""

USDT_MIN_QUANTITY = Decimal("10")
"""Minimum spot trade size, in USDT."""

BTC_USD_CM_MIN_QUANTITY = Decimal("1")
"""Minimum coin-margined contract trade size, in contracts."""

BTC_USDT_FUTURE_MIN_QUANTITY = Decimal("1")
"""Minimum USDT-margined contract trade size, in contracts."""

# User
USER_NAME = "Satoshi Nakamoto"
INIT_BALANCE_USDT = Decimal("100000")

# Back-test period
SAMPLE_PERIOD = timedelta(minutes=1)


def _local(year: int, month: int, day: int, hour: int = 0, minute: int = 0) -> datetime:
    return datetime(year, month, day, hour, minute).astimezone()


def config_date_from() -> datetime:
    """Start of the back-test period, in local time."""
    return _local(2020, 1, 1)


def config_date_to() -> datetime:
    """End of the back-test period, in local time."""
    return _local(2020, 1, 5)


@dataclass
class DebugConfig:
    """Controls how much diagnostic output a run produces."""

    is_debug: bool = False
    is_info: bool = True