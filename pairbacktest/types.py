"""Enumerations shared across assets, orders and trading pairs."""

from enum import Enum


class AssetType(Enum):
    """Kind of asset a balance is held in."""

    USDT = "usdt"
    BTC_USDT_FUTURE = "btc_usdt_future"
    BTC = "btc"
    BTC_USD_CM_FUTURE = "btc_usd_cm_future"


class TradingPairType(Enum):
    """Kind of market."""

    BTC_USDT = "btc_usdt"
    BTC_USDT_FUTURE = "btc_usdt_future"
    BTC_USD_CM_FUTURE = "btc_usd_cm_future"

    def base_asset_type(self) -> AssetType:
        """The asset being bought or sold."""
        return _BASE[self]

    def quote_asset_type(self) -> AssetType:
        """The asset prices are quoted in."""
        return _QUOTE[self]


_BASE = {
    TradingPairType.BTC_USDT: AssetType.BTC,
    TradingPairType.BTC_USDT_FUTURE: AssetType.BTC_USDT_FUTURE,
    TradingPairType.BTC_USD_CM_FUTURE: AssetType.BTC_USD_CM_FUTURE,
}

_QUOTE = {
    TradingPairType.BTC_USDT: AssetType.USDT,
    TradingPairType.BTC_USDT_FUTURE: AssetType.USDT,
    TradingPairType.BTC_USD_CM_FUTURE: AssetType.BTC,
}


class OrderDirection(Enum):
    """Direction of a position."""

    LONG = "long"
    SHORT = "short"

    def reverse(self) -> "OrderDirection":
        """The opposite direction."""
        return OrderDirection.SHORT if self is OrderDirection.LONG else OrderDirection.LONG


class OrderAction(Enum):
    """Side of an order."""

    BUY = "buy"
    SELL = "sell"


class OrderPosition(Enum):
    """Whether an order opens or closes a position."""

    OPEN = "open"
    CLOSE = "close"