"""Trading pairs with their market data, and a map of them by type."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Iterator, Optional, Tuple

from pairbacktest.funding_rate import FundingRateData, FundingRateUnit
from pairbacktest.kline import KlineData, KlineUnit
from pairbacktest.types import AssetType, TradingPairType


class TradingPairNotFoundError(LookupError):
    """No trading pair of the requested type is held."""

    def __init__(self, tp_type: TradingPairType):
        super().__init__(f"trading pair not found: {tp_type}")
        self.tp_type = tp_type


@dataclass
class TradingPair:
    """A market: its asset types, klines and optional funding rates."""

    tp_type: TradingPairType
    kline_data: KlineData = field(default_factory=KlineData)
    funding_rate: Optional[FundingRateData] = None
    base_currency: AssetType = field(init=False)
    quote_currency: AssetType = field(init=False)

    def __post_init__(self) -> None:
        self.base_currency = self.tp_type.base_asset_type()
        self.quote_currency = self.tp_type.quote_asset_type()

    def insert_funding_rate(self, time: datetime, funding_rate: Decimal) -> None:
        """Record a funding rate; ignored when the pair has no funding data."""
        if self.funding_rate is not None:
            self.funding_rate.insert(time, funding_rate)

    def get_funding_rate(self, time: datetime) -> Optional[Decimal]:
        if self.funding_rate is None:
            return None
        return self.funding_rate.get(time)

    def range_funding_rate(
        self, start: datetime, end: datetime
    ) -> Optional[Iterator[Tuple[datetime, FundingRateUnit]]]:
        """Funding rates between start and end, or None without funding data."""
        if self.funding_rate is None:
            return None
        return self.funding_rate.range(start, end)

    def iter_funding_rate(self) -> Optional[Iterator[Tuple[datetime, FundingRateUnit]]]:
        """All funding rates in order, or None without funding data."""
        if self.funding_rate is None:
            return None
        return iter(self.funding_rate)

    def insert_kline(
        self,
        open_time: datetime,
        close_time: datetime,
        open_price: Decimal,
        close_price: Decimal,
        high_price: Decimal,
        low_price: Decimal,
        volume: Decimal,
    ) -> None:
        self.kline_data.insert(
            open_time, close_time, open_price, close_price, high_price, low_price, volume
        )

    def get_kline(self, time: datetime) -> Optional[KlineUnit]:
        return self.kline_data.get(time)

    def range_kline(self, start: datetime, end: datetime) -> Iterator[Tuple[datetime, KlineUnit]]:
        return self.kline_data.range(start, end)

    def iter_kline(self) -> Iterator[Tuple[datetime, KlineUnit]]:
        return iter(self.kline_data)


@dataclass
class TradingPairMap:
    """Trading pairs keyed by type."""

    inner: dict = field(default_factory=dict)

    def add_trading_pair(
        self,
        tp_type: TradingPairType,
        kline_data: Optional[KlineData] = None,
        funding_rate: Optional[FundingRateData] = None,
    ) -> None:
        """Add a trading pair unless one of that type is already held."""
        if tp_type not in self.inner:
            self.inner[tp_type] = TradingPair(
                tp_type, kline_data if kline_data is not None else KlineData(), funding_rate
            )

    def get(self, tp_type: TradingPairType) -> TradingPair:
        """The trading pair of the given type; raises TradingPairNotFoundError."""
        try:
            return self.inner[tp_type]
        except KeyError:
            raise TradingPairNotFoundError(tp_type) from None

    def insert_funding_rate(
        self, tp_type: TradingPairType, time: datetime, funding_rate: Decimal
    ) -> None:
        self.get(tp_type).insert_funding_rate(time, funding_rate)

    def get_funding_rate(self, tp_type: TradingPairType, time: datetime) -> Optional[Decimal]:
        return self.get(tp_type).get_funding_rate(time)

    def range_funding_rate(
        self, tp_type: TradingPairType, start: datetime, end: datetime
    ) -> Optional[Iterator[Tuple[datetime, FundingRateUnit]]]:
        return self.get(tp_type).range_funding_rate(start, end)

    def iter_funding_rate(
        self, tp_type: TradingPairType
    ) -> Optional[Iterator[Tuple[datetime, FundingRateUnit]]]:
        return self.get(tp_type).iter_funding_rate()

    def insert_kline(
        self,
        tp_type: TradingPairType,
        open_time: datetime,
        close_time: datetime,
        open_price: Decimal,
        close_price: Decimal,
        high_price: Decimal,
        low_price: Decimal,
        volume: Decimal,
    ) -> None:
        self.get(tp_type).insert_kline(
            open_time, close_time, open_price, close_price, high_price, low_price, volume
        )

    def get_kline(self, tp_type: TradingPairType, time: datetime) -> Optional[KlineUnit]:
        return self.get(tp_type).get_kline(time)

    def range_kline(
        self, tp_type: TradingPairType, start: datetime, end: datetime
    ) -> Iterator[Tuple[datetime, KlineUnit]]:
        return self.get(tp_type).range_kline(start, end)

    def iter_kline(self, tp_type: TradingPairType) -> Iterator[Tuple[datetime, KlineUnit]]:
        return self.get(tp_type).iter_kline()

    def __contains__(self, tp_type: object) -> bool:
        return tp_type in self.inner

    def __len__(self) -> int:
        return len(self.inner)