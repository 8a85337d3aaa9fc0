"""Holdings (spot and leveraged) keyed by asset type."""

import copy
import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable, Iterator, Mapping

from pairbacktest.asset import BalanceNotEnoughError
from pairbacktest.asset_leveraged import AssetLeveraged
from pairbacktest.asset_map import AssetNotFoundError
from pairbacktest.asset_union import AssetUnion
from pairbacktest.types import AssetType, TradingPairType

logger = logging.getLogger(__name__)

_LEVERAGED_TYPES = {
    TradingPairType.BTC_USDT_FUTURE: AssetType.BTC_USDT_FUTURE,
    TradingPairType.BTC_USD_CM_FUTURE: AssetType.BTC_USD_CM_FUTURE,
}


@dataclass
class AssetMapV3:
    """One holding per asset type, spot or leveraged."""

    inner: dict = field(default_factory=dict)

    def get(self, as_type: AssetType) -> AssetUnion:
        """The holding of the given type; raises AssetNotFoundError if absent."""
        try:
            return self.inner[as_type]
        except KeyError:
            raise AssetNotFoundError(as_type) from None

    def merge_asset(self, other: AssetUnion) -> None:
        """Add a holding into the entry of its type, creating it if needed."""
        existing = self.inner.get(other.asset_type())
        if existing is None:
            self.inner[other.asset_type()] = other
        else:
            existing.merge(other)

    def merge_assets(self, others: Iterable[AssetUnion]) -> None:
        for other in others:
            self.merge_asset(other)

    def split(self, as_type: AssetType, balance: Decimal) -> AssetUnion:
        """Take part of one holding out; raises if the balance is not enough."""
        holding = self.get(as_type)
        part = holding.split(balance)
        if part is None:
            raise BalanceNotEnoughError(holding.balance(), balance)
        return part

    def split_allow_negative(self, as_type: AssetType, balance: Decimal) -> AssetUnion:
        """Take part of one holding out, letting what remains go negative."""
        return self.get(as_type).split_allow_negative(balance)

    def update_leveraged(self, prices: Mapping[TradingPairType, Decimal]) -> None:
        """Mark every leveraged position to the given trading-pair prices."""
        for tp_type, price in prices.items():
            as_type = _LEVERAGED_TYPES.get(tp_type)
            if as_type is None:
                continue
            try:
                holding = self.get(as_type)
            except AssetNotFoundError as exc:
                logger.error("%s", exc)
                continue
            if isinstance(holding.inner, AssetLeveraged):
                holding.inner.update(price)

    def __iter__(self) -> Iterator[AssetUnion]:
        return iter(self.inner.values())

    def __len__(self) -> int:
        return len(self.inner)

    def __contains__(self, as_type: object) -> bool:
        return as_type in self.inner

    def __add__(self, other: "AssetMapV3") -> "AssetMapV3":
        result = AssetMapV3(copy.deepcopy(self.inner))
        result += other
        return result

    def __iadd__(self, other: "AssetMapV3") -> "AssetMapV3":
        for key, holding in other.inner.items():
            if key in self.inner:
                self.inner[key] += copy.deepcopy(holding)
            else:
                self.inner[key] = copy.deepcopy(holding)
        return self