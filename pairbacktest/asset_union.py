"""A tagged holding that is either a spot asset or a leveraged position."""

import copy
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Union

from pairbacktest.asset import Asset, AssetError
from pairbacktest.asset_leveraged import AssetLeveraged, AssetLeveragedError
from pairbacktest.types import AssetType, TradingPairType

logger = logging.getLogger(__name__)


class AssetUnionTypeMismatchError(Exception):
    """Two holdings of different kinds were combined."""

    def __init__(self, required: "AssetUnion", actual: "AssetUnion"):
        super().__init__(
            f"asset union type mismatch: required {required.kind}, got {actual.kind}"
        )
        self.required = required
        self.actual = actual


@dataclass
class AssetUnion:
    """A spot asset (USDT, BTC) or a leveraged position (futures)."""

    kind: AssetType
    inner: Union[Asset, AssetLeveraged]

    @classmethod
    def from_asset(cls, asset: Asset) -> "AssetUnion":
        """Wrap a spot asset; any other type yields an empty USDT holding."""
        if asset.as_type in (AssetType.USDT, AssetType.BTC):
            return cls(asset.as_type, asset)
        logger.error("cannot wrap asset as spot holding: %r", asset)
        return cls(AssetType.USDT, Asset(AssetType.USDT, Decimal(0)))

    @classmethod
    def from_leveraged(cls, leveraged: AssetLeveraged) -> "AssetUnion":
        """Wrap a leveraged position according to its base asset type."""
        base_type = leveraged.base_asset.as_type
        if base_type in (AssetType.BTC_USDT_FUTURE, AssetType.BTC_USD_CM_FUTURE):
            return cls(AssetType.BTC_USD_CM_FUTURE, leveraged)
        logger.error("cannot wrap position as leveraged holding: %r", leveraged)
        empty = AssetLeveraged.open(
            TradingPairType.BTC_USDT,
            Decimal(0),
            Asset(AssetType.USDT, Decimal(0)),
            Decimal(0),
        )
        return cls(AssetType.BTC_USDT_FUTURE, empty)

    def asset_type(self) -> AssetType:
        return self.kind

    def merge(self, other: "AssetUnion") -> None:
        """Combine another holding of the same kind into this one."""
        if self.kind != other.kind:
            raise AssetUnionTypeMismatchError(copy.deepcopy(self), other)
        self.inner.merge(other.inner)

    def split(self, balance: Decimal) -> Optional["AssetUnion"]:
        """Take part out as a new holding, or None if that is not possible."""
        try:
            part = self.inner.split(balance)
        except (AssetError, AssetLeveragedError) as exc:
            logger.error("%s", exc)
            return None
        return AssetUnion(self.kind, part)

    def split_allow_negative(self, balance: Decimal) -> "AssetUnion":
        """Take part out as a new holding, letting what remains go negative."""
        return AssetUnion(self.kind, self.inner.split_allow_negative(balance))

    def balance(self) -> Decimal:
        """Spot balance, or base quantity for a leveraged position."""
        if isinstance(self.inner, AssetLeveraged):
            return self.inner.base_asset.balance
        return self.inner.balance

    def __iadd__(self, other: "AssetUnion") -> "AssetUnion":
        try:
            self.merge(other)
        except AssetUnionTypeMismatchError as exc:
            logger.error("%s", exc)
        return self