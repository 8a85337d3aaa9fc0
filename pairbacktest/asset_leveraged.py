"""A leveraged position: base exposure, quote liability and margin."""

from dataclasses import dataclass, replace
from decimal import Decimal

from pairbacktest.asset import Asset, AssetError, BalanceNotEnoughError
from pairbacktest.types import AssetType, OrderDirection, TradingPairType


class AssetLeveragedError(Exception):
    """Base class for leveraged asset errors."""


class TradingPairMismatchError(AssetLeveragedError):
    """Two positions of different trading pairs were combined."""

    def __init__(
        self,
        actual: TradingPairType,
        expected: TradingPairType,
        position: "AssetLeveraged",
    ):
        super().__init__(f"trading pair mismatch: expected {expected}, got {actual}")
        self.actual = actual
        self.expected = expected
        self.position = position


class BaseTypeMismatchError(AssetLeveragedError):
    """Two positions with different base asset types were combined."""

    def __init__(self, actual: AssetType, expected: AssetType, position: "AssetLeveraged"):
        super().__init__(f"base asset type mismatch: expected {expected}, got {actual}")
        self.actual = actual
        self.expected = expected
        self.position = position


class QuoteTypeMismatchError(AssetLeveragedError):
    """Two positions with different quote asset types were combined."""

    def __init__(self, actual: AssetType, expected: AssetType, position: "AssetLeveraged"):
        super().__init__(f"quote asset type mismatch: expected {expected}, got {actual}")
        self.actual = actual
        self.expected = expected
        self.position = position


class MarginTypeMismatchError(AssetLeveragedError):
    """A margin asset of the wrong type was supplied; it is kept on the error."""

    def __init__(self, actual: AssetType, expected: AssetType, margin: Asset):
        super().__init__(f"margin asset type mismatch: expected {expected}, got {actual}")
        self.actual = actual
        self.expected = expected
        self.margin = margin


class MarginNotEnoughError(AssetLeveragedError):
    """More margin was requested than the position holds."""

    def __init__(self, remain: Decimal, required: Decimal):
        super().__init__(f"margin not enough: remain {remain}, required {required}")
        self.remain = remain
        self.required = required


@dataclass
class AssetLeveraged:
    """A leveraged position.

    On opening, the quote balance is minus base quantity times price; the
    leverage is -quote / margin; quote + margin stays constant across price
    updates.
    """

    tp_type: TradingPairType
    base_asset: Asset
    quote_asset: Asset
    margin_asset: Asset

    @classmethod
    def open(
        cls,
        tp_type: TradingPairType,
        base_balance: Decimal,
        margin_asset: Asset,
        price: Decimal,
    ) -> "AssetLeveraged":
        """Open a position of base_balance at price, backed by margin_asset."""
        base_type = tp_type.base_asset_type()
        quote_type = tp_type.quote_asset_type()
        if margin_asset.as_type != quote_type:
            raise MarginTypeMismatchError(margin_asset.as_type, quote_type, margin_asset)
        return cls(
            tp_type,
            Asset(base_type, base_balance),
            Asset(quote_type, -base_balance * price),
            margin_asset,
        )

    def update(self, price: Decimal) -> None:
        """Mark the position to a new price, moving the profit into the margin."""
        diff_quote = self.base_asset.balance * price + self.quote_asset.balance
        diff_asset = self.quote_asset.split_allow_negative(diff_quote)
        self.margin_asset.merge(diff_asset)

    def direction(self) -> OrderDirection:
        """LONG while the quote balance is negative, otherwise SHORT."""
        if self.quote_asset.balance < 0:
            return OrderDirection.LONG
        return OrderDirection.SHORT

    def leverage(self) -> Decimal:
        """Leverage ratio, always positive."""
        return abs(self.quote_asset.balance / self.margin_asset.balance)

    def liquidation_price(self) -> Decimal:
        """Price at which the margin is exhausted."""
        return -(self.quote_asset.balance + self.margin_asset.balance) / self.base_asset.balance

    def margin_top_up(self, margin: Asset) -> None:
        """Add margin of the quote type to the position."""
        if self.margin_asset.as_type != margin.as_type:
            raise MarginTypeMismatchError(margin.as_type, self.margin_asset.as_type, margin)
        self.margin_asset.merge(margin)

    def margin_withdraw(self, amount: Decimal) -> Asset:
        """Take margin out of the position."""
        try:
            return self.margin_asset.split(amount)
        except BalanceNotEnoughError as exc:
            raise MarginNotEnoughError(exc.remain, exc.required) from None
        except AssetError as exc:
            raise AssetLeveragedError(str(exc)) from exc

    def merge(self, other: "AssetLeveraged") -> None:
        """Combine another position of the same kind into this one."""
        if self.tp_type != other.tp_type:
            raise TradingPairMismatchError(other.tp_type, self.tp_type, other)
        if self.base_asset.as_type != other.base_asset.as_type:
            raise BaseTypeMismatchError(other.base_asset.as_type, self.base_asset.as_type, other)
        if self.quote_asset.as_type != other.quote_asset.as_type:
            raise QuoteTypeMismatchError(
                other.quote_asset.as_type, self.quote_asset.as_type, other
            )
        if self.margin_asset.as_type != other.margin_asset.as_type:
            raise MarginTypeMismatchError(
                other.margin_asset.as_type,
                self.margin_asset.as_type,
                replace(other.margin_asset),
            )
        self.base_asset.merge(other.base_asset)
        self.quote_asset.merge(other.quote_asset)
        self.margin_asset.merge(other.margin_asset)

    def split(self, base_balance: Decimal) -> "AssetLeveraged":
        """Split off a proportional part of the position."""
        return self.split_allow_negative(base_balance)

    def split_allow_negative(self, base_balance: Decimal) -> "AssetLeveraged":
        """Split off a proportional part, letting what remains go negative."""
        remaining_base = self.base_asset.balance
        if remaining_base != 0:
            quote_balance = self.quote_asset.balance * base_balance / remaining_base
            margin_balance = self.margin_asset.balance * base_balance / remaining_base
        else:
            quote_balance = Decimal(0)
            margin_balance = Decimal(0)
        return AssetLeveraged(
            self.tp_type,
            self.base_asset.split_allow_negative(base_balance),
            self.quote_asset.split_allow_negative(quote_balance),
            self.margin_asset.split_allow_negative(margin_balance),
        )