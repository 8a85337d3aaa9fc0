"""A single balance of one asset type."""

from dataclasses import dataclass, field
from decimal import Decimal

from pairbacktest.types import AssetType


class AssetError(Exception):
    """Base class for asset errors."""


class BalanceNotEnoughError(AssetError):
    """The balance available is smaller than the balance required."""

    def __init__(self, remain: Decimal, required: Decimal):
        super().__init__(f"balance not enough: remain {remain}, required {required}")
        self.remain = remain
        self.required = required


class AssetTypeMismatchError(AssetError):
    """Two assets of different types were combined; the rejected asset is kept."""

    def __init__(self, expected: AssetType, actual: AssetType, asset: "Asset"):
        super().__init__(f"asset type mismatch: expected {expected}, got {actual}")
        self.expected = expected
        self.actual = actual
        self.asset = asset


@dataclass
class Asset:
    """An amount of one asset type."""

    as_type: AssetType
    balance: Decimal = field(default_factory=Decimal)

    def merge(self, other: "Asset") -> None:
        """Add another asset of the same type into this one."""
        if self.as_type != other.as_type:
            raise AssetTypeMismatchError(self.as_type, other.as_type, other)
        self.balance += other.balance

    def split(self, balance: Decimal) -> "Asset":
        """Take part of the balance out as a new asset."""
        if self.balance < balance:
            raise BalanceNotEnoughError(self.balance, balance)
        self.balance -= balance
        return Asset(self.as_type, balance)

    def split_allow_negative(self, balance: Decimal) -> "Asset":
        """Take part of the balance out, letting this balance go negative."""
        self.balance -= balance
        return Asset(self.as_type, balance)

    def __iadd__(self, other: "Asset") -> "Asset":
        self.balance += other.balance
        return self