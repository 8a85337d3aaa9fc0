"""Orders on a trading pair: state machine, locked asset and paid fee."""

import copy
import uuid
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Optional

from pairbacktest.asset import Asset
from pairbacktest.types import AssetType, OrderAction, TradingPairType


class OrderState(Enum):
    """Lifecycle state of an order."""

    PENDING = "pending"
    """Not yet submitted; no asset locked."""
    UNFULFILLED = "unfulfilled"
    """Submitted and waiting to be filled."""
    EXECUTED = "executed"
    """Filled; the locked asset has been released."""
    CANCELED = "canceled"
    """Canceled; the locked asset has been released."""
    UNKNOWN = "unknown"


class OrderError(Exception):
    """Base class for order errors."""


class StateVerificationError(OrderError):
    """The order was not in the state an operation requires."""

    def __init__(self, expected: OrderState, actual: OrderState):
        super().__init__(f"order state is {actual}, expected {expected}")
        self.expected = expected
        self.actual = actual


class AssetQuantityNotEnoughError(OrderError):
    """The asset offered is smaller than the order requires; it is kept on the error."""

    def __init__(
        self, as_type: AssetType, required: Decimal, provided: Decimal, asset: Asset
    ):
        super().__init__(
            f"not enough {as_type}: required {required}, provided {provided}"
        )
        self.as_type = as_type
        self.required = required
        self.provided = provided
        self.asset = asset


class LockedAssetMissingError(OrderError):
    """The order holds no locked asset."""

    def __init__(self, order: "OrderV3"):
        super().__init__(f"order {order.id} has no locked asset")
        self.order = order


class FeeAlreadyPaidError(OrderError):
    """The order already carries a paid fee asset."""

    def __init__(self, order: "OrderV3"):
        super().__init__(f"order {order.id} already has a paid fee asset")
        self.order = order


@dataclass(frozen=True)
class AddOrder:
    """Request to place a new order."""

    action: OrderAction
    price: Decimal
    quantity: Decimal


@dataclass
class OrderV3:
    """An order on a trading pair.

    A buy order locks margin (its size sets the leverage); a sell order locks
    the base asset and may lock more than required.
    """

    tp_type: TradingPairType
    price: Decimal
    quantity: Decimal
    action: OrderAction
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    state: OrderState = OrderState.PENDING
    locked_asset: Optional[Asset] = None
    paid_fee_asset: Optional[Asset] = None

    @property
    def amount(self) -> Decimal:
        """Order value in the quote asset: price times quantity."""
        return self.price * self.quantity

    @classmethod
    def buy(cls, tp_type: TradingPairType, price: Decimal, quantity: Decimal) -> "OrderV3":
        return cls(tp_type, price, quantity, OrderAction.BUY)

    @classmethod
    def sell(cls, tp_type: TradingPairType, price: Decimal, quantity: Decimal) -> "OrderV3":
        return cls(tp_type, price, quantity, OrderAction.SELL)

    def update(
        self, price: Optional[Decimal] = None, quantity: Optional[Decimal] = None
    ) -> None:
        """Change the price, the quantity, or both."""
        if price is not None:
            self.price = price
        if quantity is not None:
            self.quantity = quantity

    def _check_state(self, expected: OrderState) -> None:
        if self.state != expected:
            raise StateVerificationError(expected, self.state)

    def submit(self, asset: Asset) -> None:
        """Lock an asset against the order and mark it unfulfilled."""
        self._check_state(OrderState.PENDING)
        provided = asset.balance
        required = self.quantity
        if self.tp_type == TradingPairType.BTC_USDT and provided <= required:
            raise AssetQuantityNotEnoughError(asset.as_type, required, provided, asset)
        self.locked_asset = asset
        self.state = OrderState.UNFULFILLED

    def execute(self, paid_fee_asset: Optional[Asset] = None) -> Asset:
        """Fill the order, record the fee paid and release the locked asset."""
        self._check_state(OrderState.UNFULFILLED)
        if self.paid_fee_asset is not None:
            raise FeeAlreadyPaidError(copy.deepcopy(self))
        asset = self.locked_asset
        if asset is None:
            raise LockedAssetMissingError(copy.deepcopy(self))
        self.locked_asset = None
        self.state = OrderState.EXECUTED
        if paid_fee_asset is None:
            paid_fee_asset = Asset(asset.as_type, Decimal(0))
        self.paid_fee_asset = paid_fee_asset
        return asset

    def cancel(self) -> Optional[Asset]:
        """Cancel the order, releasing the locked asset if there is one."""
        self.state = OrderState.CANCELED
        asset, self.locked_asset = self.locked_asset, None
        return asset

    def take_paid_fee_asset(self) -> Optional[Asset]:
        """Remove and return the paid fee asset."""
        fee, self.paid_fee_asset = self.paid_fee_asset, None
        return fee