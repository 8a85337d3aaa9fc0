"""Order book of one trading pair: order pool, price indexes and paid fees."""

import uuid
from decimal import Decimal
from typing import Iterable, List, Optional

from sortedcontainers import SortedDict

from pairbacktest.asset_map import AssetMap
from pairbacktest.asset_map_v3 import AssetMapV3
from pairbacktest.asset_union import AssetUnion
from pairbacktest.order_v3 import AddOrder, OrderState, OrderV3
from pairbacktest.types import OrderAction, TradingPairType


class OrderManagerError(Exception):
    """Base class for order manager errors."""


class DuplicateOrderError(OrderManagerError):
    """An order with the same id is already in the pool."""

    def __init__(self, order: OrderV3):
        super().__init__(f"order {order.id} is already managed")
        self.order = order


class OrderIndexError(OrderManagerError):
    """The price index does not agree with the order pool."""

    def __init__(
        self, action: OrderAction, price: Decimal, order_id: Optional[uuid.UUID] = None
    ):
        if order_id is None:
            message = f"{action.value} index at price {price} holds no orders"
        else:
            message = (
                f"{action.value} index at price {price} refers to unknown order {order_id}"
            )
        super().__init__(message)
        self.action = action
        self.price = price
        self.order_id = order_id


class FinishedOrderStateError(OrderManagerError):
    """A finished order was added that is not in the executed state."""

    def __init__(self, state: OrderState):
        super().__init__(f"finished order must be executed, got {state}")
        self.state = state


class OrderManagerV3:
    """Open orders of one trading pair, indexed by side and price."""

    def __init__(self, tp_type: TradingPairType) -> None:
        self.tp_type = tp_type
        self.orders: dict = {}
        self.buy_orders: SortedDict = SortedDict()
        self.sell_orders: SortedDict = SortedDict()
        self.total_fee_asset_map = AssetMap()

    def _index(self, action: OrderAction) -> SortedDict:
        return self.buy_orders if action is OrderAction.BUY else self.sell_orders

    def insert_order(self, order: OrderV3) -> None:
        """Put an order into the pool and the price index of its side."""
        if order.id in self.orders:
            raise DuplicateOrderError(self.orders[order.id])
        self.orders[order.id] = order
        self._index(order.action).setdefault(order.price, []).append(order.id)

    def add_new_order(self, add_order: AddOrder) -> uuid.UUID:
        """Create an order for this trading pair, insert it and return its id."""
        order = OrderV3(self.tp_type, add_order.price, add_order.quantity, add_order.action)
        self.insert_order(order)
        return order.id

    def add_finished_order(self, order: OrderV3) -> None:
        """Record the fee of an executed order."""
        if order.state is not OrderState.EXECUTED:
            raise FinishedOrderStateError(order.state)
        if order.paid_fee_asset is not None:
            fee = order.paid_fee_asset
            self.total_fee_asset_map.merge_asset(type(fee)(fee.as_type, fee.balance))

    def peek_order(self, order_id: uuid.UUID) -> Optional[OrderV3]:
        """The order with the given id, if managed."""
        return self.orders.get(order_id)

    def remove_order(self, order_id: uuid.UUID) -> Optional[OrderV3]:
        """Remove an order and its index entry; None if it is not managed."""
        order = self.orders.pop(order_id, None)
        if order is None:
            return None
        index = self._index(order.action)
        level = index.get(order.price)
        if level is not None:
            level[:] = [other for other in level if other != order_id]
            if not level:
                del index[order.price]
        return order

    def remove_orders(self, order_ids: Iterable[uuid.UUID]) -> List[OrderV3]:
        """Remove several orders, returning those that were managed."""
        removed = (self.remove_order(order_id) for order_id in order_ids)
        return [order for order in removed if order is not None]

    def _peek_level(self, action: OrderAction, position: int) -> Optional[OrderV3]:
        index = self._index(action)
        if not index:
            return None
        price, ids = index.peekitem(position)
        if not ids:
            raise OrderIndexError(action, price)
        order = self.peek_order(ids[0])
        if order is None:
            raise OrderIndexError(action, price, ids[0])
        return order

    def peek_highest_buy_order(self) -> Optional[OrderV3]:
        """The earliest buy order at the highest price, if any."""
        return self._peek_level(OrderAction.BUY, -1)

    def pop_highest_buy_order(self) -> Optional[OrderV3]:
        """Remove and return the earliest buy order at the highest price."""
        order = self.peek_highest_buy_order()
        return None if order is None else self.remove_order(order.id)

    def peek_lowest_sell_order(self) -> Optional[OrderV3]:
        """The earliest sell order at the lowest price, if any."""
        return self._peek_level(OrderAction.SELL, 0)

    def pop_lowest_sell_order(self) -> Optional[OrderV3]:
        """Remove and return the earliest sell order at the lowest price."""
        order = self.peek_lowest_sell_order()
        return None if order is None else self.remove_order(order.id)

    def calculate_total_assets(self) -> AssetMapV3:
        """Total asset locked by the managed orders, per asset type."""
        result = AssetMapV3()
        for order in self.orders.values():
            asset = order.locked_asset
            if asset is not None:
                result.merge_asset(AssetUnion.from_asset(type(asset)(asset.as_type, asset.balance)))
        return result

    def calculate_total_fee(self) -> AssetMap:
        """A copy of the fees paid by finished orders."""
        return AssetMap() + self.total_fee_asset_map