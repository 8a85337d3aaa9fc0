from decimal import Decimal

import pytest

from pairbacktest.asset import Asset, BalanceNotEnoughError
from pairbacktest.asset_map import AssetNotFoundError
from pairbacktest.asset_union import AssetUnion
from pairbacktest.order_manager_v3 import OrderManagerV3
from pairbacktest.order_v3 import AddOrder
from pairbacktest.trading_pair_orders import TradingPairOrderManagerMap
from pairbacktest.types import AssetType, OrderAction, TradingPairType
from pairbacktest.user import User, UserConfig

PRICES = ["100", "200", "300", "400", "500", "600"]


def _test_user() -> User:
    config = UserConfig(
        user_name="Satoshi Nakamoto",
        init_balance_usdt=Decimal(10000),
        init_balance_btc=Decimal(0),
    )
    user = User(config)
    manager = OrderManagerV3(TradingPairType.BTC_USDT_FUTURE)
    for price in PRICES:
        order_id = manager.add_new_order(
            AddOrder(OrderAction.BUY, Decimal(price), Decimal("0.01"))
        )
        order = manager.orders[order_id]
        order.submit(Asset(AssetType.USDT, order.amount))
    for price in PRICES:
        order_id = manager.add_new_order(
            AddOrder(OrderAction.SELL, Decimal(price), Decimal("1"))
        )
        order = manager.orders[order_id]
        order.submit(Asset(AssetType.BTC, order.quantity))
    order_map = TradingPairOrderManagerMap()
    order_map.insert(TradingPairType.BTC_USDT_FUTURE, manager)
    user.tp_order_map = order_map
    return user


def test_total_asset():
    total = _test_user().total_assets()
    assert total.get(AssetType.USDT).balance() == Decimal(10021)
    assert total.get(AssetType.BTC).balance() == Decimal(6)


def test_locked_asset():
    locked = _test_user().locked_assets()
    assert locked.get(AssetType.USDT).balance() == Decimal(21)
    assert locked.get(AssetType.BTC).balance() == Decimal(6)


def test_available_assets():
    available = _test_user().available()
    assert available.get(AssetType.USDT).balance() == Decimal(10000)
    assert available.get(AssetType.BTC).balance() == Decimal(0)


def test_total_assets_leaves_available_unchanged():
    user = _test_user()
    user.total_assets()
    assert user.available_assets.get(AssetType.USDT).balance() == Decimal(10000)


def test_new_user_layout():
    user = User()
    assert user.name == "Satoshi Nakamoto"
    assert user.available_assets.get(AssetType.USDT).balance() == Decimal(100000)
    assert user.available_assets.get(AssetType.BTC_USD_CM_FUTURE).balance() == Decimal(0)
    assert set(user.tp_order_map) == {
        TradingPairType.BTC_USDT,
        TradingPairType.BTC_USD_CM_FUTURE,
        TradingPairType.BTC_USDT_FUTURE,
    }
    with pytest.raises(AssetNotFoundError):
        user.available_assets.get(AssetType.BTC_USDT_FUTURE)


def test_users_get_distinct_ids():
    first = User()
    second = User()
    assert first.id == first.id
    assert first.id != second.id


def test_merge_available_asset():
    user = _test_user()
    user.merge_available_asset(AssetUnion.from_asset(Asset(AssetType.BTC, Decimal("1.5"))))
    assert user.available().get(AssetType.BTC).balance() == Decimal("1.5")


def test_split_available_asset():
    user = _test_user()
    part = user.split_available_asset(AssetType.USDT, Decimal(2500))
    assert part.asset_type() is AssetType.USDT
    assert part.balance() == Decimal(2500)
    assert user.available().get(AssetType.USDT).balance() == Decimal(7500)


def test_split_available_asset_not_enough():
    user = _test_user()
    with pytest.raises(BalanceNotEnoughError) as info:
        user.split_available_asset(AssetType.USDT, Decimal(20000))
    assert info.value.remain == Decimal(10000)
    assert info.value.required == Decimal(20000)
    assert user.available().get(AssetType.USDT).balance() == Decimal(10000)


def test_total_fees_empty_for_new_user():
    fees = User().total_fees()
    with pytest.raises(AssetNotFoundError):
        fees.get(AssetType.USDT)