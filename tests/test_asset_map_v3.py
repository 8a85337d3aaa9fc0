from decimal import Decimal

import pytest

from pairbacktest.asset import Asset, BalanceNotEnoughError
from pairbacktest.asset_leveraged import AssetLeveraged
from pairbacktest.asset_map import AssetNotFoundError
from pairbacktest.asset_map_v3 import AssetMapV3
from pairbacktest.asset_union import AssetUnion
from pairbacktest.types import AssetType, TradingPairType


def get_test_data():
    manager = AssetMapV3()
    manager.merge_asset(AssetUnion(AssetType.BTC, Asset(AssetType.BTC, Decimal(10))))
    manager.merge_asset(AssetUnion(AssetType.USDT, Asset(AssetType.USDT, Decimal(100_000))))
    return manager


def _future_union():
    position = AssetLeveraged.open(
        TradingPairType.BTC_USDT_FUTURE,
        Decimal(1),
        Asset(AssetType.USDT, Decimal(10_000)),
        Decimal(100_000),
    )
    return AssetUnion(AssetType.BTC_USDT_FUTURE, position)


def test1():
    manager = get_test_data()
    with pytest.raises(AssetNotFoundError) as info:
        manager.get(AssetType.BTC_USDT_FUTURE)
    assert info.value.as_type is AssetType.BTC_USDT_FUTURE
    btc = manager.get(AssetType.BTC)
    assert btc.asset_type() is AssetType.BTC
    assert btc.balance() == Decimal(10)


def test_split_success():
    manager = get_test_data()
    part = manager.split(AssetType.BTC, Decimal(1))
    assert part.asset_type() is AssetType.BTC
    assert part.balance() == Decimal(1)
    assert manager.get(AssetType.BTC).balance() == Decimal(9)


def test_split_fail():
    manager = get_test_data()
    with pytest.raises(BalanceNotEnoughError) as info:
        manager.split(AssetType.BTC, Decimal(11))
    assert info.value.remain == Decimal(10)
    assert info.value.required == Decimal(11)
    btc = manager.get(AssetType.BTC)
    assert btc.asset_type() is AssetType.BTC
    assert btc.balance() == Decimal(10)


def test_split_missing_type():
    manager = get_test_data()
    with pytest.raises(AssetNotFoundError):
        manager.split(AssetType.BTC_USD_CM_FUTURE, Decimal(1))


def test_split_allow_negative():
    manager = get_test_data()
    part = manager.split_allow_negative(AssetType.BTC, Decimal(11))
    assert part.balance() == Decimal(11)
    assert manager.get(AssetType.BTC).balance() == Decimal(-1)


def test_merge_asset_into_existing():
    manager = get_test_data()
    manager.merge_asset(AssetUnion(AssetType.BTC, Asset(AssetType.BTC, Decimal(5))))
    assert manager.get(AssetType.BTC).balance() == Decimal(15)
    assert len(manager) == 2


def test_add_leaves_operands_unchanged():
    a, b = get_test_data(), get_test_data()
    total = a + b
    assert total.get(AssetType.BTC).balance() == Decimal(20)
    assert total.get(AssetType.USDT).balance() == Decimal(200_000)
    assert a.get(AssetType.BTC).balance() == Decimal(10)
    assert b.get(AssetType.USDT).balance() == Decimal(100_000)


def test_iadd_adds_new_types():
    manager = get_test_data()
    other = AssetMapV3()
    other.merge_asset(_future_union())
    manager += other
    assert AssetType.BTC_USDT_FUTURE in manager
    assert {u.asset_type() for u in manager} == {
        AssetType.BTC,
        AssetType.USDT,
        AssetType.BTC_USDT_FUTURE,
    }


def test_update_leveraged():
    manager = get_test_data()
    manager.merge_asset(_future_union())
    manager.update_leveraged(
        {TradingPairType.BTC_USDT_FUTURE: Decimal(180_000), TradingPairType.BTC_USDT: Decimal(1)}
    )
    position = manager.get(AssetType.BTC_USDT_FUTURE).inner
    assert position.quote_asset.balance == Decimal(-180_000)
    assert position.margin_asset.balance == Decimal(90_000)
    assert manager.get(AssetType.BTC).balance() == Decimal(10)


def test_update_leveraged_missing_position_is_skipped():
    manager = get_test_data()
    manager.update_leveraged({TradingPairType.BTC_USD_CM_FUTURE: Decimal(5)})
    assert AssetType.BTC_USD_CM_FUTURE not in manager
    assert manager.get(AssetType.USDT).balance() == Decimal(100_000)