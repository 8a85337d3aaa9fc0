from decimal import Decimal

import pytest

from pairbacktest.asset import Asset, AssetTypeMismatchError, BalanceNotEnoughError
from pairbacktest.types import AssetType


def test_asset_lifecycle():
    asset1 = Asset(AssetType.USDT, Decimal(100))
    assert asset1.as_type is AssetType.USDT
    assert asset1.balance == Decimal(100)

    asset2 = asset1.split(Decimal(20))
    assert asset1.as_type is AssetType.USDT
    assert asset1.balance == Decimal(80)
    assert asset2.as_type is AssetType.USDT
    assert asset2.balance == Decimal(20)

    with pytest.raises(BalanceNotEnoughError):
        asset1.split(Decimal(100))

    asset1.merge(asset2)
    assert asset1.as_type is AssetType.USDT
    assert asset1.balance == Decimal(100)

    asset4 = Asset(AssetType.BTC, Decimal(1))
    with pytest.raises(AssetTypeMismatchError) as info:
        asset1.merge(asset4)
    assert info.value.expected is AssetType.USDT
    assert info.value.actual is AssetType.BTC
    assert info.value.asset is asset4
    assert asset1.balance == Decimal(100)


def test_split_failure_reports_balances():
    asset = Asset(AssetType.BTC, Decimal(9))
    with pytest.raises(BalanceNotEnoughError) as info:
        asset.split(Decimal(10))
    assert info.value.remain == Decimal(9)
    assert info.value.required == Decimal(10)
    assert asset.balance == Decimal(9)


def test_split_allow_negative():
    asset = Asset(AssetType.USDT, Decimal(5))
    part = asset.split_allow_negative(Decimal(8))
    assert asset.balance == Decimal(-3)
    assert part == Asset(AssetType.USDT, Decimal(8))


def test_default_balance_is_zero():
    assert Asset(AssetType.BTC).balance == Decimal(0)


def test_iadd_adds_balance():
    asset = Asset(AssetType.USDT, Decimal(1))
    asset += Asset(AssetType.USDT, Decimal(2))
    assert asset.balance == Decimal(3)