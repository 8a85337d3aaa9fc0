import random
from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from pairbacktest.kline import KlineData, KlineUnit

DATA_NUM = 9


@pytest.fixture
def data():
    kline = KlineData()
    now = datetime.now().astimezone()
    inputs = []
    for offset in range(DATA_NUM):
        open_time = now - timedelta(minutes=10 * DATA_NUM - offset * 10)
        close_time = now - timedelta(minutes=10 * DATA_NUM - offset * 10 + 5)
        inputs.append(
            (
                open_time,
                close_time,
                Decimal(100 + offset * 10),
                Decimal(105 + offset * 10),
                Decimal(110 + offset * 10),
                Decimal(95 + offset * 10),
                Decimal(offset * 2),
            )
        )
    random.Random(7).shuffle(inputs)
    for item in inputs:
        kline.insert(*item)
    return kline


def test_iter(data):
    results = [unit for _, unit in data]
    assert len(results) == DATA_NUM
    for offset, unit in enumerate(results):
        assert unit.open_price == Decimal(100 + offset * 10)
        assert unit.close_price == Decimal(105 + offset * 10)
        assert unit.high_price == Decimal(110 + offset * 10)
        assert unit.low_price == Decimal(95 + offset * 10)
        assert unit.volume == Decimal(offset * 2)


def test_insert_truncates_to_minute(data):
    for time, unit in data:
        assert time.second == 0 and time.microsecond == 0
        assert unit.open_time == time


def test_get(data):
    for time, unit in data:
        assert data.get(time) is unit


def test_get_missing_returns_none(data):
    assert data.get(datetime(2000, 1, 1).astimezone()) is None


def test_range(data):
    start = DATA_NUM // 3
    end = DATA_NUM * 2 // 3
    units = [unit for _, unit in data]
    selected = list(data.range(units[start].open_time, units[end].open_time))
    assert len(selected) == end - start + 1
    for count, (_, unit) in enumerate(selected):
        assert unit is units[start + count]


def test_insert_unit_replaces_same_time():
    kline = KlineData()
    t = datetime(2020, 1, 1, 0, 0).astimezone()
    first = KlineUnit(t, t, Decimal(1), Decimal(2), Decimal(3), Decimal(0), Decimal(5))
    second = KlineUnit(t, t, Decimal(9), Decimal(9), Decimal(9), Decimal(9), Decimal(9))
    kline.insert_unit(first)
    kline.insert_unit(second)
    assert len(kline) == 1
    assert kline.get(t) is second