# pairbacktest

The core data model of a multi-pair trading backtester. All amounts are
`decimal.Decimal`, so balances stay exact. The package is a library: it has no
command line.

## What it contains

- **`pairbacktest.types`**: the enumerations `AssetType` (USDT, BTC and two
  futures), `TradingPairType` (with `base_asset_type()` and
  `quote_asset_type()`), `OrderDirection` (with `reverse()`), `OrderAction` and
  `OrderPosition`.
- **`pairbacktest.asset`**: `Asset` holds a balance of one asset type.
  `merge()` adds an asset of the same type and raises `AssetTypeMismatchError`
  otherwise. `split()` takes part of the balance out and raises
  `BalanceNotEnoughError` if it is too small. `split_allow_negative()` lets the
  balance go below zero.
- **`pairbacktest.asset_map`**: `AssetMap` keeps one `Asset` per type. `get()`
  raises `AssetNotFoundError` for a missing type. Maps can be added with `+`
  and `+=`.
- **`pairbacktest.asset_leveraged`**: `AssetLeveraged` is a futures position
  made of base, quote and margin assets. `open()` creates one at a price.
  `update()` marks it to a new price and moves the profit or loss into the
  margin. `direction()`, `leverage()` and `liquidation_price()` describe it.
  It also has `margin_top_up()`, `margin_withdraw()`, `merge()` and a
  proportional `split()`.
- **`pairbacktest.asset_union`** and **`pairbacktest.asset_map_v3`**:
  `AssetUnion` wraps either a spot `Asset` or an `AssetLeveraged`.
  `AssetMapV3` keeps one holding per asset type. Its `update_leveraged()` marks
  every futures position to a mapping of trading-pair prices.
- **`pairbacktest.order_v3`**: `OrderV3` goes through the states
  `OrderState.PENDING`, `UNFULFILLED`, `EXECUTED` and `CANCELED`.
  - `submit()` locks an asset. On the spot pair the balance must be greater
    than the quantity.
  - `execute()` releases the locked asset and records the fee paid.
  - `cancel()` releases the locked asset.
  - A call made in the wrong state raises `StateVerificationError`.
- **`pairbacktest.order_manager_v3`**: `OrderManagerV3` is the order book of
  one trading pair. It keeps buy and sell orders indexed by price and gives
  `peek_`/`pop_highest_buy_order()` and `peek_`/`pop_lowest_sell_order()`.
  Within a price, the first order inserted comes out first. It also totals the
  locked assets and the fees.
- **`pairbacktest.trading_pair_orders`**: `TradingPairOrderManagerMap` holds
  one order book per trading pair and totals the locked assets and fees across
  all of them.
- **`pairbacktest.kline`** and **`pairbacktest.funding_rate`**: `KlineData`
  holds candles and `FundingRateData` holds funding rates, both sorted by time.
  Each has `insert()`, `get()`, an inclusive `range()` and iteration.
  `insert()` truncates times to the minute.
- **`pairbacktest.trading_pair`**: `TradingPair` joins the kline and funding
  rate data of one market. `TradingPairMap` holds trading pairs by type, and
  its `get()` raises `TradingPairNotFoundError` for a missing type.
- **`pairbacktest.binance_kline`**: `BinanceKlineRow` is a stored exchange
  kline row with Unix-second times and float prices. `rows_to_kline_data()`
  turns rows into `KlineData` with local-time timestamps.
- **`pairbacktest.user`**: `User` starts with balances from a `UserConfig`
  and an order book for each trading pair. It has `available()`,
  `locked_assets()`, `total_assets()`, `total_fees()`,
  `merge_available_asset()` and `split_available_asset()`.
- **`pairbacktest.config`**: fee rates, minimum trade sizes, default user
  values, the sample period, `config_date_from()`/`config_date_to()` and
  `DebugConfig`.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Example

A leveraged position:

```python
from decimal import Decimal

from pairbacktest.asset import Asset
from pairbacktest.asset_leveraged import AssetLeveraged
from pairbacktest.types import AssetType, TradingPairType

margin = Asset(AssetType.USDT, Decimal(10_000))
position = AssetLeveraged.open(
    TradingPairType.BTC_USDT_FUTURE, Decimal(1), margin, Decimal(100_000)
)
print(position.leverage())           # 10
print(position.liquidation_price())  # 90000

position.update(Decimal(180_000))
print(position.leverage())           # 2
```

An order book for one trading pair:

```python
from decimal import Decimal

from pairbacktest.order_manager_v3 import OrderManagerV3
from pairbacktest.order_v3 import AddOrder
from pairbacktest.types import OrderAction, TradingPairType

book = OrderManagerV3(TradingPairType.BTC_USDT)
for price in (100, 300, 200):
    book.add_new_order(AddOrder(OrderAction.SELL, Decimal(price), Decimal("0.01")))

print(book.pop_lowest_sell_order().price)  # 100
```

## What it does not do

The package holds the data model only:

- It does not load market data from a database or any other store. You build
  `KlineData` and `FundingRateData` yourself, or from `BinanceKlineRow` values
  you supply.
- It contains no trading strategies. `User` keeps a strategy object but never
  calls it.
- It has no backtest runner that matches orders against candles.
- It has no command to start a run.