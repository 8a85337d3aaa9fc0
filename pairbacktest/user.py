"""A user: strategy, order books per trading pair and available assets.

Orders and assets are changed by the runner, not by the user itself.
"""

import copy
import uuid
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Optional

from pairbacktest.asset import Asset
from pairbacktest.asset_leveraged import AssetLeveraged
from pairbacktest.asset_map import AssetMap
from pairbacktest.asset_map_v3 import AssetMapV3
from pairbacktest.asset_union import AssetUnion
from pairbacktest.config import INIT_BALANCE_USDT, USER_NAME
from pairbacktest.order_manager_v3 import OrderManagerV3
from pairbacktest.trading_pair_orders import TradingPairOrderManagerMap
from pairbacktest.types import AssetType, TradingPairType


@dataclass
class UserConfig:
    """Name and starting balances of a user."""

    user_name: str = USER_NAME
    init_balance_usdt: Decimal = INIT_BALANCE_USDT
    init_balance_btc: Decimal = field(default_factory=lambda: Decimal(0))


class User:
    """Holds a strategy together with the user's orders and assets."""

    def __init__(self, config: Optional[UserConfig] = None, strategy: Any = None) -> None:
        self.config = config if config is not None else UserConfig()
        self.id = uuid.uuid4()
        self.name = self.config.user_name
        self.strategy = strategy

        self.available_assets = AssetMapV3()
        self.available_assets.merge_asset(
            AssetUnion.from_asset(Asset(AssetType.USDT, self.config.init_balance_usdt))
        )
        self.available_assets.merge_asset(
            AssetUnion.from_asset(Asset(AssetType.BTC, self.config.init_balance_btc))
        )
        self.available_assets.merge_asset(
            AssetUnion(
                AssetType.BTC_USD_CM_FUTURE,
                AssetLeveraged(
                    TradingPairType.BTC_USD_CM_FUTURE,
                    Asset(AssetType.BTC_USD_CM_FUTURE, Decimal(0)),
                    Asset(AssetType.BTC, Decimal(0)),
                    Asset(AssetType.BTC, Decimal(0)),
                ),
            )
        )

        self.tp_order_map = TradingPairOrderManagerMap()
        for tp_type in (
            TradingPairType.BTC_USDT,
            TradingPairType.BTC_USD_CM_FUTURE,
            TradingPairType.BTC_USDT_FUTURE,
        ):
            self.tp_order_map.insert(tp_type, OrderManagerV3(tp_type))

    def total_assets(self) -> AssetMapV3:
        """Locked plus available assets."""
        return self.locked_assets() + self.available()

    def locked_assets(self) -> AssetMapV3:
        """Assets locked by open orders."""
        return self.tp_order_map.calculate_total_assets()

    def available(self) -> AssetMapV3:
        """A copy of the available assets."""
        return AssetMapV3(copy.deepcopy(self.available_assets.inner))

    def total_fees(self) -> AssetMap:
        """Fees paid across all trading pairs."""
        return self.tp_order_map.calculate_total_fees()

    def merge_available_asset(self, other: AssetUnion) -> None:
        """Add a holding to the available assets."""
        self.available_assets.merge_asset(other)

    def split_available_asset(self, as_type: AssetType, balance: Decimal) -> AssetUnion:
        """Take part of an available holding out."""
        return self.available_assets.split(as_type, balance)