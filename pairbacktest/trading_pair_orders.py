"""Order managers of several trading pairs, with totals across all of them."""

from dataclasses import dataclass, field
from typing import Iterator, Optional

from pairbacktest.asset_map import AssetMap
from pairbacktest.asset_map_v3 import AssetMapV3
from pairbacktest.order_manager_v3 import OrderManagerV3
from pairbacktest.types import TradingPairType


@dataclass
class TradingPairOrderManagerMap:
    """One order manager per trading pair."""

    inner: dict = field(default_factory=dict)

    def calculate_total_assets(self) -> AssetMapV3:
        """Total asset locked by open orders across all trading pairs."""
        result = AssetMapV3()
        for manager in self.inner.values():
            result += manager.calculate_total_assets()
        return result

    def calculate_total_fees(self) -> AssetMap:
        """Total fees paid across all trading pairs."""
        result = AssetMap()
        for manager in self.inner.values():
            result += manager.calculate_total_fee()
        return result

    def insert(
        self, tp_type: TradingPairType, order_manager: OrderManagerV3
    ) -> Optional[OrderManagerV3]:
        """Set the manager of a trading pair, returning the one it replaces."""
        previous = self.inner.get(tp_type)
        self.inner[tp_type] = order_manager
        return previous

    def get(self, tp_type: TradingPairType) -> Optional[OrderManagerV3]:
        """The manager of a trading pair, if there is one."""
        return self.inner.get(tp_type)

    def __contains__(self, tp_type: object) -> bool:
        return tp_type in self.inner

    def __iter__(self) -> Iterator[TradingPairType]:
        return iter(self.inner)

    def __len__(self) -> int:
        return len(self.inner)