"""A collection of assets keyed by asset type."""

from dataclasses import dataclass, field, replace
from decimal import Decimal
from typing import Iterable, Iterator

from pairbacktest.asset import Asset, AssetError
from pairbacktest.types import AssetType


class AssetNotFoundError(AssetError, LookupError):
    """No asset of the requested type is held."""

    def __init__(self, as_type: AssetType):
        super().__init__(f"asset not found: {as_type}")
        self.as_type = as_type


@dataclass
class AssetMap:
    """Assets keyed by their type, one asset per type."""

    inner: dict = field(default_factory=dict)

    def add_asset_type(self, as_type: AssetType) -> None:
        """Ensure an entry for the type exists, with zero balance if new."""
        self.inner.setdefault(as_type, Asset(as_type, Decimal(0)))

    def add_asset_types(self, as_types: Iterable[AssetType]) -> None:
        for as_type in as_types:
            self.add_asset_type(as_type)

    def get(self, as_type: AssetType) -> Asset:
        """The asset of the given type; raises AssetNotFoundError if absent."""
        try:
            return self.inner[as_type]
        except KeyError:
            raise AssetNotFoundError(as_type) from None

    def merge_asset(self, other: Asset) -> None:
        """Add an asset into the entry of its type, creating it if needed."""
        self.add_asset_type(other.as_type)
        self.inner[other.as_type].merge(other)

    def merge_assets(self, others: Iterable[Asset]) -> None:
        for other in others:
            self.merge_asset(other)

    def split(self, as_type: AssetType, balance: Decimal) -> Asset:
        """Take part of the balance of one type out as a new asset."""
        return self.get(as_type).split(balance)

    def __iter__(self) -> Iterator[Asset]:
        return iter(self.inner.values())

    def __len__(self) -> int:
        return len(self.inner)

    def __contains__(self, as_type: object) -> bool:
        return as_type in self.inner

    def __add__(self, other: "AssetMap") -> "AssetMap":
        result = AssetMap({key: replace(asset) for key, asset in self.inner.items()})
        result += other
        return result

    def __iadd__(self, other: "AssetMap") -> "AssetMap":
        for key, asset in other.inner.items():
            if key in self.inner:
                self.inner[key] += asset
            else:
                self.inner[key] = replace(asset)
        return self