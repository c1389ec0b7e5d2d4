"""Tile and asset stores: the sole owners of map records."""

from hex_terrain.stores.assets import MAX_ASSET_SCALE, MIN_ASSET_SCALE, AssetStore
from hex_terrain.stores.stats import MapStats, map_stats
from hex_terrain.stores.tiles import TileStackStore
from hex_terrain.stores.transactions import remove_all_at
from hex_terrain.stores.types import PlacedAsset, Tile

__all__ = [
    "AssetStore",
    "MAX_ASSET_SCALE",
    "MIN_ASSET_SCALE",
    "MapStats",
    "PlacedAsset",
    "Tile",
    "TileStackStore",
    "map_stats",
    "remove_all_at",
]
