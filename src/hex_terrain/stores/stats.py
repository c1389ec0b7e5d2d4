"""Inventory statistics and bill of materials for a map."""

from collections import Counter
from dataclasses import dataclass, field
from typing import Any

from hex_terrain.catalog import TILE_PRICES, get_asset_by_id
from hex_terrain.stores.assets import AssetStore
from hex_terrain.stores.tiles import TileStackStore


@dataclass
class MapStats:
    """Counts of everything on the table plus its estimated retail cost."""

    tile_count: int = 0
    stack_count: int = 0
    asset_count: int = 0
    tiles_by_height: dict[int, int] = field(default_factory=dict)
    assets_by_type: dict[str, int] = field(default_factory=dict)
    max_stack_height: int = 0
    estimated_cost: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "tile_count": self.tile_count,
            "stack_count": self.stack_count,
            "asset_count": self.asset_count,
            "tiles_by_height": dict(self.tiles_by_height),
            "assets_by_type": dict(self.assets_by_type),
            "max_stack_height": self.max_stack_height,
            "estimated_cost": self.estimated_cost,
        }


def map_stats(tiles: TileStackStore, assets: AssetStore) -> MapStats:
    """Summarise the stores. Imported assets have no list price and cost nothing."""
    stacks = tiles.snapshot()
    placed = assets.snapshot()

    heights = Counter(t.height for stack in stacks.values() for t in stack)
    types = Counter(a.type for a in placed)

    cost = sum(TILE_PRICES.get(h, 0.0) * n for h, n in heights.items())
    for asset_type, n in types.items():
        definition = get_asset_by_id(asset_type)
        if definition is not None:
            cost += definition.price * n

    return MapStats(
        tile_count=sum(heights.values()),
        stack_count=len(stacks),
        asset_count=len(placed),
        tiles_by_height=dict(sorted(heights.items())),
        assets_by_type=dict(types),
        max_stack_height=max(
            (sum(t.height for t in stack) for stack in stacks.values()), default=0
        ),
        estimated_cost=round(cost, 2),
    )
