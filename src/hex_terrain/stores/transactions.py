"""Operations that span both stores."""

import logging

from hex_terrain.stores.assets import AssetStore
from hex_terrain.stores.tiles import TileStackStore
from hex_terrain.stores.types import PlacedAsset, Tile

logger = logging.getLogger(__name__)


def remove_all_at(
    tiles: TileStackStore, assets: AssetStore, q: int, r: int
) -> tuple[list[Tile], list[PlacedAsset]]:
    """Clear a hex: its whole tile stack and every asset standing on it.

    Both store locks are held for the duration so readers never see the
    stack gone with its assets still present.
    """
    with tiles.lock, assets.lock:
        removed_tiles = tiles.clear_at(q, r)
        removed_assets = assets.remove_at(q, r)

    if removed_tiles or removed_assets:
        logger.debug(
            "Cleared (%d, %d): %d tiles, %d assets",
            q, r, len(removed_tiles), len(removed_assets),
        )
    return removed_tiles, removed_assets
