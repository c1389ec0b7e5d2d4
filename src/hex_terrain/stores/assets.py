"""Placed decorative assets."""

import logging
import threading
import uuid
from collections.abc import Iterator
from dataclasses import replace

from hex_terrain.catalog import is_known_asset_type
from hex_terrain.stores.types import PlacedAsset

logger = logging.getLogger(__name__)

MIN_ASSET_SCALE = 0.1
MAX_ASSET_SCALE = 10.0


def clamp_scale(scale: float) -> float:
    return max(MIN_ASSET_SCALE, min(MAX_ASSET_SCALE, scale))


class AssetStore:
    """Owns every placed asset, keyed by id in placement order.

    Mutations addressed to an unknown id are silently ignored.
    """

    def __init__(self) -> None:
        self._assets: dict[str, PlacedAsset] = {}
        self.lock = threading.RLock()

    def __len__(self) -> int:
        return len(self._assets)

    def __contains__(self, asset_id: object) -> bool:
        return asset_id in self._assets

    def add(
        self,
        q: int,
        r: int,
        asset_type: str,
        rotation_y: float = 0.0,
        scale: float = 1.0,
    ) -> PlacedAsset | None:
        """Place a new asset on top of any others already at ``(q, r)``.

        Returns None without placing anything if ``asset_type`` is neither a
        catalog id nor an imported id.
        """
        if not is_known_asset_type(asset_type):
            logger.debug("Ignoring unknown asset type %r at (%d, %d)", asset_type, q, r)
            return None

        with self.lock:
            asset = PlacedAsset(
                id=str(uuid.uuid4()),
                q=q,
                r=r,
                type=asset_type,
                rotation_y=rotation_y,
                scale=clamp_scale(scale),
                stack_level=self._count_at(q, r),
            )
            self._assets[asset.id] = asset
            return replace(asset)

    def insert(self, asset: PlacedAsset) -> None:
        """Store a copy of an already-built asset, keeping its id."""
        with self.lock:
            self._assets[asset.id] = replace(asset, scale=clamp_scale(asset.scale))

    def remove(self, asset_id: str) -> bool:
        with self.lock:
            return self._assets.pop(asset_id, None) is not None

    def remove_at(self, q: int, r: int) -> list[PlacedAsset]:
        """Remove every asset anchored to ``(q, r)`` and return them."""
        with self.lock:
            removed = [a for a in self._assets.values() if a.q == q and a.r == r]
            for asset in removed:
                del self._assets[asset.id]
            return removed

    def move(self, asset_id: str, q: int, r: int) -> None:
        """Re-anchor an asset, placing it above the assets already at the destination."""
        with self.lock:
            asset = self._assets.get(asset_id)
            if asset is None:
                logger.debug("Cannot move unknown asset %s", asset_id)
                return
            level = sum(
                1 for a in self._assets.values() if a.q == q and a.r == r and a.id != asset_id
            )
            asset.q = q
            asset.r = r
            asset.stack_level = level

    def rotate(self, asset_id: str, delta: float) -> None:
        """Add ``delta`` radians to the asset's rotation. The angle is not wrapped."""
        with self.lock:
            asset = self._assets.get(asset_id)
            if asset is None:
                logger.debug("Cannot rotate unknown asset %s", asset_id)
                return
            asset.rotation_y += delta

    def adjust_scale(self, asset_id: str, delta: float) -> None:
        with self.lock:
            asset = self._assets.get(asset_id)
            if asset is None:
                logger.debug("Cannot scale unknown asset %s", asset_id)
                return
            asset.scale = clamp_scale(asset.scale + delta)

    def get(self, asset_id: str) -> PlacedAsset | None:
        with self.lock:
            asset = self._assets.get(asset_id)
            return replace(asset) if asset is not None else None

    def get_assets_at(self, q: int, r: int) -> list[PlacedAsset]:
        with self.lock:
            return [replace(a) for a in self._assets.values() if a.q == q and a.r == r]

    def has_asset_at(self, q: int, r: int) -> bool:
        with self.lock:
            return self._count_at(q, r) > 0

    def occupied_keys(self) -> set[tuple[int, int]]:
        with self.lock:
            return {(a.q, a.r) for a in self._assets.values()}

    def __iter__(self) -> Iterator[PlacedAsset]:
        return iter(self.snapshot())

    def snapshot(self) -> list[PlacedAsset]:
        with self.lock:
            return [replace(a) for a in self._assets.values()]

    def restore(self, assets: list[PlacedAsset]) -> None:
        with self.lock:
            self._assets = {a.id: replace(a) for a in assets}

    def clear(self) -> None:
        with self.lock:
            self._assets.clear()

    def _count_at(self, q: int, r: int) -> int:
        return sum(1 for a in self._assets.values() if a.q == q and a.r == r)
