"""Editor state: the stores plus the command surface the UI layer drives."""

import asyncio
import logging
import math
import random
import threading
from collections import deque
from dataclasses import dataclass, field

from hex_terrain.catalog import is_known_asset_type
from hex_terrain.config import settings
from hex_terrain.hexgrid import Hex, hex_grid_for_table
from hex_terrain.models import TileType, ToolMode
from hex_terrain.stores import (
    AssetStore,
    MapStats,
    PlacedAsset,
    Tile,
    TileStackStore,
    map_stats,
    remove_all_at,
)
from hex_terrain.stores.tiles import VALID_TILE_HEIGHTS
from hex_terrain.terrain import (
    GeneratedTerrain,
    PlacementAdvisor,
    PlacementSuggestion,
    TerrainAnalysis,
    TerrainAnalyzer,
    TerrainPreset,
    TerrainSynthesizer,
    get_preset,
    merge_generated,
)

logger = logging.getLogger(__name__)

MAX_SEED = 2**31 - 1
DEFAULT_PROJECT_NAME = "Untitled Map"


@dataclass
class _Snapshot:
    stacks: dict[str, list[Tile]]
    assets: list[PlacedAsset] = field(default_factory=list)


class MapEditor:
    """Owns one map's tile and asset stores and every command that mutates them.

    Commands never raise on bad input; they do nothing instead. Each command
    that changes the map records an undo snapshot first.
    """

    def __init__(
        self,
        tiles: TileStackStore | None = None,
        assets: AssetStore | None = None,
        history_limit: int | None = None,
    ) -> None:
        self.tiles = tiles if tiles is not None else TileStackStore()
        self.assets = assets if assets is not None else AssetStore()
        self.analyzer = TerrainAnalyzer()
        self.advisor = PlacementAdvisor(self.analyzer)

        self.selected_tool = ToolMode.TILE
        self.selected_tile_height = 1
        self.selected_tile_type = TileType.GROUND
        self.selected_asset_type = "tree_pine"
        self.selected_preset: TerrainPreset = get_preset(settings.default_preset)
        self.table_size = (settings.table_width, settings.table_height)
        self.project_name = DEFAULT_PROJECT_NAME

        self._generation_lock = threading.Lock()
        self.last_seed: int | None = None
        self.last_analysis: TerrainAnalysis | None = None
        self.placement_suggestions: list[PlacementSuggestion] = []

        limit = history_limit if history_limit is not None else settings.history_limit
        self._undo: deque[_Snapshot] = deque(maxlen=max(limit, 0))
        self._redo: list[_Snapshot] = []

    # ── Tool state ──────────────────────────────────────────────

    def set_tool(self, tool: str) -> None:
        try:
            self.selected_tool = ToolMode(tool)
        except ValueError:
            logger.debug("Ignoring unknown tool %r", tool)

    def set_tile_height(self, height: int) -> None:
        if height in VALID_TILE_HEIGHTS:
            self.selected_tile_height = int(height)

    def set_tile_type(self, tile_type: str) -> None:
        try:
            self.selected_tile_type = TileType(tile_type)
        except ValueError:
            logger.debug("Ignoring unknown tile type %r", tile_type)

    def set_asset_type(self, asset_type: str) -> None:
        if is_known_asset_type(asset_type):
            self.selected_asset_type = asset_type

    def set_preset(self, preset_id: str) -> None:
        self.selected_preset = get_preset(preset_id)

    def set_table_size(self, width: float, height: float) -> None:
        if not all(math.isfinite(v) and v > 0 for v in (width, height)):
            logger.debug("Ignoring invalid table size %r x %r", width, height)
            return
        self.table_size = (float(width), float(height))

    def set_project_name(self, name: str) -> None:
        name = name.strip()
        if name:
            self.project_name = name

    # ── Queries ─────────────────────────────────────────────────

    @property
    def is_generating(self) -> bool:
        return self._generation_lock.locked()

    def table_hexes(self) -> list[Hex]:
        """Every hex whose center lies on the current table."""
        return hex_grid_for_table(*self.table_size)

    def get_tiles_at(self, q: int, r: int) -> list[Tile]:
        return self.tiles.get_tiles_at(q, r)

    def get_total_height_at(self, q: int, r: int) -> int:
        return self.tiles.get_total_height_at(q, r)

    def stats(self) -> MapStats:
        return map_stats(self.tiles, self.assets)

    # ── Tile commands ───────────────────────────────────────────

    def add_tile(
        self, q: int, r: int, height: int | None = None, tile_type: str | None = None
    ) -> Tile | None:
        snapshot = self._snapshot()
        tile = self.tiles.add_tile(
            q,
            r,
            height if height is not None else self.selected_tile_height,
            tile_type if tile_type is not None else self.selected_tile_type,
        )
        if tile is not None:
            self._record(snapshot)
        return tile

    def remove_tile(self, tile_id: str, q: int, r: int) -> None:
        snapshot = self._snapshot()
        if self.tiles.remove_tile(tile_id, q, r):
            self._record(snapshot)

    def remove_all_at(self, q: int, r: int) -> None:
        snapshot = self._snapshot()
        removed_tiles, removed_assets = remove_all_at(self.tiles, self.assets, q, r)
        if removed_tiles or removed_assets:
            self._record(snapshot)

    # ── Asset commands ──────────────────────────────────────────

    def add_asset(
        self,
        q: int,
        r: int,
        asset_type: str | None = None,
        rotation_y: float = 0.0,
        scale: float = 1.0,
    ) -> PlacedAsset | None:
        snapshot = self._snapshot()
        asset = self.assets.add(
            q,
            r,
            asset_type if asset_type is not None else self.selected_asset_type,
            rotation_y=rotation_y,
            scale=scale,
        )
        if asset is not None:
            self._record(snapshot)
        return asset

    def remove_asset(self, asset_id: str) -> None:
        snapshot = self._snapshot()
        if self.assets.remove(asset_id):
            self._record(snapshot)

    def move_asset(self, asset_id: str, q: int, r: int) -> None:
        if asset_id not in self.assets:
            return
        self._record(self._snapshot())
        self.assets.move(asset_id, q, r)

    def rotate_asset(self, asset_id: str, delta: float) -> None:
        if asset_id not in self.assets:
            return
        self._record(self._snapshot())
        self.assets.rotate(asset_id, delta)

    def adjust_asset_scale(self, asset_id: str, delta: float) -> None:
        if asset_id not in self.assets:
            return
        self._record(self._snapshot())
        self.assets.adjust_scale(asset_id, delta)

    def clear_map(self) -> None:
        snapshot = self._snapshot()
        with self.tiles.lock, self.assets.lock:
            self.tiles.clear()
            self.assets.clear()
        self._record(snapshot)

    # ── Terrain generation and advice ───────────────────────────

    def generate_terrain(
        self,
        center_q: int = 0,
        center_r: int = 0,
        radius: int | None = None,
        seed: int | None = None,
    ) -> GeneratedTerrain | None:
        """Generate terrain with the selected preset and merge it into the map.

        Generated stacks replace existing stacks hex by hex; generated assets
        are added. Either the whole result is committed or, if anything fails,
        nothing is. Returns None on failure or if a generation is already running.

        Synthesis runs without the store locks, so edits made meanwhile are
        kept. The map is snapshotted and merged under both locks.
        """
        if not self._generation_lock.acquire(blocking=False):
            logger.warning("Terrain generation already in progress, ignoring request")
            return None

        try:
            if radius is None:
                radius = settings.default_generation_radius
            radius = max(0, min(radius, settings.max_generation_radius))
            if seed is None:
                seed = random.randint(0, MAX_SEED)

            try:
                synthesizer = TerrainSynthesizer.from_seed(seed)
                result = synthesizer.generate(
                    center_q, center_r, radius, self.selected_preset, self.assets
                )
                with self.tiles.lock, self.assets.lock:
                    snapshot = self._snapshot()
                    try:
                        merge_generated(result, self.tiles, self.assets)
                    except Exception:
                        self._restore(snapshot)
                        raise
            except Exception:
                logger.exception("Terrain generation failed (seed %d)", seed)
                return None

            self._record(snapshot)
            self.last_seed = seed
            return result
        finally:
            self._generation_lock.release()

    async def generate_terrain_async(
        self,
        center_q: int = 0,
        center_r: int = 0,
        radius: int | None = None,
        seed: int | None = None,
    ) -> GeneratedTerrain | None:
        """Run ``generate_terrain`` in a worker thread (CPU-bound)."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            None, self.generate_terrain, center_q, center_r, radius, seed
        )

    def analyze_terrain(
        self, center_q: int = 0, center_r: int = 0, radius: int = 10
    ) -> TerrainAnalysis:
        self.last_analysis = self.analyzer.analyze(
            self.tiles, self.assets, center_q, center_r, radius
        )
        return self.last_analysis

    def get_placement_suggestions(self, q: int, r: int) -> list[PlacementSuggestion]:
        self.placement_suggestions = self.advisor.suggest(self.tiles, self.assets, q, r)
        return self.placement_suggestions

    def apply_suggestion(self, suggestion: PlacementSuggestion) -> None:
        """Arm the asset tool with the suggested type; the next hex click places it."""
        if not is_known_asset_type(suggestion.asset_type):
            logger.debug("Ignoring suggestion for unknown asset %r", suggestion.asset_type)
            return
        self.selected_tool = ToolMode.ASSET
        self.selected_asset_type = suggestion.asset_type

    # ── History ─────────────────────────────────────────────────

    @property
    def can_undo(self) -> bool:
        return bool(self._undo)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo)

    def undo(self) -> None:
        if not self._undo:
            return
        self._redo.append(self._snapshot())
        self._restore(self._undo.pop())

    def redo(self) -> None:
        if not self._redo:
            return
        self._undo.append(self._snapshot())
        self._restore(self._redo.pop())

    def _snapshot(self) -> _Snapshot:
        with self.tiles.lock, self.assets.lock:
            return _Snapshot(self.tiles.snapshot(), self.assets.snapshot())

    def _restore(self, snapshot: _Snapshot) -> None:
        with self.tiles.lock, self.assets.lock:
            self.tiles.restore(snapshot.stacks)
            self.assets.restore(snapshot.assets)

    def _record(self, snapshot: _Snapshot) -> None:
        self._undo.append(snapshot)
        self._redo.clear()
