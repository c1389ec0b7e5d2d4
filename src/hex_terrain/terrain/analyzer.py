"""Statistical analysis of a map region."""

import logging

import numpy as np

from hex_terrain.hexgrid import hex_neighbors
from hex_terrain.models import TerrainType
from hex_terrain.stores.assets import AssetStore
from hex_terrain.stores.tiles import TileStackStore
from hex_terrain.terrain.types import TerrainAnalysis

logger = logging.getLogger(__name__)

# Height variance thresholds for terrain classification
MOUNTAINOUS_VARIANCE = 50.0
HILLY_VARIANCE = 20.0
# Fraction of the scanned region that must be occupied to count as mixed
MIXED_COVERAGE = 0.3

# Recommendation thresholds
LOW_ASSET_DENSITY = 0.1
HIGH_ASSET_DENSITY = 0.5
LOW_CONNECTIVITY = 0.3
FLAT_VARIANCE = 10.0

RECOMMEND_MORE_ASSETS = "Consider adding more assets to populate the terrain"
RECOMMEND_FEWER_ASSETS = "Terrain seems crowded - consider reducing asset density"
RECOMMEND_FILL_GAPS = "Terrain connectivity is low - consider filling gaps for better playability"
RECOMMEND_ADD_HEIGHT = "Flat terrain detected - consider adding height variation for visual interest"
RECOMMEND_DEFENSIVE = (
    "Mountainous terrain suits strategic gameplay - consider adding defensive positions"
)


class TerrainAnalyzer:
    """Computes height, connectivity and density statistics over a region.

    The region is the axial square ``[center - radius, center + radius]^2``,
    not a hex disk.
    """

    def analyze(
        self,
        tiles: TileStackStore,
        assets: AssetStore,
        center_q: int = 0,
        center_r: int = 0,
        radius: int = 10,
    ) -> TerrainAnalysis:
        occupied = [
            (q, r)
            for q in range(center_q - radius, center_q + radius + 1)
            for r in range(center_r - radius, center_r + radius + 1)
            if tiles.has_stack(q, r)
        ]

        if occupied:
            heights = np.array(
                [tiles.get_total_height_at(q, r) for q, r in occupied], dtype=np.float64
            )
            height_variance = float(np.mean((heights - heights.mean()) ** 2))
        else:
            height_variance = 0.0

        side = 2 * radius + 1
        terrain_type = self.classify(height_variance, len(occupied), side * side)
        connectivity = self.connectivity(tiles, occupied)
        asset_density = len(assets) / max(len(occupied), 1)

        analysis = TerrainAnalysis(
            terrain_type=terrain_type,
            asset_density=asset_density,
            height_variance=height_variance,
            connectivity=connectivity,
            recommended_actions=self.recommendations(
                terrain_type, asset_density, height_variance, connectivity
            ),
        )
        logger.debug(
            "Analyzed %d occupied hexes around (%d, %d): %s, variance %.2f",
            len(occupied), center_q, center_r, terrain_type.value, height_variance,
        )
        return analysis

    @staticmethod
    def classify(height_variance: float, occupied_count: int, region_size: int) -> TerrainType:
        if height_variance > MOUNTAINOUS_VARIANCE:
            return TerrainType.MOUNTAINOUS
        if height_variance > HILLY_VARIANCE:
            return TerrainType.HILLY
        if occupied_count > MIXED_COVERAGE * region_size:
            return TerrainType.MIXED
        return TerrainType.FLAT

    @staticmethod
    def connectivity(tiles: TileStackStore, occupied: list[tuple[int, int]]) -> float:
        """Fraction of occupied hexes with at least one occupied neighbor."""
        if not occupied:
            return 0.0
        connected = sum(
            1
            for q, r in occupied
            if any(tiles.has_stack(n.q, n.r) for n in hex_neighbors(q, r))
        )
        return connected / len(occupied)

    @staticmethod
    def recommendations(
        terrain_type: TerrainType,
        asset_density: float,
        height_variance: float,
        connectivity: float,
    ) -> list[str]:
        actions = []

        if asset_density < LOW_ASSET_DENSITY:
            actions.append(RECOMMEND_MORE_ASSETS)
        elif asset_density > HIGH_ASSET_DENSITY:
            actions.append(RECOMMEND_FEWER_ASSETS)

        if connectivity < LOW_CONNECTIVITY:
            actions.append(RECOMMEND_FILL_GAPS)

        if terrain_type == TerrainType.FLAT and height_variance < FLAT_VARIANCE:
            actions.append(RECOMMEND_ADD_HEIGHT)

        if terrain_type == TerrainType.MOUNTAINOUS:
            actions.append(RECOMMEND_DEFENSIVE)

        return actions
