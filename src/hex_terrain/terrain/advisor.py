"""Single-hex asset placement suggestions."""

import logging

from hex_terrain.catalog import get_assets_by_category
from hex_terrain.models import AssetCategory, TerrainType
from hex_terrain.stores.assets import AssetStore
from hex_terrain.stores.tiles import TileStackStore
from hex_terrain.terrain.analyzer import TerrainAnalyzer
from hex_terrain.terrain.types import PlacementSuggestion

logger = logging.getLogger(__name__)

MAX_SUGGESTIONS = 3
ANALYSIS_RADIUS = 3
NEIGHBORHOOD_RADIUS = 2

TALL_NEIGHBORHOOD_HEIGHT = 15
SPARSE_ASSET_DENSITY = 0.2


class PlacementAdvisor:
    """Suggests what to place at a hex from its surroundings.

    Rules are evaluated in a fixed order and the first three that apply are
    returned in that order.
    """

    def __init__(self, analyzer: TerrainAnalyzer | None = None) -> None:
        self.analyzer = analyzer or TerrainAnalyzer()

    def suggest(
        self, tiles: TileStackStore, assets: AssetStore, q: int, r: int
    ) -> list[PlacementSuggestion]:
        analysis = self.analyzer.analyze(tiles, assets, q, r, ANALYSIS_RADIUS)

        nearby_heights: list[int] = []
        nearby_types: list[str] = []
        for dq in range(-NEIGHBORHOOD_RADIUS, NEIGHBORHOOD_RADIUS + 1):
            for dr in range(-NEIGHBORHOOD_RADIUS, NEIGHBORHOOD_RADIUS + 1):
                nq, nr = q + dq, r + dr
                if tiles.has_stack(nq, nr):
                    nearby_heights.append(tiles.get_total_height_at(nq, nr))
                nearby_types.extend(a.type for a in assets.get_assets_at(nq, nr))

        avg_height = sum(nearby_heights) / len(nearby_heights) if nearby_heights else 0.0

        suggestions: list[PlacementSuggestion] = []

        if analysis.terrain_type == TerrainType.MOUNTAINOUS and avg_height > TALL_NEIGHBORHOOD_HEIGHT:
            suggestions.append(
                PlacementSuggestion(
                    q, r, "rock_large", 0.8, "High elevation suits large rock formations"
                )
            )

        if any(t.startswith("tree_") for t in nearby_types):
            suggestions.append(
                PlacementSuggestion(
                    q, r, "scatter_grass", 0.6, "Near trees - good spot for ground cover"
                )
            )

        if analysis.asset_density < SPARSE_ASSET_DENSITY:
            trees = get_assets_by_category(AssetCategory.TREES)
            if trees:
                suggestions.append(
                    PlacementSuggestion(
                        q, r, trees[0].id, 0.5, "Area could benefit from vegetation"
                    )
                )

        logger.debug("%d placement suggestions for (%d, %d)", len(suggestions), q, r)
        return suggestions[:MAX_SUGGESTIONS]
