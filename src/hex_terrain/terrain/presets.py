"""Terrain presets for procedural generation.

Each preset pairs a tile height distribution with per-category asset
scatter parameters, so different environments produce distinctly
different tables.
"""

import logging

from hex_terrain.models import AssetCategory
from hex_terrain.terrain.types import AssetCategoryConfig, TerrainPreset

logger = logging.getLogger(__name__)

DEFAULT_PRESET_ID = "forest"

TERRAIN_PRESETS: dict[str, TerrainPreset] = {
    # ── Forest ──────────────────────────────────────────────────
    # Mostly low ground, dense loose tree cover with undergrowth and a
    # few tight rock outcrops.
    "forest": TerrainPreset(
        id="forest",
        name="Dense Forest",
        description="Thick woodland with trees and undergrowth",
        height_distribution={1: 0.7, 2: 0.2, 5: 0.1},
        asset_categories={
            AssetCategory.TREES: AssetCategoryConfig(probability=0.8, density=0.6, clustering=0.3),
            AssetCategory.ROCKS: AssetCategoryConfig(probability=0.2, density=0.1, clustering=0.8),
            AssetCategory.SCATTER: AssetCategoryConfig(probability=0.4, density=0.3, clustering=0.2),
        },
    ),
    # ── Desert ──────────────────────────────────────────────────
    # Rolling dunes; rocks are the main feature, vegetation is rare
    # and huddles together.
    "desert": TerrainPreset(
        id="desert",
        name="Arid Desert",
        description="Sandy dunes with sparse vegetation",
        height_distribution={1: 0.4, 2: 0.4, 5: 0.2},
        asset_categories={
            AssetCategory.TREES: AssetCategoryConfig(probability=0.1, density=0.05, clustering=0.9),
            AssetCategory.ROCKS: AssetCategoryConfig(probability=0.6, density=0.2, clustering=0.4),
            AssetCategory.SCATTER: AssetCategoryConfig(probability=0.2, density=0.1, clustering=0.6),
        },
    ),
    # ── Mountain ────────────────────────────────────────────────
    # Tall tiles dominate. Rocks scatter widely; an occasional lone
    # structure sits among them.
    "mountain": TerrainPreset(
        id="mountain",
        name="Rugged Mountains",
        description="Steep peaks with rocky terrain",
        height_distribution={1: 0.3, 2: 0.3, 5: 0.4},
        asset_categories={
            AssetCategory.TREES: AssetCategoryConfig(probability=0.3, density=0.15, clustering=0.7),
            AssetCategory.ROCKS: AssetCategoryConfig(probability=0.8, density=0.4, clustering=0.2),
            AssetCategory.BUILDINGS: AssetCategoryConfig(probability=0.1, density=0.02, clustering=1.0),
        },
    ),
    # ── Urban ───────────────────────────────────────────────────
    # Nearly flat ground built up with scattered structures.
    "urban": TerrainPreset(
        id="urban",
        name="Urban Settlement",
        description="Built-up area with structures and paths",
        height_distribution={1: 0.9, 2: 0.08, 5: 0.02},
        asset_categories={
            AssetCategory.BUILDINGS: AssetCategoryConfig(probability=0.6, density=0.3, clustering=0.1),
            AssetCategory.ROCKS: AssetCategoryConfig(probability=0.2, density=0.1, clustering=0.8),
            AssetCategory.SCATTER: AssetCategoryConfig(probability=0.3, density=0.2, clustering=0.3),
        },
    ),
}


def get_preset(preset_id: str) -> TerrainPreset:
    """Return the preset with the given id.

    Falls back to the forest preset if the id is unrecognised.
    """
    preset = TERRAIN_PRESETS.get(preset_id)
    if preset is None:
        logger.warning("Unknown terrain preset %r, using %r", preset_id, DEFAULT_PRESET_ID)
        return TERRAIN_PRESETS[DEFAULT_PRESET_ID]
    return preset
