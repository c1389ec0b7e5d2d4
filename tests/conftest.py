"""Pytest configuration and fixtures for terrain builder tests."""

import random

import pytest
from hex_terrain.editor import MapEditor
from hex_terrain.stores import AssetStore, TileStackStore
from hex_terrain.terrain import AssetCategoryConfig, TerrainPreset


@pytest.fixture
def tiles():
    """An empty tile stack store."""
    return TileStackStore()


@pytest.fixture
def assets():
    """An empty asset store."""
    return AssetStore()


@pytest.fixture
def editor():
    """A fresh editor with empty stores."""
    return MapEditor()


@pytest.fixture
def rng():
    """Seeded random source for reproducible tests."""
    return random.Random(1234)


@pytest.fixture
def bare_preset():
    """Preset that places no assets, for fast tile-only generation."""
    return TerrainPreset(
        id="bare",
        name="Bare Ground",
        description="Tiles only",
        height_distribution={1: 0.5, 2: 0.3, 5: 0.2},
        asset_categories={},
    )


@pytest.fixture
def carpet_preset():
    """Preset whose single category always fires and covers every hex."""
    return TerrainPreset(
        id="carpet",
        name="Carpet",
        description="Every hex gets a scatter prop",
        height_distribution={1: 1.0, 2: 0.0, 5: 0.0},
        asset_categories={
            "Scatter": AssetCategoryConfig(probability=1.0, density=0.2, clustering=1.0),
        },
    )
