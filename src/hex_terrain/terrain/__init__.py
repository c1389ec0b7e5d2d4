"""Procedural terrain generation, analysis and placement advice."""

from hex_terrain.terrain.advisor import PlacementAdvisor
from hex_terrain.terrain.analyzer import TerrainAnalyzer
from hex_terrain.terrain.noise import NoiseHeightField, SeededNoise
from hex_terrain.terrain.presets import TERRAIN_PRESETS, get_preset
from hex_terrain.terrain.synthesizer import TerrainSynthesizer, merge_generated
from hex_terrain.terrain.types import (
    AssetCategoryConfig,
    GeneratedTerrain,
    PlacementSuggestion,
    TerrainAnalysis,
    TerrainPreset,
)

__all__ = [
    "AssetCategoryConfig",
    "GeneratedTerrain",
    "NoiseHeightField",
    "PlacementAdvisor",
    "PlacementSuggestion",
    "SeededNoise",
    "TERRAIN_PRESETS",
    "TerrainAnalysis",
    "TerrainAnalyzer",
    "TerrainPreset",
    "TerrainSynthesizer",
    "get_preset",
    "merge_generated",
]
