"""Enumerations shared across the terrain builder."""

from enum import IntEnum, StrEnum


class TileHeight(IntEnum):
    """Physical tile heights, in height units (cm)."""

    LOW = 1
    MEDIUM = 2
    TALL = 5


class TileType(StrEnum):
    """Surface material of a tile."""

    GROUND = "ground"
    WATER = "water"
    MUD = "mud"


class ToolMode(StrEnum):
    """Editor tool the next hex click applies."""

    TILE = "tile"
    ASSET = "asset"
    SELECT = "select"
    DELETE = "delete"


class TerrainType(StrEnum):
    """Terrain classification produced by analysis."""

    FLAT = "flat"
    HILLY = "hilly"
    MOUNTAINOUS = "mountainous"
    MIXED = "mixed"


class AssetCategory(StrEnum):
    """Asset catalog categories."""

    TREES = "Trees"
    ROCKS = "Rocks"
    BUILDINGS = "Buildings"
    SCATTER = "Scatter"
