"""Hexagonal tabletop terrain builder: hex model, tile stacks and procedural terrain."""

from hex_terrain.editor import MapEditor
from hex_terrain.hexgrid import Hex, axial_to_world, coords_to_key, world_to_axial
from hex_terrain.models import TerrainType, TileType, ToolMode

__version__ = "0.1.0"
__all__ = [
    "Hex",
    "MapEditor",
    "TerrainType",
    "TileType",
    "ToolMode",
    "axial_to_world",
    "coords_to_key",
    "world_to_axial",
]
