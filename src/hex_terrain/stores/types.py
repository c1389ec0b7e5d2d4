"""Record types owned by the tile and asset stores."""

from dataclasses import dataclass

from hex_terrain.models import TileType


@dataclass
class Tile:
    """One physical tile in a hex's stack.

    ``stack_level`` is the zero-based position in the stack, bottom first.
    """

    id: str
    q: int
    r: int
    height: int  # 1, 2 or 5
    type: TileType = TileType.GROUND
    stack_level: int = 0


@dataclass
class PlacedAsset:
    """A decorative asset anchored to a hex.

    ``stack_level`` orders co-located assets; it never affects vertical placement.
    """

    id: str
    q: int
    r: int
    type: str  # catalog id or "imported-" id
    rotation_y: float = 0.0  # radians, unbounded
    scale: float = 1.0
    stack_level: int = 0
