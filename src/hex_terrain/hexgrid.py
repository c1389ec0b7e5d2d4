"""Axial hex coordinate utilities.

Pointy-top hexes addressed by axial ``(q, r)``: rows of constant ``r`` run
along world ``x`` and each hex has a vertex pointing along ``z``. The cube
third coordinate is ``s = -q - r``. Neighbor numbering (clockwise from East):
    Edge 0: E   (+1,  0)
    Edge 1: NE  (+1, -1)
    Edge 2: NW  ( 0, -1)
    Edge 3: W   (-1,  0)
    Edge 4: SW  (-1, +1)
    Edge 5: SE  ( 0, +1)
"""

import math
from typing import NamedTuple

from hex_terrain.config import settings

SQRT3 = math.sqrt(3)

# Center-to-vertex radius chosen so the flat-to-flat width matches the table tiles
HEX_SIZE: float = settings.hex_flat_to_flat_cm / SQRT3
HEX_FLAT_TO_FLAT: float = HEX_SIZE * SQRT3
HEX_POINT_TO_POINT: float = HEX_SIZE * 2


class Hex(NamedTuple):
    """Integer axial coordinate."""

    q: int
    r: int

    @property
    def s(self) -> int:
        return -self.q - self.r


# Neighbor offsets indexed by edge number (clockwise from E)
HEX_DIRECTIONS: list[Hex] = [
    Hex(+1, 0),  # Edge 0: E
    Hex(+1, -1),  # Edge 1: NE
    Hex(0, -1),  # Edge 2: NW
    Hex(-1, 0),  # Edge 3: W
    Hex(-1, +1),  # Edge 4: SW
    Hex(0, +1),  # Edge 5: SE
]


def coords_to_key(q: int, r: int) -> str:
    """Convert coordinates to string key for dict lookups."""
    return f"{q},{r}"


def key_to_coords(key: str) -> Hex:
    """Convert string key back to coordinates."""
    q, r = key.split(",")
    return Hex(int(q), int(r))


def axial_to_world(
    q: int, r: int, height_units: float = 0.0, size: float = HEX_SIZE
) -> tuple[float, float, float]:
    """Convert an axial coordinate to the world-space center ``(x, y, z)``.

    ``y`` is the vertical offset of a surface ``height_units`` above the table.
    """
    x = size * (SQRT3 * q + SQRT3 / 2 * r)
    z = size * (3 / 2 * r)
    y = height_units * settings.height_unit
    return (x, y, z)


def cube_round(frac_q: float, frac_r: float, frac_s: float) -> tuple[int, int, int]:
    """Round fractional cube coordinates to the nearest valid hex.

    The component with the largest rounding error is rebuilt from the other
    two so the result always satisfies ``q + r + s == 0``. Inputs must be
    finite.
    """
    q = round(frac_q)
    r = round(frac_r)
    s = round(frac_s)

    q_diff = abs(q - frac_q)
    r_diff = abs(r - frac_r)
    s_diff = abs(s - frac_s)

    if q_diff > r_diff and q_diff > s_diff:
        q = -r - s
    elif r_diff > s_diff:
        r = -q - s
    else:
        s = -q - r

    return (q, r, s)


def hex_round(frac_q: float, frac_r: float) -> Hex:
    """Snap a fractional axial coordinate to the nearest hex."""
    q, r, _ = cube_round(frac_q, frac_r, -frac_q - frac_r)
    return Hex(q, r)


def world_to_axial(x: float, z: float, size: float = HEX_SIZE) -> Hex | None:
    """Convert a world-space point on the table plane to the hex containing it.

    Returns None when either coordinate is NaN or infinite.
    """
    if not (math.isfinite(x) and math.isfinite(z)):
        return None
    frac_q = (SQRT3 / 3 * x - 1 / 3 * z) / size
    frac_r = (2 / 3 * z) / size
    return hex_round(frac_q, frac_r)


def hex_neighbors(q: int, r: int) -> list[Hex]:
    """Get the 6 neighbors in edge order."""
    return [Hex(q + d.q, r + d.r) for d in HEX_DIRECTIONS]


def hex_distance(q1: int, r1: int, q2: int, r2: int) -> int:
    """Calculate hex distance between two coordinates."""
    return (abs(q1 - q2) + abs(q1 + r1 - q2 - r2) + abs(r1 - r2)) // 2


def hexes_in_range(center_q: int, center_r: int, radius: int) -> list[Hex]:
    """All hexes within ``radius`` steps of the center, center included."""
    if radius < 0:
        return []
    result = []
    for dq in range(-radius, radius + 1):
        for dr in range(max(-radius, -dq - radius), min(radius, -dq + radius) + 1):
            result.append(Hex(center_q + dq, center_r + dr))
    return result


def hex_corners(q: int, r: int, size: float = HEX_SIZE) -> list[tuple[float, float]]:
    """The 6 corner points ``(x, z)`` of a pointy-top hex.

    Corners sit at -30, 30, 90, 150, 210 and 270 degrees from the center.
    """
    center_x, _, center_z = axial_to_world(q, r, 0, size=size)
    corners = []
    for i in range(6):
        angle = math.pi / 3 * i - math.pi / 6
        corners.append((center_x + size * math.cos(angle), center_z + size * math.sin(angle)))
    return corners


def is_hex_in_bounds(q: int, r: int, width: float, height: float, size: float = HEX_SIZE) -> bool:
    """Check whether a hex center lies on a ``width`` x ``height`` table centered at the origin."""
    x, _, z = axial_to_world(q, r, 0, size=size)
    return abs(x) <= width / 2 and abs(z) <= height / 2


def hex_grid_for_table(width: float, height: float, size: float = HEX_SIZE) -> list[Hex]:
    """Enumerate every hex whose center falls on the table surface."""
    max_q = math.ceil(width / (size * SQRT3))
    max_r = math.ceil(height / (size * 1.5))

    hexes = []
    for r in range(-max_r, max_r + 1):
        for q in range(-max_q - max_r, max_q + max_r + 1):
            if is_hex_in_bounds(q, r, width, height, size=size):
                hexes.append(Hex(q, r))
    return hexes
