"""Per-hex tile stacks."""

import logging
import threading
import uuid
from collections.abc import Iterator
from dataclasses import replace

from hex_terrain.hexgrid import Hex, coords_to_key, key_to_coords
from hex_terrain.models import TileHeight, TileType
from hex_terrain.stores.types import Tile

logger = logging.getLogger(__name__)

VALID_TILE_HEIGHTS = frozenset(int(h) for h in TileHeight)


class TileStackStore:
    """Owns every tile, grouped into bottom-to-top stacks keyed by ``"q,r"``.

    An empty stack is never stored: the key is created by the first tile and
    deleted with the last one. Within a stack, ``stack_level`` values are always
    ``0..N-1`` in stack order. All reads return copies.
    """

    def __init__(self) -> None:
        self._stacks: dict[str, list[Tile]] = {}
        self.lock = threading.RLock()

    def __len__(self) -> int:
        return len(self._stacks)

    def __contains__(self, key: object) -> bool:
        return key in self._stacks

    def has_stack(self, q: int, r: int) -> bool:
        return coords_to_key(q, r) in self._stacks

    def add_tile(self, q: int, r: int, height: int, tile_type: str = TileType.GROUND) -> Tile | None:
        """Append a tile on top of the stack at ``(q, r)``.

        Returns the new tile, or None if ``height`` or ``tile_type`` is not a
        recognised value.
        """
        if height not in VALID_TILE_HEIGHTS:
            logger.debug("Ignoring tile with unsupported height %r at (%d, %d)", height, q, r)
            return None
        try:
            kind = TileType(tile_type)
        except ValueError:
            logger.debug("Ignoring tile with unknown type %r at (%d, %d)", tile_type, q, r)
            return None

        with self.lock:
            stack = self._stacks.setdefault(coords_to_key(q, r), [])
            tile = Tile(
                id=str(uuid.uuid4()),
                q=q,
                r=r,
                height=int(height),
                type=kind,
                stack_level=len(stack),
            )
            stack.append(tile)
            return replace(tile)

    def remove_tile(self, tile_id: str, q: int, r: int) -> bool:
        """Remove one tile by id and compact the stack. Unknown ids are ignored."""
        with self.lock:
            key = coords_to_key(q, r)
            stack = self._stacks.get(key)
            if not stack:
                return False

            remaining = [t for t in stack if t.id != tile_id]
            if len(remaining) == len(stack):
                logger.debug("Tile %s not found at %s", tile_id, key)
                return False

            if remaining:
                _renumber(remaining)
                self._stacks[key] = remaining
            else:
                del self._stacks[key]
            return True

    def clear_at(self, q: int, r: int) -> list[Tile]:
        """Drop the whole stack at ``(q, r)`` and return the removed tiles.

        Assets on the hex are left alone; use ``stores.remove_all_at`` to
        clear both.
        """
        with self.lock:
            return self._stacks.pop(coords_to_key(q, r), [])

    def set_stack(self, q: int, r: int, tiles: list[Tile]) -> None:
        """Replace the stack at ``(q, r)`` with copies of ``tiles``, renumbered."""
        with self.lock:
            key = coords_to_key(q, r)
            if not tiles:
                self._stacks.pop(key, None)
                return
            stack = [replace(t, q=q, r=r) for t in tiles]
            _renumber(stack)
            self._stacks[key] = stack

    def get_tiles_at(self, q: int, r: int) -> list[Tile]:
        with self.lock:
            return [replace(t) for t in self._stacks.get(coords_to_key(q, r), [])]

    def get_total_height_at(self, q: int, r: int) -> int:
        """Sum of tile heights in the stack; 0 for an empty hex."""
        with self.lock:
            return sum(t.height for t in self._stacks.get(coords_to_key(q, r), []))

    def occupied_hexes(self) -> list[Hex]:
        with self.lock:
            return [key_to_coords(key) for key in self._stacks]

    def tile_count(self) -> int:
        with self.lock:
            return sum(len(stack) for stack in self._stacks.values())

    def iter_tiles(self) -> Iterator[Tile]:
        """Iterate over a snapshot of every tile, stack by stack, bottom first."""
        for stack in self.snapshot().values():
            yield from stack

    def snapshot(self) -> dict[str, list[Tile]]:
        with self.lock:
            return {key: [replace(t) for t in stack] for key, stack in self._stacks.items()}

    def restore(self, stacks: dict[str, list[Tile]]) -> None:
        with self.lock:
            self._stacks = {
                key: [replace(t) for t in stack] for key, stack in stacks.items() if stack
            }

    def clear(self) -> None:
        with self.lock:
            self._stacks.clear()


def _renumber(stack: list[Tile]) -> None:
    for level, tile in enumerate(stack):
        tile.stack_level = level
