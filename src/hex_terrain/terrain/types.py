"""Type definitions for terrain generation and analysis."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from hex_terrain.hexgrid import Hex
from hex_terrain.models import TerrainType
from hex_terrain.stores.types import PlacedAsset, Tile


@dataclass(frozen=True)
class AssetCategoryConfig:
    """How one asset category is scattered by a preset."""

    # Chance the category appears at all in a generation run
    probability: float
    # Cluster centers per generated hex
    density: float
    # 0 = sparse, distance-sensitive scatter; 1 = every hex joins its cluster
    clustering: float


@dataclass(frozen=True)
class TerrainPreset:
    """Named, immutable bundle of generation parameters."""

    id: str
    name: str
    description: str
    # Tile height -> probability; the three values sum to at most 1
    height_distribution: Mapping[int, float]
    asset_categories: Mapping[str, AssetCategoryConfig] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Read-only copies; presets are shared between editors
        object.__setattr__(
            self, "height_distribution", MappingProxyType(dict(self.height_distribution))
        )
        object.__setattr__(
            self, "asset_categories", MappingProxyType(dict(self.asset_categories))
        )


@dataclass
class GeneratedTerrain:
    """Output of one synthesis run, not yet merged into the stores."""

    seed: int
    center: Hex
    radius: int
    heights: dict[Hex, float]
    stacks: dict[str, list[Tile]]
    assets: list[PlacedAsset]

    @property
    def tile_count(self) -> int:
        return sum(len(stack) for stack in self.stacks.values())


@dataclass
class TerrainAnalysis:
    """Aggregate statistics over a region of the map."""

    terrain_type: TerrainType
    asset_density: float
    height_variance: float
    connectivity: float
    recommended_actions: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "terrain_type": self.terrain_type.value,
            "asset_density": self.asset_density,
            "height_variance": self.height_variance,
            "connectivity": self.connectivity,
            "recommended_actions": list(self.recommended_actions),
        }


@dataclass(frozen=True)
class PlacementSuggestion:
    """A single-hex asset recommendation."""

    q: int
    r: int
    asset_type: str
    confidence: float  # [0, 1]
    reason: str
