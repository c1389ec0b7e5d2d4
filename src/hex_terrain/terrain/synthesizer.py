"""Turns a noise height field and a preset into tile stacks and clustered assets."""

import logging
import math
import random
import time
import uuid
from dataclasses import dataclass

from hex_terrain.catalog import AssetDefinition, get_assets_by_category
from hex_terrain.hexgrid import Hex, coords_to_key, hex_distance
from hex_terrain.models import TileType
from hex_terrain.stores.assets import AssetStore
from hex_terrain.stores.tiles import TileStackStore
from hex_terrain.stores.types import PlacedAsset, Tile
from hex_terrain.terrain.noise import NoiseHeightField
from hex_terrain.terrain.types import AssetCategoryConfig, GeneratedTerrain, TerrainPreset

logger = logging.getLogger(__name__)

# Stacks are 1..MAX_STACK_DEPTH tiles deep, scaled by the height field
MAX_STACK_DEPTH = 3

# Distance (in hexes) at which an unclustered hex stops joining its cluster
CLUSTER_FALLOFF_DISTANCE = 5

ASSET_SCALE_MIN = 0.8
ASSET_SCALE_SPREAD = 0.4


@dataclass
class _HexSample:
    q: int
    r: int
    total_height: int


class TerrainSynthesizer:
    """Generates terrain for a hex disk around a center.

    All randomness comes from the injected ``rng`` so a run is reproducible
    from its seed.
    """

    def __init__(self, height_field: NoiseHeightField, rng: random.Random) -> None:
        self.height_field = height_field
        self.rng = rng

    @classmethod
    def from_seed(cls, seed: int) -> "TerrainSynthesizer":
        return cls(NoiseHeightField(seed), random.Random(seed))

    @property
    def seed(self) -> int:
        return self.height_field.seed

    def generate(
        self,
        center_q: int,
        center_r: int,
        radius: int,
        preset: TerrainPreset,
        existing_assets: AssetStore | None = None,
    ) -> GeneratedTerrain:
        """Generate tile stacks and assets for every hex within ``radius`` of the center.

        Nothing is written to the stores; call ``merge_into`` with the result.
        Hexes already holding an asset in ``existing_assets`` receive no new asset.
        """
        logger.info(
            "Generating %r terrain at (%d, %d), radius %d, seed %d",
            preset.id, center_q, center_r, radius, self.seed,
        )
        t_start = time.perf_counter()

        heights = self.height_field.generate(center_q, center_r, radius)
        t_heights = time.perf_counter()

        stacks = self.generate_tiles(heights, preset)
        t_tiles = time.perf_counter()

        occupied = existing_assets.occupied_keys() if existing_assets is not None else set()
        assets = self.generate_assets(stacks, preset, occupied)
        t_assets = time.perf_counter()

        logger.info(
            "[Terrain] Generation complete in %.1fms "
            "(heights %.1fms, tiles %.1fms, assets %.1fms): %d stacks, %d assets",
            (t_assets - t_start) * 1000,
            (t_heights - t_start) * 1000,
            (t_tiles - t_heights) * 1000,
            (t_assets - t_tiles) * 1000,
            len(stacks),
            len(assets),
        )

        return GeneratedTerrain(
            seed=self.seed,
            center=Hex(center_q, center_r),
            radius=radius,
            heights=heights,
            stacks=stacks,
            assets=assets,
        )

    def pick_tile_height(self, preset: TerrainPreset) -> int:
        """Draw a tile height from the preset's cumulative distribution.

        Tall tiles are checked first, then medium; anything left is low.
        """
        dist = preset.height_distribution
        p5 = dist.get(5, 0.0)
        p2 = dist.get(2, 0.0)
        u = self.rng.random()
        if u < p5:
            return 5
        if u < p5 + p2:
            return 2
        return 1

    def generate_tiles(
        self, heights: dict[Hex, float], preset: TerrainPreset
    ) -> dict[str, list[Tile]]:
        """Build one uniform-height stack per hex, deeper where the field is higher."""
        stacks: dict[str, list[Tile]] = {}
        for hex_, value in heights.items():
            tile_height = self.pick_tile_height(preset)
            depth = math.floor(value * MAX_STACK_DEPTH) + 1
            stacks[coords_to_key(hex_.q, hex_.r)] = [
                Tile(
                    id=str(uuid.uuid4()),
                    q=hex_.q,
                    r=hex_.r,
                    height=tile_height,
                    type=TileType.GROUND,
                    stack_level=level,
                )
                for level in range(depth)
            ]
        return stacks

    def generate_assets(
        self,
        stacks: dict[str, list[Tile]],
        preset: TerrainPreset,
        occupied: set[tuple[int, int]] | None = None,
    ) -> list[PlacedAsset]:
        """Scatter clustered assets over the generated hexes.

        Each category is rolled once per run against its probability. A hex
        that already holds an asset keeps it; the first asset placed wins.
        """
        taken = set(occupied) if occupied else set()
        samples = [
            _HexSample(stack[0].q, stack[0].r, sum(t.height for t in stack))
            for stack in stacks.values()
            if stack
        ]

        assets: list[PlacedAsset] = []
        for category, config in preset.asset_categories.items():
            if self.rng.random() >= config.probability:
                logger.debug("Skipping asset category %s this run", category)
                continue

            choices = get_assets_by_category(category)
            if not choices:
                continue

            for sample in self._cluster(samples, config):
                definition: AssetDefinition = self.rng.choice(choices)
                if (sample.q, sample.r) in taken:
                    continue
                assets.append(
                    PlacedAsset(
                        id=str(uuid.uuid4()),
                        q=sample.q,
                        r=sample.r,
                        type=definition.id,
                        rotation_y=self.rng.random() * math.pi * 2,
                        scale=ASSET_SCALE_MIN + self.rng.random() * ASSET_SCALE_SPREAD,
                        stack_level=0,
                    )
                )
                taken.add((sample.q, sample.r))

        return assets

    def _cluster(
        self, samples: list[_HexSample], config: AssetCategoryConfig
    ) -> list[_HexSample]:
        """Select the hexes that receive an asset for one category.

        Cluster centers are drawn uniformly from the samples; each hex then
        joins with a probability that falls off with distance to its nearest
        center, flattened toward 1 by the clustering factor.
        """
        num_clusters = math.floor(len(samples) * config.density)
        if num_clusters <= 0:
            return []

        centers = [self.rng.choice(samples) for _ in range(num_clusters)]

        selected = []
        for sample in samples:
            min_distance = min(
                hex_distance(sample.q, sample.r, c.q, c.r) for c in centers
            )
            probability = config.clustering + (1 - config.clustering) * (
                1 - min_distance / CLUSTER_FALLOFF_DISTANCE
            )
            if self.rng.random() < probability:
                selected.append(sample)
        return selected


def merge_generated(
    result: GeneratedTerrain, tiles: TileStackStore, assets: AssetStore
) -> None:
    """Commit a generation result: stacks replace per hex, assets are added."""
    with tiles.lock, assets.lock:
        for stack in result.stacks.values():
            if stack:
                tiles.set_stack(stack[0].q, stack[0].r, stack)
        for asset in result.assets:
            assets.insert(asset)
