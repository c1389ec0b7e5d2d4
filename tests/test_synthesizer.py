"""Tests for terrain synthesis from height fields and presets."""

import math
import random

import pytest
from hex_terrain.catalog import get_asset_by_id
from hex_terrain.hexgrid import Hex, hex_distance, key_to_coords
from hex_terrain.stores import AssetStore, TileStackStore
from hex_terrain.terrain import (
    AssetCategoryConfig,
    NoiseHeightField,
    TerrainPreset,
    TerrainSynthesizer,
    get_preset,
    merge_generated,
)
from hex_terrain.terrain.synthesizer import _HexSample


class SequenceRandom(random.Random):
    """Random source that replays fixed values from ``random()`` and ``choice()``."""

    def __init__(self, values, picks=()):
        super().__init__(0)
        self._values = iter(values)
        self._picks = iter(picks)

    def random(self):
        return next(self._values)

    def choice(self, seq):
        return next(self._picks)


def _synth(rng: random.Random, seed: int = 5) -> TerrainSynthesizer:
    return TerrainSynthesizer(NoiseHeightField(seed), rng)


class TestTileHeightSelection:
    """Tests for cumulative height selection."""

    @pytest.fixture
    def preset(self):
        return TerrainPreset(
            id="t",
            name="t",
            description="",
            height_distribution={1: 0.3, 2: 0.3, 5: 0.4},
        )

    @pytest.mark.parametrize(
        ("u", "expected"),
        [(0.0, 5), (0.39, 5), (0.4, 2), (0.69, 2), (0.7, 1), (0.99, 1)],
    )
    def test_cumulative_selection(self, preset, u, expected):
        synth = _synth(SequenceRandom([u]))
        assert synth.pick_tile_height(preset) == expected

    def test_missing_entries_default_to_low(self):
        preset = TerrainPreset(id="t", name="t", description="", height_distribution={})
        synth = _synth(random.Random(0))
        assert {synth.pick_tile_height(preset) for _ in range(50)} == {1}


class TestTileGeneration:
    """Tests for turning heights into stacks."""

    def test_stack_depth_from_height(self, bare_preset):
        heights = {Hex(0, 0): 0.0, Hex(1, 0): 0.5, Hex(2, 0): 0.99, Hex(3, 0): 1.0}
        synth = _synth(random.Random(0))

        stacks = synth.generate_tiles(heights, bare_preset)

        assert [len(stacks[k]) for k in ("0,0", "1,0", "2,0", "3,0")] == [1, 2, 3, 4]

    def test_stack_uniform_and_ordered(self, bare_preset):
        heights = {Hex(q, 0): 0.9 for q in range(10)}
        stacks = _synth(random.Random(3)).generate_tiles(heights, bare_preset)

        for key, stack in stacks.items():
            q, r = key_to_coords(key)
            assert len({t.height for t in stack}) == 1
            assert [t.stack_level for t in stack] == list(range(len(stack)))
            assert all((t.q, t.r) == (q, r) for t in stack)


class TestAssetGeneration:
    """Tests for clustered asset scatter."""

    def test_skipped_category(self, bare_preset):
        preset = TerrainPreset(
            id="none",
            name="none",
            description="",
            height_distribution={1: 1.0},
            asset_categories={"Trees": AssetCategoryConfig(0.0, 1.0, 1.0)},
        )
        result = _synth(random.Random(1)).generate(0, 0, 4, preset)
        assert result.assets == []

    def test_full_clustering_covers_every_hex(self, carpet_preset):
        result = _synth(random.Random(1)).generate(0, 0, 3, carpet_preset)

        assert {(a.q, a.r) for a in result.assets} == set(result.heights)
        assert all(get_asset_by_id(a.type).category == "Scatter" for a in result.assets)

    def test_no_clusters_when_density_rounds_to_zero(self):
        preset = TerrainPreset(
            id="sparse",
            name="sparse",
            description="",
            height_distribution={1: 1.0},
            asset_categories={"Rocks": AssetCategoryConfig(1.0, 0.001, 1.0)},
        )
        result = _synth(random.Random(1)).generate(0, 0, 3, preset)
        assert result.assets == []

    def test_one_asset_per_hex(self):
        preset = TerrainPreset(
            id="busy",
            name="busy",
            description="",
            height_distribution={1: 1.0},
            asset_categories={
                "Trees": AssetCategoryConfig(1.0, 0.5, 1.0),
                "Rocks": AssetCategoryConfig(1.0, 0.5, 1.0),
            },
        )
        result = _synth(random.Random(2)).generate(0, 0, 4, preset)

        hexes = [(a.q, a.r) for a in result.assets]
        assert len(hexes) == len(set(hexes))
        # Trees run first and claim every hex
        assert all(a.type.startswith("tree_") for a in result.assets)

    def test_existing_assets_win(self, carpet_preset):
        existing = AssetStore()
        existing.add(0, 0, "house_cottage")
        existing.add(1, -1, "house_cottage")

        result = _synth(random.Random(4)).generate(0, 0, 3, carpet_preset, existing)

        placed = {(a.q, a.r) for a in result.assets}
        assert (0, 0) not in placed
        assert (1, -1) not in placed
        assert len(placed) == len(result.heights) - 2

    def test_random_transform_ranges(self, carpet_preset):
        result = _synth(random.Random(8)).generate(0, 0, 4, carpet_preset)
        for asset in result.assets:
            assert 0.0 <= asset.rotation_y < 2 * math.pi
            assert 0.8 <= asset.scale <= 1.2
            assert asset.stack_level == 0


class TestClusterSelection:
    """Tests for distance-based cluster membership."""

    @staticmethod
    def _samples(*coords):
        return [_HexSample(q, r, 1) for q, r in coords]

    @pytest.mark.parametrize("u", [0.0, 0.5, 0.999])
    def test_no_clustering_ignores_far_hexes(self, u):
        samples = self._samples((0, 0), (2, 0), (5, 0), (0, 6))
        center = samples[0]
        synth = _synth(SequenceRandom([u] * 4, picks=[center]))

        selected = synth._cluster(samples, AssetCategoryConfig(1.0, 0.25, 0.0))

        coords = {(s.q, s.r) for s in selected}
        assert (0, 0) in coords
        assert (5, 0) not in coords
        assert (0, 6) not in coords

    @pytest.mark.parametrize(("u", "included"), [(0.0, True), (0.79, True), (0.81, False)])
    def test_half_clustering_at_distance_two(self, u, included):
        samples = self._samples((0, 0), (2, -1))
        synth = _synth(SequenceRandom([0.0, u], picks=[samples[0]]))

        selected = synth._cluster(samples, AssetCategoryConfig(1.0, 0.5, 0.5))

        assert (samples[1] in selected) is included

    def test_nearest_center_sets_distance(self):
        """A hex 4 away from one center and 2 from another uses the closer one."""
        samples = self._samples((0, 0), (4, 0), (6, 0))
        synth = _synth(SequenceRandom([0.99, 0.5, 0.99], picks=[samples[0], samples[2]]))

        selected = synth._cluster(samples, AssetCategoryConfig(1.0, 0.67, 0.0))

        assert selected == samples

    def test_far_center_alone_excludes_hex(self):
        samples = self._samples((0, 0), (4, 0), (6, 0))
        synth = _synth(SequenceRandom([0.99, 0.5, 0.0], picks=[samples[0]]))

        selected = synth._cluster(samples, AssetCategoryConfig(1.0, 0.34, 0.0))

        assert selected == [samples[0]]


class TestGenerate:
    """Tests for full generation runs."""

    @pytest.mark.parametrize("center", [(0, 0), (3, -2)])
    def test_containment(self, center):
        cq, cr = center
        result = TerrainSynthesizer.from_seed(17).generate(cq, cr, 5, get_preset("forest"))

        for key in result.stacks:
            q, r = key_to_coords(key)
            assert hex_distance(q, r, cq, cr) <= 5
        for asset in result.assets:
            assert hex_distance(asset.q, asset.r, cq, cr) <= 5

    def test_same_seed_same_terrain(self):
        preset = get_preset("mountain")
        a = TerrainSynthesizer.from_seed(99).generate(0, 0, 5, preset)
        b = TerrainSynthesizer.from_seed(99).generate(0, 0, 5, preset)

        assert a.heights == b.heights
        assert {k: [t.height for t in s] for k, s in a.stacks.items()} == {
            k: [t.height for t in s] for k, s in b.stacks.items()
        }
        assert [(x.q, x.r, x.type, x.scale) for x in a.assets] == [
            (x.q, x.r, x.type, x.scale) for x in b.assets
        ]

    def test_result_metadata(self, bare_preset):
        result = TerrainSynthesizer.from_seed(5).generate(1, 2, 3, bare_preset)
        assert result.seed == 5
        assert result.center == Hex(1, 2)
        assert result.radius == 3
        assert len(result.stacks) == 37
        assert result.tile_count == sum(len(s) for s in result.stacks.values())


class TestMerge:
    """Tests for committing generated terrain into the stores."""

    def test_replaces_stacks_and_adds_assets(self, carpet_preset):
        tiles = TileStackStore()
        assets = AssetStore()
        for _ in range(6):
            tiles.add_tile(0, 0, 5)
        tiles.add_tile(20, 20, 2)
        outside = assets.add(20, 20, "rock_small")

        result = TerrainSynthesizer.from_seed(3).generate(0, 0, 2, carpet_preset, assets)
        merge_generated(result, tiles, assets)

        assert len(tiles.get_tiles_at(0, 0)) == len(result.stacks["0,0"])
        assert tiles.get_total_height_at(20, 20) == 2
        assert outside.id in assets
        assert len(assets) == len(result.assets) + 1
        for key, stack in result.stacks.items():
            q, r = key_to_coords(key)
            assert [t.stack_level for t in tiles.get_tiles_at(q, r)] == list(range(len(stack)))
