"""Noise utilities for terrain generation using OpenSimplex."""

import math

import numpy as np
from opensimplex import OpenSimplex

from hex_terrain.config import settings
from hex_terrain.hexgrid import Hex, hex_distance, hexes_in_range

SQRT3 = math.sqrt(3)


class SeededNoise:
    """Deterministic noise generator with a fixed seed."""

    def __init__(self, seed: int) -> None:
        self.seed = seed
        self._simplex = OpenSimplex(seed=seed)

    def sample_2d(self, x: float, y: float) -> float:
        """Sample 2D noise at the given coordinates. Returns value in [-1, 1]."""
        return self._simplex.noise2(x, y)

    def octave_noise_2d(
        self,
        x: float,
        y: float,
        octaves: int = 4,
        persistence: float = 0.5,
        lacunarity: float = 2.0,
        scale: float = 0.05,
    ) -> float:
        """Generate fractal Brownian motion (fBm) noise.

        Args:
            x, y: Sample coordinates
            octaves: Number of noise layers to combine
            persistence: Amplitude multiplier per octave (typically 0.5)
            lacunarity: Frequency multiplier per octave (typically 2.0)
            scale: Base frequency of the first octave

        Returns:
            Noise value in [-1, 1]
        """
        total = 0.0
        amplitude = 1.0
        frequency = scale
        max_amplitude = 0.0

        for _ in range(octaves):
            total += amplitude * self.sample_2d(x * frequency, y * frequency)
            max_amplitude += amplitude
            amplitude *= persistence
            frequency *= lacunarity

        return total / max_amplitude


def hex_to_noise_space(q: int, r: int) -> tuple[float, float]:
    """Project an axial hex onto the noise sampling plane.

    Independent of the render transform so terrain frequency does not change
    with hex size. Odd columns are shifted half a row.
    """
    x = q * 1.5
    z = r * SQRT3 + (q % 2) * SQRT3 / 2
    return (x, z)


class NoiseHeightField:
    """Seed-reproducible per-hex heights in [0, 1] over a hex disk.

    Heights fade to zero toward the edge of the generated radius so generated
    terrain never ends in an abrupt wall.
    """

    def __init__(
        self,
        seed: int,
        octaves: int | None = None,
        base_frequency: float | None = None,
        persistence: float | None = None,
        lacunarity: float | None = None,
    ) -> None:
        self.noise = SeededNoise(seed)
        self.octaves = octaves if octaves is not None else settings.noise_octaves
        self.base_frequency = (
            base_frequency if base_frequency is not None else settings.noise_base_frequency
        )
        self.persistence = persistence if persistence is not None else settings.noise_persistence
        self.lacunarity = lacunarity if lacunarity is not None else settings.noise_lacunarity

    @property
    def seed(self) -> int:
        return self.noise.seed

    def sample(self, q: int, r: int) -> float:
        """Unattenuated height at a hex, normalized from [-1, 1] to [0, 1]."""
        x, z = hex_to_noise_space(q, r)
        value = self.noise.octave_noise_2d(
            x,
            z,
            octaves=self.octaves,
            persistence=self.persistence,
            lacunarity=self.lacunarity,
            scale=self.base_frequency,
        )
        return (value + 1.0) / 2.0

    def generate(self, center_q: int, center_r: int, radius: int) -> dict[Hex, float]:
        """Heights for every hex within ``radius`` of the center, with radial falloff."""
        hexes = hexes_in_range(center_q, center_r, radius)
        if not hexes:
            return {}

        raw = np.array([self.sample(h.q, h.r) for h in hexes], dtype=np.float64)
        distances = np.array(
            [hex_distance(h.q, h.r, center_q, center_r) for h in hexes], dtype=np.float64
        )

        if radius > 0:
            falloff = np.maximum(0.0, 1.0 - distances / radius)
        else:
            falloff = np.ones_like(distances)

        heights = np.clip(raw * falloff, 0.0, 1.0)
        return {h: float(v) for h, v in zip(hexes, heights)}
