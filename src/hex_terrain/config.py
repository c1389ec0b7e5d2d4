"""Terrain builder configuration."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables (prefixed ``HEX_TERRAIN_``)."""

    model_config = SettingsConfigDict(
        env_prefix="HEX_TERRAIN_",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # Logging
    log_level: str = "info"

    # Hex geometry: 1 world unit = 1 cm on the physical table
    hex_flat_to_flat_cm: float = 5.0
    height_unit: float = 0.5  # world units per height unit

    # Default table surface in world units
    table_width: float = 20.0
    table_height: float = 16.0

    # Terrain generation
    default_preset: str = "forest"
    default_generation_radius: int = 8
    max_generation_radius: int = 15

    # Noise parameters for the height field
    noise_octaves: int = 4
    noise_base_frequency: float = 0.05
    noise_persistence: float = 0.5
    noise_lacunarity: float = 2.0

    # Editor undo depth
    history_limit: int = 20


settings = Settings()
