"""Command-line entry point: generate a table from the configured preset and report on it."""

import logging
import sys

from hex_terrain.config import settings
from hex_terrain.editor import MapEditor


def setup_logging() -> None:
    """Configure logging for the terrain builder."""
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
    )


def main(seed: int | None = None) -> MapEditor:
    """Generate one table and log its analysis and bill of materials."""
    setup_logging()
    logger = logging.getLogger(__name__)
    logger.info("Hex terrain builder starting (preset %r)...", settings.default_preset)

    editor = MapEditor()
    width, height = editor.table_size
    logger.info(
        "Project %r: %g x %g table, %d hexes",
        editor.project_name, width, height, len(editor.table_hexes()),
    )
    result = editor.generate_terrain(radius=settings.default_generation_radius, seed=seed)
    if result is None:
        logger.error("Generation produced no terrain")
        return editor

    analysis = editor.analyze_terrain(radius=settings.default_generation_radius)
    logger.info(
        "Terrain: %s (variance %.2f, connectivity %.2f, asset density %.2f)",
        analysis.terrain_type.value,
        analysis.height_variance,
        analysis.connectivity,
        analysis.asset_density,
    )
    for action in analysis.recommended_actions:
        logger.info("Recommendation: %s", action)

    stats = editor.stats()
    logger.info(
        "Table uses %d tiles in %d stacks and %d assets, estimated cost %.2f",
        stats.tile_count, stats.stack_count, stats.asset_count, stats.estimated_cost,
    )
    return editor


def run() -> None:
    """Entry point for the terrain builder."""
    main()


if __name__ == "__main__":
    run()
