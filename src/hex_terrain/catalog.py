"""Asset catalog: every placeable decorative asset and its list price."""

from dataclasses import dataclass

from hex_terrain.models import AssetCategory

IMPORTED_PREFIX = "imported-"


@dataclass(frozen=True)
class AssetDefinition:
    """A placeable catalog asset."""

    id: str
    name: str
    category: AssetCategory
    scale: float
    price: float


ASSET_CATALOG: tuple[AssetDefinition, ...] = (
    # Trees
    AssetDefinition("tree_pine", "Pine Tree", AssetCategory.TREES, 1.0, 2.99),
    AssetDefinition("tree_oak", "Oak Tree", AssetCategory.TREES, 1.2, 3.49),
    AssetDefinition("tree_birch", "Birch Tree", AssetCategory.TREES, 0.9, 2.99),
    AssetDefinition("tree_maple", "Maple Tree", AssetCategory.TREES, 1.1, 3.49),
    AssetDefinition("tree_dead", "Dead Tree", AssetCategory.TREES, 1.0, 2.49),
    AssetDefinition("tree_palm", "Palm Tree", AssetCategory.TREES, 1.3, 3.99),
    AssetDefinition("tree_willow", "Willow Tree", AssetCategory.TREES, 1.4, 3.99),
    # Rocks
    AssetDefinition("rock_small", "Small Pebble", AssetCategory.ROCKS, 0.5, 1.99),
    AssetDefinition("rock_medium", "Medium Rock", AssetCategory.ROCKS, 0.8, 2.99),
    AssetDefinition("rock_large", "Large Boulder", AssetCategory.ROCKS, 1.2, 4.99),
    AssetDefinition("rock_cliff", "Cliff Face", AssetCategory.ROCKS, 1.5, 6.99),
    AssetDefinition("rock_mossy", "Mossy Rock", AssetCategory.ROCKS, 0.9, 3.49),
    # Buildings
    AssetDefinition("house_cottage", "Cottage", AssetCategory.BUILDINGS, 1.0, 14.99),
    AssetDefinition("tower_watch", "Watch Tower", AssetCategory.BUILDINGS, 1.2, 19.99),
    AssetDefinition("ruin_stone", "Stone Ruin", AssetCategory.BUILDINGS, 1.0, 12.99),
    AssetDefinition("bridge_wood", "Wooden Bridge", AssetCategory.BUILDINGS, 1.0, 9.99),
    # Scatter props
    AssetDefinition("scatter_grass", "Grass Tuft", AssetCategory.SCATTER, 0.3, 0.99),
    AssetDefinition("scatter_flowers", "Wildflowers", AssetCategory.SCATTER, 0.4, 1.49),
    AssetDefinition("scatter_mushroom", "Mushrooms", AssetCategory.SCATTER, 0.3, 1.29),
    AssetDefinition("scatter_log", "Dead Log", AssetCategory.SCATTER, 0.6, 1.99),
    AssetDefinition("scatter_fern", "Fern", AssetCategory.SCATTER, 0.5, 1.49),
    AssetDefinition("scatter_vine", "Hanging Vine", AssetCategory.SCATTER, 0.4, 1.49),
)

_CATALOG_BY_ID: dict[str, AssetDefinition] = {a.id: a for a in ASSET_CATALOG}

# Retail price of one tile, by height
TILE_PRICES: dict[int, float] = {1: 4.99, 2: 9.99, 5: 19.99}


def get_asset_by_id(asset_id: str) -> AssetDefinition | None:
    return _CATALOG_BY_ID.get(asset_id)


def get_assets_by_category(category: str) -> list[AssetDefinition]:
    return [a for a in ASSET_CATALOG if a.category == category]


def is_imported_asset_type(asset_type: str) -> bool:
    return asset_type.startswith(IMPORTED_PREFIX)


def is_known_asset_type(asset_type: str) -> bool:
    """An asset type is placeable if it is in the catalog or was imported."""
    return asset_type in _CATALOG_BY_ID or is_imported_asset_type(asset_type)
