"""
Module for working with Minecraft game data.

Provides the loaders reading raw family tables, the index builder, the
immutable indexed store and the service tying them together.
"""

from .service import MinecraftDataService, SchemaMapping, default_data_path
from .store import IndexedDataStore
from .indexer import IndexBuilder, build_index, freeze
from .cache import StoreCache
from .loaders import (
    GameDataFileLoader,
    JsonDataProvider,
    InMemoryDataProvider,
    RawDataProvider,
)
from .models import (
    ALL_FAMILIES,
    Biome,
    Block,
    BlockDrop,
    BlockLoot,
    BlockState,
    Effect,
    Enchantment,
    Entity,
    EntityLoot,
    Food,
    Instrument,
    Item,
    LootDrop,
    Particle,
    Recipe,
    RecipeItem,
    ShapedRecipe,
    ShapelessRecipe,
    Variation,
    Window,
    WindowOpener,
    WindowSlot,
)

# Public exports
__all__ = [
    # Main service
    "MinecraftDataService",
    "IndexedDataStore",
    "default_data_path",
    # Records
    "Biome",
    "Block",
    "BlockDrop",
    "BlockLoot",
    "BlockState",
    "Effect",
    "Enchantment",
    "Entity",
    "EntityLoot",
    "Food",
    "Instrument",
    "Item",
    "LootDrop",
    "Particle",
    "Recipe",
    "RecipeItem",
    "ShapedRecipe",
    "ShapelessRecipe",
    "Variation",
    "Window",
    "WindowOpener",
    "WindowSlot",
    # Constants
    "ALL_FAMILIES",
    # Component classes (for advanced usage)
    "IndexBuilder",
    "StoreCache",
    "SchemaMapping",
    "GameDataFileLoader",
    "JsonDataProvider",
    "InMemoryDataProvider",
    "RawDataProvider",
    "build_index",
    "freeze",
]
