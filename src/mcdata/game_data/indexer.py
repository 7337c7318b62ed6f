"""
Index construction for game data.

Turns the raw family tables of one dataset into every derived lookup
structure exposed by IndexedDataStore: by-id and by-name maps, ordered
arrays, secondary-key maps and the recipe, loot and material indices.
"""

import logging
from types import MappingProxyType
from typing import Any, Callable, Dict, Hashable, Iterable, List, Mapping, Optional, Tuple, TypeVar, cast

from ..errors import InvalidDataError
from ..versioning.catalog import VersionCatalog
from ..versioning.models import ResolvedVersion, Version
from .loaders import RawDataProvider
from .models import (
    ALL_FAMILIES,
    ENTITY_TYPE_MOB,
    ENTITY_TYPE_OBJECT,
    FAMILY_BIOMES,
    FAMILY_BLOCK_COLLISION_SHAPES,
    FAMILY_BLOCK_LOOT,
    FAMILY_BLOCKS,
    FAMILY_COMMANDS,
    FAMILY_EFFECTS,
    FAMILY_ENCHANTMENTS,
    FAMILY_ENTITIES,
    FAMILY_ENTITY_LOOT,
    FAMILY_FOODS,
    FAMILY_INSTRUMENTS,
    FAMILY_ITEMS,
    FAMILY_LANGUAGE,
    FAMILY_MATERIALS,
    FAMILY_PARTICLES,
    FAMILY_PROTOCOL,
    FAMILY_PROTOCOL_COMMENTS,
    FAMILY_RECIPES,
    FAMILY_VERSION,
    FAMILY_WINDOWS,
    Biome,
    Block,
    BlockLoot,
    Effect,
    Enchantment,
    Entity,
    EntityLoot,
    Food,
    Instrument,
    Item,
    MaterialMap,
    Particle,
    RawRecord,
    RawTable,
    RawTables,
    Recipe,
    Window,
    parse_recipe,
)
from .store import IndexedDataStore

R = TypeVar("R")
K = TypeVar("K", bound=Hashable)


def build_index(records: Iterable[R], key: Callable[[R], Optional[K]]) -> Mapping[K, R]:
    """Index records by ``key`` in iteration order.

    Records whose key is None are skipped; on collision the later record
    wins. The result is a read-only mapping.
    """
    index: Dict[K, R] = {}
    for record in records:
        value = key(record)
        if value is not None:
            index[value] = record
    return MappingProxyType(index)


def freeze(value: Any) -> Any:
    """Recursively convert dicts/lists into read-only mappings/tuples."""
    if isinstance(value, dict):
        return MappingProxyType({k: freeze(v) for k, v in cast(Dict[Any, Any], value).items()})
    if isinstance(value, list):
        return tuple(freeze(v) for v in cast(List[Any], value))
    return value


class IndexBuilder:
    """Builds IndexedDataStore instances from raw tables.

    ``build`` pulls the tables of a resolved dataset from the provider;
    ``build_from_tables`` is the pure transformation and can be used
    directly with tables obtained elsewhere.
    """

    def __init__(self, provider: RawDataProvider, catalog: Optional[VersionCatalog] = None):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.provider = provider
        self.catalog = catalog

    def load_tables(self, resolution: ResolvedVersion) -> RawTables:
        """Load every known family listed for the resolved dataset.

        Raises:
            MissingDataError: If a listed family cannot be loaded
        """
        listed = self.provider.families(resolution.platform, resolution.data_key)
        tables: RawTables = {}
        for family in listed:
            if family not in ALL_FAMILIES:
                self.logger.debug(f"Skipping unindexed family '{family}'")
                continue
            tables[family] = self.provider.load_family(
                family, resolution.platform, resolution.data_key
            )
        return tables

    def build(self, resolution: ResolvedVersion) -> IndexedDataStore:
        """Load and index the dataset named by ``resolution``."""
        self.logger.info(f"Building indices for {resolution.qualified_key}")
        tables = self.load_tables(resolution)
        store = self.build_from_tables(tables, resolution)
        self.logger.info(
            f"Built {resolution.qualified_key}: {len(store.blocks_array)} blocks, "
            f"{len(store.items_array)} items, {len(store.entities_array)} entities, "
            f"{sum(len(r) for r in store.recipes.values())} recipes"
        )
        return store

    def build_from_tables(self, tables: RawTables, resolution: ResolvedVersion) -> IndexedDataStore:
        """Build every index from raw tables. Pure: the tables are not modified.

        Args:
            tables: Family name -> raw table; absent families give empty indices
            resolution: The dataset these tables belong to

        Returns:
            Fully built IndexedDataStore

        Raises:
            InvalidDataError: If a table has an unexpected structure
        """
        blocks = self._records(tables, FAMILY_BLOCKS, Block.from_dict)
        items = self._records(tables, FAMILY_ITEMS, Item.from_dict)
        foods = self._records(tables, FAMILY_FOODS, Food.from_dict)
        biomes = self._records(tables, FAMILY_BIOMES, Biome.from_dict)
        instruments = self._records(tables, FAMILY_INSTRUMENTS, Instrument.from_dict)
        entities = self._records(tables, FAMILY_ENTITIES, Entity.from_dict)
        enchantments = self._records(tables, FAMILY_ENCHANTMENTS, Enchantment.from_dict)
        effects = self._records(tables, FAMILY_EFFECTS, Effect.from_dict)
        windows = self._records(tables, FAMILY_WINDOWS, Window.from_dict)
        particles = self._records(tables, FAMILY_PARTICLES, Particle.from_dict)
        block_loot = self._records(tables, FAMILY_BLOCK_LOOT, BlockLoot.from_dict)
        entity_loot = self._records(tables, FAMILY_ENTITY_LOOT, EntityLoot.from_dict)

        return IndexedDataStore(
            type=resolution.platform,
            version=self._version(tables.get(FAMILY_VERSION), resolution),
            resolution=resolution,
            requested_version=resolution.requested_version,
            blocks=build_index(blocks, lambda b: b.id),
            blocks_by_name=build_index(blocks, lambda b: b.name),
            blocks_array=blocks,
            blocks_by_state_id=self._blocks_by_state_id(blocks),
            items=build_index(items, lambda i: i.id),
            items_by_name=build_index(items, lambda i: i.name),
            items_array=items,
            foods=build_index(foods, lambda f: f.id),
            foods_by_name=build_index(foods, lambda f: f.name),
            foods_array=foods,
            foods_by_food_points=build_index(foods, lambda f: f.food_points),
            foods_by_saturation=build_index(foods, lambda f: f.saturation),
            biomes=build_index(biomes, lambda b: b.id),
            biomes_by_name=build_index(biomes, lambda b: b.name),
            biomes_array=biomes,
            recipes=self._recipes(tables.get(FAMILY_RECIPES)),
            instruments=build_index(instruments, lambda i: i.id),
            instruments_by_name=build_index(instruments, lambda i: i.name),
            instruments_array=instruments,
            materials=self._materials(tables.get(FAMILY_MATERIALS)),
            entities=build_index(entities, lambda e: e.id),
            entities_by_name=build_index(entities, lambda e: e.name),
            entities_array=entities,
            entities_by_internal_id=build_index(entities, lambda e: e.internal_id),
            mobs=build_index(
                (e for e in entities if e.type == ENTITY_TYPE_MOB), lambda e: e.id
            ),
            objects=build_index(
                (e for e in entities if e.type == ENTITY_TYPE_OBJECT), lambda e: e.id
            ),
            enchantments=build_index(enchantments, lambda e: e.id),
            enchantments_by_name=build_index(enchantments, lambda e: e.name),
            enchantments_array=enchantments,
            effects=build_index(effects, lambda e: e.id),
            effects_by_name=build_index(effects, lambda e: e.name),
            effects_array=effects,
            windows=build_index(windows, lambda w: w.id),
            windows_by_name=build_index(windows, lambda w: w.name),
            windows_array=windows,
            windows_by_opener=self._windows_by_opener(windows),
            particles=build_index(particles, lambda p: p.id),
            particles_by_name=build_index(particles, lambda p: p.name),
            particles_array=particles,
            block_loot=block_loot,
            block_loot_by_name=build_index(block_loot, lambda loot: loot.block),
            entity_loot=entity_loot,
            entity_loot_by_name=build_index(entity_loot, lambda loot: loot.entity),
            language=self._language(tables.get(FAMILY_LANGUAGE)),
            protocol=freeze(tables.get(FAMILY_PROTOCOL)),
            protocol_comments=freeze(tables.get(FAMILY_PROTOCOL_COMMENTS)),
            block_collision_shapes=freeze(tables.get(FAMILY_BLOCK_COLLISION_SHAPES)),
            commands=freeze(tables.get(FAMILY_COMMANDS)),
            catalog=self.catalog,
        )

    # === FAMILY HELPERS ===

    def _records(
        self, tables: RawTables, family: str, factory: Callable[[RawRecord], R]
    ) -> Tuple[R, ...]:
        """Convert a list-shaped family table into records, keeping file order."""
        raw = tables.get(family)
        if raw is None:
            return ()
        if not isinstance(raw, list):
            raise InvalidDataError(f"'{family}' table must be a list, got {type(raw).__name__}")
        try:
            records = tuple(factory(cast(RawRecord, entry)) for entry in cast(List[Any], raw))
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidDataError(f"Invalid record in '{family}': {e!r}") from e
        self.logger.debug(f"Indexed {len(records)} {family}")
        return records

    @staticmethod
    def _blocks_by_state_id(blocks: Tuple[Block, ...]) -> Mapping[int, Block]:
        index: Dict[int, Block] = {}
        for block in blocks:
            if block.min_state_id is None or block.max_state_id is None:
                continue
            for state_id in range(block.min_state_id, block.max_state_id + 1):
                index[state_id] = block
        return MappingProxyType(index)

    @staticmethod
    def _windows_by_opener(windows: Tuple[Window, ...]) -> Mapping[Tuple[str, int], Window]:
        index: Dict[Tuple[str, int], Window] = {}
        for window in windows:
            for opener in window.opened_with:
                index[(opener.type, opener.id)] = window
        return MappingProxyType(index)

    def _recipes(self, raw: RawTable) -> Mapping[int, Tuple[Recipe, ...]]:
        """Group recipes by the id of their result, preserving file order.

        Accepts a flat list of recipes or the ``{"<result id>": [recipes]}``
        object form, in which the key is used when a result has no id.
        """
        if raw is None:
            return MappingProxyType({})

        entries: List[Tuple[Optional[str], Any]] = []
        if isinstance(raw, dict):
            for key, variants in cast(Dict[str, Any], raw).items():
                if not isinstance(variants, list):
                    raise InvalidDataError(f"Recipes for '{key}' must be a list")
                entries.extend((key, entry) for entry in cast(List[Any], variants))
        elif isinstance(raw, list):
            entries.extend((None, entry) for entry in cast(List[Any], raw))
        else:
            raise InvalidDataError("'recipes' table must be a list or an object")

        grouped: Dict[int, List[Recipe]] = {}
        skipped = 0
        for key, entry in entries:
            if not isinstance(entry, dict):
                raise InvalidDataError(f"Recipe must be an object: {entry!r}")
            try:
                recipe = parse_recipe(cast(RawRecord, entry))
                result_id = recipe.result.id
                if result_id is None and key is not None:
                    result_id = int(key)
            except (KeyError, TypeError, ValueError) as e:
                raise InvalidDataError(f"Invalid recipe {entry!r}: {e!r}") from e
            if result_id is None:
                skipped += 1
                continue
            grouped.setdefault(result_id, []).append(recipe)

        if skipped:
            self.logger.warning(f"Skipped {skipped} recipes without a result id")
        self.logger.debug(f"Indexed recipes for {len(grouped)} results")
        return MappingProxyType({k: tuple(v) for k, v in grouped.items()})

    @staticmethod
    def _materials(raw: RawTable) -> Mapping[str, MaterialMap]:
        if raw is None:
            return MappingProxyType({})
        if not isinstance(raw, dict):
            raise InvalidDataError("'materials' table must be an object")

        materials: Dict[str, MaterialMap] = {}
        for name, tools in cast(Dict[str, Any], raw).items():
            if not isinstance(tools, dict):
                raise InvalidDataError(f"Material '{name}' must map tool ids to multipliers")
            try:
                materials[name] = MappingProxyType(
                    {int(tool): float(speed) for tool, speed in cast(Dict[str, Any], tools).items()}
                )
            except (TypeError, ValueError) as e:
                raise InvalidDataError(f"Invalid tool entry in material '{name}': {e}") from e
        return MappingProxyType(materials)

    @staticmethod
    def _language(raw: RawTable) -> Mapping[str, str]:
        if raw is None:
            return MappingProxyType({})
        if not isinstance(raw, dict):
            raise InvalidDataError("'language' table must be an object")
        return MappingProxyType({str(k): str(v) for k, v in cast(Dict[str, Any], raw).items()})

    def _version(self, raw: RawTable, resolution: ResolvedVersion) -> Version:
        """Version of the data itself: version.json completed from the catalog."""
        catalog_version: Optional[Version] = None
        if self.catalog is not None:
            catalog_version = self.catalog.metadata_for(resolution.platform, resolution.data_key)

        if isinstance(raw, dict):
            version = Version.from_dict(cast(RawRecord, raw), resolution.platform)
            if catalog_version is not None:
                version = version.merged_with(catalog_version)
            if version.minecraft_version is None:
                version = version.merged_with(
                    Version(platform=resolution.platform, minecraft_version=resolution.data_key)
                )
            return version

        if catalog_version is not None:
            return catalog_version
        return Version(platform=resolution.platform, minecraft_version=resolution.data_key)
