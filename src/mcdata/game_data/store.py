"""
Indexed, immutable view of one game data dataset.

An IndexedDataStore is produced by the IndexBuilder and never changes
afterwards. Every map is a read-only mapping and every ordered array a
tuple, so stores can be shared between threads without locking.
"""

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any, Mapping, Optional, Tuple, Union

from ..errors import NotFoundError
from ..versioning.models import ResolvedVersion, Version
from .models import (
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
    Recipe,
    Window,
)

if TYPE_CHECKING:
    from ..versioning.catalog import VersionCatalog


@dataclass(frozen=True, eq=False)
class IndexedDataStore:
    """All indices of one resolved dataset.

    Stores compare and hash by identity, so they can key sets and dicts.

    Ordinary lookups are plain mapping accesses (``store.blocks.get(1)``) and
    return None on a miss. Only the combined item-or-block lookups raise.
    """
    type: str
    version: Version
    resolution: ResolvedVersion
    requested_version: Optional[Version] = None

    blocks: Mapping[int, Block] = field(default_factory=dict)
    blocks_by_name: Mapping[str, Block] = field(default_factory=dict)
    blocks_array: Tuple[Block, ...] = ()
    blocks_by_state_id: Mapping[int, Block] = field(default_factory=dict)

    items: Mapping[int, Item] = field(default_factory=dict)
    items_by_name: Mapping[str, Item] = field(default_factory=dict)
    items_array: Tuple[Item, ...] = ()

    foods: Mapping[int, Food] = field(default_factory=dict)
    foods_by_name: Mapping[str, Food] = field(default_factory=dict)
    foods_array: Tuple[Food, ...] = ()
    foods_by_food_points: Mapping[float, Food] = field(default_factory=dict)
    foods_by_saturation: Mapping[float, Food] = field(default_factory=dict)

    biomes: Mapping[int, Biome] = field(default_factory=dict)
    biomes_by_name: Mapping[str, Biome] = field(default_factory=dict)
    biomes_array: Tuple[Biome, ...] = ()

    recipes: Mapping[int, Tuple[Recipe, ...]] = field(default_factory=dict)

    instruments: Mapping[int, Instrument] = field(default_factory=dict)
    instruments_by_name: Mapping[str, Instrument] = field(default_factory=dict)
    instruments_array: Tuple[Instrument, ...] = ()

    materials: Mapping[str, MaterialMap] = field(default_factory=dict)

    entities: Mapping[int, Entity] = field(default_factory=dict)
    entities_by_name: Mapping[str, Entity] = field(default_factory=dict)
    entities_array: Tuple[Entity, ...] = ()
    entities_by_internal_id: Mapping[int, Entity] = field(default_factory=dict)
    mobs: Mapping[int, Entity] = field(default_factory=dict)
    objects: Mapping[int, Entity] = field(default_factory=dict)

    enchantments: Mapping[int, Enchantment] = field(default_factory=dict)
    enchantments_by_name: Mapping[str, Enchantment] = field(default_factory=dict)
    enchantments_array: Tuple[Enchantment, ...] = ()

    effects: Mapping[int, Effect] = field(default_factory=dict)
    effects_by_name: Mapping[str, Effect] = field(default_factory=dict)
    effects_array: Tuple[Effect, ...] = ()

    windows: Mapping[Union[str, int], Window] = field(default_factory=dict)
    windows_by_name: Mapping[str, Window] = field(default_factory=dict)
    windows_array: Tuple[Window, ...] = ()
    windows_by_opener: Mapping[Tuple[str, int], Window] = field(default_factory=dict)

    particles: Mapping[int, Particle] = field(default_factory=dict)
    particles_by_name: Mapping[str, Particle] = field(default_factory=dict)
    particles_array: Tuple[Particle, ...] = ()

    block_loot: Tuple[BlockLoot, ...] = ()
    block_loot_by_name: Mapping[str, BlockLoot] = field(default_factory=dict)
    entity_loot: Tuple[EntityLoot, ...] = ()
    entity_loot_by_name: Mapping[str, EntityLoot] = field(default_factory=dict)

    language: Mapping[str, str] = field(default_factory=dict)

    # Opaque tables, copied through as read-only structures
    protocol: Any = None
    protocol_comments: Any = None
    block_collision_shapes: Any = None
    commands: Any = None

    catalog: Optional["VersionCatalog"] = field(default=None, repr=False, compare=False)

    # === CROSS-FAMILY LOOKUPS ===

    def find_item_or_block_by_id(self, item_id: int) -> Union[Item, Block]:
        """Return the item with ``item_id``, else the block with that id.

        Raises:
            NotFoundError: If neither family has the id
        """
        item = self.items.get(item_id)
        if item is not None:
            return item
        block = self.blocks.get(item_id)
        if block is not None:
            return block
        raise NotFoundError(item_id)

    def find_item_or_block_by_name(self, name: str) -> Union[Item, Block]:
        """Return the item named ``name``, else the block with that name.

        Raises:
            NotFoundError: If neither family has the name
        """
        item = self.items_by_name.get(name)
        if item is not None:
            return item
        block = self.blocks_by_name.get(name)
        if block is not None:
            return block
        raise NotFoundError(name)

    # === VERSION CHECKS ===

    @property
    def requested(self) -> Any:
        """The identifier this store was requested with."""
        return self.resolution.requested

    @property
    def is_fallback(self) -> bool:
        """True when the data comes from an earlier version than requested."""
        return self.resolution.fallback

    def _compare_to(self, other: str) -> int:
        """Compare this store's data version with ``other`` chronologically."""
        if self.catalog is None:
            raise RuntimeError("Version comparison needs a catalog")
        own = self.version.minecraft_version or self.resolution.data_key
        if self.catalog.position_of(self.type, own) is None:
            own = self.resolution.data_key
        return self.catalog.compare(self.type, own, other)

    def is_newer_or_equal_to(self, other: str) -> bool:
        """Whether the data version is ``other`` or a later release."""
        return self._compare_to(other) >= 0

    def is_older_than(self, other: str) -> bool:
        """Whether the data version is an earlier release than ``other``."""
        return self._compare_to(other) < 0

    def for_request(self, resolution: ResolvedVersion, requested_version: Optional[Version]) -> "IndexedDataStore":
        """Return a store sharing all indices but reporting another request."""
        return replace(self, resolution=resolution, requested_version=requested_version)
