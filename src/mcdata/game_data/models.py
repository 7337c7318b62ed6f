"""
Data models for game data records.

Contains the record dataclasses built from the raw tables, the type aliases
used for raw JSON, and the family name constants. Records are frozen and
carry no lookup or file-system logic; raw camelCase keys are converted to
snake_case attributes in ``from_dict``.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple, TypeAlias, Union, cast

from ..errors import InvalidDataError

# Type aliases for raw JSON
RawRecord: TypeAlias = Dict[str, Any]
"""A single raw record (e.g., a block) as parsed from JSON."""

RawTable: TypeAlias = Any
"""A whole family table: usually a list of records, sometimes an object."""

RawTables: TypeAlias = Dict[str, RawTable]
"""Maps family name to its raw table for one dataset."""


# Family names (match the JSON file names of a dataset)
FAMILY_BIOMES = "biomes"
FAMILY_BLOCKS = "blocks"
FAMILY_BLOCK_COLLISION_SHAPES = "blockCollisionShapes"
FAMILY_BLOCK_LOOT = "blockLoot"
FAMILY_COMMANDS = "commands"
FAMILY_EFFECTS = "effects"
FAMILY_ENCHANTMENTS = "enchantments"
FAMILY_ENTITIES = "entities"
FAMILY_ENTITY_LOOT = "entityLoot"
FAMILY_FOODS = "foods"
FAMILY_INSTRUMENTS = "instruments"
FAMILY_ITEMS = "items"
FAMILY_LANGUAGE = "language"
FAMILY_MATERIALS = "materials"
FAMILY_PARTICLES = "particles"
FAMILY_PROTOCOL = "protocol"
FAMILY_PROTOCOL_COMMENTS = "protocolComments"
FAMILY_RECIPES = "recipes"
FAMILY_VERSION = "version"
FAMILY_WINDOWS = "windows"

ALL_FAMILIES = (
    FAMILY_BIOMES,
    FAMILY_BLOCKS,
    FAMILY_BLOCK_COLLISION_SHAPES,
    FAMILY_BLOCK_LOOT,
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
)

# Entity types used to split entities into mobs and objects
ENTITY_TYPE_MOB = "mob"
ENTITY_TYPE_OBJECT = "object"


def _optional_int(value: Any) -> Optional[int]:
    return int(value) if value is not None else None


def _optional_float(value: Any) -> Optional[float]:
    return float(value) if value is not None else None


def _variations(data: RawRecord) -> Tuple["Variation", ...]:
    raw: List[Any] = data.get("variations") or []
    return tuple(Variation.from_dict(cast(RawRecord, v)) for v in raw)


# =============================================================================
# Blocks and items
# =============================================================================

@dataclass(frozen=True)
class Variation:
    """Metadata variant of a block or item (legacy numeric metadata)."""
    metadata: int
    display_name: str

    @classmethod
    def from_dict(cls, data: RawRecord) -> "Variation":
        return cls(metadata=int(data["metadata"]), display_name=str(data["displayName"]))


@dataclass(frozen=True)
class BlockState:
    """A block state property (enum, bool or int)."""
    name: str
    type: str
    num_values: int
    values: Tuple[Any, ...] = ()

    @classmethod
    def from_dict(cls, data: RawRecord) -> "BlockState":
        return cls(
            name=str(data["name"]),
            type=str(data["type"]),
            num_values=int(data.get("num_values", 0)),
            values=tuple(data.get("values") or ()),
        )


@dataclass(frozen=True)
class BlockDrop:
    """What a block drops when broken.

    Raw drops are either a bare item id or a dict with optional counts and
    a ``drop`` that is itself an id or ``{id, metadata}``.
    """
    drop_id: int
    metadata: Optional[int] = None
    min_count: float = 1
    max_count: Optional[float] = None

    @classmethod
    def from_value(cls, value: Any) -> "BlockDrop":
        if isinstance(value, int):
            return cls(drop_id=value)
        if not isinstance(value, dict):
            raise InvalidDataError(f"Invalid block drop: {value!r}")

        data = cast(RawRecord, value)
        drop = data.get("drop")
        metadata: Optional[int] = None
        if isinstance(drop, dict):
            drop_id = int(cast(RawRecord, drop)["id"])
            metadata = _optional_int(cast(RawRecord, drop).get("metadata"))
        elif isinstance(drop, int):
            drop_id = drop
        else:
            raise InvalidDataError(f"Invalid block drop: {value!r}")

        min_count = float(data.get("minCount", 1))
        max_count = _optional_float(data.get("maxCount"))
        return cls(
            drop_id=drop_id,
            metadata=metadata,
            min_count=min_count,
            max_count=max_count if max_count is not None else min_count,
        )


@dataclass(frozen=True)
class Block:
    """A block record."""
    id: int
    name: str
    display_name: str
    hardness: Optional[float] = None
    stack_size: int = 64
    diggable: bool = True
    bounding_box: str = "block"
    material: Optional[str] = None
    harvest_tools: Mapping[int, bool] = field(default_factory=lambda: MappingProxyType({}))
    variations: Tuple[Variation, ...] = ()
    states: Tuple[BlockState, ...] = ()
    drops: Tuple[BlockDrop, ...] = ()
    transparent: bool = False
    emit_light: int = 0
    filter_light: int = 0
    min_state_id: Optional[int] = None
    max_state_id: Optional[int] = None
    default_state: Optional[int] = None

    @classmethod
    def from_dict(cls, data: RawRecord) -> "Block":
        """Create Block from a raw blocks.json entry."""
        harvest: Dict[str, bool] = data.get("harvestTools") or {}
        raw_drops: List[Any] = data.get("drops") or []
        raw_states: List[Any] = data.get("states") or []
        return cls(
            id=int(data["id"]),
            name=str(data["name"]),
            display_name=str(data.get("displayName", data["name"])),
            hardness=_optional_float(data.get("hardness")),
            stack_size=int(data.get("stackSize", 64)),
            diggable=bool(data.get("diggable", True)),
            bounding_box=str(data.get("boundingBox", "block")),
            material=data.get("material"),
            harvest_tools=MappingProxyType({int(k): bool(v) for k, v in harvest.items()}),
            variations=_variations(data),
            states=tuple(BlockState.from_dict(cast(RawRecord, s)) for s in raw_states),
            drops=tuple(BlockDrop.from_value(d) for d in raw_drops),
            transparent=bool(data.get("transparent", False)),
            emit_light=int(data.get("emitLight", 0)),
            filter_light=int(data.get("filterLight", 0)),
            min_state_id=_optional_int(data.get("minStateId")),
            max_state_id=_optional_int(data.get("maxStateId")),
            default_state=_optional_int(data.get("defaultState")),
        )

    def can_harvest_with(self, item_id: Optional[int]) -> bool:
        """Whether breaking with ``item_id`` (None for bare hand) yields drops."""
        if not self.harvest_tools:
            return True
        return item_id is not None and self.harvest_tools.get(item_id, False)


@dataclass(frozen=True)
class Item:
    """An item record."""
    id: int
    name: str
    display_name: str
    stack_size: int = 64
    durability: Optional[int] = None
    variations: Tuple[Variation, ...] = ()

    @classmethod
    def from_dict(cls, data: RawRecord) -> "Item":
        """Create Item from a raw items.json entry."""
        return cls(
            id=int(data["id"]),
            name=str(data["name"]),
            display_name=str(data.get("displayName", data["name"])),
            stack_size=int(data.get("stackSize", 64)),
            durability=_optional_int(data.get("durability")),
            variations=_variations(data),
        )


@dataclass(frozen=True)
class Food(Item):
    """A food item: an Item with nutrition values."""
    food_points: float = 0
    saturation: float = 0
    effective_quality: float = 0
    saturation_ratio: float = 0

    @classmethod
    def from_dict(cls, data: RawRecord) -> "Food":
        """Create Food from a raw foods.json entry."""
        return cls(
            id=int(data["id"]),
            name=str(data["name"]),
            display_name=str(data.get("displayName", data["name"])),
            stack_size=int(data.get("stackSize", 64)),
            durability=_optional_int(data.get("durability")),
            variations=_variations(data),
            food_points=float(data["foodPoints"]),
            saturation=float(data["saturation"]),
            effective_quality=float(data.get("effectiveQuality", 0)),
            saturation_ratio=float(data.get("saturationRatio", 0)),
        )


# =============================================================================
# Entities and simple id/name families
# =============================================================================

@dataclass(frozen=True)
class Entity:
    """An entity record; ``internal_id`` is the id used by spawn eggs."""
    id: int
    name: str
    display_name: str
    type: str
    internal_id: Optional[int] = None
    width: Optional[float] = None
    height: Optional[float] = None
    category: Optional[str] = None

    @classmethod
    def from_dict(cls, data: RawRecord) -> "Entity":
        return cls(
            id=int(data["id"]),
            name=str(data["name"]),
            display_name=str(data.get("displayName", data["name"])),
            type=str(data.get("type", "")),
            internal_id=_optional_int(data.get("internalId")),
            width=_optional_float(data.get("width")),
            height=_optional_float(data.get("height")),
            category=data.get("category"),
        )


@dataclass(frozen=True)
class Biome:
    id: int
    name: str
    rainfall: float
    temperature: float
    display_name: Optional[str] = None
    color: Optional[int] = None

    @classmethod
    def from_dict(cls, data: RawRecord) -> "Biome":
        return cls(
            id=int(data["id"]),
            name=str(data["name"]),
            rainfall=float(data.get("rainfall", 0)),
            temperature=float(data.get("temperature", 0)),
            display_name=data.get("displayName"),
            color=_optional_int(data.get("color")),
        )


@dataclass(frozen=True)
class Effect:
    id: int
    name: str
    display_name: str
    type: str  # "good" or "bad"

    @classmethod
    def from_dict(cls, data: RawRecord) -> "Effect":
        return cls(
            id=int(data["id"]),
            name=str(data["name"]),
            display_name=str(data.get("displayName", data["name"])),
            type=str(data.get("type", "good")),
        )


@dataclass(frozen=True)
class Enchantment:
    id: int
    name: str
    display_name: str

    @classmethod
    def from_dict(cls, data: RawRecord) -> "Enchantment":
        return cls(
            id=int(data["id"]),
            name=str(data["name"]),
            display_name=str(data.get("displayName", data["name"])),
        )


@dataclass(frozen=True)
class Instrument:
    id: int
    name: str

    @classmethod
    def from_dict(cls, data: RawRecord) -> "Instrument":
        return cls(id=int(data["id"]), name=str(data["name"]))


@dataclass(frozen=True)
class Particle:
    """A particle record; both fields are optional in older datasets."""
    id: Optional[int] = None
    name: Optional[str] = None

    @classmethod
    def from_dict(cls, data: RawRecord) -> "Particle":
        return cls(id=_optional_int(data.get("id")), name=data.get("name"))


# =============================================================================
# Loot tables
# =============================================================================

@dataclass(frozen=True)
class LootDrop:
    """A possible drop of a loot entry with its conditions."""
    item: str
    drop_chance: float
    stack_size_range: Tuple[Any, ...] = ()
    block_age: Optional[int] = None
    silk_touch: Optional[bool] = None
    no_silk_touch: Optional[bool] = None
    player_kill: Optional[bool] = None

    @classmethod
    def from_dict(cls, data: RawRecord) -> "LootDrop":
        return cls(
            item=str(data["item"]),
            drop_chance=float(data.get("dropChance", 1)),
            stack_size_range=tuple(data.get("stackSizeRange") or ()),
            block_age=_optional_int(data.get("blockAge")),
            silk_touch=data.get("silkTouch"),
            no_silk_touch=data.get("noSilkTouch"),
            player_kill=data.get("playerKill"),
        )


@dataclass(frozen=True)
class BlockLoot:
    block: str
    drops: Tuple[LootDrop, ...]

    @classmethod
    def from_dict(cls, data: RawRecord) -> "BlockLoot":
        raw: List[Any] = data.get("drops") or []
        return cls(
            block=str(data["block"]),
            drops=tuple(LootDrop.from_dict(cast(RawRecord, d)) for d in raw),
        )


@dataclass(frozen=True)
class EntityLoot:
    entity: str
    drops: Tuple[LootDrop, ...]

    @classmethod
    def from_dict(cls, data: RawRecord) -> "EntityLoot":
        raw: List[Any] = data.get("drops") or []
        return cls(
            entity=str(data["entity"]),
            drops=tuple(LootDrop.from_dict(cast(RawRecord, d)) for d in raw),
        )


# =============================================================================
# Windows
# =============================================================================

@dataclass(frozen=True)
class WindowSlot:
    """A named slot or slot range of a window."""
    name: str
    index: int
    size: int = 1

    @property
    def indices(self) -> range:
        return range(self.index, self.index + self.size)


@dataclass(frozen=True)
class WindowOpener:
    """A record (block, item or entity) whose use opens a window."""
    type: str
    id: int


@dataclass(frozen=True)
class Window:
    """Inventory window layout."""
    id: Union[str, int]
    name: str
    slots: Tuple[WindowSlot, ...] = ()
    properties: Tuple[str, ...] = ()
    opened_with: Tuple[WindowOpener, ...] = ()

    @classmethod
    def from_dict(cls, data: RawRecord) -> "Window":
        """Create Window from a raw windows.json entry.

        Raises:
            InvalidDataError: If ``slots`` is present but empty
        """
        raw_slots: Optional[List[Any]] = data.get("slots")
        if raw_slots is not None and not raw_slots:
            raise InvalidDataError(f"Window {data.get('id')!r} has an empty slot list")
        slots = tuple(
            WindowSlot(
                name=str(s["name"]),
                index=int(s["index"]),
                size=int(s.get("size", 1)),
            )
            for s in cast(List[RawRecord], raw_slots or [])
        )
        openers = tuple(
            WindowOpener(type=str(o["type"]), id=int(o["id"]))
            for o in cast(List[RawRecord], data.get("openedWith") or [])
        )
        return cls(
            id=data["id"],
            name=str(data["name"]),
            slots=slots,
            properties=tuple(str(p) for p in data.get("properties") or ()),
            opened_with=openers,
        )

    def slot(self, name: str) -> Optional[WindowSlot]:
        """Return the named slot range, or None."""
        for slot in self.slots:
            if slot.name == name:
                return slot
        return None


# =============================================================================
# Recipes
# =============================================================================

@dataclass(frozen=True)
class RecipeItem:
    """An item reference inside a recipe.

    Normalizes the raw forms: bare id (or null), ``[id, metadata]`` and
    ``{"id": .., "metadata": .., "count": ..}``.
    """
    id: Optional[int]
    metadata: Optional[int] = None
    count: Optional[int] = None

    @classmethod
    def from_value(cls, value: Any) -> "RecipeItem":
        if value is None or isinstance(value, int):
            return cls(id=value)
        if isinstance(value, list):
            parts = cast(List[Any], value)
            if len(parts) > 2:
                raise InvalidDataError(f"Invalid recipe item: {value!r}")
            item_id = _optional_int(parts[0]) if parts else None
            metadata = _optional_int(parts[1]) if len(parts) > 1 else None
            return cls(id=item_id, metadata=metadata)
        if isinstance(value, dict):
            data = cast(RawRecord, value)
            return cls(
                id=_optional_int(data.get("id")),
                metadata=_optional_int(data.get("metadata")),
                count=_optional_int(data.get("count")),
            )
        raise InvalidDataError(f"Invalid recipe item: {value!r}")


Shape: TypeAlias = Tuple[Tuple[RecipeItem, ...], ...]


def _shape(rows: Any) -> Shape:
    return tuple(tuple(RecipeItem.from_value(v) for v in row) for row in rows)


@dataclass(frozen=True)
class ShapedRecipe:
    """A recipe with a fixed grid layout (``inShape``)."""
    result: RecipeItem
    in_shape: Shape
    out_shape: Optional[Shape] = None

    @classmethod
    def from_dict(cls, data: RawRecord) -> "ShapedRecipe":
        out_shape = data.get("outShape")
        return cls(
            result=RecipeItem.from_value(data.get("result")),
            in_shape=_shape(data["inShape"]),
            out_shape=_shape(out_shape) if out_shape is not None else None,
        )


@dataclass(frozen=True)
class ShapelessRecipe:
    """A recipe with an unordered ingredient list."""
    result: RecipeItem
    ingredients: Tuple[RecipeItem, ...]

    @classmethod
    def from_dict(cls, data: RawRecord) -> "ShapelessRecipe":
        return cls(
            result=RecipeItem.from_value(data.get("result")),
            ingredients=tuple(RecipeItem.from_value(v) for v in data["ingredients"]),
        )


Recipe: TypeAlias = Union[ShapedRecipe, ShapelessRecipe]


def parse_recipe(data: RawRecord) -> Recipe:
    """Build the right recipe variant from a raw entry.

    Raises:
        InvalidDataError: If the entry has neither ``inShape`` nor ``ingredients``
    """
    if "inShape" in data:
        return ShapedRecipe.from_dict(data)
    if "ingredients" in data:
        return ShapelessRecipe.from_dict(data)
    raise InvalidDataError(f"Recipe has neither inShape nor ingredients: {data!r}")


MaterialMap: TypeAlias = Mapping[int, float]
"""Maps tool item id to dig speed multiplier."""
