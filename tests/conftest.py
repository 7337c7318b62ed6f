"""Shared fixtures: small minecraft-data style datasets."""

import copy
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

import orjson
import pytest

from mcdata.game_data import InMemoryDataProvider
from mcdata.versioning import VersionCatalog

# Newest first, as protocolVersions.json ships it
PC_PROTOCOL_VERSIONS: List[Dict[str, Any]] = [
    {"minecraftVersion": "1.9", "version": 107, "dataVersion": 169, "usesNetty": True, "majorVersion": "1.9"},
    {"minecraftVersion": "1.8.9", "version": 47, "usesNetty": True, "majorVersion": "1.8"},
    {"minecraftVersion": "1.8.8", "version": 47, "usesNetty": True, "majorVersion": "1.8"},
    {"minecraftVersion": "1.8", "version": 47, "usesNetty": True, "majorVersion": "1.8"},
    {"minecraftVersion": "1.7.10", "version": 5, "usesNetty": True, "majorVersion": "1.7"},
    {"minecraftVersion": "1.7.2", "version": 4, "usesNetty": True, "majorVersion": "1.7"},
    {"minecraftVersion": "1.4.2", "version": 47, "usesNetty": False, "majorVersion": "1.4"},
    {"minecraftVersion": "1.3.2", "version": 39, "usesNetty": False, "majorVersion": "1.3"},
]

PE_PROTOCOL_VERSIONS: List[Dict[str, Any]] = [
    {"minecraftVersion": "0.15", "version": 81, "majorVersion": "0.15"},
    {"minecraftVersion": "0.14.3", "version": 70, "majorVersion": "0.14"},
    {"minecraftVersion": "0.14", "version": 70, "majorVersion": "0.14"},
]

PC_18_TABLES: Dict[str, Any] = {
    "blocks": [
        {"id": 1, "name": "stone", "displayName": "Stone", "hardness": 1.5, "material": "rock",
         "harvestTools": {"257": True, "270": True}, "drops": [{"drop": 4}]},
        {"id": 3, "name": "dirt", "displayName": "Dirt", "hardness": 0.5, "drops": [{"drop": 3}]},
        {"id": 54, "name": "chest", "displayName": "Chest", "hardness": 2.5, "drops": [{"drop": 54}]},
        {"id": 59, "name": "wheat", "displayName": "Crops", "hardness": 0,
         "drops": [{"drop": 295, "minCount": 0, "maxCount": 3}, 296]},
    ],
    "items": [
        {"id": 257, "name": "iron_pickaxe", "displayName": "Iron Pickaxe", "stackSize": 1},
        {"id": 260, "name": "apple", "displayName": "Apple"},
        {"id": 280, "name": "stick", "displayName": "Stick"},
        {"id": 296, "name": "wheat", "displayName": "Wheat"},
        {"id": 297, "name": "bread", "displayName": "Bread"},
    ],
    "foods": [
        {"id": 260, "name": "apple", "displayName": "Apple", "foodPoints": 4, "saturation": 2.4},
        {"id": 297, "name": "bread", "displayName": "Bread", "foodPoints": 5, "saturation": 6},
    ],
    "entities": [
        {"id": 1, "internalId": 41, "name": "Boat", "displayName": "Boat", "type": "object"},
        {"id": 50, "internalId": 50, "name": "Creeper", "displayName": "Creeper", "type": "mob"},
        {"id": 90, "internalId": 90, "name": "Pig", "displayName": "Pig", "type": "mob"},
    ],
    "recipes": {
        "280": [{"inShape": [[5], [5]], "result": {"id": 280, "count": 4}}],
        "297": [{"inShape": [[296, 296, 296]], "result": {"id": 297, "count": 1}}],
    },
    "materials": {"rock": {"257": 6, "270": 2}},
    "windows": [
        {"id": "minecraft:chest", "name": "Chest",
         "slots": [{"name": "chest", "index": 0, "size": 27}],
         "openedWith": [{"type": "block", "id": 54}]},
    ],
    "language": {"item.apple.name": "Apple"},
    "version": {"version": 47, "minecraftVersion": "1.8.8", "majorVersion": "1.8"},
}

PC_19_TABLES: Dict[str, Any] = {
    "blocks": [{"id": 1, "name": "stone", "displayName": "Stone", "hardness": 1.5}],
    "items": [{"id": 443, "name": "elytra", "displayName": "Elytra", "stackSize": 1}],
    "version": {"version": 107, "minecraftVersion": "1.9", "majorVersion": "1.9"},
}

PC_142_TABLES: Dict[str, Any] = {
    "blocks": [{"id": 1, "name": "stone", "displayName": "Stone", "hardness": 1.5}],
    "items": [{"id": 280, "name": "stick", "displayName": "Stick"}],
}

PE_014_TABLES: Dict[str, Any] = {
    "blocks": [{"id": 1, "name": "stone", "displayName": "Stone", "hardness": 1.5}],
    "items": [{"id": 280, "name": "stick", "displayName": "Stick"}],
    "version": {"version": 70, "minecraftVersion": "0.14", "majorVersion": "0.14"},
}

DEFAULT_DATASETS: Dict[Tuple[str, str], Dict[str, Any]] = {
    ("pc", "1.4.2"): PC_142_TABLES,
    ("pc", "1.8"): PC_18_TABLES,
    ("pc", "1.9"): PC_19_TABLES,
    ("pe", "0.14"): PE_014_TABLES,
}

DataDirFactory = Callable[..., Path]


def _write_json(path: Path, data: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(orjson.dumps(data))


@pytest.fixture
def datasets() -> Dict[Tuple[str, str], Dict[str, Any]]:
    """Fresh copy of the default test datasets."""
    return copy.deepcopy(DEFAULT_DATASETS)


@pytest.fixture
def protocol_versions() -> Dict[str, List[Dict[str, Any]]]:
    return {"pc": copy.deepcopy(PC_PROTOCOL_VERSIONS), "pe": copy.deepcopy(PE_PROTOCOL_VERSIONS)}


@pytest.fixture
def provider(datasets, protocol_versions) -> InMemoryDataProvider:
    return InMemoryDataProvider(datasets, protocol_versions)


@pytest.fixture
def catalog(provider) -> VersionCatalog:
    return VersionCatalog.from_provider(provider)


@pytest.fixture
def make_data_dir(tmp_path: Path) -> DataDirFactory:
    """Factory writing a data directory laid out like minecraft-data.

    ``unlisted_files`` are extra (platform, key, family) entries added to
    dataPaths.json without writing the family file.
    """

    def factory(
        datasets: Optional[Mapping[Tuple[str, str], Mapping[str, Any]]] = None,
        unlisted_files: Tuple[Tuple[str, str, str], ...] = (),
        manifest_platform_names: Optional[Mapping[str, str]] = None,
        schemas: Optional[Mapping[str, Any]] = None,
    ) -> Path:
        root = tmp_path / "data"
        names = {"pc": "pc", "pe": "pe"}
        names.update(manifest_platform_names or {})

        manifest: Dict[str, Dict[str, Dict[str, str]]] = {}
        for (platform, key), tables in (datasets or DEFAULT_DATASETS).items():
            rel = f"{platform}/{key}"
            entry = manifest.setdefault(names[platform], {}).setdefault(key, {})
            for family, table in tables.items():
                _write_json(root / rel / f"{family}.json", table)
                entry[family] = rel

        for platform, key, family in unlisted_files:
            manifest.setdefault(names[platform], {}).setdefault(key, {})[family] = f"{platform}/{key}"

        _write_json(root / "dataPaths.json", manifest)
        _write_json(root / "pc" / "common" / "protocolVersions.json", PC_PROTOCOL_VERSIONS)
        _write_json(root / "pe" / "common" / "protocolVersions.json", PE_PROTOCOL_VERSIONS)

        for family, schema in (schemas or {}).items():
            _write_json(root / "schemas" / f"{family}_schema.json", schema)
        return root

    return factory


@pytest.fixture
def data_dir(make_data_dir: DataDirFactory) -> Path:
    """Data directory holding the default datasets."""
    return make_data_dir()
