import os
from pathlib import Path

import pytest

from mcdata.game_data.service import MinecraftDataService

# Path to the data/ directory of a minecraft-data checkout
MINECRAFT_DATA_PATH = os.environ.get("MINECRAFT_DATA_PATH") or "minecraft-data/data"

needs_data = pytest.mark.skipif(
    not (Path(MINECRAFT_DATA_PATH) / "dataPaths.json").exists(),
    reason="minecraft-data checkout not found",
)


@needs_data
def test_every_supported_version_builds():
    service = MinecraftDataService(data_path=MINECRAFT_DATA_PATH)
    for platform, keys in service.supported_versions.items():
        for key in keys:
            data = service.request(f"{platform}_{key}")
            assert data.type == platform
            assert data.version.minecraft_version
            print(f"✓ {platform}_{key}: {len(data.blocks_array)} blocks, {len(data.items_array)} items")


@needs_data
def test_stone_in_1_8():
    service = MinecraftDataService(data_path=MINECRAFT_DATA_PATH)
    data = service.request("1.8.8")
    stone = data.blocks_by_name.get("stone")
    assert stone is not None, "stone not found"
    assert stone.id == 1
    assert data.find_item_or_block_by_name("stone") is not None


@needs_data
def test_protocol_request_matches_release():
    service = MinecraftDataService(data_path=MINECRAFT_DATA_PATH)
    assert service.request(47).resolution == service.request("1.8.9").resolution
