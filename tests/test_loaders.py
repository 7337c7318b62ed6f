"""Tests for reading minecraft-data style directories."""

from pathlib import Path

import orjson
import pytest

from mcdata.errors import InvalidDataError, MissingDataError
from mcdata.game_data import GameDataFileLoader, JsonDataProvider
from mcdata.versioning import VersionCatalog


class TestGameDataFileLoader:
    """Test JSON file reading."""

    def test_read_json_file(self, tmp_path: Path) -> None:
        json_file = tmp_path / "blocks.json"
        json_file.write_bytes(orjson.dumps([{"id": 1, "name": "stone"}]))
        assert GameDataFileLoader.read_json_file(json_file) == [{"id": 1, "name": "stone"}]

    def test_invalid_json(self, tmp_path: Path) -> None:
        json_file = tmp_path / "broken.json"
        json_file.write_text("{not json", encoding="utf-8")
        with pytest.raises(orjson.JSONDecodeError):
            GameDataFileLoader.read_json_file(json_file)


class TestJsonDataProvider:
    """Test the dataPaths.json driven provider."""

    def test_missing_manifest(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            JsonDataProvider(tmp_path)

    def test_manifest_must_be_object(self, tmp_path: Path) -> None:
        (tmp_path / "dataPaths.json").write_bytes(b"[]")
        with pytest.raises(InvalidDataError):
            JsonDataProvider(tmp_path)

    def test_families_and_load(self, data_dir: Path) -> None:
        provider = JsonDataProvider(data_dir)
        assert "blocks" in provider.families("pc", "1.8")
        blocks = provider.load_family("blocks", "pc", "1.8")
        assert blocks[0]["name"] == "stone"

    def test_unlisted_family(self, data_dir: Path) -> None:
        provider = JsonDataProvider(data_dir)
        with pytest.raises(MissingDataError):
            provider.load_family("biomes", "pc", "1.8")

    def test_listed_family_without_file(self, make_data_dir) -> None:
        data_dir = make_data_dir(unlisted_files=(("pc", "1.8", "biomes"),))
        provider = JsonDataProvider(data_dir)
        with pytest.raises(MissingDataError) as exc_info:
            provider.load_family("biomes", "pc", "1.8")
        assert exc_info.value.version_key == "1.8"

    def test_unreadable_family_file(self, data_dir: Path) -> None:
        (data_dir / "pc" / "1.8" / "items.json").write_text("[{", encoding="utf-8")
        provider = JsonDataProvider(data_dir)
        with pytest.raises(MissingDataError):
            provider.load_family("items", "pc", "1.8")

    def test_bedrock_manifest_alias(self, make_data_dir) -> None:
        data_dir = make_data_dir(manifest_platform_names={"pe": "bedrock"})
        provider = JsonDataProvider(data_dir)
        assert provider.supported_versions()["pe"] == ["0.14"]
        assert provider.load_family("items", "pe", "0.14")[0]["name"] == "stick"

    def test_protocol_versions_build_catalog(self, data_dir: Path) -> None:
        provider = JsonDataProvider(data_dir)
        catalog = VersionCatalog.from_provider(provider)
        assert catalog.supported_keys("pc") == ("1.4.2", "1.8", "1.9")
        assert catalog.metadata_for("pe", "0.15") is not None

    def test_schema_file(self, make_data_dir) -> None:
        data_dir = make_data_dir(schemas={"blocks": {"type": "array"}})
        provider = JsonDataProvider(data_dir)
        schema_file = provider.schema_file("blocks")
        assert schema_file is not None and schema_file.exists()
        assert provider.schema_file("items") is None
