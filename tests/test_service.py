"""Tests for MinecraftDataService."""

import threading
from pathlib import Path
from typing import List

import pytest

from mcdata.errors import MissingDataError, UnknownVersionError, UnsupportedVersionError
from mcdata.game_data import IndexBuilder, IndexedDataStore, InMemoryDataProvider, MinecraftDataService


@pytest.fixture
def service(data_dir: Path) -> MinecraftDataService:
    return MinecraftDataService(data_path=data_dir)


class TestRequest:
    """Test request() against a data directory."""

    def test_exact_request(self, service: MinecraftDataService) -> None:
        data = service.request("1.8")
        assert isinstance(data, IndexedDataStore)
        assert data.blocks_by_name["stone"].id == 1
        assert not data.is_fallback

    def test_repeat_requests_return_same_store(self, service: MinecraftDataService) -> None:
        assert service.request("1.8") is service.request("1.8")
        assert service.request("1.8.9") is service.request(47)

    def test_fallback_reports_requested_and_actual(self, service: MinecraftDataService) -> None:
        data = service.request("1.8.8")
        assert data.is_fallback
        assert data.resolution.data_key == "1.8"
        assert data.requested_version is not None
        assert data.requested_version.minecraft_version == "1.8.8"
        assert data.version.minecraft_version == "1.8.8"

    def test_intermediate_versions_share_indices(self, service: MinecraftDataService) -> None:
        exact = service.request("1.8")
        fallback = service.request("1.8.8")
        assert fallback is not exact
        assert fallback.items is exact.items
        assert fallback.requested_version != exact.requested_version

    def test_unknown_version(self, service: MinecraftDataService) -> None:
        with pytest.raises(UnknownVersionError):
            service.request("42.0")

    def test_unsupported_version(self, service: MinecraftDataService) -> None:
        with pytest.raises(UnsupportedVersionError):
            service.request("1.3.2")

    def test_pe_request(self, service: MinecraftDataService) -> None:
        data = service.request("pe_0.14.3")
        assert data.type == "pe"
        assert data.items_by_name["stick"].id == 280


class TestBuildFailures:
    """Test that failed builds are not cached."""

    def test_missing_family_not_cached(self, make_data_dir) -> None:
        data_dir = make_data_dir(unlisted_files=(("pc", "1.9", "biomes"),))
        service = MinecraftDataService(data_path=data_dir)

        with pytest.raises(MissingDataError):
            service.request("1.9")

        # Supply the file: the next request builds successfully
        (data_dir / "pc" / "1.9" / "biomes.json").write_text(
            '[{"id": 1, "name": "plains", "rainfall": 0.4, "temperature": 0.8}]', encoding="utf-8"
        )
        data = service.request("1.9")
        assert data.biomes[1].name == "plains"

    def test_other_datasets_unaffected(self, make_data_dir) -> None:
        data_dir = make_data_dir(unlisted_files=(("pc", "1.9", "biomes"),))
        service = MinecraftDataService(data_path=data_dir)
        with pytest.raises(MissingDataError):
            service.request("1.9")
        assert service.request("1.8").items[280].name == "stick"


class TestConcurrency:
    """Test concurrent requests."""

    def test_concurrent_requests_build_once(
        self, provider: InMemoryDataProvider, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        service = MinecraftDataService(provider=provider)
        builds: List[str] = []
        original = IndexBuilder.build

        def counting_build(self: IndexBuilder, resolution):
            builds.append(resolution.qualified_key)
            return original(self, resolution)

        monkeypatch.setattr(IndexBuilder, "build", counting_build)

        results: List[IndexedDataStore] = []
        lock = threading.Lock()

        def worker(version: str) -> None:
            data = service.request(version)
            with lock:
                results.append(data)

        threads = [
            threading.Thread(target=worker, args=(v,))
            for v in ["1.8", "1.8.8", "1.8.9", "1.8"] * 4
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert builds == ["pc_1.8"]
        assert len(results) == 16
        assert len({id(r.blocks) for r in results}) == 1


class TestStaticExports:
    """Test service-level version tables and schemas."""

    def test_supported_versions(self, service: MinecraftDataService) -> None:
        assert service.supported_versions["pc"] == ["1.4.2", "1.8", "1.9"]

    def test_version_tables(self, service: MinecraftDataService) -> None:
        assert service.versions_by_minecraft_version["pc"]["1.8.8"].version == 47
        assert service.pre_netty_versions_by_protocol_version["pc"][47].minecraft_version == "1.4.2"
        assert service.post_netty_versions_by_protocol_version["pc"][47].minecraft_version == "1.8.9"
        assert len(service.versions) == 11

    def test_schemas_loaded_lazily(self, make_data_dir) -> None:
        data_dir = make_data_dir(schemas={"blocks": {"type": "array", "items": {"type": "object"}}})
        service = MinecraftDataService(data_path=data_dir)
        assert list(service.schemas) == ["blocks"]
        assert service.schemas["blocks"]["items"]["type"] == "object"
        assert service.schemas["blocks"] is service.schemas["blocks"]
        with pytest.raises(KeyError):
            service.schemas["items"]


class TestProviderOverride:
    """Test services built on in-memory providers."""

    def test_in_memory_provider(self, provider: InMemoryDataProvider) -> None:
        service = MinecraftDataService(provider=provider)
        assert service.data_path is None
        assert service.request("1.9").items_by_name["elytra"].id == 443
        assert len(service.schemas) == 0

    def test_clear_cache(self, provider: InMemoryDataProvider) -> None:
        service = MinecraftDataService(provider=provider)
        first = service.request("1.9")
        service.clear_cache()
        assert service.request("1.9") is not first
