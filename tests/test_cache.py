"""Tests for the process-wide store cache."""

import threading
import time
from typing import List

import pytest

from mcdata.game_data import StoreCache


class TestStoreCache:
    """Test build-once semantics."""

    def test_builds_once(self) -> None:
        cache: StoreCache[str, object] = StoreCache()
        calls: List[int] = []

        def build() -> object:
            calls.append(1)
            return object()

        first = cache.get_or_build("pc_1.8", build)
        second = cache.get_or_build("pc_1.8", build)
        assert first is second
        assert len(calls) == 1
        assert "pc_1.8" in cache
        assert len(cache) == 1

    def test_failed_build_is_not_cached(self) -> None:
        cache: StoreCache[str, object] = StoreCache()

        def failing() -> object:
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            cache.get_or_build("pc_1.8", failing)
        assert cache.get("pc_1.8") is None

        value = object()
        assert cache.get_or_build("pc_1.8", lambda: value) is value

    def test_concurrent_requests_build_once(self) -> None:
        cache: StoreCache[str, object] = StoreCache()
        calls: List[int] = []
        results: List[object] = []
        lock = threading.Lock()

        def slow_build() -> object:
            calls.append(1)
            time.sleep(0.05)
            return object()

        def worker() -> None:
            value = cache.get_or_build("pc_1.8", slow_build)
            with lock:
                results.append(value)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(calls) == 1
        assert len(results) == 8
        assert all(r is results[0] for r in results)

    def test_clear(self) -> None:
        cache: StoreCache[str, int] = StoreCache()
        cache.get_or_build("a", lambda: 1)
        cache.clear()
        assert len(cache) == 0
        assert cache.get("a") is None

    def test_clear_during_build_does_not_build_twice(self) -> None:
        """A request arriving after clear() waits for the build already running."""
        cache: StoreCache[str, object] = StoreCache()
        calls: List[int] = []
        started = threading.Event()
        release = threading.Event()
        results: List[object] = []

        def build() -> object:
            calls.append(1)
            if len(calls) == 1:
                started.set()
                release.wait(timeout=5)
            return object()

        def worker() -> None:
            results.append(cache.get_or_build("pc_1.8", build))

        first = threading.Thread(target=worker)
        first.start()
        assert started.wait(timeout=5)

        cache.clear()
        second = threading.Thread(target=worker)
        second.start()
        time.sleep(0.05)
        release.set()
        first.join()
        second.join()

        assert len(calls) == 1
        assert len(results) == 2
        assert results[0] is results[1]
