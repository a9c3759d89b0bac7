"""Tests for the lookup cache."""

from __future__ import annotations

import threading

from swatchx.discovery.cache import LookupCache, QueryKey
from swatchx.discovery.classifier import ClassificationResult


def _result(point: int, label: str, param_a: int = 50, param_b: int = 50) -> ClassificationResult:
    return ClassificationResult(point=point, param_a=param_a, param_b=param_b, label=label)


class TestQueryKey:
    def test_equal_when_all_fields_match(self) -> None:
        assert QueryKey(10, 50, 50) == QueryKey(10, 50, 50)
        assert hash(QueryKey(10, 50, 50)) == hash(QueryKey(10, 50, 50))

    def test_fields_are_not_interchangeable(self) -> None:
        # "1,23" vs "12,3" would collide as a naive joined string
        assert QueryKey(1, 23, 5) != QueryKey(12, 3, 5)
        assert QueryKey(10, 50, 60) != QueryKey(10, 60, 50)


class TestLookupCache:
    def test_get_missing_returns_none(self) -> None:
        cache = LookupCache()
        assert cache.get(QueryKey(0, 50, 50)) is None
        assert not cache.has(QueryKey(0, 50, 50))

    def test_put_then_get(self) -> None:
        cache = LookupCache()
        key = QueryKey(0, 50, 50)
        result = _result(0, "Red")

        returned = cache.put(key, result)

        assert returned is result
        assert cache.get(key) is result
        assert cache.has(key)
        assert len(cache) == 1

    def test_put_never_overwrites(self) -> None:
        cache = LookupCache()
        key = QueryKey(0, 50, 50)
        first = _result(0, "Red")
        second = _result(0, "Crimson")

        cache.put(key, first)
        returned = cache.put(key, second)

        assert returned is first
        assert cache.get(key) is first
        assert len(cache) == 1

    def test_keys_differ_by_params(self) -> None:
        cache = LookupCache()
        cache.put(QueryKey(0, 50, 50), _result(0, "Red"))
        cache.put(QueryKey(0, 50, 20), _result(0, "Maroon", param_b=20))

        assert cache.get(QueryKey(0, 50, 50)).label == "Red"  # type: ignore[union-attr]
        assert cache.get(QueryKey(0, 50, 20)).label == "Maroon"  # type: ignore[union-attr]
        assert len(cache) == 2

    def test_has_all(self) -> None:
        cache = LookupCache()
        for point in (0, 10, 20):
            cache.put(QueryKey(point, 50, 50), _result(point, "Red"))

        assert cache.has_all(QueryKey(p, 50, 50) for p in (0, 10, 20))
        assert not cache.has_all(QueryKey(p, 50, 50) for p in (0, 10, 30))
        assert cache.has_all([])

    def test_reset_clears_everything(self) -> None:
        cache = LookupCache()
        cache.put(QueryKey(0, 50, 50), _result(0, "Red"))
        cache.put(QueryKey(10, 50, 50), _result(10, "Red"))

        cache.reset()

        assert len(cache) == 0
        assert cache.get(QueryKey(0, 50, 50)) is None

    def test_concurrent_puts_keep_a_single_value(self) -> None:
        cache = LookupCache()
        key = QueryKey(0, 50, 50)
        results = [_result(0, f"Label {i}") for i in range(16)]
        returned: list[ClassificationResult] = []
        barrier = threading.Barrier(len(results))

        def writer(result: ClassificationResult) -> None:
            barrier.wait()
            returned.append(cache.put(key, result))

        threads = [threading.Thread(target=writer, args=(r,)) for r in results]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        stored = cache.get(key)
        assert stored is not None
        assert all(r is stored for r in returned)
        assert len(cache) == 1
