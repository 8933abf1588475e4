from __future__ import annotations

import copy
import importlib
import pickle
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[2]
PYTHON_DIR = ROOT / "python"
sys.path.insert(0, str(PYTHON_DIR))

simple_data = importlib.import_module("simple_data")
ABSENT = simple_data.ABSENT
SimpleCache = simple_data.SimpleCache
TypeInvalid = simple_data.TypeInvalid


class CountingProducer:
    def __init__(self, value) -> None:
        self.value = value
        self.calls: list[object] = []

    def __call__(self, key):
        self.calls.append(key)
        return self.value


def test_get_miss_without_producer_returns_absent() -> None:
    cache = SimpleCache()
    assert cache.get("k") is ABSENT
    assert "k" not in cache


def test_get_miss_with_producer_stores_result() -> None:
    cache = SimpleCache()
    producer = CountingProducer(5)
    assert cache.get("k", producer) == 5
    assert producer.calls == ["k"]
    assert cache["k"] == 5


def test_get_hit_does_not_invoke_producer() -> None:
    cache = SimpleCache()
    cache.get("k", lambda key: 5)
    producer = CountingProducer(99)
    assert cache.get("k") == 5
    assert cache.get("k", producer) == 5
    assert producer.calls == []


def test_get_absent_result_is_returned_but_not_stored() -> None:
    cache = SimpleCache()
    assert cache.get("k", lambda key: ABSENT) is ABSENT
    assert "k" not in cache


def test_none_is_a_real_cached_value() -> None:
    cache = SimpleCache()
    assert cache.get("k", lambda key: None) is None
    assert "k" in cache
    producer = CountingProducer(1)
    assert cache.get("k", producer) is None
    assert producer.calls == []


def test_get_ignores_non_callable_producer() -> None:
    cache = SimpleCache()
    assert cache.get("k", 5) is ABSENT
    assert len(cache) == 0


def test_delete_forces_recompute() -> None:
    cache = SimpleCache()
    producer = CountingProducer("v")
    cache.get("k", producer)
    del cache["k"]
    cache.get("k", producer)
    assert producer.calls == ["k", "k"]


def test_set_with_always_invokes_and_overwrites() -> None:
    cache = SimpleCache(k=1)
    assert cache.set_with("k", lambda key: 2) == 2
    assert cache["k"] == 2


def test_set_with_absent_keeps_existing_entry_by_default() -> None:
    cache = SimpleCache(k=1)
    assert cache.set_with("k", lambda key: ABSENT) is ABSENT
    assert cache["k"] == 1


def test_set_with_absent_deletes_when_requested() -> None:
    cache = SimpleCache(k=1)
    assert cache.set_with("k", lambda key: ABSENT, True) is ABSENT
    assert "k" not in cache


def test_set_with_absent_delete_on_missing_key_is_noop() -> None:
    cache = SimpleCache()
    cache.set_with("k", lambda key: ABSENT, delete_on_absent=True)
    assert len(cache) == 0


@pytest.mark.parametrize("producer", [None, 5, "callable", object()])
def test_set_with_requires_callable(producer) -> None:
    cache = SimpleCache()
    with pytest.raises(TypeInvalid):
        cache.set_with("k", producer)


def test_type_invalid_is_a_type_error() -> None:
    with pytest.raises(TypeError):
        SimpleCache().set_with("k", None)


def test_dict_operations_behave_normally() -> None:
    cache = SimpleCache()
    cache["a"] = 1
    cache["b"] = 2
    assert "a" in cache
    assert len(cache) == 2
    assert sorted(cache) == ["a", "b"]
    assert cache.pop("a") == 1
    cache.clear()
    assert len(cache) == 0


def test_non_string_keys() -> None:
    cache = SimpleCache()
    key = ("tuple", 1)
    assert cache.get(key, lambda k: k[1]) == 1
    assert cache[key] == 1


def test_absent_is_a_falsy_singleton() -> None:
    assert not ABSENT
    assert repr(ABSENT) == "ABSENT"
    assert type(ABSENT)() is ABSENT
    assert copy.copy(ABSENT) is ABSENT
    assert copy.deepcopy(ABSENT) is ABSENT
    assert pickle.loads(pickle.dumps(ABSENT)) is ABSENT
