"""Tests for element-wise mappers.

Validates:
- Length/order preservation and keyed (dict) outputs
- Typed map coercion and TypeMismatch positions
- map_if / map_at pass-through semantics and selector policy
- map2 / pmap alignment and LengthMismatch
- Fail-fast error propagation and side-effect ordering
"""

from __future__ import annotations

import math

import pytest

from mapfold import (
    LengthMismatch,
    SelectorError,
    TypeMismatch,
    compact,
    discard,
    imap,
    keep,
    map2,
    map_,
    map_at,
    map_chr,
    map_dbl,
    map_if,
    map_int,
    map_lgl,
    pluck,
    pmap,
    walk,
)


# ═════════════════════════════════════════════════════════════════════════════
# Generic map
# ═════════════════════════════════════════════════════════════════════════════


def test_map_preserves_length_and_order() -> None:
    """map_(s, f)[i] == f(s[i]) for every index."""
    s = [3, 1, 4, 1, 5, 9]
    out = map_(s, lambda x: x * x)
    assert len(out) == len(s)
    assert out == [x * x for x in s]


def test_map_forwards_extra_args() -> None:
    """Extra positional and keyword args reach f after the element."""
    assert map_([1, 2], lambda x, y, z=0: x + y + z, 10, z=100) == [111, 112]


def test_map_over_mapping_keeps_keys() -> None:
    """Mapping input yields a dict with the same keys in the same order."""
    out = map_({"b": 2, "a": 1}, str)
    assert out == {"b": "2", "a": "1"}
    assert list(out) == ["b", "a"]


def test_map_does_not_mutate_input() -> None:
    """Input container is left untouched."""
    s = [1, 2, 3]
    map_(s, lambda x: x + 1)
    assert s == [1, 2, 3]


def test_map_accepts_generators() -> None:
    """Any finite iterable works and produces a list."""
    assert map_((x for x in range(3)), lambda x: -x) == [0, -1, -2]


def test_map_empty() -> None:
    """Empty input gives empty output without calling f."""
    assert map_([], lambda x: 1 / 0) == []


def test_map_fail_fast() -> None:
    """First error propagates and later elements are not visited."""
    seen: list[int] = []

    def f(x: int) -> float:
        seen.append(x)
        return 1 / x

    with pytest.raises(ZeroDivisionError):
        map_([1, 0, 2], f)
    assert seen == [1, 0]


def test_map_side_effects_in_order() -> None:
    """Side effects happen once per element, in sequence order."""
    log: list[str] = []
    map_(["a", "b", "c"], log.append)
    assert log == ["a", "b", "c"]


# ═════════════════════════════════════════════════════════════════════════════
# Extractor shorthand
# ═════════════════════════════════════════════════════════════════════════════


def test_map_with_key_extractor() -> None:
    """A str mapper extracts that key from each element."""
    rows = [{"name": "x", "n": 1}, {"name": "y", "n": 2}]
    assert map_(rows, "name") == ["x", "y"]


def test_map_with_index_extractor_and_default() -> None:
    """An int mapper extracts a position; missing positions fall back to default."""
    assert map_([(1, 2), (3,)], 1, default=-1) == [2, -1]


def test_map_with_path_extractor() -> None:
    """A list path walks nested structures."""
    data = [{"a": [0, {"b": "deep"}]}]
    assert map_(data, ["a", 1, "b"]) == ["deep"]


def test_pluck_attribute_access() -> None:
    """pluck falls back to attributes for str keys."""
    assert pluck(3 + 4j, "imag") == 4.0
    assert pluck(object(), "missing", default="d") == "d"


def test_invalid_mapper_rejected() -> None:
    """Non-callable, non-extractor mappers raise TypeError."""
    with pytest.raises(TypeError):
        map_([1], 1.5)  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        map_([1], True)  # type: ignore[arg-type]


# ═════════════════════════════════════════════════════════════════════════════
# Typed maps
# ═════════════════════════════════════════════════════════════════════════════


def test_map_dbl_coerces_numbers() -> None:
    """Ints and bools become floats."""
    out = map_dbl([1, 4, True], lambda x: x)
    assert out == [1.0, 4.0, 1.0]
    assert all(type(v) is float for v in out)


def test_map_dbl_type_mismatch_names_index() -> None:
    """Incoercible result raises TypeMismatch with the offending index."""
    with pytest.raises(TypeMismatch) as exc_info:
        map_dbl([1, 2, 3], lambda x: "three" if x == 3 else x)
    assert exc_info.value.position == 2
    assert exc_info.value.operation == "map_dbl"
    assert isinstance(exc_info.value, TypeError)


def test_map_dbl_type_mismatch_names_key() -> None:
    """Keyed inputs report the key, not a position."""
    with pytest.raises(TypeMismatch) as exc_info:
        map_dbl({"a": 1, "b": None}, lambda x: x)
    assert exc_info.value.position == "b"


def test_map_int_accepts_integral_floats_only() -> None:
    """2.0 coerces to 2; 2.5 is a mismatch."""
    assert map_int([2.0, 3, False], lambda x: x) == [2, 3, 0]
    with pytest.raises(TypeMismatch):
        map_int([2.5], lambda x: x)
    with pytest.raises(TypeMismatch):
        map_int([math.inf], lambda x: x)


def test_map_chr() -> None:
    """Strings pass, numbers render, None fails."""
    assert map_chr([1, "b", 2.5], lambda x: x) == ["1", "b", "2.5"]
    with pytest.raises(TypeMismatch):
        map_chr([None], lambda x: x)


def test_map_lgl() -> None:
    """Booleans pass, 0/1 coerce, other values fail."""
    assert map_lgl([0, 1, 2], lambda x: x > 0) == [False, True, True]
    assert map_lgl([0, 1], lambda x: x) == [False, True]
    with pytest.raises(TypeMismatch):
        map_lgl([2], lambda x: x)


def test_typed_map_is_fail_fast() -> None:
    """Coercion happens per element, so f is not called past the bad one."""
    seen: list[int] = []

    def f(x: int) -> object:
        seen.append(x)
        return "bad" if x == 1 else x

    with pytest.raises(TypeMismatch):
        map_dbl([0, 1, 2], f)
    assert seen == [0, 1]


# ═════════════════════════════════════════════════════════════════════════════
# Guarded maps
# ═════════════════════════════════════════════════════════════════════════════


def test_map_if_identity_for_failing_predicate() -> None:
    """Elements failing the predicate are the very same objects."""
    marker = ["untouched"]
    s = [1, marker, 3]
    out = map_if(s, lambda x: isinstance(x, int), lambda x: x * 10)
    assert out[0] == 10 and out[2] == 30
    assert out[1] is marker


def test_map_if_else_branch() -> None:
    """else_ transforms the elements failing the predicate."""
    out = map_if([1, 2, 3, 4], lambda x: x % 2 == 0, lambda x: "even", else_=lambda x: "odd")
    assert out == ["odd", "even", "odd", "even"]


def test_map_if_predicate_extractor() -> None:
    """Predicate accepts extractor shorthand too."""
    rows = [{"keep": True, "v": 1}, {"keep": False, "v": 2}]
    out = map_if(rows, "keep", lambda r: r["v"])
    assert out == [1, {"keep": False, "v": 2}]


def test_map_at_positions() -> None:
    """Selected positions are transformed, negative counts from the end."""
    assert map_at([1, 2, 3, 4], [0, -1], lambda x: -x) == [-1, 2, 3, -4]


def test_map_at_keys() -> None:
    """Mapping selectors match keys."""
    assert map_at({"a": 1, "b": 2}, "b", lambda x: x * 100) == {"a": 1, "b": 200}


def test_map_at_position_on_mapping() -> None:
    """An int selector that is not a key falls back to position."""
    assert map_at({"a": 1, "b": 2}, 0, lambda x: 0) == {"a": 0, "b": 2}


def test_map_at_duplicates_apply_once() -> None:
    """Duplicate selectors do not apply f twice."""
    assert map_at([1, 2], [1, 1, -1], lambda x: x + 1) == [1, 3]


def test_map_at_ignores_missing_by_default() -> None:
    """Out-of-range indices and unknown keys are ignored under the default policy."""
    assert map_at([1, 2], [5, "zz"], lambda x: 0) == [1, 2]


def test_map_at_strict_raises() -> None:
    """strict=True raises SelectorError naming the first missing selector."""
    with pytest.raises(SelectorError) as exc_info:
        map_at([1, 2], [0, 7], lambda x: 0, strict=True)
    assert exc_info.value.position == 7


def test_map_at_unhashable_selector_is_missing() -> None:
    """An unhashable selector on a mapping counts as missing under either policy."""
    assert map_at({"a": 1}, [["a"]], lambda x: x + 1) == {"a": 1}
    assert map_at({"a": 1}, [(["a"],), "a"], lambda x: x + 1) == {"a": 2}
    with pytest.raises(SelectorError) as exc_info:
        map_at({"a": 1}, [["a"]], lambda x: x + 1, strict=True)
    assert exc_info.value.position == ["a"]


def test_map_at_policy_from_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    """MAPFOLD_MAP_SELECTOR_POLICY=error makes missing selectors fail."""
    from mapfold.foundation.config import clear_settings_cache

    monkeypatch.setenv("MAPFOLD_MAP_SELECTOR_POLICY", "error")
    clear_settings_cache()
    with pytest.raises(SelectorError):
        map_at([1], 3, lambda x: x)
    assert map_at([1], 3, lambda x: x, strict=False) == [1]


# ═════════════════════════════════════════════════════════════════════════════
# Multi-sequence maps
# ═════════════════════════════════════════════════════════════════════════════


def test_map2_aligned() -> None:
    """f receives one element from each sequence, positionally aligned."""
    assert map2([1, 2, 3], [10, 20, 30], lambda x, y: x + y) == [11, 22, 33]


def test_map2_length_mismatch() -> None:
    """Unequal lengths never truncate."""
    with pytest.raises(LengthMismatch) as exc_info:
        map2([1, 2, 3], [1, 2], lambda x, y: x)
    assert "xs=3" in str(exc_info.value) and "ys=2" in str(exc_info.value)
    assert isinstance(exc_info.value, ValueError)


def test_map2_keeps_keys_of_first() -> None:
    """Keys of xs label the output."""
    assert map2({"a": 1, "b": 2}, [10, 20], lambda x, y: x * y) == {"a": 10, "b": 40}


def test_pmap_positional() -> None:
    """N columns map in lockstep."""
    assert pmap([[1, 2], [3, 4], [5, 6]], lambda a, b, c: a * b + c) == [8, 14]


def test_pmap_named_columns() -> None:
    """A mapping of columns passes keyword arguments."""
    out = pmap({"n": [1, 2], "mean": [0.0, 5.0]}, lambda n, mean: f"{n}@{mean}")
    assert out == ["1@0.0", "2@5.0"]


def test_pmap_length_mismatch() -> None:
    """Any column of different length fails."""
    with pytest.raises(LengthMismatch):
        pmap([[1, 2], [1, 2], [1]], lambda *xs: xs)
    with pytest.raises(LengthMismatch):
        pmap({"a": [1], "b": []}, lambda a, b: a)


def test_pmap_empty() -> None:
    """No columns, no rows."""
    assert pmap([], lambda: 1) == []


# ═════════════════════════════════════════════════════════════════════════════
# imap / walk / filtering
# ═════════════════════════════════════════════════════════════════════════════


def test_imap_index_and_key() -> None:
    """f receives the index for sequences and the key for mappings."""
    assert imap(["a", "b"], lambda x, i: f"{i}:{x}") == ["0:a", "1:b"]
    assert imap({"k": 1}, lambda x, k: f"{k}={x}") == {"k": "k=1"}


def test_walk_returns_input() -> None:
    """walk runs f for effects and returns the same object."""
    seen: list[int] = []
    s = [1, 2]
    assert walk(s, seen.append) is s
    assert seen == [1, 2]


def test_keep_and_discard() -> None:
    """Filters preserve the container kind."""
    assert keep([1, 2, 3, 4], lambda x: x % 2 == 0) == [2, 4]
    assert discard({"a": 1, "b": 2}, lambda x: x > 1) == {"a": 1}


def test_compact() -> None:
    """None entries are dropped, falsy values kept."""
    assert compact([0, None, "", None, 1]) == [0, "", 1]
    assert compact({"a": None, "b": 0}) == {"b": 0}
