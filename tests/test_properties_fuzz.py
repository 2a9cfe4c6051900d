"""Property-based tests for objecthash invariants using hypothesis."""

from __future__ import annotations

import random
import unicodedata
from concurrent.futures import ThreadPoolExecutor

from hypothesis import HealthCheck, given, settings, strategies as st

from objecthash import digest

_text = st.text(
    alphabet=st.characters(exclude_categories=("Cs",)), max_size=16
)
_scalars = st.one_of(st.integers(), _text)
_keys = st.one_of(st.integers(), _text.map(lambda s: unicodedata.normalize("NFC", s)))
_values = st.recursive(
    _scalars,
    lambda children: st.one_of(
        st.lists(children, max_size=4),
        st.dictionaries(_keys, children, max_size=4),
    ),
    max_leaves=20,
)


@given(value=_values)
def test_digest_is_deterministic(value: object) -> None:
    assert digest(value) == digest(value)


@given(value=_values)
def test_digest_has_fixed_length(value: object) -> None:
    assert len(digest(value)) == 32


@given(text=_text)
def test_unicode_equivalent_forms_agree(text: str) -> None:
    nfd = unicodedata.normalize("NFD", text)
    nfc = unicodedata.normalize("NFC", text)
    assert digest(nfd) == digest(text) == digest(nfc)


@settings(suppress_health_check=[HealthCheck.too_slow])
@given(
    entries=st.dictionaries(st.integers(), _scalars, min_size=2, max_size=8),
    seed=st.integers(min_value=0, max_value=2**32 - 1),
)
def test_mapping_digest_ignores_insertion_order(
    entries: dict[int, object], seed: int
) -> None:
    items = list(entries.items())
    random.Random(seed).shuffle(items)
    assert digest(dict(items)) == digest(entries)


@given(
    elements=st.lists(st.integers(), min_size=2, max_size=8, unique=True)
)
def test_sequence_digest_depends_on_order(elements: list[int]) -> None:
    assert digest(elements) != digest(list(reversed(elements)))


@given(number=st.integers())
def test_integer_differs_from_its_text(number: int) -> None:
    assert digest(number) != digest(str(number))


def test_concurrent_hashing_matches_sequential() -> None:
    """Independent digests computed on worker threads match the serial result."""
    values = [{"id": index, "tags": [str(index), index * 3]} for index in range(64)]
    expected = [digest(value) for value in values]
    with ThreadPoolExecutor(max_workers=8) as pool:
        assert list(pool.map(digest, values)) == expected
