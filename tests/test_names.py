"""Tests for the name generator."""

import pytest
from hypothesis import given, settings

from ludus_sim.domain.errors import NameGenerationError, ValidationError
from ludus_sim.systems.names import NameGenerator
from tests.helpers.strategies import name_parts_strategy, seeds

PREFIXES = ["Gaius", "Marcus", "Titus"]
COGNOMENS = ["Rufus", "Magnus"]


def test_issues_every_combination_once() -> None:
    generator = NameGenerator(7, PREFIXES, COGNOMENS)
    assert generator.capacity == 6
    names = [generator.generate_next() for _ in range(6)]
    assert sorted(names) == sorted(f"{p} {c}" for p in PREFIXES for c in COGNOMENS)
    assert generator.remaining == 0
    with pytest.raises(NameGenerationError):
        generator.generate_next()
    assert generator.try_generate() is None


def test_same_seed_same_order() -> None:
    a = NameGenerator(123, PREFIXES, COGNOMENS)
    b = NameGenerator(123, PREFIXES, COGNOMENS)
    assert [a.generate_next() for _ in range(6)] == [b.generate_next() for _ in range(6)]


def test_entries_are_trimmed() -> None:
    generator = NameGenerator(1, ["  Aulus "], ["Varus  "])
    assert generator.generate_next() == "Aulus Varus"


@pytest.mark.parametrize(
    "prefixes,cognomens",
    [
        ([], ["Rufus"]),
        (["Gaius"], []),
        (["Gaius", "  "], ["Rufus"]),
        (["Gaius", " Gaius"], ["Rufus"]),
    ],
)
def test_invalid_lists(prefixes, cognomens) -> None:
    with pytest.raises(ValidationError):
        NameGenerator(1, prefixes, cognomens)


def test_resume_from_issued_count() -> None:
    full = NameGenerator(55, PREFIXES, COGNOMENS)
    expected = [full.generate_next() for _ in range(6)]
    resumed = NameGenerator(55, PREFIXES, COGNOMENS, issued=3)
    assert resumed.issued == 3
    assert resumed.generate_next() == expected[3]
    with pytest.raises(ValidationError):
        NameGenerator(55, PREFIXES, COGNOMENS, issued=7)


@given(prefixes=name_parts_strategy(), cognomens=name_parts_strategy(), seed=seeds)
@settings(max_examples=25)
def test_pool_exhaustion_never_repeats(prefixes, cognomens, seed: int) -> None:
    generator = NameGenerator(seed, prefixes, cognomens)
    total = len(prefixes) * len(cognomens)
    names = [generator.generate_next() for _ in range(total)]
    assert len(set(names)) == total
    assert generator.try_generate() is None
