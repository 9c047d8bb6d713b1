from __future__ import annotations

from typing import Iterable

from ludus_sim.domain.errors import NameGenerationError, ValidationError
from ludus_sim.sim.rng import DEFAULT_SEED, SeededRng


def _normalize(items: Iterable[str], label: str) -> tuple[str, ...]:
    normalized: list[str] = []
    seen: set[str] = set()
    for item in items:
        if item is None:
            raise ValidationError(f"{label} cannot contain None")
        trimmed = item.strip()
        if not trimmed:
            raise ValidationError(f"{label} cannot contain blank entries")
        if trimmed in seen:
            raise ValidationError(f"{label} contains a duplicate: {trimmed!r}")
        seen.add(trimmed)
        normalized.append(trimmed)
    if not normalized:
        raise ValidationError(f"{label} cannot be empty")
    return tuple(normalized)


class NameGenerator:
    """Issues "{prefix} {cognomen}" names from a pool shuffled once per seed, never repeating."""

    def __init__(
        self,
        seed: int = DEFAULT_SEED,
        prefixes: Iterable[str] = (),
        cognomens: Iterable[str] = (),
        *,
        issued: int = 0,
    ) -> None:
        self.prefixes = _normalize(prefixes, "prefixes")
        self.cognomens = _normalize(cognomens, "cognomens")
        self.seed = seed
        pool = [f"{prefix} {cognomen}" for prefix in self.prefixes for cognomen in self.cognomens]
        rng = SeededRng(seed)
        for i in range(len(pool) - 1, 0, -1):
            j = rng.next_int(0, i)
            pool[i], pool[j] = pool[j], pool[i]
        self._pool = tuple(pool)
        if not 0 <= issued <= len(self._pool):
            raise ValidationError(f"issued must be in [0, {len(self._pool)}], got {issued}")
        self._index = issued

    @property
    def capacity(self) -> int:
        return len(self._pool)

    @property
    def issued(self) -> int:
        return self._index

    @property
    def remaining(self) -> int:
        return len(self._pool) - self._index

    def generate_next(self) -> str:
        if self._index >= len(self._pool):
            raise NameGenerationError("Name pool exhausted: every combination has been issued")
        name = self._pool[self._index]
        self._index += 1
        return name

    def try_generate(self) -> str | None:
        if self._index >= len(self._pool):
            return None
        return self.generate_next()
