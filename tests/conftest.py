from __future__ import annotations

from collections.abc import Iterator

import pytest

from burrow.util import rng


class ScriptedRNG:
    """Stands in for an RNG, answering ``randint`` calls from a fixed list."""

    def __init__(self, values: list[int]) -> None:
        self.values = list(values)
        self.calls: list[tuple[int, int]] = []

    def randint(self, a: int, b: int) -> int:
        self.calls.append((a, b))
        value = self.values.pop(0)
        assert a <= value <= b, f"scripted roll {value} outside {a}..{b}"
        return value


@pytest.fixture(autouse=True)
def reset_rng_provider() -> Iterator[None]:
    """Give every test a fresh, deterministically seeded global RNG provider."""
    rng._provider = None
    rng.init(12345)
    yield
    rng._provider = None


@pytest.fixture
def scripted_rng() -> type[ScriptedRNG]:
    return ScriptedRNG
