"""Seeded random streams for level generation.

Every subsystem that needs randomness asks for a named stream derived from one
master seed. Generation code never touches the global ``random`` module:
builders, the solver and the spawner all receive an explicit ``RNG`` handle,
so a level can be reproduced from its seed as long as call order is preserved.

Usage:
    from burrow.util import rng
    rng.init("burrito1")

    level_rng = rng.get("map.generation")
    builder = random_builder(depth, level_rng)

    # Tests can skip the provider entirely and pass random.Random(42).

Domain names in use:
    - "map.generation" - builder selection and every builder's own draws
    - "world.spawning" - spawn counts, tile picks and random-table rolls
"""

from __future__ import annotations

import zlib
from random import Random
from typing import TYPE_CHECKING, TypeAlias

from burrow import config

if TYPE_CHECKING:
    from burrow.types import RandomSeed


class RNGStream:
    """Cacheable handle to the current ``Random`` for one domain.

    The underlying generator is looked up on every call, so a handle obtained
    before ``rng.reset()`` keeps working and follows the new seed.
    """

    def __init__(self, provider: RNGProvider, domain: str) -> None:
        self._provider = provider
        self._domain = domain

    @property
    def domain(self) -> str:
        return self._domain

    def _rng(self) -> Random:
        return self._provider._get_raw(self._domain)

    def randint(self, a: int, b: int) -> int:
        """Return random integer N such that a <= N <= b."""
        return self._rng().randint(a, b)

    def randrange(self, start: int, stop: int | None = None, step: int = 1) -> int:
        return self._rng().randrange(start, stop, step)


# Anything generation code accepts as its randomness source.
RNG: TypeAlias = Random | RNGStream


class RNGProvider:
    """Owns one ``Random`` per domain, each seeded from the master seed."""

    def __init__(self, master_seed: RandomSeed = None) -> None:
        self._master_seed = master_seed
        self._streams: dict[str, Random] = {}
        self._proxies: dict[str, RNGStream] = {}

    @property
    def master_seed(self) -> RandomSeed:
        return self._master_seed

    def get(self, domain: str) -> RNGStream:
        """Return the (cached) stream handle for ``domain``."""
        if domain not in self._proxies:
            self._proxies[domain] = RNGStream(self, domain)
        return self._proxies[domain]

    def _get_raw(self, domain: str) -> Random:
        if domain not in self._streams:
            if self._master_seed is None:
                self._streams[domain] = Random()
            else:
                # crc32 rather than hash(): hash() of str is salted per process
                derived_seed = zlib.crc32(f"{self._master_seed}:{domain}".encode())
                self._streams[domain] = Random(derived_seed)
        return self._streams[domain]

    def reset(self, master_seed: RandomSeed = None) -> None:
        """Reseed every domain. Existing handles stay valid."""
        self._master_seed = master_seed
        self._streams.clear()


# =============================================================================
# Module-level API
# =============================================================================

_provider: RNGProvider | None = None


def init(master_seed: RandomSeed = None) -> None:
    """Initialize (or reseed) the global provider."""
    global _provider
    if _provider is not None:
        _provider.reset(master_seed)
    else:
        _provider = RNGProvider(master_seed)


def get(domain: str) -> RNGStream:
    """Return the global stream for ``domain``.

    Auto-initializes from ``config.RANDOM_SEED`` if ``init()`` was never called.
    """
    global _provider
    if _provider is None:
        _provider = RNGProvider(config.RANDOM_SEED)
    return _provider.get(domain)


def reset(master_seed: RandomSeed = None) -> None:
    """Reseed the global provider. Requires a prior ``init()``."""
    if _provider is None:
        raise RuntimeError("RNG not initialized - call rng.init() first")
    _provider.reset(master_seed)
