"""
Cellular (Worley) noise with the "cell value" return type.

The plane is cut into unit lattice cells after scaling by ``frequency``.
Every lattice cell owns one feature point, jittered away from the cell centre
by a hash of the cell coordinates and the seed. A sample returns the
pseudo-random value in [-1, 1) belonging to the nearest feature point, so the
output is piecewise constant: flat patches separated by sharp cell borders.
Distance uses the "natural" metric (euclidean squared plus manhattan), which
gives slightly rounder patches than either metric alone.

Everything is vectorized over numpy arrays of sample coordinates.
"""

from __future__ import annotations

import numpy as np

from burrow import config

_PRIME_X = np.uint64(501125321)
_PRIME_Y = np.uint64(1136930381)
_SALT_X = np.uint64(0x9E3779B97F4A7C15)
_SALT_Y = np.uint64(0xC2B2AE3D27D4EB4F)
_MIX_1 = np.uint64(0xFF51AFD7ED558CCD)
_MIX_2 = np.uint64(0xC4CEB9FE1A85EC53)
_SHIFT = np.uint64(33)
_MANTISSA_SHIFT = np.uint64(11)
_MANTISSA_SCALE = 1.0 / float(1 << 53)


def _fmix64(h: np.ndarray) -> np.ndarray:
    """MurmurHash3 finalizer. Wraps modulo 2**64 like the C original."""
    h = h ^ (h >> _SHIFT)
    h = h * _MIX_1
    h = h ^ (h >> _SHIFT)
    h = h * _MIX_2
    return h ^ (h >> _SHIFT)


def _unit(h: np.ndarray) -> np.ndarray:
    """Map hashes to floats in [0, 1)."""
    return (h >> _MANTISSA_SHIFT).astype(np.float64) * _MANTISSA_SCALE


class CellularNoise:
    """Seeded 2-D cellular noise field."""

    def __init__(
        self,
        seed: int,
        frequency: float = config.REGION_NOISE_FREQUENCY,
        jitter: float = config.REGION_NOISE_JITTER,
    ) -> None:
        if frequency <= 0:
            raise ValueError(f"Noise frequency must be positive, got {frequency}")
        self.seed = seed
        self.frequency = frequency
        self.jitter = jitter
        self._seed_hash = _fmix64(np.array([seed], dtype=np.uint64))

    def _hash(self, cell_x: np.ndarray, cell_y: np.ndarray) -> np.ndarray:
        h = (
            self._seed_hash
            ^ (cell_x.astype(np.uint64) * _PRIME_X)
            ^ (cell_y.astype(np.uint64) * _PRIME_Y)
        )
        return _fmix64(h)

    def sample(self, xs: np.ndarray, ys: np.ndarray) -> np.ndarray:
        """Noise values in [-1, 1) at the given coordinate arrays."""
        px = np.atleast_1d(np.asarray(xs, dtype=np.float64)) * self.frequency
        py = np.atleast_1d(np.asarray(ys, dtype=np.float64)) * self.frequency
        base_x = np.floor(px).astype(np.int64)
        base_y = np.floor(py).astype(np.int64)

        best_distance = np.full(px.shape, np.inf)
        best_value = np.zeros(px.shape)

        for dy in (-1, 0, 1):
            for dx in (-1, 0, 1):
                cell_x = base_x + dx
                cell_y = base_y + dy
                h = self._hash(cell_x, cell_y)

                offset_x = (_unit(_fmix64(h ^ _SALT_X)) * 2.0 - 1.0) * self.jitter
                offset_y = (_unit(_fmix64(h ^ _SALT_Y)) * 2.0 - 1.0) * self.jitter
                vec_x = cell_x + 0.5 + offset_x - px
                vec_y = cell_y + 0.5 + offset_y - py

                distance = (
                    vec_x * vec_x + vec_y * vec_y + np.abs(vec_x) + np.abs(vec_y)
                )
                closer = distance < best_distance
                best_distance = np.where(closer, distance, best_distance)
                best_value = np.where(closer, _unit(h) * 2.0 - 1.0, best_value)

        return best_value

    def __call__(self, x: float, y: float) -> float:
        return float(self.sample(np.array([x]), np.array([y]))[0])
