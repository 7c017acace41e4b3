"""Perlin simplex noise in one, two and three dimensions, with fBm summation."""

from __future__ import annotations

import math
import random
from collections.abc import Sequence

__all__ = ["SimplexNoise", "fast_floor"]

# Skewing and unskewing factors.
_F2 = 0.366025403  # (sqrt(3) - 1) / 2
_G2 = 0.211324865  # (3 - sqrt(3)) / 6
_F3 = 1.0 / 3.0
_G3 = 1.0 / 6.0

_PERM_SIZE = 256


def fast_floor(fp: float) -> int:
    """Return the largest integer not greater than ``fp``."""
    i = int(fp)
    return i - 1 if fp < i else i


class SimplexNoise:
    """Simplex noise generator with a seeded permutation table.

    The fractal parameters describe a fractional Brownian motion sum:
    the first octave has the given frequency and amplitude, and each
    following octave multiplies them by ``lacunarity`` and ``persistence``.
    """

    def __init__(
        self,
        frequency: float = 1.0,
        amplitude: float = 1.0,
        lacunarity: float = 2.0,
        persistence: float = 0.5,
        seed: int | None = 0,
    ) -> None:
        self.frequency = frequency
        self.amplitude = amplitude
        self.lacunarity = lacunarity
        self.persistence = persistence
        self.seed = seed
        rng = random.Random(seed)
        self._perm: tuple[int, ...] = tuple(rng.randrange(255) for _ in range(_PERM_SIZE))

    @property
    def perm(self) -> tuple[int, ...]:
        """The 256-entry permutation table."""
        return self._perm

    def hash(self, i: int) -> int:
        """Hash an integer to an 8-bit value through the permutation table."""
        return self._perm[i & 0xFF]

    def grad(self, hash_value: int, *args: float) -> float:
        """Dot product of a hashed gradient with a 1D, 2D or 3D distance vector."""
        if len(args) == 1:
            return self._grad1(hash_value, *args)
        if len(args) == 2:
            return self._grad2(hash_value, *args)
        if len(args) == 3:
            return self._grad3(hash_value, *args)
        raise TypeError(f"grad takes 1 to 3 coordinates, got {len(args)}")

    def noise(self, *args: float) -> float:
        """Simplex noise at a 1D, 2D or 3D point, roughly within [-1, 1]."""
        if len(args) == 1:
            return self._noise1(*args)
        if len(args) == 2:
            return self._noise2(*args)
        if len(args) == 3:
            return self._noise3(*args)
        raise TypeError(f"noise takes 1 to 3 coordinates, got {len(args)}")

    def fractal(self, octaves: int, *args: float) -> float:
        """Sum ``octaves`` octaves of noise, normalised by the total amplitude.

        With no octaves (or zero total amplitude) the result is NaN.
        """
        if not 1 <= len(args) <= 3:
            raise TypeError(f"fractal takes 1 to 3 coordinates, got {len(args)}")
        output = 0.0
        denom = 0.0
        frequency = self.frequency
        amplitude = self.amplitude
        for _ in range(octaves):
            output += amplitude * self.noise(*(c * frequency for c in args))
            denom += amplitude
            frequency *= self.lacunarity
            amplitude *= self.persistence
        if denom == 0.0:
            return math.nan
        return output / denom

    # Gradients

    @staticmethod
    def _grad1(hash_value: int, x: float) -> float:
        h = hash_value & 0x0F
        g = 1.0 + (h & 7)
        if h & 8:
            g = -g
        return g * x

    @staticmethod
    def _grad2(hash_value: int, x: float, y: float) -> float:
        h = hash_value & 0x3F
        u, v = (x, y) if h < 4 else (y, x)
        return (-u if h & 1 else u) + (-2.0 * v if h & 2 else 2.0 * v)

    @staticmethod
    def _grad3(hash_value: int, x: float, y: float, z: float) -> float:
        h = hash_value & 15
        u = x if h < 8 else y
        if h < 4:
            v = y
        elif h in (12, 14):
            v = x
        else:
            v = z
        return (-u if h & 1 else u) + (-v if h & 2 else v)

    # Noise

    def _noise1(self, x: float) -> float:
        i0 = fast_floor(x)
        i1 = i0 + 1
        x0 = x - i0
        x1 = x0 - 1.0

        t0 = 1.0 - x0 * x0
        t0 *= t0
        n0 = t0 * t0 * self._grad1(self.hash(i0), x0)

        t1 = 1.0 - x1 * x1
        t1 *= t1
        n1 = t1 * t1 * self._grad1(self.hash(i1), x1)

        return 0.395 * (n0 + n1)

    @staticmethod
    def _corner(t: float, g: float) -> float:
        if t < 0.0:
            return 0.0
        t *= t
        return t * t * g

    def _noise2(self, x: float, y: float) -> float:
        s = (x + y) * _F2
        i = fast_floor(x + s)
        j = fast_floor(y + s)

        t = (i + j) * _G2
        x0 = x - (i - t)
        y0 = y - (j - t)

        i1, j1 = (1, 0) if x0 > y0 else (0, 1)

        x1 = x0 - i1 + _G2
        y1 = y0 - j1 + _G2
        x2 = x0 - 1.0 + 2.0 * _G2
        y2 = y0 - 1.0 + 2.0 * _G2

        h = self.hash
        gi0 = h(i + h(j))
        gi1 = h(i + i1 + h(j + j1))
        gi2 = h(i + 1 + h(j + 1))

        total = 0.0
        for gi, cx, cy in ((gi0, x0, y0), (gi1, x1, y1), (gi2, x2, y2)):
            t_c = 0.5 - cx * cx - cy * cy
            if t_c >= 0.0:
                total += self._corner(t_c, self._grad2(gi, cx, cy))
        return 45.23065 * total

    def _noise3(self, x: float, y: float, z: float) -> float:
        s = (x + y + z) * _F3
        i = fast_floor(x + s)
        j = fast_floor(y + s)
        k = fast_floor(z + s)
        t = (i + j + k) * _G3
        x0 = x - (i - t)
        y0 = y - (j - t)
        z0 = z - (k - t)

        first, second = self._simplex_order(x0, y0, z0)
        i1, j1, k1 = first
        i2, j2, k2 = second

        x1, y1, z1 = x0 - i1 + _G3, y0 - j1 + _G3, z0 - k1 + _G3
        x2, y2, z2 = x0 - i2 + 2.0 * _G3, y0 - j2 + 2.0 * _G3, z0 - k2 + 2.0 * _G3
        x3, y3, z3 = x0 - 1.0 + 3.0 * _G3, y0 - 1.0 + 3.0 * _G3, z0 - 1.0 + 3.0 * _G3

        h = self.hash
        gi0 = h(i + h(j + h(k)))
        gi1 = h(i + i1 + h(j + j1 + h(k + k1)))
        gi2 = h(i + i2 + h(j + j2 + h(k + k2)))
        gi3 = h(i + 1 + h(j + 1 + h(k + 1)))

        corners = (
            (gi0, x0, y0, z0),
            (gi1, x1, y1, z1),
            (gi2, x2, y2, z2),
            (gi3, x3, y3, z3),
        )
        total = 0.0
        for gi, cx, cy, cz in corners:
            t_c = 0.6 - cx * cx - cy * cy - cz * cz
            if t_c >= 0.0:
                total += self._corner(t_c, self._grad3(gi, cx, cy, cz))
        return 32.0 * total

    @staticmethod
    def _simplex_order(
        x0: float, y0: float, z0: float
    ) -> tuple[Sequence[int], Sequence[int]]:
        """Offsets of the second and third simplex corners in (i, j, k)."""
        if x0 >= y0:
            if y0 >= z0:
                return (1, 0, 0), (1, 1, 0)
            if x0 >= z0:
                return (1, 0, 0), (1, 0, 1)
            return (0, 0, 1), (1, 0, 1)
        if y0 < z0:
            return (0, 0, 1), (0, 1, 1)
        if x0 < z0:
            return (0, 1, 0), (0, 1, 1)
        return (0, 1, 0), (1, 1, 0)