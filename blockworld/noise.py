"""Seeded two-dimensional gradient noise."""

from __future__ import annotations

import math
import struct
from typing import Tuple

PI = 3.14159265
PI2 = PI * PI
HALF_PI = PI / 2
TAU = 2 * PI

_MASK_64 = (1 << 64) - 1


def _f32(value: float) -> float:
    return struct.unpack("f", struct.pack("f", value))[0]


_ANGLE_SCALE = _f32(PI) / float(1 << 31)


def _rotl32(value: int) -> int:
    return ((value << 32) | (value >> 32)) & _MASK_64


def _interpolate(a0: float, a1: float, weight: float) -> float:
    return (a1 - a0) * (3.0 - weight * 2.0) * weight * weight + a0


def _cell(value: float) -> Tuple[int, int]:
    if value >= 0.0:
        low = int(value)
        return low, low + 1
    high = int(value)
    return high - 1, high


class PerlinNoiseGenerator:
    """Gradient noise whose lattice gradients are hashed from a world seed."""

    def __init__(self, world_seed: int) -> None:
        self.world_seed = world_seed & _MASK_64

    def sample_2d(self, x: float, z: float) -> float:
        """Noise value at ``(x, z)``, clamped to [-1, 1]."""
        x0, x1 = _cell(x)
        z0, z1 = _cell(z)
        sx = x - x0
        sz = z - z0

        ix0 = _interpolate(self._gradient_dot(x0, z0, x, z), self._gradient_dot(x1, z0, x, z), sx)
        ix1 = _interpolate(self._gradient_dot(x0, z1, x, z), self._gradient_dot(x1, z1, x, z), sx)
        value = _interpolate(ix0, ix1, sz)
        return min(1.0, max(-1.0, value))

    def _gradient_dot(self, cx: int, cz: int, x: float, z: float) -> float:
        gx, gz = self._random_gradient(cx, cz)
        return gx * (x - cx) + gz * (z - cz)

    def _random_gradient(self, cx: int, cz: int) -> Tuple[float, float]:
        a = ((cx & _MASK_64) * 3284157443) & _MASK_64
        b = cz & _MASK_64
        b ^= _rotl32(a)
        b = (b * 1911520717) & _MASK_64
        b ^= self.world_seed
        a ^= _rotl32(b)
        a = (a * 2048419325) & _MASK_64
        angle = _f32(_f32(float(a)) * _ANGLE_SCALE)
        return math.cos(angle), math.sin(angle)