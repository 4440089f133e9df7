"""Random number helpers: uniform, Gaussian, power-law and hemisphere samples."""

from __future__ import annotations

import math
import random
from collections.abc import Sequence

from flocksim.vectors import (
    Vector,
    rotate_xy,
    rotate_zx,
    scalar_product,
    scale,
    unit_vect,
    vect_difference,
)

_DEFAULT_RNG = random.Random()


def _pick(rng: random.Random | None) -> random.Random:
    return _DEFAULT_RNG if rng is None else rng


def uniform(min_value: float, max_value: float, rng: random.Random | None = None) -> float:
    """Uniformly distributed value between ``min_value`` and ``max_value``."""
    if min_value > max_value:
        raise ValueError("the maximal value has to be larger than the minimal value")
    return min_value + _pick(rng).random() * (max_value - min_value)


def uniform_seeded(min_value: float, max_value: float, seed: int) -> float:
    """Uniform value drawn from a generator freshly seeded with ``seed``."""
    return uniform(min_value, max_value, random.Random(seed))


def gauss(mean: float, std_dev: float, rng: random.Random | None = None) -> float:
    """Normally distributed value (Box-Muller transformation)."""
    if std_dev < 0:
        raise ValueError("standard deviation must not be negative")
    rng = _pick(rng)
    u1 = uniform(0.0, 1.0, rng)
    while u1 == 1.0:
        u1 = uniform(0.0, 1.0, rng)
    u2 = uniform(0.0, 1.0, rng)
    theta = 2 * math.pi * u2
    rho = math.sqrt(-2 * math.log(1 - u1))
    return mean + std_dev * rho * math.cos(theta)


def power_law(x0: float, x1: float, n: float, rng: random.Random | None = None) -> float:
    """Value in [x0, x1] drawn from a power-law distribution with exponent ``n``."""
    if n == -1:
        raise ValueError("exponent of power-law distribution cannot be -1")
    u = uniform(0.0, 1.0, rng)
    low = x0 ** (n + 1)
    return ((x1 ** (n + 1) - low) * u + low) ** (1 / (1 + n))


def vect_on_half_sphere(
    axis: Sequence[float], rng: random.Random | None = None
) -> Vector:
    """Random unit vector on the half sphere whose pole is ``axis``."""
    rng = _pick(rng)
    axis = unit_vect(axis)
    sample = rotate_zx((1.0, 0.0, 0.0), uniform(-math.pi, math.pi, rng))
    sample = rotate_xy(sample, uniform(-math.pi, math.pi, rng))
    product = scalar_product(axis, sample, 3)
    if product < 0.0:
        sample = vect_difference(sample, scale(axis, 2 * product, 3))
    return sample