"""Scalar response curves: smoothing, clamping, sigmoids and braking curves."""

from __future__ import annotations

import math

_CIRCLE_PACKING = (
    1.0,
    1.0,
    2.0,
    2.1547005383792515290182975610,
    2.4142135623730950488016887242,
    2.7013016167040798643630809941,
    3.0,
    3.0,
    3.3047648709624865052411502235,
    3.6131259297527530557132863469,
    3.8130256313981243982516251560,
    3.9238044001630872522327544134,
    4.0296019301161834974827410413,
    4.2360679774997896964091736687,
    4.3284285548608366814039093675,
    4.5213569647061642409073640084,
    4.6154255948731939855392441620,
    4.7920337483105791701491239533,
    4.837033051562731469989727989,
    4.8637033051562731469989727989,
    5.1223207369915283214476857922,
)

_UNBOUNDED_RADIUS = 100000000.0


def ema(x_current: float, x_previous: float, smoothing: float, width: int) -> float:
    """Exponential moving average step."""
    multiplier = smoothing / (1 + width)
    return x_current * multiplier + x_previous * (1 - multiplier)


def clamp_scalar(x: float, x_min: float, x_max: float) -> float:
    """Clamp ``x`` into ``[x_min, x_max]``."""
    if x <= x_min:
        return x_min
    if x >= x_max:
        return x_max
    return x


def sigmoid(x: float, gamma: float, r0: float) -> float:
    """Sinusoidal step: 1 below ``r0 - gamma``, 0 above ``r0``."""
    if x > r0:
        return 0.0
    if x > r0 - gamma:
        return 0.5 * (math.sin((math.pi / gamma) * (x - r0) - math.pi / 2) + 1.0)
    return 1.0


def sigmoid_like(x: float, r: float, d: float) -> float:
    """Sinusoidal rise: 0 below ``r``, 1 from ``r + d`` on."""
    if x < r:
        return 0.0
    if x < r + d:
        return math.sin((math.pi / d) * (x - r) - math.pi / 2) + 1.0
    return 1.0


def sigmoid_lin(x: float, p: float, v_max: float, r0: float) -> float:
    """Linear-gain curve ``(r0 - x) * p`` capped at ``v_max``; 0 if ``p <= 0``."""
    vel = (r0 - x) * p
    if p <= 0:
        return 0.0
    if vel >= v_max:
        return v_max
    return vel


def vel_decay_lin_sqrt(x: float, p: float, acc: float, v_max: float, r0: float) -> float:
    """Braking curve: linear near ``r0``, square root further out, capped at ``v_max``."""
    vel = (x - r0) * p
    if acc <= 0 or p <= 0 or vel <= 0:
        return 0.0
    if vel < acc / p:
        return v_max if vel >= v_max else vel
    vel = math.sqrt(2 * acc * (x - r0) - acc * acc / p / p)
    return v_max if vel >= v_max else vel


def stopping_distance_lin_sqrt(v: float, a: float, p: float) -> float:
    """Inverse of :func:`vel_decay_lin_sqrt` (distance needed to stop from ``v``)."""
    if v < a / p:
        return v / p
    return (v * v / a + a / p / p) / 2


def radius_of_waypoint_area(
    number_of_agents: int, size_of_agent: float, gamma: float
) -> float:
    """Radius of an area that fits ``number_of_agents`` agents (known up to 19)."""
    if number_of_agents < -1:
        raise ValueError("number of agents must not be less than -1")
    if number_of_agents < 20 and size_of_agent >= 0:
        half = size_of_agent / 2
        return half * _CIRCLE_PACKING[number_of_agents + 1] - half + gamma
    return _UNBOUNDED_RADIUS