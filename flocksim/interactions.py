"""Pairwise interaction terms that give the desired velocity of one agent."""

from __future__ import annotations

import math
from collections.abc import Sequence

from flocksim.curves import sigmoid_lin, sigmoid_like, vel_decay_lin_sqrt
from flocksim.phase import Phase
from flocksim.vectors import (
    Vector,
    bump_function,
    scale,
    sigma_grad,
    sigma_norm,
    unit_vect,
    vect_abs,
    vect_difference,
    vect_sum,
)

_ZERO: Vector = (0.0, 0.0, 0.0)


def _planar(v: Sequence[float], dim: int) -> Vector:
    """Drop the Z component when working in two dimensions."""
    if dim == 2:
        return (v[0], v[1], 0.0)
    return (v[0], v[1], v[2])


def _normalized(total: Vector, n: int, dim: int, normalize: bool) -> Vector:
    """Divide the length of a summed term by the number of contributors."""
    if normalize and n > 1:
        return scale(unit_vect(total), vect_abs(total) / n, dim)
    return total


def _others(phase: Phase, which: int):
    return (i for i in range(phase.number_of_agents) if i != which)


def friction_lin_sqrt(
    phase: Phase,
    c_frict: float,
    v_frict: float,
    acc: float,
    p: float,
    r0: float,
    which: int,
    dim: int,
) -> Vector:
    """Friction-like alignment that damps velocity differences exceeding a braking curve.

    The allowed velocity difference at a given distance follows the
    linear / square-root braking curve, with ``v_frict`` as slack.
    """
    position = phase.coordinates[which]
    velocity = phase.velocities[which]
    total = _ZERO
    for i in _others(phase, which):
        distance = vect_abs(vect_difference(phase.coordinates[i], position))
        vel_diff_vect = _planar(vect_difference(phase.velocities[i], velocity), dim)
        vel_diff = vect_abs(vel_diff_vect)
        direction = unit_vect(vel_diff_vect)
        allowed = max(v_frict, vel_decay_lin_sqrt(distance, p, acc, vel_diff, r0))
        if vel_diff > allowed:
            total = vect_sum(total, scale(direction, c_frict * (vel_diff - allowed), dim))
    return total


def repulsion_lin(
    phase: Phase,
    v_rep: float,
    p: float,
    r0: float,
    which: int,
    dim: int,
    normalize: bool,
) -> Vector:
    """Linear repulsion from every neighbour closer than ``r0``."""
    position = phase.coordinates[which]
    total = _ZERO
    n = 0
    for i in _others(phase, which):
        diff = _planar(vect_difference(position, phase.coordinates[i]), dim)
        distance = vect_abs(diff)
        if distance >= r0:
            continue
        n += 1
        term = scale(unit_vect(diff), sigmoid_lin(distance, p, v_rep, r0), dim)
        total = vect_sum(total, term)
    return _normalized(total, n, dim, normalize)


def attraction_lin(
    phase: Phase,
    v_rep: float,
    p: float,
    r0: float,
    which: int,
    dim: int,
    normalize: bool,
) -> Vector:
    """Linear attraction towards every neighbour farther than ``r0``."""
    position = phase.coordinates[which]
    total = _ZERO
    n = 0
    for i in _others(phase, which):
        diff = _planar(vect_difference(position, phase.coordinates[i]), dim)
        distance = vect_abs(diff)
        if distance <= r0:
            continue
        n += 1
        term = scale(unit_vect(diff), sigmoid_lin(distance, p, v_rep, r0), dim)
        total = vect_sum(total, term)
    return _normalized(total, n, dim, normalize)


def repulsion_pow_lin(
    phase: Phase,
    v_rep: float,
    p: float,
    rp_max: float,
    which: int,
    dim: int,
    normalize: bool,
) -> Vector:
    """Repulsion from neighbours whose smoothed received power exceeds ``rp_max``."""
    position = phase.coordinates[which]
    powers = phase.ema[which]
    total = _ZERO
    n = 0
    for i in _others(phase, which):
        diff = _planar(vect_difference(phase.coordinates[i], position), dim)
        if powers[i] <= rp_max:
            continue
        n += 1
        term = scale(unit_vect(diff), sigmoid_lin(powers[i], p, v_rep, rp_max), dim)
        total = vect_sum(total, term)
    return _normalized(total, n, dim, normalize)


def attraction_pow_lin(
    phase: Phase,
    v_rep: float,
    p: float,
    rp_min: float,
    which: int,
    dim: int,
    normalize: bool,
) -> Vector:
    """Attraction towards neighbours whose smoothed received power is below ``rp_min``."""
    position = phase.coordinates[which]
    powers = phase.ema[which]
    total = _ZERO
    n = 0
    for i in _others(phase, which):
        diff = _planar(vect_difference(phase.coordinates[i], position), dim)
        if powers[i] >= rp_min:
            continue
        n += 1
        term = scale(unit_vect(diff), sigmoid_lin(powers[i], p, v_rep, rp_min), dim)
        total = vect_sum(total, term)
    return _normalized(total, n, dim, normalize)


def action_function(z: float, a: float, b: float) -> float:
    """Smooth pairwise action without finite cut-off, zero at ``z = 0``."""
    c = abs(a - b) / math.sqrt(4 * a * b)
    sigma = (z + c) / math.sqrt(1 + (z + c) ** 2)
    return 0.5 * ((a + b) * sigma + (a - b))


def gradient_based(
    phase: Phase,
    epsilon: float,
    a: float,
    b: float,
    h: float,
    d: float,
    r: float,
    which: int,
    dim: int,
) -> Vector:
    """Gradient term of the Olfati-Saber flocking model.

    Agent 0 is taken to be the agent itself; agents from index 1 on are its
    neighbours.
    """
    sigma_r = (math.sqrt(1 + epsilon * r * r) - 1) / epsilon
    sigma_d = (math.sqrt(1 + epsilon * d * d) - 1) / epsilon
    position = phase.coordinates[which]
    total = _ZERO
    for i in range(1, phase.number_of_agents):
        diff = _planar(vect_difference(phase.coordinates[i], position), dim)
        grad = sigma_grad(diff, epsilon, dim)
        distance = sigma_norm(diff, epsilon)
        phi = bump_function(distance / sigma_r, h) * action_function(
            distance - sigma_d, a, b
        )
        total = vect_sum(total, scale(grad, phi, 3))
    return total


def alignment_olfati(
    phase: Phase, h: float, r: float, which: int, dim: int, epsilon: float
) -> Vector:
    """Velocity consensus term of the Olfati-Saber flocking model.

    Agent 0 is taken to be the agent itself; agents from index 1 on are its
    neighbours.
    """
    sigma_r = (math.sqrt(1 + epsilon * r * r) - 1) / epsilon
    position = phase.coordinates[which]
    velocity = phase.velocities[which]
    total = _ZERO
    for i in range(1, phase.number_of_agents):
        diff = _planar(vect_difference(phase.coordinates[i], position), dim)
        vel_diff = _planar(vect_difference(phase.velocities[i], velocity), dim)
        weight = bump_function(sigma_norm(diff, epsilon) / sigma_r, h)
        total = vect_sum(total, scale(vel_diff, weight, dim))
    return total


def tracking_olfati(
    target_position: Sequence[float], phase: Phase, which: int, dim: int
) -> Vector:
    """Navigation term pulling an agent towards ``target_position``."""
    diff = vect_difference(phase.coordinates[which], target_position)
    return scale(sigma_grad(diff, 1.0, dim), -3.0, dim)


def target_tracking(
    target_position: Sequence[float],
    phase: Phase,
    r_com: float,
    d_com: float,
    r_trg: float,
    d_trg: float,
    neighbourhood_size: int,
    which: int,
    dim: int,
) -> Vector:
    """Pull towards the neighbourhood's centre of mass plus a push of it towards the target."""
    position = phase.coordinates[which]
    com = phase.neighbourhood_com(neighbourhood_size)

    com_diff = vect_difference(com, position)
    com_part = scale(
        unit_vect(com_diff), sigmoid_like(vect_abs(com_diff), r_com, d_com), dim
    )

    target_diff = vect_difference(target_position, com)
    target_part = scale(
        unit_vect(target_diff), sigmoid_like(vect_abs(target_diff), r_trg, d_trg), dim
    )
    return vect_sum(com_part, target_part)