"""Random initial placement of agents in boxes, rings, spheres, planes and lines."""

from __future__ import annotations

import math
import random
from collections.abc import Callable, Sequence

from flocksim.phase import Phase
from flocksim.randomness import uniform
from flocksim.vectors import Vector, vect_abs, vect_abs_xy, vect_difference, vectorial_product

_FAR_AWAY = 2e22
_STEPS_PER_AGENT = 100


class PlacementError(RuntimeError):
    """Raised when agents cannot be placed without overlapping each other."""


def _check_range(phase: Phase, from_agent: int, to_agent: int) -> None:
    if not 0 <= from_agent <= to_agent <= phase.number_of_agents:
        raise ValueError(
            f"agent range [{from_agent}, {to_agent}) is outside "
            f"[0, {phase.number_of_agents})"
        )


def _place(
    phase: Phase,
    from_agent: int,
    to_agent: int,
    sample: Callable[[], Vector],
    too_close: Callable[[Vector], bool],
    velocity: Sequence[float] = (0.0, 0.0, 0.0),
    park_first: bool = False,
) -> None:
    """Place agents ``from_agent``..``to_agent - 1`` one after another.

    A candidate position is rejected while it is too close to any agent
    outside the not-yet-placed range. The number of attempts is shared by
    all agents and limited to 100 per agent of the phase.
    """
    _check_range(phase, from_agent, to_agent)
    if park_first:
        for i in range(from_agent, to_agent):
            phase.coordinates[i] = [_FAR_AWAY, _FAR_AWAY, _FAR_AWAY]
            phase.velocities[i] = [0.0, 0.0, 0.0]

    max_steps = _STEPS_PER_AGENT * phase.number_of_agents
    steps = 0
    for i in range(from_agent, to_agent):
        others = [
            j for j in range(phase.number_of_agents) if not i <= j < to_agent
        ]
        while True:
            candidate = sample()
            fits = not any(
                too_close(vect_difference(phase.coordinates[j], candidate))
                for j in others
            )
            steps += 1
            if steps > max_steps:
                raise PlacementError("initial area is too small to place the agents")
            if fits:
                break
        phase.velocities[i] = list(velocity)
        phase.coordinates[i] = list(candidate)


def randomize_phase(
    phase: Phase,
    x_size: float,
    y_size: float,
    z_size: float,
    x_center: float,
    y_center: float,
    z_center: float,
    from_agent: int,
    to_agent: int,
    radius: float,
    rng: random.Random | None = None,
) -> None:
    """Place agents at rest in a box, at least four radii apart."""

    def sample() -> Vector:
        return (
            uniform(x_center - x_size / 2.0, x_center + x_size / 2.0, rng),
            uniform(y_center - y_size / 2.0, y_center + y_size / 2.0, rng),
            uniform(z_center - z_size / 2.0, z_center + z_size / 2.0, rng),
        )

    _place(
        phase,
        from_agent,
        to_agent,
        sample,
        lambda d: vect_abs(d) <= 4 * radius,
        park_first=True,
    )


def place_inside_ring(
    phase: Phase,
    ring_size: float,
    from_agent: int,
    to_agent: int,
    x_center: float,
    y_center: float,
    z_center: float,
    z_size: float,
    radius: float,
    rng: random.Random | None = None,
) -> None:
    """Place agents inside a disc of radius ``ring_size`` with velocity (1000, 3000, 0)."""

    def sample() -> Vector:
        angle = uniform(0.0, 2.0 * math.pi, rng)
        distance = uniform(0.0, ring_size, rng)
        z = uniform(z_center - z_size / 2.0, z_center + z_size / 2.0, rng)
        return (
            x_center + distance * math.sin(angle),
            y_center + distance * math.cos(angle),
            z,
        )

    _place(
        phase,
        from_agent,
        to_agent,
        sample,
        lambda d: vect_abs(d) <= radius,
        velocity=(1000.0, 3000.0, 0.0),
        park_first=True,
    )


def place_inside_sphere(
    phase: Phase,
    sphere_size: float,
    from_agent: int,
    to_agent: int,
    x_center: float,
    y_center: float,
    z_center: float,
    radius: float,
    rng: random.Random | None = None,
) -> None:
    """Place agents at rest inside a sphere of radius ``sphere_size``."""

    def sample() -> Vector:
        phi = uniform(0.0, 2.0 * math.pi, rng)
        theta = uniform(0.0, math.pi, rng)
        distance = uniform(0.0, sphere_size, rng)
        return (
            x_center + distance * math.cos(phi) * math.sin(theta),
            y_center + distance * math.sin(phi) * math.sin(theta),
            z_center + distance * math.cos(theta),
        )

    _place(
        phase,
        from_agent,
        to_agent,
        sample,
        lambda d: vect_abs(d) <= radius,
        park_first=True,
    )


def randomize_on_plane(
    phase: Phase,
    x_size: float,
    y_size: float,
    x_center: float,
    y_center: float,
    z_center: float,
    normal: Sequence[float],
    x_axis: Sequence[float],
    from_agent: int,
    to_agent: int,
    radius: float,
    rng: random.Random | None = None,
) -> None:
    """Place agents at rest on a rectangle of a plane.

    The local frame is ``x_axis`` and ``normal x x_axis``.
    """
    y_axis = vectorial_product(normal, x_axis)

    def sample() -> Vector:
        c = uniform(-x_size / 2.0, x_size / 2.0, rng)
        d = uniform(-y_size / 2.0, y_size / 2.0, rng)
        return (
            x_center + c * x_axis[0] + d * y_axis[0],
            y_center + c * x_axis[1] + d * y_axis[1],
            z_center + c * x_axis[2] + d * y_axis[2],
        )

    _place(phase, from_agent, to_agent, sample, lambda d: vect_abs(d) <= radius)


def place_on_xy_plane(
    phase: Phase,
    x_size: float,
    y_size: float,
    x_center: float,
    y_center: float,
    z_center: float,
    from_agent: int,
    to_agent: int,
    radius: float,
    rng: random.Random | None = None,
) -> None:
    """Place agents at rest on a horizontal rectangle; spacing is measured in XY."""

    def sample() -> Vector:
        return (
            x_center + uniform(-x_size / 2.0, x_size / 2.0, rng),
            y_center + uniform(-y_size / 2.0, y_size / 2.0, rng),
            z_center,
        )

    _place(phase, from_agent, to_agent, sample, lambda d: vect_abs_xy(d) <= radius)


def place_on_xz_plane(
    phase: Phase,
    x_size: float,
    z_size: float,
    x_center: float,
    y_center: float,
    z_center: float,
    from_agent: int,
    to_agent: int,
    radius: float,
    rng: random.Random | None = None,
) -> None:
    """Place agents at rest on a rectangle parallel to the XZ plane."""

    def sample() -> Vector:
        x = x_center + uniform(-x_size / 2.0, x_size / 2.0, rng)
        z = z_center + uniform(-z_size / 2.0, z_size / 2.0, rng)
        return (x, y_center, z)

    _place(phase, from_agent, to_agent, sample, lambda d: vect_abs(d) <= radius)


def place_on_yz_plane(
    phase: Phase,
    y_size: float,
    z_size: float,
    x_center: float,
    y_center: float,
    z_center: float,
    from_agent: int,
    to_agent: int,
    radius: float,
    rng: random.Random | None = None,
) -> None:
    """Place agents at rest on a rectangle parallel to the YZ plane."""

    def sample() -> Vector:
        y = y_center + uniform(-y_size / 2.0, y_size / 2.0, rng)
        z = z_center + uniform(-z_size / 2.0, z_size / 2.0, rng)
        return (x_center, y, z)

    _place(phase, from_agent, to_agent, sample, lambda d: vect_abs(d) <= radius)


def place_onto_line(
    phase: Phase,
    from_agent: int,
    to_agent: int,
    tangential: Sequence[float],
    x_center: float,
    y_center: float,
    z_center: float,
    line_length: float,
    radius: float,
    rng: random.Random | None = None,
) -> None:
    """Place agents at rest on a segment through the centre along ``tangential``."""

    def sample() -> Vector:
        a = uniform(-line_length / 2.0, line_length / 2.0, rng)
        return (
            x_center + tangential[0] * a,
            y_center + tangential[1] * a,
            z_center + tangential[2] * a,
        )

    _place(phase, from_agent, to_agent, sample, lambda d: vect_abs(d) <= radius)


def init_cond(
    phase: Phase,
    size_x: float,
    size_y: float,
    size_z: float,
    copter_size: float,
    rng: random.Random | None = None,
) -> None:
    """Random initial state of all agents at rest, in a box around the origin."""
    randomize_phase(
        phase,
        size_x,
        size_y,
        size_z,
        0.0,
        0.0,
        0.0,
        0,
        phase.number_of_agents,
        copter_size,
        rng,
    )