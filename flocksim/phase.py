"""Phase space of a flock: positions, velocities and inner states of every agent."""

from __future__ import annotations

import math
from collections.abc import Collection, Sequence

from flocksim.vectors import (
    Vector,
    rotate_around_axis,
    rotate_xy,
    scalar_product,
    unit_vect,
    vect_abs,
    vect_abs_xy,
    vect_difference,
)

Row = list[float]


def _mean(rows: Sequence[Sequence[float]]) -> Vector:
    if not rows:
        raise ValueError("no agents to average over")
    n = len(rows)
    return (
        sum(r[0] for r in rows) / n,
        sum(r[1] for r in rows) / n,
        sum(r[2] for r in rows) / n,
    )


def _tangent_xy(position: Sequence[float], ref_point: Sequence[float]) -> Vector:
    return unit_vect(rotate_xy(vect_difference(position, ref_point), math.pi / 2))


def _tangent_axis(
    position: Sequence[float], ref_point: Sequence[float], axis: Sequence[float]
) -> Vector:
    return unit_vect(
        rotate_around_axis(vect_difference(position, ref_point), axis, math.pi / 2)
    )


class Phase:
    """State of all agents at one instant.

    ``number_of_agents`` is the number of rows that the queries look at; it
    may be lowered to restrict them to the first agents.
    """

    def __init__(self, number_of_agents: int, number_of_inner_states: int = 0) -> None:
        if number_of_agents < 0:
            raise ValueError("number of agents must not be negative")
        if number_of_inner_states < 0:
            raise ValueError("number of inner states must not be negative")
        n = number_of_agents
        self.number_of_agents = n
        self.number_of_inner_states = number_of_inner_states
        self.coordinates: list[Row] = [[0.0, 0.0, 0.0] for _ in range(n)]
        self.velocities: list[Row] = [[0.0, 0.0, 0.0] for _ in range(n)]
        self.inner_states: list[Row] = [
            [0.0] * number_of_inner_states for _ in range(n)
        ]
        self.laplacian: list[Row] = [[0.0] * n for _ in range(n)]
        self.ema: list[Row] = [[0.0] * n for _ in range(n)]
        self.received_power: Row = [0.0] * n
        self.real_ids: list[int] = list(range(n))

    def copy(self) -> Phase:
        """Independent deep copy."""
        clone = Phase(0, self.number_of_inner_states)
        clone.number_of_agents = self.number_of_agents
        clone.coordinates = [list(r) for r in self.coordinates]
        clone.velocities = [list(r) for r in self.velocities]
        clone.inner_states = [list(r) for r in self.inner_states]
        clone.laplacian = [list(r) for r in self.laplacian]
        clone.ema = [list(r) for r in self.ema]
        clone.received_power = list(self.received_power)
        clone.real_ids = list(self.real_ids)
        return clone

    def _active(self) -> range:
        return range(self.number_of_agents)

    def extrapolated_coordinates(self, which: int, delay: float) -> Vector:
        """Position of an agent linearly extrapolated by ``delay`` time."""
        x = self.coordinates[which]
        v = self.velocities[which]
        return (x[0] + v[0] * delay, x[1] + v[1] * delay, x[2] + v[2] * delay)

    def distance_between(self, a1: int, a2: int, dim: int = 3) -> float:
        """Euclidean distance of two agents over the first ``dim`` axes."""
        n = self.number_of_agents
        if not (0 <= a1 < n and 0 <= a2 < n):
            raise IndexError(
                "index of agent must be larger than -1 and less than the number of agents"
            )
        p, q = self.coordinates[a1], self.coordinates[a2]
        return math.sqrt(sum((p[i] - q[i]) ** 2 for i in range(dim)))

    def nearby_count(self, which: int, radius: float) -> int:
        """Number of agents (itself included) within ``radius`` of an agent."""
        centre = self.coordinates[which]
        return sum(
            1
            for j in self._active()
            if vect_abs(vect_difference(self.coordinates[j], centre)) <= radius
        )

    def com(self) -> Vector:
        """Centre of mass of all agents (unit masses)."""
        return _mean([self.coordinates[j] for j in self._active()])

    def local_com(self, which: int, radius: float) -> Vector:
        """Centre of mass of the agents within ``radius`` of an agent."""
        centre = self.coordinates[which]
        return _mean(
            [
                self.coordinates[j]
                for j in self._active()
                if vect_abs(vect_difference(centre, self.coordinates[j])) <= radius
            ]
        )

    def com_excluding(self, excluded: Collection[int]) -> Vector:
        """Centre of mass of all agents not listed in ``excluded``."""
        skip = set(excluded)
        return _mean([self.coordinates[j] for j in self._active() if j not in skip])

    def neighbourhood_com(self, size: int) -> Vector:
        """Centre of mass of the first ``size`` agents."""
        return _mean(self.coordinates[:size])

    def local_com_excluding(
        self, which: int, excluded: Collection[int], radius: float
    ) -> Vector:
        """Local centre of mass around an agent, ignoring the ``excluded`` agents."""
        skip = set(excluded)
        centre = self.coordinates[which]
        return _mean(
            [
                self.coordinates[j]
                for j in self._active()
                if j not in skip
                and vect_abs(vect_difference(centre, self.coordinates[j])) <= radius
            ]
        )

    def avg_velocity(self) -> Vector:
        """Mean of the coordinate rows of all agents."""
        return _mean([self.coordinates[j] for j in self._active()])

    def local_avg_xy_velocity(self, which: int, radius: float) -> Vector:
        """Mean XY velocity of an agent and its neighbours within ``radius``."""
        centre = self.coordinates[which]
        own = self.velocities[which]
        sx, sy, n = own[0], own[1], 1
        for j in self._active():
            if j == which:
                continue
            if vect_abs(vect_difference(centre, self.coordinates[j])) <= radius:
                v = self.velocities[j]
                sx += v[0]
                sy += v[1]
                n += 1
        return (sx / n, sy / n, 0.0)

    def _xy_tangential(self, ref_point, which, neighbours) -> Vector:
        x = self.coordinates[which]
        tangent = _tangent_xy(x, ref_point)
        projected = scalar_product(tangent, self.velocities[which], 2)
        n = 1
        for j in neighbours:
            projected += scalar_product(
                _tangent_xy(self.coordinates[j], ref_point), self.velocities[j], 2
            )
            n += 1
        return (tangent[0] * projected / n, tangent[1] * projected / n, 0.0)

    def avg_xy_tangential_velocity(
        self, ref_point: Sequence[float], which: int
    ) -> Vector:
        """Mean tangential XY speed around ``ref_point``, along the agent's tangent."""
        others = [j for j in self._active() if j != which]
        x = self.coordinates[which]
        tangent = _tangent_xy(x, ref_point)
        projected = scalar_product(tangent, self.velocities[which], 2)
        for j in others:
            projected += scalar_product(
                _tangent_xy(self.coordinates[j], ref_point), self.velocities[j], 2
            )
        factor = projected / self.number_of_agents
        return (tangent[0] * factor, tangent[1] * factor, 0.0)

    def _xy_neighbours(self, which: int, area_size: float):
        x = self.coordinates[which]
        for j in self._active():
            if j == which:
                continue
            if vect_abs_xy(vect_difference(self.coordinates[j], x)) <= area_size:
                yield j

    def local_avg_xy_tangential_velocity(
        self, ref_point: Sequence[float], which: int, area_size: float
    ) -> Vector:
        """Like :meth:`avg_xy_tangential_velocity`, over XY neighbours only."""
        return self._xy_tangential(
            ref_point, which, self._xy_neighbours(which, area_size)
        )

    def local_avg_xy_tangential_velocity_excluding(
        self,
        ref_point: Sequence[float],
        excluded: Collection[int],
        which: int,
        area_size: float,
    ) -> Vector:
        """Local tangential XY velocity ignoring ``excluded`` agents.

        The neighbour scan runs in index order and stops at the first
        excluded agent, so later agents are not counted either.
        """
        skip = set(excluded)
        x = self.coordinates[which]

        def neighbours():
            for j in self._active():
                if j == which:
                    continue
                if j in skip:
                    return
                if vect_abs_xy(vect_difference(self.coordinates[j], x)) <= area_size:
                    yield j

        return self._xy_tangential(ref_point, which, neighbours())

    def local_avg_tangential_velocity(
        self,
        ref_point: Sequence[float],
        axis: Sequence[float],
        which: int,
        area_size: float,
    ) -> Vector:
        """Local mean tangential velocity in the plane normal to ``axis``."""
        x = self.coordinates[which]
        tangent = _tangent_axis(x, ref_point, axis)
        projected = scalar_product(tangent, self.velocities[which], 3)
        n = 1
        for j in self._active():
            if j == which:
                continue
            neighbour = self.coordinates[j]
            if vect_abs(vect_difference(neighbour, x)) <= area_size:
                projected += scalar_product(
                    _tangent_axis(neighbour, ref_point, axis), self.velocities[j], 3
                )
                n += 1
        factor = projected / n
        return (tangent[0] * factor, tangent[1] * factor, tangent[2] * factor)

    def swap_agents(self, i: int, j: int, true_agent: int) -> None:
        """Swap the states of agents ``i`` and ``j``.

        Positions, velocities, inner states, real IDs and received power are
        swapped, as are the two entries of the ``true_agent`` row of the EMA
        matrix.
        """
        for rows in (
            self.coordinates,
            self.velocities,
            self.inner_states,
            self.real_ids,
            self.received_power,
        ):
            rows[i], rows[j] = rows[j], rows[i]
        ema_row = self.ema[true_agent]
        ema_row[i], ema_row[j] = ema_row[j], ema_row[i]


def store_phase(timeline: Sequence[Phase], phase: Phase, step: int) -> None:
    """Copy positions, velocities, Laplacian and EMA of ``phase`` into ``timeline[step]``."""
    target = timeline[step]
    n = phase.number_of_agents
    for j in range(n):
        target.coordinates[j] = list(phase.coordinates[j][:3])
        target.velocities[j] = list(phase.velocities[j][:3])
        target.laplacian[j][:n] = phase.laplacian[j][:n]
        target.ema[j][:n] = phase.ema[j][:n]


def store_inner_states(timeline: Sequence[Phase], phase: Phase, step: int) -> None:
    """Copy the inner states of ``phase`` into ``timeline[step]``."""
    target = timeline[step]
    k = phase.number_of_inner_states
    for j in range(phase.number_of_agents):
        target.inner_states[j][:k] = phase.inner_states[j][:k]


def shift_timeline(timeline: Sequence[Phase], rows: int, rows_to_save: int) -> None:
    """Move the last ``rows_to_save`` of ``rows`` steps to the front of the timeline."""
    n = timeline[0].number_of_agents
    for i in range(rows_to_save):
        target, source = timeline[i], timeline[rows - rows_to_save + i]
        for j in range(n):
            target.coordinates[j] = list(source.coordinates[j][:3])
            target.velocities[j] = list(source.velocities[j][:3])
            target.laplacian[j][:n] = source.laplacian[j][:n]


def shift_inner_state_timeline(
    timeline: Sequence[Phase], rows: int, rows_to_save: int
) -> None:
    """Move the last ``rows_to_save`` inner-state steps to the front."""
    n = timeline[0].number_of_agents
    k = timeline[0].number_of_inner_states
    for i in range(rows_to_save):
        target, source = timeline[i], timeline[rows - rows_to_save + i]
        for j in range(n):
            target.inner_states[j][:k] = source.inner_states[j][:k]


def wait(timeline: Sequence[Phase], time_to_wait: float, h: float) -> None:
    """Fill the first steps of the timeline with the initial state at rest."""
    n = timeline[0].number_of_agents
    k = timeline[0].number_of_inner_states
    for i in range(1, int((1 + time_to_wait) / h)):
        previous, current = timeline[i - 1], timeline[i]
        for j in range(n):
            current.coordinates[j] = list(previous.coordinates[j][:3])
            current.velocities[j] = [0.0, 0.0, 0.0]
            current.inner_states[j][:k] = previous.inner_states[j][:k]