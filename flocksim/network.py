"""Collisions, connectivity clusters, neighbour selection and radio power models."""

from __future__ import annotations

import math
import random
from collections.abc import MutableSequence, Sequence
from dataclasses import dataclass, field

from flocksim.phase import Phase
from flocksim.polygons import intersection_of_segment_and_polygon_2d
from flocksim.randomness import gauss, uniform
from flocksim.vectors import distance_2d, vect_abs, vect_difference

Matrix = list[list[float]]

_CROWDED_OBSTACLES = 70
_FAR_OBSTACLE = 25000.0
_PATH_LOSS_OFFSET = 32.44
_NOISE_STD_DEV = 2.0
_WALL_LOSS_FACTOR = 40.0


@dataclass(frozen=True)
class RadioParams:
    """Parameters of the log-distance radio propagation model.

    Distances are in centimetres, ``freq`` in GHz. ``communication_type`` is
    0 for range-based, 1 for power-based and 2 for power-based communication
    with obstacles attenuating the signal.
    """

    transmit_power: float
    alpha: float
    ref_distance: float
    freq: float
    communication_type: int = 0


@dataclass(frozen=True)
class Obstacle:
    """A polygonal obstacle in the XY plane."""

    center: tuple[float, float]
    vertices: tuple[tuple[float, float], ...] = field(default_factory=tuple)


def how_many_collisions(
    phase: Phase,
    agents_in_danger: MutableSequence[bool],
    count_collisions: bool,
    radius: float,
) -> int:
    """Count agents that newly got within ``radius`` of another agent.

    ``agents_in_danger`` holds the previous danger flags and is updated in
    place. Nothing happens if ``count_collisions`` is false.
    """
    if not count_collisions:
        return 0
    coords = phase.coordinates
    collisions = 0
    for j in range(phase.number_of_agents):
        previous = agents_in_danger[j]
        agents_in_danger[j] = False
        for i in range(j):
            if vect_abs(vect_difference(coords[i], coords[j])) <= radius:
                agents_in_danger[i] = True
                agents_in_danger[j] = True
        if not previous and agents_in_danger[j]:
            collisions += 1
    return collisions


def adjacency_matrix(phase: Phase, communication_range: float) -> Matrix:
    """Symmetric 0/1 matrix of agents closer than ``communication_range``."""
    n = phase.number_of_agents
    coords = phase.coordinates
    matrix = [[0.0] * n for _ in range(n)]
    for i in range(n):
        for j in range(i):
            linked = vect_abs(vect_difference(coords[i], coords[j])) < communication_range
            matrix[i][j] = matrix[j][i] = 1.0 if linked else 0.0
    return matrix


def _linked(
    adjacency: Sequence[Sequence[float]],
    i: int,
    k: int,
    communication_type: int,
    sensitivity_thresh: float,
) -> bool:
    if communication_type in (1, 2):
        return adjacency[i][k] >= sensitivity_thresh or adjacency[k][i] >= sensitivity_thresh
    if communication_type == 0:
        return adjacency[i][k] == 1
    return False


def create_cluster(
    start: int,
    adjacency: Sequence[Sequence[float]],
    communication_type: int,
    sensitivity_thresh: float = 0.0,
) -> set[int]:
    """Indices of all agents reachable from ``start`` through the adjacency matrix.

    For communication types 1 and 2 a link exists if either direction is at
    least ``sensitivity_thresh``; for type 0 a link is an entry equal to 1.
    """
    n = len(adjacency)
    visited = {start}
    stack = [start]
    while stack:
        i = stack.pop()
        for k in range(n):
            if k not in visited and _linked(
                adjacency, i, k, communication_type, sensitivity_thresh
            ):
                visited.add(k)
                stack.append(k)
    return visited


def count_clusters(
    phase: Phase,
    communication_type: int,
    communication_range: float,
    sensitivity_thresh: float,
) -> int:
    """Number of connected groups of agents.

    Type 0 links agents closer than ``communication_range``; types 1 and 2
    use the phase's Laplacian with ``sensitivity_thresh``. Other types find
    no clusters.
    """
    n = phase.number_of_agents
    if communication_type == 0:
        adjacency = adjacency_matrix(phase, communication_range)
    elif communication_type in (1, 2):
        adjacency = [list(row[:n]) for row in phase.laplacian[:n]]
    else:
        return 0

    labelled: set[int] = set()
    clusters = 0
    for i in range(n):
        if len(labelled) == n:
            break
        members = create_cluster(i, adjacency, communication_type, sensitivity_thresh)
        if members - labelled:
            clusters += 1
            labelled |= members
    return clusters


def order_by_distance(phase: Phase, reference: Sequence[float]) -> None:
    """Stably reorder agents by increasing distance from ``reference``."""

    def distance(k: int) -> float:
        return vect_abs(vect_difference(phase.coordinates[k], reference))

    for i in range(1, phase.number_of_agents):
        j = i
        while j > 0 and distance(j - 1) > distance(j):
            phase.swap_agents(j - 1, j, 0)
            j -= 1


def order_by_power(phase: Phase, size: int, which_agent: int) -> None:
    """Stably reorder the first ``size`` agents by decreasing received power."""
    power = phase.received_power
    for i in range(1, size):
        j = i
        while j > 0 and power[j - 1] < power[j]:
            phase.swap_agents(j - 1, j, which_agent)
            j -= 1


def select_nearby_visible_agents(
    phase: Phase,
    reference: Sequence[float],
    communication_range: float,
    power_thresh: float,
    mode: int,
    true_agent: int,
    packet_loss: float,
    rng: random.Random | None = None,
) -> int:
    """Move the agents heard from ``reference`` to the front of the phase.

    An agent sitting exactly at ``reference`` goes to index 0. In mode 0 an
    agent is heard within ``communication_range``; in modes 1 and 2 when its
    received power exceeds ``power_thresh`` and its packet is not lost. The
    return value counts index 0 plus the agents heard.
    """
    if mode not in (0, 1, 2):
        raise ValueError(f"communication type {mode} is not acknowledged")

    def distance(k: int) -> float:
        return vect_abs(vect_difference(phase.coordinates[k], reference))

    count = 1
    i = phase.number_of_agents - 1
    while i >= count:
        dist = distance(i)
        power = phase.received_power[i]
        lost = uniform(0.0, 1.0, rng) < power * power * packet_loss
        if mode == 0:
            heard = dist <= communication_range
        else:
            heard = power > power_thresh and not lost
        if dist != 0 and heard:
            phase.swap_agents(i, count, true_agent)
            count += 1
            continue
        if dist == 0 and distance(0) != 0:
            phase.swap_agents(i, 0, true_agent)
            continue
        i -= 1
    return count


def degraded_power(
    distance: float,
    dist_obst: float,
    loss: float,
    params: RadioParams,
    rng: random.Random | None = None,
) -> float:
    """Received power (dBm) after log-distance path loss with Gaussian noise.

    Distances shorter than the reference distance count as the reference
    distance. Only communication type 2 takes the obstructed length
    ``dist_obst`` and the extra ``loss`` into account.
    """
    span = params.ref_distance if distance < params.ref_distance else distance
    if params.communication_type == 2:
        span -= dist_obst
    else:
        loss = 0.0
    return params.transmit_power - (
        10 * params.alpha * math.log10(span * 0.01 * params.freq)
        + _PATH_LOSS_OFFSET
        + loss
        + gauss(0.0, _NOISE_STD_DEV, rng)
    )


def received_power_log(
    ref_coords: Sequence[float],
    neighbour_coords: Sequence[float],
    obstacles: Sequence[Obstacle],
    params: RadioParams,
    distance: float,
    rng: random.Random | None = None,
) -> float:
    """Power received from a neighbour, attenuated by the first obstacle crossed.

    Obstacles only matter for communication type 2. With more than 70
    obstacles, those farther than 25000 from ``ref_coords`` are ignored.
    """
    dist_obst = 0.0
    loss = 0.0
    if params.communication_type == 2:
        crowded = len(obstacles) > _CROWDED_OBSTACLES
        for obstacle in obstacles:
            centre = (obstacle.center[0], obstacle.center[1], 0.0)
            if crowded and distance_2d(ref_coords, centre) > _FAR_OBSTACLE:
                continue
            hits = intersection_of_segment_and_polygon_2d(
                ref_coords, neighbour_coords, obstacle.vertices
            )
            if len(hits) == 2:
                dist_obst = vect_abs(vect_difference(hits[0], hits[1]))
                loss = _WALL_LOSS_FACTOR * math.log10(dist_obst)
                break
            dist_obst = 0.0
            loss = 0.0
    return degraded_power(distance, dist_obst, loss, params, rng)