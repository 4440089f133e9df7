import math
import random

import pytest

from flocksim.phase import Phase
from flocksim.placement import (
    PlacementError,
    init_cond,
    place_inside_ring,
    place_inside_sphere,
    place_on_xy_plane,
    place_on_xz_plane,
    place_on_yz_plane,
    place_onto_line,
    randomize_on_plane,
    randomize_phase,
)


def _dist(p, q):
    return math.sqrt(sum((a - b) ** 2 for a, b in zip(p, q)))


def _pairs(phase, agents):
    return [(i, j) for i in agents for j in agents if i < j]


def test_randomize_phase_inside_box_and_spaced():
    phase = Phase(5)
    randomize_phase(phase, 1000, 800, 600, 10, 20, 30, 0, 5, 10, random.Random(1))
    for x, y, z in phase.coordinates:
        assert -490 <= x <= 510
        assert -380 <= y <= 420
        assert -270 <= z <= 330
    for i, j in _pairs(phase, range(5)):
        assert _dist(phase.coordinates[i], phase.coordinates[j]) > 40
    assert all(v == [0.0, 0.0, 0.0] for v in phase.velocities)


def test_randomize_phase_keeps_agents_outside_range():
    phase = Phase(4)
    phase.coordinates[0] = [1.0, 2.0, 3.0]
    phase.velocities[0] = [4.0, 5.0, 6.0]
    phase.coordinates[3] = [7.0, 8.0, 9.0]
    randomize_phase(phase, 1000, 1000, 1000, 0, 0, 0, 1, 3, 5, random.Random(2))
    assert phase.coordinates[0] == [1.0, 2.0, 3.0]
    assert phase.velocities[0] == [4.0, 5.0, 6.0]
    assert phase.coordinates[3] == [7.0, 8.0, 9.0]
    for i in (1, 2):
        for j in (0, 3):
            assert _dist(phase.coordinates[i], phase.coordinates[j]) > 20


def test_randomize_phase_deterministic_with_seed():
    a, b = Phase(3), Phase(3)
    randomize_phase(a, 500, 500, 500, 0, 0, 0, 0, 3, 1, random.Random(7))
    randomize_phase(b, 500, 500, 500, 0, 0, 0, 0, 3, 1, random.Random(7))
    assert a.coordinates == b.coordinates


def test_randomize_phase_too_small_area_raises():
    phase = Phase(2)
    with pytest.raises(PlacementError):
        randomize_phase(phase, 0, 0, 0, 0, 0, 0, 0, 2, 1, random.Random(0))


def test_randomize_phase_bad_range_raises():
    phase = Phase(2)
    with pytest.raises(ValueError):
        randomize_phase(phase, 10, 10, 10, 0, 0, 0, 0, 3, 1, random.Random(0))


def test_negative_size_raises_value_error():
    phase = Phase(1)
    with pytest.raises(ValueError):
        randomize_phase(phase, -10, 10, 10, 0, 0, 0, 0, 1, 1, random.Random(0))


def test_ring_positions_and_velocity():
    phase = Phase(6)
    place_inside_ring(phase, 300, 0, 6, 50, -50, 100, 20, 5, random.Random(3))
    for x, y, z in phase.coordinates:
        assert math.hypot(x - 50, y + 50) <= 300 + 1e-9
        assert 90 <= z <= 110
    assert all(v == [1000.0, 3000.0, 0.0] for v in phase.velocities)
    for i, j in _pairs(phase, range(6)):
        assert _dist(phase.coordinates[i], phase.coordinates[j]) > 5


def test_sphere_positions():
    phase = Phase(6)
    place_inside_sphere(phase, 200, 0, 6, 1, 2, 3, 4, random.Random(4))
    for p in phase.coordinates:
        assert _dist(p, (1, 2, 3)) <= 200 + 1e-9
    assert all(v == [0.0, 0.0, 0.0] for v in phase.velocities)
    for i, j in _pairs(phase, range(6)):
        assert _dist(phase.coordinates[i], phase.coordinates[j]) > 4


def test_randomize_on_plane_stays_in_plane():
    phase = Phase(5)
    normal = (0.0, 0.0, 1.0)
    x_axis = (1.0, 0.0, 0.0)
    randomize_on_plane(
        phase, 400, 200, 10, 20, 30, normal, x_axis, 0, 5, 3, random.Random(5)
    )
    for x, y, z in phase.coordinates:
        assert z == pytest.approx(30)
        assert -190 <= x <= 210
        assert -80 <= y <= 120
    for i, j in _pairs(phase, range(5)):
        assert _dist(phase.coordinates[i], phase.coordinates[j]) > 3


def test_randomize_on_tilted_plane_orthogonal_to_normal():
    phase = Phase(4)
    normal = (1.0, 1.0, 0.0)
    x_axis = (0.0, 0.0, 1.0)
    randomize_on_plane(phase, 100, 100, 5, 5, 5, normal, x_axis, 0, 4, 1, random.Random(6))
    for p in phase.coordinates:
        offset = [p[k] - 5 for k in range(3)]
        assert sum(o * n for o, n in zip(offset, normal)) == pytest.approx(0, abs=1e-9)


def test_xy_plane():
    phase = Phase(5)
    place_on_xy_plane(phase, 100, 60, 0, 0, 42, 0, 5, 2, random.Random(8))
    for x, y, z in phase.coordinates:
        assert z == 42
        assert -50 <= x <= 50
        assert -30 <= y <= 30
    for i, j in _pairs(phase, range(5)):
        a, b = phase.coordinates[i], phase.coordinates[j]
        assert math.hypot(a[0] - b[0], a[1] - b[1]) > 2


def test_xz_plane():
    phase = Phase(4)
    place_on_xz_plane(phase, 100, 60, 0, -7, 0, 0, 4, 2, random.Random(9))
    for x, y, z in phase.coordinates:
        assert y == -7
        assert -50 <= x <= 50
        assert -30 <= z <= 30


def test_yz_plane():
    phase = Phase(4)
    place_on_yz_plane(phase, 100, 60, 11, 0, 0, 0, 4, 2, random.Random(10))
    for x, y, z in phase.coordinates:
        assert x == 11
        assert -50 <= y <= 50
        assert -30 <= z <= 30


def test_line_is_collinear():
    phase = Phase(4)
    place_onto_line(phase, 0, 4, (1.0, 2.0, 0.0), 5, 5, 5, 100, 1, random.Random(11))
    for x, y, z in phase.coordinates:
        assert z == 5
        assert (y - 5) == pytest.approx(2 * (x - 5))
        assert abs(x - 5) <= 50
    assert all(v == [0.0, 0.0, 0.0] for v in phase.velocities)


def test_line_too_short_raises():
    phase = Phase(3)
    with pytest.raises(PlacementError):
        place_onto_line(phase, 0, 3, (1.0, 0.0, 0.0), 0, 0, 0, 0, 1, random.Random(0))


def test_init_cond_centred_at_origin():
    phase = Phase(4)
    init_cond(phase, 200, 200, 200, 3, random.Random(12))
    for p in phase.coordinates:
        assert all(-100 <= c <= 100 for c in p)
    for i, j in _pairs(phase, range(4)):
        assert _dist(phase.coordinates[i], phase.coordinates[j]) > 12