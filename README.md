# flocksim

flocksim provides building blocks for simulating flocks of flying robots. It is written in pure Python and has no third-party dependencies.

## Modules

- `flocksim.vectors`: 3D vector helpers.
  - Basic operations: `vect_sum`, `vect_difference`, `scale`, `unit_vect`, `normalize_vector`, `scalar_product` and `vectorial_product`.
  - Rotations: `rotate_xy`, `rotate_zy`, `rotate_zx`, and `rotate_around_axis` (Rodrigues rotation).
  - Projections and distances: projections onto a line or a plane, distances from a line, and angles between vectors.
  - Olfati-Saber helpers: `sigma_norm`, `sigma_grad` and `bump_function`.
- `flocksim.numeric`: `ipow`, base conversion (`to_base`), a stable descending `arg_max_sort`, `inner_sum`, `max_off_diagonal`, and square matrix products and powers.
- `flocksim.randomness`: random draws.
  - `uniform`, `uniform_seeded`, `gauss` (Box–Muller), `power_law` and `vect_on_half_sphere`.
  - Each function except `uniform_seeded` takes an optional `random.Random`. Without one, they share a module-level generator.
  - `uniform_seeded` draws from a generator freshly seeded with the given seed.
- `flocksim.curves`: the response curves used by the interaction terms.
  - `ema`, `clamp_scalar`, `sigmoid`, `sigmoid_like`, `sigmoid_lin`, `vel_decay_lin_sqrt` and `stopping_distance_lin_sqrt`.
  - `radius_of_waypoint_area`, which knows the area radius for up to 19 agents. For more agents it returns 1e8.
- `flocksim.geometry`: geometric tests and constructions.
  - The "shadow" test `at_shadow`.
  - Tangent points of circles.
  - Intersections of segments, half-lines and lines.
  - Points on a line at a given distance.
  - Closest points of two 3D lines.
  - Functions that can find nothing return `None` or an empty tuple.
- `flocksim.polygons`: polygon helpers. A polygon is a sequence of `(x, y)` vertices.
  - `is_inside_polygon`, `intersecting_polygons`, `centre_of_polygon_2d`, `centroid_of_polygon_2d`, `intersection_of_segment_and_polygon_2d`, `envelope_square` and `polygon_area` (shoelace formula).
- `flocksim.phase`: the `Phase` class and timeline helpers.
  - `Phase` stores each agent's coordinates, velocities, inner states, Laplacian, EMA matrix, received power and real IDs.
  - `Phase` offers centre-of-mass queries, local and tangential velocity averages, `extrapolated_coordinates`, `distance_between`, `swap_agents` and `copy`.
  - Timeline helpers work on sequences of phases: `store_phase`, `store_inner_states`, `shift_timeline`, `shift_inner_state_timeline` and `wait`.
- `flocksim.placement`: random initial placement of agents without overlap.
  - Shapes: `randomize_phase` and `init_cond` place agents in a box. The other functions are `place_inside_ring`, `place_inside_sphere`, `randomize_on_plane`, `place_on_xy_plane`, `place_on_xz_plane`, `place_on_yz_plane` and `place_onto_line`.
  - `PlacementError` is raised when the attempts run out.
- `flocksim.network`: collisions, clusters and radio power.
  - Counting: `how_many_collisions`, `adjacency_matrix`, `create_cluster` and `count_clusters`.
  - Reordering agents: `order_by_distance`, `order_by_power` and `select_nearby_visible_agents`.
  - Log-distance received-power models, `received_power_log` and `degraded_power`. They are configured by `RadioParams` and take `Obstacle` polygons into account.
- `flocksim.interactions`: desired-velocity terms.
  - Linear terms: `repulsion_lin`, `attraction_lin`, `repulsion_pow_lin`, `attraction_pow_lin` and `friction_lin_sqrt`.
  - Olfati-Saber terms: `action_function`, `gradient_based`, `alignment_olfati` and `tracking_olfati`.
  - `target_tracking`.
- `flocksim.inifile`: parameter files and command-line file choices.
  - `parse_ini_lines` and `parse_ini` call a `handler(section, name, value)` for each entry. They return 0, or the number of the first bad line.
  - Command-line helpers: `find_input_file`, `find_output_file` and `count_inputs`.

## Example

```python
import random

from flocksim.phase import Phase
from flocksim.placement import place_on_xy_plane
from flocksim.interactions import repulsion_lin

rng = random.Random(1)
phase = Phase(10, 0)
place_on_xy_plane(phase, 5000.0, 5000.0, 0.0, 0.0, 0.0, 0, 10, 300.0, rng)

velocity = repulsion_lin(phase, 400.0, 0.5, 1000.0, 0, 2, True)
print(velocity)
```

How the modules handle data:

- Vector functions accept any sequence of three numbers.
- They return new tuples and leave their arguments unchanged.
- The `Phase` rows themselves are lists that placement, ordering and timeline functions update in place.

## What it does not do

flocksim is a library only. It has no command to run, no simulation main loop, no flocking algorithm that ties the terms together, and no visualisation or output writing. You supply the time stepping and the parameter handling yourself.

## Running the tests

```
pip install -e .[test]
pytest
```