"""Fixed configuration shared by the spread model and the simulator."""

import math

# Vegetation class marking cells that can never burn.
NON_BURNABLE_CLASS = 99

# Landscape resolution (m) used for neighbour distances.
DEFAULT_RESOLUTION = 30.0

# Queen neighbour moves as (row, col) offsets, ordered row-wise:
#   0 1 2
#   3   4
#   5 6 7
NEIGHBOUR_OFFSETS = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1),           (0, 1),
    (1, -1),  (1, 0),  (1, 1),
)

# Direction the wind must blow from (degrees) to push fire from the burning
# cell into each neighbour above.
SOURCE_ANGLES_DEG = (
    135, 180, 225,
    90,       270,
    45,   0,  315,
)

SQRT2 = math.sqrt(2.0)

DETERMINISTIC_THRESHOLD = 0.5
DEFAULT_UPPER_LIMIT = 1.0

# max_steps of 0/None becomes UNLIMITED_STEPS_FACTOR * n_cells
UNLIMITED_STEPS_FACTOR = 10

LAYER_NAMES = ("vegetation", "elevation", "wind_direction", "wind_speed")
