"""
Physical constants and display conventions for the gravity forward model.

The display scales are unit conversions applied once to an aggregated
field (see gravity.engine.evaluate_all). They are not part of the
physical formulas and must never be applied per body.

IMPORTANT: No unicode characters allowed in this file (Windows charmap constraint).
"""

import math

# Gravitational constant, rounded to four figures
G = 6.674e-11  # m^3 kg^-1 s^-2

# Relative offset applied to every observation point before evaluation.
# Pushes the point off exact corner/edge/face alignments that would give
# log(0) or 0/0 in the prism formulas. Heuristic; kept for compatibility.
OBSERVATION_PERTURBATION = 1e-7

# Display scale for Gx, Gy, Gz (sign flip + SI to 1e-8 m/s^2, i.e. uGal)
VECTOR_SCALE = -1e8

# Display scale for the gradient tensor (1/s^2 to Eotvos)
TENSOR_SCALE = 1e9

FOUR_THIRDS_PI = 4.0 / 3.0 * math.pi

# Density contrasts offered by the editing panel (kg/m^3)
DENSITY_PRESETS = {
    "soil_void": -1800.0,
    "concrete": 2000.0,
    "lead": 11340.0,
    "tungsten": 19300.0,
}

# Slider ranges of the editing panel, exposed for clients
DENSITY_RANGE = (-3000.0, 22590.0)
CENTROID_RANGE = (-50.0, 50.0)
ROTATION_RANGE = (-math.pi / 2.0, math.pi / 2.0)

# Request limits for a single evaluation
MAX_BODIES = 100
MAX_POINTS = 10000

# A persisted model holds at most this many objects
MAX_OBJECTS = 10
