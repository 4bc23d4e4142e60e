#!/usr/bin/env python3
"""
Shared constants for the satellite capture simulator (simulation units).

The simulation works in dimensionless world units with G = 1. Defaults here
feed SimulationConfig and PlacementConfig; keeping them in one place makes
tuning a preset a matter of overriding a few fields.
"""

# Physics
G = 1.0
SOFTENING_FLOOR = 0.25  # minimum squared separation in the force law
BASE_DT = 0.01
STEPS_PER_FRAME = 10

# Domain
DOMAIN_HALF_SIZE = 500.0
SPAWN_RADIUS = 750.0
EJECTION_FACTOR = 3.0  # multiples of the full domain size

# Satellites
PARTICLE_MASS = 0.25
PARTICLE_RADIUS = 1.0
MAX_PARTICLES = 1000
SPAWN_PROBABILITY = 0.2
CAPTURABLE_FRACTION = 0.75
SPEED_MULTIPLIER_RANGE = (0.85, 1.25)

# Capture
RING_MIN_DISTANCE = 10.0
RING_MAX_DISTANCE = 500.0
TANGENTIAL_TOLERANCE = 0.5
CAPTURE_PROBABILITY = 0.1
UNCAPTURE_PROBABILITY = 0.001
CAPTURE_BLEND_FACTOR = 0.15

# Damping (damped-rings variant)
DAMPING_FACTOR = 0.99995
DAMPING_DISTANCE_RATIO = 1.5

# Trails
TRAIL_CAPACITY = 100
TRAIL_INTERVAL = 1
DYING_TRAIL_TICKS = 60

# Body placement
BODY_COUNT_RANGE = (5, 8)
MIN_BODY_SPACING = 200.0
GRID_SIZE = 4
CELL_MARGIN_RATIO = 0.3
BODY_MASS_RANGE = (5000.0, 10000.0)
BODY_RADIUS_RANGE = (30.0, 80.0)
CLUSTER_SPREAD = 0.25
PLACEMENT_MAX_ATTEMPTS = 200
LANES_PER_BODY = 3
LANE_RADIUS_RANGE = (1.6, 3.5)  # multiples of the body radius

# Rendering (viewport)
VIEW_WIDTH = 1000
VIEW_HEIGHT = 1000
BACKGROUND_COLOR = (0, 0, 0)
PARTICLE_COLOR = (255, 255, 255)
TRAIL_COLOR = (200, 200, 200)
CAPTURED_COLOR = (140, 200, 255)

# Viewport zoom bounds (pixels per world unit)
MIN_PIXELS_PER_UNIT = 0.02
MAX_PIXELS_PER_UNIT = 20.0
VIEW_PADDING = 0.05  # fraction of the shorter side left empty around the domain

# Safety: avoid drawing outside reasonable integer pixel ranges
SAFE_COORD_LIMIT = 30000
