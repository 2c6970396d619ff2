# constants.py

"""
Application Constants

This module defines static configuration values for the display framework.
Tunable values (burst counts, intervals, particle coefficients) live in
config.json and are parsed by config.py; these are not expected to change
between runs.

Data Contract:
- All values are immutable constants.
- Units are specified in comments where applicable.
"""

# Screen dimensions
WIDTH = 1600  # Pixels
HEIGHT = 900  # Pixels

# Window Title
TITLE = "Fireworks"

# Colors (RGBA)
BLACK = (0, 0, 0, 255)
TRANSPARENT = (0, 0, 0, 0)

# Burst composition
MIN_PARTICLES_PER_BURST = 80
MAX_PARTICLES_PER_BURST = 100  # Inclusive
SPAWN_MARGIN = 0.1  # Fraction of the canvas kept free on every side.

# A particle is dead once its size drops below this many pixels.
MIN_PARTICLE_SIZE = 1.0

# Visual Effects
TRAIL_FADE_ALPHA = 0.05  # Opacity of the black veil laid over the sky each frame. Lower = longer trails.
SHADOW_ALPHA = 0.1  # Alpha of a particle's outer gradient stop.
HIGHLIGHT_COLOR = (255, 255, 255, 77)  # rgba(255, 255, 255, 0.3)

# Radial gradient stop offsets (fraction of the gradient radius).
HIGHLIGHT_STOP = 0.1
BODY_STOP = 0.6
SHADOW_STOP = 1.0

# Scheduling
BASE_FRAME_MS = 16.67  # Frame period at 60 fps.
SPAWN_JITTER = (0.5, 1.0)  # Multiplier range applied to the spawn interval.

# Logging
LOG_EVERY_FRAMES = 300
