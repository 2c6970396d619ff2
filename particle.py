# particle.py

import math

import numpy as np

import constants
from colors import with_alpha


class Particle:
    """
    A single spark of a burst.

    Data Contract:
    - Inputs: origin (x, y), size, RGBA color, ParticleOptions and the random
      generator shared with the owning burst.
    - Side Effects: update() mutates position, velocity and size in place.
    - Invariants: size never grows (shrink is in (0, 1)). After n ticks the size
      is size0 * shrink**n, so every particle dies in a finite number of ticks.
    """
    def __init__(self, x: float, y: float, size: float, color: tuple, options, rng: np.random.Generator):
        self.x = x
        self.y = y
        self.size = size
        self.color = color
        self.shadow_color = with_alpha(color, constants.SHADOW_ALPHA)

        self.speed = options.speed
        self.gravity = options.gravity
        self.power = options.power
        self.shrink = options.shrink
        self.jitter = options.jitter
        self.rng = rng

        # Cosine-weighted magnitude: most sparks are slow, a few fly far.
        angle = rng.uniform(0, 2 * math.pi)
        speed = math.cos(rng.uniform(0, math.pi / 2)) * self.speed
        self.vx = math.cos(angle) * speed
        self.vy = math.sin(angle) * speed

    def update(self):
        """
        Advances the particle by one tick.
        v = v * power, vy += gravity, p += v + jitter, size *= shrink
        """
        self.vx *= self.power
        self.vy *= self.power
        self.vy += self.gravity

        # One noise sample moves both axes.
        jitter = self.rng.uniform(-1, 1) * self.jitter
        self.x += self.vx + jitter
        self.y += self.vy + jitter

        self.size *= self.shrink

    def is_alive(self) -> bool:
        return self.size >= constants.MIN_PARTICLE_SIZE

    def render(self, canvas):
        """
        Draws the particle as a square filled with a radial gradient.
        A square is cheaper to fill than a disc and the gradient hides the corners.
        """
        if not self.is_alive():
            return

        stops = (
            (constants.HIGHLIGHT_STOP, constants.HIGHLIGHT_COLOR),
            (constants.BODY_STOP, self.color),
            (constants.SHADOW_STOP, self.shadow_color),
        )
        canvas.fill_radial_gradient(self.x, self.y, self.size, stops)
