# firework.py

import enum
import logging

import numpy as np

from particle import Particle

logger = logging.getLogger("fireworks")


class Status(enum.Enum):
    ACTIVE = "active"
    COMPLETED = "completed"


class Firework:
    """
    One burst: a group of particles sharing an origin, a color and a lifecycle.

    Data Contract:
    - Inputs: origin (x, y), RGBA color, particle count, ParticleOptions, rng.
    - Outputs: None. The burst owns its particles exclusively.
    - Invariants: status is ACTIVE from construction and switches to COMPLETED
      exactly once, on the first update that leaves no live particle. A
      completed burst never draws again.
    """
    def __init__(self, x: float, y: float, color: tuple, particle_count: int, options, rng: np.random.Generator):
        self.x = x
        self.y = y
        self.color = color
        self.status = Status.ACTIVE

        base_size = options.size
        self.particles = [
            Particle(x, y, base_size + rng.uniform(-base_size / 2, base_size / 2), color, options, rng)
            for _ in range(particle_count)
        ]

    def update(self):
        """Advances every particle and drops the ones that burned out."""
        for particle in self.particles:
            particle.update()

        self.particles = [particle for particle in self.particles if particle.is_alive()]

        if not self.particles and self.status is Status.ACTIVE:
            self.status = Status.COMPLETED
            logger.debug(f"Burst at ({self.x:.0f}, {self.y:.0f}) burned out.")

    def render(self, canvas):
        """
        Updates the burst, then draws its surviving particles.
        There is no way to advance a burst without drawing it.
        """
        if self.is_completed():
            return

        self.update()
        if self.is_completed():
            return

        for particle in self.particles:
            particle.render(canvas)

    def is_completed(self) -> bool:
        return self.status is Status.COMPLETED
