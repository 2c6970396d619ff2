# spawner.py

import logging

import numpy as np

import constants
from colors import to_rgba
from firework import Firework
from scheduler import RepeatingTask

logger = logging.getLogger("fireworks")


class SpawnScheduler:
    """
    Keeps the number of active bursts near the configured target.

    Data Contract:
    - Inputs: the engine's active-burst list (shared, mutated in place), the
      FireworksConfig, the canvas bounds (width, height), rng and a scheduler.
    - Side Effects: prunes completed bursts and appends new ones.
    - Invariants: at most one burst is spawned per tick, whatever the deficit.
      The period is spawn_interval_ms * uniform(0.5, 1.0) so bursts never
      look periodic.
    """
    def __init__(self, bursts: list, config, bounds: tuple, rng: np.random.Generator, scheduler):
        self.bursts = bursts
        self.config = config
        self.width, self.height = bounds
        self.rng = rng
        self.task = RepeatingTask(scheduler, self.tick, self.next_interval, name="spawn")

    def next_interval(self) -> float:
        low, high = constants.SPAWN_JITTER
        return self.config.spawn_interval_ms * self.rng.uniform(low, high)

    def prune(self) -> int:
        """Removes completed bursts from the shared list. Returns how many were removed."""
        before = len(self.bursts)
        self.bursts[:] = [burst for burst in self.bursts if not burst.is_completed()]
        return before - len(self.bursts)

    def tick(self):
        self.prune()
        if len(self.bursts) < self.config.target_burst_count:
            self.bursts.append(self.create_burst())

    def create_burst(self, x=None, y=None, color=None, particle_count=None) -> Firework:
        """
        Builds a burst, randomising every argument left as None:
        position within the inner 80% of the canvas, color from the palette,
        particle count in [80, 100].
        """
        margin = constants.SPAWN_MARGIN
        if x is None:
            x = self.rng.uniform(self.width * margin, self.width * (1 - margin))
        if y is None:
            y = self.rng.uniform(self.height * margin, self.height * (1 - margin))
        if color is None:
            palette = self.config.color_palette
            color = palette[self.rng.integers(len(palette))]
        else:
            color = to_rgba(color)
        if particle_count is None:
            particle_count = int(self.rng.integers(
                constants.MIN_PARTICLES_PER_BURST, constants.MAX_PARTICLES_PER_BURST, endpoint=True
            ))

        logger.debug(f"Spawning burst at ({x:.0f}, {y:.0f}) color={color} particles={particle_count}")
        return Firework(x, y, color, particle_count, self.config.particle_options, self.rng)

    def start(self):
        self.task.start()

    def cancel(self):
        self.task.cancel()
