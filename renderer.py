# renderer.py

import logging

import constants
from scheduler import RepeatingTask

logger = logging.getLogger("fireworks")


class Renderer:
    """
    Drives the per-frame physics update and composites the result.

    Each frame:
    1. Fade the persistent buffer with translucent black (the trails).
    2. Clear the transient buffer.
    3. Render every active burst into the transient buffer.
    4. Add the transient buffer onto the persistent buffer.

    Data Contract:
    - Inputs: persistent (front) and transient (back) canvases of equal size,
      the engine's active-burst list, a scheduler and the frame interval.
    - Side Effects: advances every burst by one tick per frame.
    - Invariants: a burst's physics update precedes its draw, and all drawing
      precedes the composite. Because both drawing and compositing are
      additive, the result does not depend on burst order.
    """
    def __init__(self, front, back, bursts: list, scheduler, interval_ms: float):
        self.front = front
        self.back = back
        self.bursts = bursts
        self.frame = 0
        self.task = RepeatingTask(scheduler, self.tick, interval_ms, name="render")

    def tick(self):
        self.front.fill(constants.BLACK, constants.TRAIL_FADE_ALPHA)
        self.back.clear()

        for burst in self.bursts:
            burst.render(self.back)

        self.front.composite_additive(self.back)

        # --- Logging (throttled) ---
        if self.frame % constants.LOG_EVERY_FRAMES == 0:
            live = sum(len(burst.particles) for burst in self.bursts)
            logger.debug(f"Frame={self.frame}, ActiveBursts={len(self.bursts)}, LiveParticles={live}")
        self.frame += 1

    def start(self):
        self.task.start()

    def cancel(self):
        self.task.cancel()
