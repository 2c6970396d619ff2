# fireworks.py

import logging

import numpy as np

from canvas import Canvas, SurfaceError
from config import FireworksConfig
from renderer import Renderer
from scheduler import FrameScheduler, TimerScheduler
from spawner import SpawnScheduler

logger = logging.getLogger("fireworks")


class Fireworks:
    """
    The display engine: owns the active bursts, the spawn loop and the render loop.

    Data Contract:
    - Inputs:
        - surface: a Canvas, or a pygame.Surface to wrap in one. This is the
          persistent (visible) buffer.
        - config (FireworksConfig): defaults are used when omitted.
        - rng (np.random.Generator): the single source of randomness.
        - timer / frames: scheduling primitives pumped by the host loop.
    - Outputs: None. Drawing happens in the persistent buffer.
    - Side Effects: start() registers callbacks with the schedulers.
    - Invariants: the spawn and render loops never overlap; each callback runs
      to completion. pause() and stop() may be called any number of times.
    - Raises: SurfaceError when no usable surface is given.
    """
    def __init__(self, surface, config: FireworksConfig = None, rng: np.random.Generator = None,
                 timer: TimerScheduler = None, frames: FrameScheduler = None):
        if surface is None:
            raise SurfaceError("Cannot start a display without a drawing surface.")
        self.canvas = surface if isinstance(surface, Canvas) else Canvas(surface)
        self.buffer = self.canvas.create_buffer()

        self.config = config or FireworksConfig()
        self.rng = rng if rng is not None else np.random.default_rng()
        self.timer = timer or TimerScheduler()
        self.frames = frames or FrameScheduler()

        self.bursts = []
        self.spawner = SpawnScheduler(
            self.bursts, self.config, (self.canvas.width, self.canvas.height), self.rng, self.timer
        )

        render_scheduler = self.frames if self.config.use_frame_sync else self.timer
        self.renderer = Renderer(
            self.canvas, self.buffer, self.bursts, render_scheduler, self.config.render_interval_ms
        )

        logger.info(
            f"Fireworks created on a {self.canvas.width}x{self.canvas.height} canvas "
            f"(target={self.config.target_burst_count}, fps={self.config.fps}, "
            f"frame_sync={self.config.use_frame_sync})."
        )

    @property
    def is_running(self) -> bool:
        return self.spawner.task.is_running or self.renderer.task.is_running

    @property
    def particle_count(self) -> int:
        return sum(len(burst.particles) for burst in self.bursts)

    def start(self):
        """Starts (or resumes) both loops. Has no effect while already running."""
        if self.spawner.task.is_running and self.renderer.task.is_running:
            return
        self.spawner.start()
        self.renderer.start()
        logger.info("Display started.")

    def pause(self):
        """Cancels both pending ticks. Bursts and buffers are left as they are."""
        was_running = self.is_running
        self.spawner.cancel()
        self.renderer.cancel()
        if was_running:
            logger.info(f"Display paused with {len(self.bursts)} active burst(s).")

    def stop(self):
        """Pauses, drops every burst and clears the sky to the background."""
        self.pause()
        self.bursts.clear()
        self.canvas.clear()
        logger.info("Display stopped and cleared.")

    def spawn_burst(self, x=None, y=None, color=None, particle_count=None):
        """
        Launches one burst immediately, outside the automatic spawn policy.
        Omitted arguments are randomised the same way as scheduled bursts.
        """
        burst = self.spawner.create_burst(x, y, color, particle_count)
        self.bursts.append(burst)
        return burst
