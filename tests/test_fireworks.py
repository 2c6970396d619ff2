"""Unit tests for the Fireworks engine and the Renderer."""

import math
import unittest

import numpy as np
import pygame

from canvas import Canvas, SurfaceError
from config import FireworksConfig, ParticleOptions
from firework import Firework
from fireworks import Fireworks
from renderer import Renderer
from scheduler import FrameScheduler, TimerScheduler


def pixels(canvas: Canvas) -> np.ndarray:
    """Returns the canvas as a (width, height, 4) RGBA array."""
    rgb = pygame.surfarray.array3d(canvas.surface)
    alpha = pygame.surfarray.array_alpha(canvas.surface)
    return np.dstack([rgb, alpha])


class TestFireworksConstruction(unittest.TestCase):
    """Test engine construction."""

    def test_missing_surface_aborts_construction(self) -> None:
        """Test that no surface means no engine."""
        with self.assertRaises(SurfaceError):
            Fireworks(None)

    def test_wraps_plain_pygame_surface(self) -> None:
        """Test that a pygame.Surface is wrapped in a Canvas with a matching buffer."""
        show = Fireworks(pygame.Surface((40, 30), pygame.SRCALPHA))

        assert isinstance(show.canvas, Canvas)
        assert (show.buffer.width, show.buffer.height) == (40, 30)
        assert show.bursts == []

    def test_render_loop_uses_frames_at_native_rate(self) -> None:
        """Test that fps at or above the refresh rate follows the display refresh."""
        timer, frames = TimerScheduler(clock=lambda: 0.0), FrameScheduler()
        show = Fireworks(Canvas.blank(40, 30), FireworksConfig(fps=60), timer=timer, frames=frames)

        show.start()

        assert frames.pending() == 1
        assert timer.pending() == 1

    def test_render_loop_uses_timer_below_native_rate(self) -> None:
        """Test that a lower fps drives rendering from the plain timer."""
        timer, frames = TimerScheduler(clock=lambda: 0.0), FrameScheduler()
        config = FireworksConfig(fps=30)
        show = Fireworks(Canvas.blank(40, 30), config, timer=timer, frames=frames)

        show.start()

        assert math.isclose(config.render_interval_ms, 33.34)
        assert frames.pending() == 0
        assert timer.pending() == 2


class TestFireworksLifecycle(unittest.TestCase):
    """Test start, pause and stop."""

    def setUp(self) -> None:
        """Set up an engine with manually pumped schedulers."""
        self.timer = TimerScheduler(clock=lambda: 0.0)
        self.frames = FrameScheduler()
        self.show = Fireworks(
            Canvas.blank(200, 150), FireworksConfig(), np.random.default_rng(21),
            timer=self.timer, frames=self.frames,
        )

    def run_for(self, ms: int) -> None:
        """Pumps both schedulers in 16 ms steps."""
        for now in range(16, ms + 1, 16):
            self.timer.run_due(now=now)
            self.frames.run_frame()

    def test_start_spawns_and_renders(self) -> None:
        """Test that a running engine fills the sky."""
        self.show.start()
        self.run_for(1000)

        assert self.show.is_running
        assert self.show.bursts
        assert pixels(self.show.canvas)[..., 3].any()

    def test_pause_twice_is_same_as_once(self) -> None:
        """Test that pause is idempotent and leaves the state untouched."""
        self.show.start()
        self.run_for(500)
        bursts = list(self.show.bursts)
        before = pixels(self.show.canvas)

        self.show.pause()
        self.show.pause()
        self.run_for(500)

        assert not self.show.is_running
        assert self.show.spawner.task.handle is None
        assert self.show.renderer.task.handle is None
        assert self.show.bursts == bursts
        assert np.array_equal(pixels(self.show.canvas), before)

    def test_start_resumes_after_pause(self) -> None:
        """Test that calling start again continues the show."""
        self.show.start()
        self.run_for(200)
        self.show.pause()
        frame = self.show.renderer.frame

        self.show.start()
        self.run_for(200)

        assert self.show.renderer.frame > frame

    def test_stop_clears_bursts_and_sky(self) -> None:
        """Test the stop postcondition: no bursts and a background-only buffer."""
        self.show.start()
        self.run_for(1000)

        self.show.stop()

        assert len(self.show.bursts) == 0
        assert not pixels(self.show.canvas).any()
        assert self.timer.pending() == 0
        assert self.frames.pending() == 0

    def test_pause_and_stop_before_start(self) -> None:
        """Test that lifecycle calls on an idle engine are no-ops."""
        self.show.pause()
        self.show.stop()

        assert not self.show.is_running


class TestManualSpawn(unittest.TestCase):
    """Test spawn_burst."""

    def test_seeded_manual_spawn(self) -> None:
        """Test a forced 80 particle burst: sizes and speeds stay within bounds."""
        show = Fireworks(Canvas.blank(300, 300), rng=np.random.default_rng(2024))
        options = show.config.particle_options

        burst = show.spawn_burst(100, 100, "red", particle_count=80)

        assert show.bursts == [burst]
        assert burst.color == (255, 0, 0, 255)
        assert len(burst.particles) == 80
        for particle in burst.particles:
            assert options.size / 2 <= particle.size <= 3 * options.size / 2
            assert math.hypot(particle.vx, particle.vy) <= options.speed + 1e-9

    def test_spawn_ignores_target_count(self) -> None:
        """Test that manual bursts bypass the automatic spawn policy."""
        show = Fireworks(Canvas.blank(300, 300), FireworksConfig(target_burst_count=1))

        for _ in range(3):
            show.spawn_burst()

        assert len(show.bursts) == 3
        assert show.particle_count >= 240

    def test_same_seed_same_burst(self) -> None:
        """Test that a fixed seed reproduces the same burst."""
        first = Fireworks(Canvas.blank(300, 300), rng=np.random.default_rng(5)).spawn_burst()
        second = Fireworks(Canvas.blank(300, 300), rng=np.random.default_rng(5)).spawn_burst()

        assert (first.x, first.y, first.color) == (second.x, second.y, second.color)
        assert [p.vx for p in first.particles] == [p.vx for p in second.particles]


class TestRendererCompositing(unittest.TestCase):
    """Test the two-buffer compositor."""

    def make_burst(self, seed: int, x: float, color: tuple) -> Firework:
        """Builds a burst with its own random source so draw order cannot change its physics."""
        return Firework(x, 40.0, color, 30, ParticleOptions(), np.random.default_rng(seed))

    def render_frames(self, order: list, frames: int = 5) -> np.ndarray:
        front = Canvas.blank(120, 80)
        renderer = Renderer(front, front.create_buffer(), order, FrameScheduler(), 16.67)
        for _ in range(frames):
            renderer.tick()
        return pixels(front)

    def test_burst_order_does_not_change_pixels(self) -> None:
        """Test that rendering [A, B] and [B, A] composite to identical buffers."""
        a = self.make_burst(1, 50.0, (255, 80, 0, 255))
        b = self.make_burst(2, 60.0, (0, 120, 255, 255))
        a_again = self.make_burst(1, 50.0, (255, 80, 0, 255))
        b_again = self.make_burst(2, 60.0, (0, 120, 255, 255))

        forward = self.render_frames([a, b])
        backward = self.render_frames([b_again, a_again])

        assert forward.any()
        assert np.array_equal(forward, backward)

    def test_trails_fade_without_bursts(self) -> None:
        """Test that the persistent buffer keeps fading when nothing is active."""
        front = Canvas.blank(20, 20)
        front.surface.fill((200, 200, 200, 255))
        renderer = Renderer(front, front.create_buffer(), [], FrameScheduler(), 16.67)

        renderer.tick()
        once = pixels(front)[0, 0, 0]
        for _ in range(50):
            renderer.tick()

        assert pixels(front)[0, 0, 0] < once < 200

    def test_transient_buffer_cleared_each_frame(self) -> None:
        """Test that the back buffer only holds the latest frame."""
        front = Canvas.blank(120, 80)
        back = front.create_buffer()
        burst = self.make_burst(3, 60.0, (255, 255, 0, 255))
        renderer = Renderer(front, back, [burst], FrameScheduler(), 16.67)

        for _ in range(200):
            renderer.tick()

        assert burst.is_completed()
        assert not pixels(back).any()
