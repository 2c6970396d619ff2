# canvas.py

import functools
import logging

import numba
import numpy as np
import pygame

import constants

logger = logging.getLogger("fireworks")


class SurfaceError(RuntimeError):
    """Raised when no usable drawing surface can be obtained."""


# --- JIT-Compiled Rasteriser ---
# Gradient stamps are rebuilt for every new (size, color) pair, so the
# per-pixel loop is compiled by Numba. It operates only on NumPy arrays.

@numba.jit(nopython=True, fastmath=True)
def _radial_gradient_jit(side, offsets, colors, out):
    """
    Fills `out` (side x side x 4, indexed [x, y]) with a radial gradient centred
    on the top-left corner of the square, radius side / 2.

    Colors are linearly interpolated between stops and written premultiplied
    by their alpha, so stamps can be summed with additive blending. Pixels
    before the first stop or beyond the last one take that stop's color.
    """
    radius = side / 2.0
    num_stops = offsets.shape[0]
    for i in range(side):
        for j in range(side):
            dx = i + 0.5
            dy = j + 0.5
            t = np.sqrt(dx * dx + dy * dy) / radius

            if t <= offsets[0]:
                k = 0
                local_t = 0.0
            elif t >= offsets[num_stops - 1]:
                k = num_stops - 2
                local_t = 1.0
            else:
                k = 0
                while t > offsets[k + 1]:
                    k += 1
                local_t = (t - offsets[k]) / (offsets[k + 1] - offsets[k])

            if num_stops == 1:
                r = colors[0, 0]
                g = colors[0, 1]
                b = colors[0, 2]
                a = colors[0, 3]
            else:
                r = colors[k, 0] + (colors[k + 1, 0] - colors[k, 0]) * local_t
                g = colors[k, 1] + (colors[k + 1, 1] - colors[k, 1]) * local_t
                b = colors[k, 2] + (colors[k + 1, 2] - colors[k, 2]) * local_t
                a = colors[k, 3] + (colors[k + 1, 3] - colors[k, 3]) * local_t

            out[i, j, 0] = np.uint8(r * a / 255.0 + 0.5)
            out[i, j, 1] = np.uint8(g * a / 255.0 + 0.5)
            out[i, j, 2] = np.uint8(b * a / 255.0 + 0.5)
            out[i, j, 3] = np.uint8(a + 0.5)


@functools.lru_cache(maxsize=4096)
def gradient_stamp(side: int, stops: tuple) -> pygame.Surface:
    """
    Returns a cached side x side SRCALPHA surface holding the gradient for `stops`.
    `stops` is a tuple of (offset, (r, g, b, a)) pairs with increasing offsets.
    """
    offsets = np.array([offset for offset, _ in stops], dtype=np.float64)
    colors = np.array([color for _, color in stops], dtype=np.float64)
    pixels = np.zeros((side, side, 4), dtype=np.uint8)
    _radial_gradient_jit(side, offsets, colors, pixels)

    stamp = pygame.Surface((side, side), pygame.SRCALPHA)
    rgb = pygame.surfarray.pixels3d(stamp)
    rgb[...] = pixels[:, :, :3]
    del rgb  # Release the surface lock.
    alpha = pygame.surfarray.pixels_alpha(stamp)
    alpha[...] = pixels[:, :, 3]
    del alpha
    return stamp


class Canvas:
    """
    A drawing surface backed by a per-pixel-alpha pygame.Surface.

    Data Contract:
    - Inputs: a pygame.Surface with non-zero width and height.
    - Outputs: None. All operations draw into the wrapped surface in place.
    - Invariants: the surface keeps per-pixel alpha; a cleared canvas is fully
      transparent (0, 0, 0, 0), which is the background-only value.
    """
    def __init__(self, surface: pygame.Surface):
        if surface is None:
            raise SurfaceError("No drawing surface was provided.")
        width, height = surface.get_size()
        if width <= 0 or height <= 0:
            raise SurfaceError(f"Drawing surface has no usable area: {width}x{height}.")

        self.surface = surface
        self._veil = pygame.Surface((width, height), pygame.SRCALPHA)
        self._veil_color = None

    @classmethod
    def blank(cls, width: int, height: int) -> "Canvas":
        """Creates a transparent canvas of the given size."""
        if width <= 0 or height <= 0:
            raise SurfaceError(f"Cannot create a {width}x{height} canvas.")
        logger.debug(f"Allocating {width}x{height} canvas buffer.")
        return cls(pygame.Surface((width, height), pygame.SRCALPHA))

    @property
    def width(self) -> int:
        return self.surface.get_width()

    @property
    def height(self) -> int:
        return self.surface.get_height()

    def create_buffer(self) -> "Canvas":
        """Returns a new transparent canvas of the same size."""
        return Canvas.blank(self.width, self.height)

    def fill(self, color: tuple, alpha: float):
        """Lays a translucent veil of `color` over the whole canvas (source-over)."""
        veil_color = (color[0], color[1], color[2], round(alpha * 255))
        if veil_color != self._veil_color:
            self._veil.fill(veil_color)
            self._veil_color = veil_color
        self.surface.blit(self._veil, (0, 0))

    def clear(self):
        """Resets every pixel to fully transparent."""
        self.surface.fill(constants.TRANSPARENT)

    def fill_radial_gradient(self, x: float, y: float, size: float, stops: tuple):
        """
        Fills the square of side `size` whose top-left corner is (x, y) with a
        radial gradient centred on (x, y) of radius size / 2. The stamp is
        added onto the canvas, so overlapping particles brighten each other.
        """
        side = int(size)
        if side < 1:
            return
        stamp = gradient_stamp(side, stops)
        self.surface.blit(stamp, (round(x), round(y)), special_flags=pygame.BLEND_RGBA_ADD)

    def composite_additive(self, other: "Canvas"):
        """Adds `other` onto this canvas channel by channel, saturating at 255."""
        self.surface.blit(other.surface, (0, 0), special_flags=pygame.BLEND_RGBA_ADD)

    def present(self, target: pygame.Surface):
        """
        Draws the canvas onto an opaque target such as the window.
        Pixels are stored premultiplied, so alpha must not be applied again.
        """
        target.blit(self.surface, (0, 0), special_flags=pygame.BLEND_PREMULTIPLIED)
