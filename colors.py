# colors.py

"""
Color helpers.

Every color inside the display is a plain (r, g, b, a) tuple of 0-255 ints.
Tuples are hashable, which lets the canvas cache gradient stamps per color.
Parsing of names and hex strings is delegated to pygame.Color.
"""

import pygame


def to_rgba(value) -> tuple:
    """
    Normalises a color value into an (r, g, b, a) tuple.

    Accepts anything pygame.Color understands: a color name ("red"),
    a hex string ("#ff8000"), an RGB or RGBA sequence, or a pygame.Color.
    Raises ValueError for unrecognised names.
    """
    if isinstance(value, (tuple, list)):
        color = pygame.Color(*value)
    else:
        color = pygame.Color(value)
    return (color.r, color.g, color.b, color.a)


def hsla(hue: float, saturation: float, lightness: float, alpha: float = 1.0) -> tuple:
    """Builds an RGBA tuple from CSS-style hsla(h, s%, l%, a) components."""
    color = pygame.Color(0, 0, 0)
    # pygame expects alpha as a percentage.
    color.hsla = (hue % 360, saturation, lightness, alpha * 100)
    return (color.r, color.g, color.b, color.a)


def with_alpha(value, alpha: float) -> tuple:
    """Returns the same color with its alpha replaced by `alpha` (0.0-1.0)."""
    r, g, b, _ = to_rgba(value)
    return (r, g, b, round(alpha * 255))


# Twelve evenly spaced, fully saturated hues.
DEFAULT_PALETTE = tuple(hsla(hue, 100, 50) for hue in range(0, 360, 30))
