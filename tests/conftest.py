"""Shared pytest configuration."""

import os

# Surfaces are created without a window; keep SDL from looking for a display.
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
