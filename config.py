# config.py

"""
Display Configuration

Explicit, defaulted configuration for the fireworks engine. Every recognised
field is declared here; unknown keys are rejected instead of being silently
attached to the engine.

Data Contract:
- Inputs: the "fireworks" section of config.json (a dict with snake_case keys).
- Outputs: frozen FireworksConfig / ParticleOptions instances.
- Invariants: power and shrink are expected in (0, 1). shrink >= 1 would keep
  particles alive forever; this is a caller precondition and is not checked,
  since the check would sit on the per-tick hot path.
"""

import json
import logging
from dataclasses import dataclass, field, fields, replace

import constants
from colors import DEFAULT_PALETTE, hsla, to_rgba

logger = logging.getLogger("fireworks")


class ConfigError(ValueError):
    """Raised when the configuration file contains an invalid or unknown entry."""


@dataclass(frozen=True)
class ParticleOptions:
    size: float = 15.0  # Base particle size in pixels.
    speed: float = 15.0  # Maximum initial speed in pixels per tick.
    gravity: float = 0.08  # Added to the vertical velocity every tick.
    power: float = 0.93  # Velocity drag factor per tick.
    shrink: float = 0.97  # Size decay factor per tick.
    jitter: float = 1.0  # Magnitude of the per-tick positional noise.
    # Fallback only: every burst passes its own color, which overrides this one.
    color: tuple = field(default_factory=lambda: hsla(210, 100, 50))


@dataclass(frozen=True)
class FireworksConfig:
    target_burst_count: int = 8
    spawn_interval_ms: float = 400.0
    fps: float = 60.0
    display_refresh_rate: float = 60.0
    color_palette: tuple = DEFAULT_PALETTE
    particle_options: ParticleOptions = field(default_factory=ParticleOptions)

    @property
    def render_interval_ms(self) -> float:
        """Delay between two render ticks when driven by the plain timer."""
        return constants.BASE_FRAME_MS * (60 / self.fps)

    @property
    def use_frame_sync(self) -> bool:
        """True when the render loop should follow the display refresh instead of a timer."""
        return self.fps >= self.display_refresh_rate

    @classmethod
    def from_dict(cls, data: dict) -> "FireworksConfig":
        """
        Builds a configuration from a plain mapping, filling in defaults.

        Raises ConfigError on unknown keys, unparseable colors, an empty
        palette or non-positive timing values.
        """
        data = dict(data)
        _reject_unknown(cls, data, "fireworks")

        options_data = data.pop("particle_options", None) or {}
        _reject_unknown(ParticleOptions, options_data, "particle_options")
        options_kwargs = {}
        for name, value in options_data.items():
            options_kwargs[name] = _parse_color(value, name) if name == "color" else _parse_number(value, name)
        particle_options = ParticleOptions(**options_kwargs)

        if "color_palette" in data:
            palette = tuple(_parse_color(value, "color_palette") for value in data["color_palette"])
            if not palette:
                raise ConfigError("color_palette must contain at least one color")
            data["color_palette"] = palette

        for name in ("spawn_interval_ms", "fps", "display_refresh_rate"):
            if name in data:
                data[name] = _parse_number(data[name], name)
                if data[name] <= 0:
                    raise ConfigError(f"{name} must be positive, got {data[name]}")
        if "target_burst_count" in data:
            data["target_burst_count"] = _parse_number(data["target_burst_count"], "target_burst_count", int)

        return cls(particle_options=particle_options, **data)

    def with_options(self, **changes) -> "FireworksConfig":
        """Returns a copy with some particle options replaced."""
        return replace(self, particle_options=replace(self.particle_options, **changes))


def _reject_unknown(cls, data: dict, section: str):
    known = {f.name for f in fields(cls)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigError(f"Unknown {section} option(s): {', '.join(unknown)}")


def _parse_number(value, key: str, kind=float):
    try:
        return kind(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid value for {key}: {value!r}") from e


def _parse_color(value, key: str) -> tuple:
    try:
        return to_rgba(value)
    except (ValueError, TypeError) as e:
        raise ConfigError(f"Invalid color for {key}: {value!r}") from e


def load_config(config_path='config.json'):
    """
    Reads config.json and returns (raw_config, FireworksConfig).

    The raw dict is returned as well because logging, run_id and the master
    seed live beside the "fireworks" section.
    """
    with open(config_path, 'r') as f:
        config = json.load(f)

    fireworks_config = FireworksConfig.from_dict(config.get('fireworks', {}))
    logger.info(f"Loaded configuration from {config_path}: {fireworks_config}")
    return config, fireworks_config
