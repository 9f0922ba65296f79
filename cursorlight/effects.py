"""Post-smoothing effects - hand tremor and idle drift.

An effect runs after the active strategy:

    apply(frame, dt, effect_state, config) -> CursorFrame

`effect_state` is the private dict of one pipeline entry. Effects only
touch `effect_state["time"]` and never reach into the controller.
"""

from __future__ import annotations
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Dict, MutableMapping, Tuple

from . import config as cfg
from .math_utils import ieee_div
from .types import ConfigurationError, CursorFrame, build_config

TWO_PI = math.pi * 2.0

# camelCase keys accepted in effect config mappings
_KEY_ALIASES = {
    "velocityScale": "velocity_scale",
    "minVelocity": "min_velocity",
    "maxVelocity": "max_velocity",
}


@dataclass(frozen=True)
class HandShakeConfig:
    intensity: float = cfg.HANDSHAKE_INTENSITY
    frequency: float = cfg.HANDSHAKE_FREQUENCY
    velocity_scale: float = cfg.HANDSHAKE_VELOCITY_SCALE
    min_velocity: float = cfg.HANDSHAKE_MIN_VELOCITY


@dataclass(frozen=True)
class IdleDriftConfig:
    intensity: float = cfg.IDLE_DRIFT_INTENSITY
    frequency: float = cfg.IDLE_DRIFT_FREQUENCY
    max_velocity: float = cfg.IDLE_DRIFT_MAX_VELOCITY
    pattern: str = cfg.IDLE_DRIFT_PATTERN

    def __post_init__(self):
        drift_shape(self.pattern)


def advance_time(effect_state: MutableMapping[str, Any], dt: float) -> float:
    """Accumulate dt into the entry's private clock and return it."""
    t = effect_state.get("time", 0.0) + dt
    effect_state["time"] = t
    return t


class CursorEffect(ABC):
    """Base class for pipeline effects."""

    config_type: type

    def coerce_config(self, config: Any) -> Any:
        """Accept the config dataclass, a mapping, or None for defaults."""
        return build_config(self.config_type, config, _KEY_ALIASES)

    @abstractmethod
    def apply(self, frame: CursorFrame, dt: float,
              effect_state: MutableMapping[str, Any], config: Any) -> CursorFrame:
        """Transform the frame. Returns a new frame."""
        pass

    def __call__(self, frame, dt, effect_state, config) -> CursorFrame:
        return self.apply(frame, dt, effect_state, config)


class HandShakeEffect(CursorEffect):
    """Tremor whose amplitude grows with cursor speed.

    The X and Y offsets use different frequency ratios so the shake does
    not trace a simple ellipse.
    """

    config_type = HandShakeConfig

    @staticmethod
    def offset(time: float, speed: float, c: HandShakeConfig) -> Tuple[float, float]:
        velocity_factor = max(0.0, (speed - c.min_velocity) * c.velocity_scale)
        amplitude = c.intensity * (1.0 + velocity_factor)
        t = time * c.frequency * TWO_PI
        return (
            amplitude * math.sin(t) * math.cos(t * 0.75),
            amplitude * math.cos(t) * math.sin(t * 1.25),
        )

    def apply(self, frame, dt, effect_state, config) -> CursorFrame:
        c = self.coerce_config(config)
        time = advance_time(effect_state, dt)
        dx, dy = self.offset(time, frame.velocity.length(), c)
        return frame.with_position(frame.position.x + dx, frame.position.y + dy)


def _circular(t: float) -> Tuple[float, float]:
    return math.cos(t), math.sin(t)


def _figure8(t: float) -> Tuple[float, float]:
    return math.sin(t), 0.5 * math.sin(2.0 * t)


def _organic(t: float) -> Tuple[float, float]:
    return (
        0.6 * math.sin(t) + 0.4 * math.sin(t * 1.3),
        0.6 * math.cos(t * 0.7) + 0.4 * math.cos(t * 1.7),
    )


DRIFT_PATTERNS: Dict[str, Callable[[float], Tuple[float, float]]] = {
    "circular": _circular,
    "figure8": _figure8,
    "organic": _organic,
}


def drift_shape(pattern: str) -> Callable[[float], Tuple[float, float]]:
    """Look up a drift pattern by name."""
    try:
        return DRIFT_PATTERNS[pattern]
    except KeyError:
        raise ConfigurationError(f"Unknown drift pattern: {pattern}") from None


class IdleDriftEffect(CursorEffect):
    """Micro-movement while nearly still, fading out as speed rises.

    max_velocity == 0 is not guarded: a moving cursor gets idle factor 0,
    a still one gets nan.
    """

    config_type = IdleDriftConfig

    @staticmethod
    def offset(time: float, speed: float, c: IdleDriftConfig) -> Tuple[float, float]:
        shape = drift_shape(c.pattern)
        idle = 1.0 - ieee_div(speed, c.max_velocity)
        # nan propagates
        idle_factor = idle if math.isnan(idle) else max(0.0, idle)
        amplitude = c.intensity * idle_factor
        ux, uy = shape(time * c.frequency * TWO_PI)
        return amplitude * ux, amplitude * uy

    def apply(self, frame, dt, effect_state, config) -> CursorFrame:
        c = self.coerce_config(config)
        time = advance_time(effect_state, dt)
        dx, dy = self.offset(time, frame.velocity.length(), c)
        return frame.with_position(frame.position.x + dx, frame.position.y + dy)


hand_shake_effect = HandShakeEffect()
idle_drift_effect = IdleDriftEffect()


def resolve_apply(effect: Any) -> Callable[..., CursorFrame]:
    """Return the callable that applies `effect`.

    Objects with an `apply` method are used through it; bare callables
    with the same signature are used directly.
    """
    apply = getattr(effect, "apply", None)
    if callable(apply):
        return apply
    if callable(effect):
        return effect
    raise TypeError(f"Not an effect: {effect!r}")
