"""Smoothing strategies - turn a jittery target into a smoothed position.

Every strategy exposes one operation:

    update(current, target, dt, config, velocity, slot) -> (position, velocity)

Inputs are never mutated. `slot` is a dict owned by the controller that
survives across frames; only the easing strategy stores anything in it.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable, Dict, MutableMapping, Tuple, Union

from .math_utils import lerp, exp_blend, ease_out_cubic, ease_out_quad, ease_in_out_cubic
from .types import (
    ConfigurationError, StrategyKind, Vec2,
    LerpConfig, SpringConfig, EasingConfig,
)

StrategyResult = Tuple[Vec2, Vec2]

EASING_FUNCTIONS: Dict[str, Callable[[float], float]] = {
    "easeOutCubic": ease_out_cubic,
    "easeOutQuad": ease_out_quad,
    "easeInOutCubic": ease_in_out_cubic,
}


def get_easing_function(name: str) -> Callable[[float], float]:
    """Look up an easing function by name."""
    try:
        return EASING_FUNCTIONS[name]
    except KeyError:
        raise ConfigurationError(f"Unknown easing function: {name}") from None


class SmoothingStrategy(ABC):
    """Base class for all smoothing strategies."""

    kind: StrategyKind

    @abstractmethod
    def update(
        self,
        current: Vec2,
        target: Vec2,
        dt: float,
        config: Any,
        velocity: Vec2,
        slot: MutableMapping[str, Any],
    ) -> StrategyResult:
        """Advance one frame. Returns (new position, new velocity)."""
        pass


class LerpStrategy(SmoothingStrategy):
    """Exponential smoothing towards the target. Velocity passes through."""

    kind = StrategyKind.LERP

    def update(self, current, target, dt, config: LerpConfig, velocity, slot) -> StrategyResult:
        b = exp_blend(config.damping, dt)
        position = Vec2(lerp(current.x, target.x, b), lerp(current.y, target.y, b))
        return position, velocity.copy()


class SpringStrategy(SmoothingStrategy):
    """Unit-mass spring-damper, semi-implicit Euler, axes independent.

    Not clamped: stiffness * dt^2 around 1 or more will overshoot and can
    diverge.
    """

    kind = StrategyKind.SPRING

    def update(self, current, target, dt, config: SpringConfig, velocity, slot) -> StrategyResult:
        k = config.stiffness
        d = config.damping
        fx = -k * (current.x - target.x) - d * velocity.x
        fy = -k * (current.y - target.y) - d * velocity.y

        new_velocity = Vec2(velocity.x + fx * dt, velocity.y + fy * dt)
        position = Vec2(
            current.x + new_velocity.x * dt,
            current.y + new_velocity.y * dt,
        )
        return position, new_velocity


class EasingPhase(Enum):
    """Phases of the fixed-duration easing animation."""
    IDLE = auto()       # nothing captured yet
    ANIMATING = auto()  # replaying towards the captured target
    HOLDING = auto()    # reached the target, waiting for it to move


@dataclass
class EasingState:
    """Start snapshot for the current easing animation."""
    phase: EasingPhase = EasingPhase.IDLE
    start_pos: Vec2 = field(default_factory=Vec2)
    start_target: Vec2 = field(default_factory=Vec2)
    elapsed: float = 0.0

    def needs_capture(self, target: Vec2) -> bool:
        # exact comparison: a bit-different target restarts the animation
        if self.phase is EasingPhase.IDLE:
            return True
        return target.x != self.start_target.x or target.y != self.start_target.y

    def capture(self, current: Vec2, target: Vec2) -> None:
        self.start_pos = current.copy()
        self.start_target = target.copy()
        self.elapsed = 0.0
        self.phase = EasingPhase.ANIMATING

    def advance(self, dt: float, duration: float) -> float:
        """Add dt and return linear progress in [0, 1]."""
        self.elapsed += dt
        if duration <= 0:
            t = 1.0
        else:
            t = min(self.elapsed / duration, 1.0)
        self.phase = EasingPhase.HOLDING if t >= 1.0 else EasingPhase.ANIMATING
        return t


class EasingStrategy(SmoothingStrategy):
    """Fixed-duration eased interpolation from a captured start position.

    Restarts from the current position whenever the target moves.
    """

    kind = StrategyKind.EASING
    slot_key = "easing"

    def state(self, slot: MutableMapping[str, Any]) -> EasingState:
        st = slot.get(self.slot_key)
        if st is None:
            st = EasingState()
            slot[self.slot_key] = st
        return st

    def update(self, current, target, dt, config: EasingConfig, velocity, slot) -> StrategyResult:
        ease = get_easing_function(config.easing)
        st = self.state(slot)

        if st.needs_capture(target):
            st.capture(current, target)

        eased_t = ease(st.advance(dt, config.duration))
        position = Vec2(
            lerp(st.start_pos.x, target.x, eased_t),
            lerp(st.start_pos.y, target.y, eased_t),
        )
        return position, velocity.copy()


STRATEGIES: Dict[StrategyKind, SmoothingStrategy] = {
    s.kind: s for s in (LerpStrategy(), SpringStrategy(), EasingStrategy())
}


def get_strategy(name: Union[str, StrategyKind]) -> SmoothingStrategy:
    """Resolve a strategy by name. Unknown names raise ConfigurationError."""
    return STRATEGIES[StrategyKind.parse(name)]
