"""Cursor controller - one smoothing strategy plus an ordered effects pipeline.

Usage:
    cursor = CursorController({"strategy": "spring"})
    cursor.add_effect(hand_shake_effect, {"intensity": 0.5})
    cursor.set_target(x, y)        # any number of times per frame
    cursor.update(dt)              # once per frame
    pos = cursor.position          # a copy, safe to keep
"""

from __future__ import annotations
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from .types import (
    ConfigurationError, ControllerConfig, CursorFrame, EffectEntry,
    StrategyKind, Vec2,
)
from .strategies import get_strategy
from .effects import resolve_apply, hand_shake_effect, idle_drift_effect
from .config import DEMO_HANDSHAKE, DEMO_IDLE_DRIFT
from .logging import log


class CursorController:
    """Smooths a raw target into a position/velocity pair every frame.

    Owns three fields (current, target, velocity), the strategy slot and
    the private state of each pipeline entry. Single-threaded: set_target
    and update are expected from the same frame loop.
    """

    def __init__(self, config: Union[ControllerConfig, Mapping[str, Any], None] = None):
        if isinstance(config, ControllerConfig):
            self.config = config
        else:
            self.config = ControllerConfig.from_mapping(config)
        self._current = Vec2()
        self._target = Vec2()
        self._velocity = Vec2()
        self._strategy_slot: Dict[str, Any] = {}
        self._pipeline: List[EffectEntry] = []

    # ─── Target ───────────────────────────────────────────────────────────

    def set_target(self, x: float, y: float) -> None:
        """Overwrite the target point. Only the last value before update counts."""
        self._target.x = float(x)
        self._target.y = float(y)

    @property
    def target(self) -> Vec2:
        return self._target.copy()

    @target.setter
    def target(self, value: Union[Vec2, Tuple[float, float], Mapping[str, float]]) -> None:
        v = Vec2.of(value)
        self.set_target(v.x, v.y)

    # ─── Read ─────────────────────────────────────────────────────────────

    @property
    def position(self) -> Vec2:
        """Current smoothed position (a copy)."""
        return self._current.copy()

    @property
    def velocity(self) -> Vec2:
        return self._velocity.copy()

    # ─── Effects pipeline ─────────────────────────────────────────────────

    def add_effect(self, effect: Any, config: Any = None) -> None:
        """Append an effect with a fresh private state. Order matters."""
        resolve_apply(effect)
        coerce = getattr(effect, "coerce_config", None)
        if coerce is not None:
            config = coerce(config)
        elif config is None:
            config = {}
        self._pipeline.append(EffectEntry(effect=effect, config=config))
        name = getattr(effect, "__name__", type(effect).__name__)
        log(f"[CURSOR] Effect #{len(self._pipeline)} added: {name}")

    def clear_effects(self) -> None:
        """Drop every pipeline entry together with its state."""
        n = len(self._pipeline)
        self._pipeline = []
        log(f"[CURSOR] Cleared {n} effect(s)")

    @property
    def effects(self) -> Tuple[Any, ...]:
        return tuple(entry.effect for entry in self._pipeline)

    # ─── Configuration ────────────────────────────────────────────────────

    @property
    def strategy(self) -> str:
        """Name of the active strategy."""
        return self.config.strategy

    @strategy.setter
    def strategy(self, name: Union[str, StrategyKind]) -> None:
        # the new name is not validated here; update() raises for unknown names
        self.config = self.config.with_strategy(name)
        self._strategy_slot.clear()
        log(f"[CURSOR] Strategy -> {self.config.strategy}")

    def configure(self, kind: Union[str, StrategyKind], **params: Any) -> None:
        """Override parameters of one strategy, e.g. configure("spring", stiffness=80)."""
        try:
            self.config = self.config.with_params(StrategyKind.parse(kind), params)
        except ConfigurationError as e:
            log(f"[CURSOR][ERR] {e}")
            raise
        log(f"[CURSOR] Configured {kind}: {params}")

    def reset(self, x: float = 0.0, y: float = 0.0) -> None:
        """Snap position and target to (x, y) and stop.

        Effect state is kept; strategy state is dropped.
        """
        self._current = Vec2(float(x), float(y))
        self._target = Vec2(float(x), float(y))
        self._velocity = Vec2()
        self._strategy_slot.clear()

    # ─── Frame ────────────────────────────────────────────────────────────

    def update(self, dt: float) -> None:
        """Advance one frame by dt seconds."""
        try:
            frame = self._step(dt)
        except ConfigurationError as e:
            log(f"[CURSOR][ERR] {e}")
            raise

        self._current = frame.position.copy()
        self._velocity = frame.velocity.copy()

    def _step(self, dt: float) -> CursorFrame:
        strategy = get_strategy(self.config.strategy)
        position, velocity = strategy.update(
            self._current, self._target, dt, self.config.for_active(),
            self._velocity, self._strategy_slot,
        )

        frame = CursorFrame(position=position, velocity=velocity, target=self._target.copy())
        for entry in self._pipeline:
            frame = resolve_apply(entry.effect)(frame, dt, entry.state, entry.config)
        return frame


def install_demo_effects(controller: CursorController) -> None:
    """Register tremor then idle drift, tuned for NDC units."""
    controller.add_effect(hand_shake_effect, DEMO_HANDSHAKE)
    controller.add_effect(idle_drift_effect, DEMO_IDLE_DRIFT)


def create_controller(strategy: Union[str, StrategyKind] = "lerp",
                      with_effects: bool = True,
                      config: Optional[Mapping[str, Any]] = None) -> CursorController:
    """Controller wired the way the demo uses it."""
    settings = dict(config or {})
    settings["strategy"] = strategy.value if isinstance(strategy, StrategyKind) else strategy
    controller = CursorController(settings)
    if with_effects:
        install_demo_effects(controller)
    return controller
