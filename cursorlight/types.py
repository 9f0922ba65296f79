"""Core data types for cursorlight."""

from __future__ import annotations
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, Mapping, Optional, Tuple, Union
from enum import Enum

from . import config as cfg
from .math_utils import hypot2


class ConfigurationError(ValueError):
    """Unknown strategy, easing function, drift pattern or config key."""


class StrategyKind(str, Enum):
    """Known smoothing strategies, selected by name."""
    LERP = "lerp"
    SPRING = "spring"
    EASING = "easing"

    @classmethod
    def parse(cls, name: Union[str, StrategyKind]) -> StrategyKind:
        try:
            return cls(name)
        except ValueError:
            raise ConfigurationError(f"Unknown smoothing strategy: {name}") from None


@dataclass
class Vec2:
    """A 2D point or vector."""
    x: float = 0.0
    y: float = 0.0

    def copy(self) -> Vec2:
        return Vec2(self.x, self.y)

    def length(self) -> float:
        return hypot2(self.x, self.y)

    @classmethod
    def of(cls, value: Union[Vec2, Tuple[float, float], Mapping[str, float]]) -> Vec2:
        """Build a Vec2 from a Vec2, an (x, y) pair or an {x, y} mapping."""
        if isinstance(value, Vec2):
            return value.copy()
        if isinstance(value, Mapping):
            return cls(float(value["x"]), float(value["y"]))
        x, y = value
        return cls(float(x), float(y))


@dataclass
class CursorFrame:
    """Working state threaded through the effects pipeline.

    Effects return a full replacement frame. `target` is passed through
    untouched by convention.
    """
    position: Vec2 = field(default_factory=Vec2)
    velocity: Vec2 = field(default_factory=Vec2)
    target: Vec2 = field(default_factory=Vec2)

    def with_position(self, x: float, y: float) -> CursorFrame:
        return CursorFrame(position=Vec2(x, y), velocity=self.velocity, target=self.target)


@dataclass(frozen=True)
class LerpConfig:
    damping: float = cfg.LERP_DAMPING


@dataclass(frozen=True)
class SpringConfig:
    stiffness: float = cfg.SPRING_STIFFNESS
    damping: float = cfg.SPRING_DAMPING


@dataclass(frozen=True)
class EasingConfig:
    duration: float = cfg.EASING_DURATION_S
    easing: str = cfg.EASING_FUNCTION


StrategyConfig = Union[LerpConfig, SpringConfig, EasingConfig]

_STRATEGY_CONFIG_TYPES = {
    StrategyKind.LERP: LerpConfig,
    StrategyKind.SPRING: SpringConfig,
    StrategyKind.EASING: EasingConfig,
}


def build_config(cls: type, overrides: Optional[Mapping[str, Any]], aliases: Optional[Mapping[str, str]] = None) -> Any:
    """Build a config dataclass from defaults plus a mapping of overrides.

    Keys may use the field name or one of `aliases`. Unknown keys raise
    ConfigurationError.
    """
    if overrides is None:
        return cls()
    if isinstance(overrides, cls):
        return overrides
    names = {f.name for f in fields(cls)}
    kwargs: Dict[str, Any] = {}
    for key, value in overrides.items():
        name = aliases.get(key, key) if aliases else key
        if name not in names:
            raise ConfigurationError(f"Unknown {cls.__name__} parameter: {key}")
        kwargs[name] = value
    return cls(**kwargs)


@dataclass(frozen=True)
class ControllerConfig:
    """Construction-time controller configuration.

    `strategy` is kept as given; an unknown name only fails when the
    controller next updates.
    """
    strategy: str = cfg.DEFAULT_STRATEGY
    lerp: LerpConfig = field(default_factory=LerpConfig)
    spring: SpringConfig = field(default_factory=SpringConfig)
    easing: EasingConfig = field(default_factory=EasingConfig)

    @classmethod
    def from_mapping(cls, mapping: Optional[Mapping[str, Any]]) -> ControllerConfig:
        """Parse {strategy, lerp: {...}, spring: {...}, easing: {...}}."""
        if mapping is None:
            return cls()
        unknown = set(mapping) - {"strategy", "lerp", "spring", "easing"}
        if unknown:
            raise ConfigurationError(f"Unknown controller config keys: {sorted(unknown)}")
        strategy = mapping["strategy"] if "strategy" in mapping else cfg.DEFAULT_STRATEGY
        if isinstance(strategy, StrategyKind):
            strategy = strategy.value
        return cls(
            strategy=str(strategy),
            lerp=build_config(LerpConfig, mapping.get("lerp")),
            spring=build_config(SpringConfig, mapping.get("spring")),
            easing=build_config(EasingConfig, mapping.get("easing")),
        )

    @property
    def kind(self) -> StrategyKind:
        return StrategyKind.parse(self.strategy)

    def for_active(self) -> StrategyConfig:
        """Config of the selected strategy."""
        return getattr(self, self.kind.value)

    def with_strategy(self, name: Union[str, StrategyKind]) -> ControllerConfig:
        if isinstance(name, StrategyKind):
            name = name.value
        return replace(self, strategy=str(name))

    def with_params(self, kind: StrategyKind, params: Mapping[str, Any]) -> ControllerConfig:
        """Return a copy with one strategy's parameters overridden."""
        current = getattr(self, kind.value)
        merged = {f.name: getattr(current, f.name) for f in fields(current)}
        merged.update(params)
        return replace(self, **{kind.value: build_config(_STRATEGY_CONFIG_TYPES[kind], merged)})


@dataclass
class EffectEntry:
    """One pipeline entry: the effect, its config, and its private state."""
    effect: Any
    config: Any = None
    state: Dict[str, Any] = field(default_factory=dict)
