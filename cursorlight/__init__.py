"""cursorlight - cursor smoothing with a pluggable strategy and effects pipeline."""

from .types import (
    ConfigurationError,
    ControllerConfig,
    CursorFrame,
    EasingConfig,
    LerpConfig,
    SpringConfig,
    StrategyKind,
    Vec2,
)
from .strategies import EASING_FUNCTIONS, STRATEGIES, get_easing_function, get_strategy
from .effects import (
    HandShakeConfig,
    HandShakeEffect,
    IdleDriftConfig,
    IdleDriftEffect,
    hand_shake_effect,
    idle_drift_effect,
)
from .controller import CursorController, create_controller

__all__ = [
    'ConfigurationError',
    'ControllerConfig',
    'CursorFrame',
    'EasingConfig',
    'LerpConfig',
    'SpringConfig',
    'StrategyKind',
    'Vec2',
    'EASING_FUNCTIONS',
    'STRATEGIES',
    'get_easing_function',
    'get_strategy',
    'HandShakeConfig',
    'HandShakeEffect',
    'IdleDriftConfig',
    'IdleDriftEffect',
    'hand_shake_effect',
    'idle_drift_effect',
    'CursorController',
    'create_controller',
]
