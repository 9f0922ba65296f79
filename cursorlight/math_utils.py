"""Pure math utilities - no external dependencies."""

from __future__ import annotations
import math


def clamp(v: float, a: float, b: float) -> float:
    """Clamp value v to range [a, b]."""
    return a if v < a else b if v > b else v


def lerp(a: float, b: float, t: float) -> float:
    """Linear interpolation from a to b by factor t (clamped to [0, 1])."""
    t = clamp(t, 0.0, 1.0)
    return a + (b - a) * t


def exp_blend(rate: float, dt: float) -> float:
    """Frame-rate independent blend factor: 1 - e^(-rate*dt).

    Stays in [0, 1) for any non-negative dt, including dt much larger
    than 1/rate.
    """
    return 1.0 - math.exp(-rate * dt)


def ease_out_cubic(t: float) -> float:
    """Cubic ease-out: fast start, decelerating to zero velocity."""
    if t <= 0.0:
        return 0.0
    if t >= 1.0:
        return 1.0
    p = 1.0 - t
    return 1.0 - p * p * p


def ease_out_quad(t: float) -> float:
    """Quadratic ease-out: decelerating to zero velocity."""
    if t <= 0.0:
        return 0.0
    if t >= 1.0:
        return 1.0
    return 1.0 - (1.0 - t) * (1.0 - t)


def ease_in_out_cubic(t: float) -> float:
    """Cubic ease-in-out: acceleration until halfway, then deceleration."""
    if t <= 0.0:
        return 0.0
    if t >= 1.0:
        return 1.0
    if t < 0.5:
        return 4.0 * t * t * t
    else:
        p = -2.0 * t + 2.0
        return 1.0 - p * p * p / 2.0


def hypot2(x: float, y: float) -> float:
    """Length of the 2D vector (x, y)."""
    return math.sqrt(x * x + y * y)


def ieee_div(a: float, b: float) -> float:
    """a / b with IEEE-754 results for b == 0 (+-inf, or nan for 0/0)."""
    if b == 0.0:
        if a == 0.0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b
