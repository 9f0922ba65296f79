import math

import pytest

from cursorlight.types import (
    ConfigurationError, Vec2, LerpConfig, SpringConfig, EasingConfig, StrategyKind,
)
from cursorlight.strategies import (
    EasingPhase, EasingStrategy, LerpStrategy, SpringStrategy,
    get_easing_function, get_strategy,
)
from cursorlight.math_utils import ease_out_cubic, ease_out_quad, ease_in_out_cubic


def run(strategy, config, current, target, dt, steps, velocity=None, slot=None):
    velocity = velocity or Vec2()
    slot = {} if slot is None else slot
    for _ in range(steps):
        current, velocity = strategy.update(current, target, dt, config, velocity, slot)
    return current, velocity


def test_lerp_one_step_blend():
    pos, vel = LerpStrategy().update(Vec2(0, 0), Vec2(1, 0), 0.1, LerpConfig(damping=10.0), Vec2(), {})
    assert pos.x == pytest.approx(1.0 - math.exp(-1.0))
    assert pos.x == pytest.approx(0.6321, abs=1e-4)
    assert pos.y == 0.0
    assert (vel.x, vel.y) == (0.0, 0.0)


def test_lerp_converges_monotonically():
    lerp = LerpStrategy()
    cfg = LerpConfig(damping=10.0)
    target = Vec2(1.0, -2.0)
    current, velocity = Vec2(), Vec2()
    last = math.inf
    for _ in range(120):
        current, velocity = lerp.update(current, target, 1 / 60, cfg, velocity, {})
        d = math.hypot(target.x - current.x, target.y - current.y)
        assert d < last
        last = d
    assert last < 1e-8


def test_lerp_frame_rate_independent():
    lerp = LerpStrategy()
    cfg = LerpConfig(damping=10.0)
    one, _ = run(lerp, cfg, Vec2(0, 0), Vec2(1, 1), 1.0, 1)
    many, _ = run(lerp, cfg, Vec2(0, 0), Vec2(1, 1), 0.01, 100)
    assert one.x == pytest.approx(many.x, rel=1e-9)
    assert one.y == pytest.approx(many.y, rel=1e-9)


def test_lerp_stable_for_huge_dt():
    pos, _ = LerpStrategy().update(Vec2(0, 0), Vec2(1, 0), 1000.0, LerpConfig(damping=10.0), Vec2(), {})
    assert 0.0 <= pos.x <= 1.0
    assert pos.x == pytest.approx(1.0)


def test_lerp_zero_damping_freezes():
    pos, _ = run(LerpStrategy(), LerpConfig(damping=0.0), Vec2(0.25, 0.5), Vec2(1, 1), 0.1, 50)
    assert (pos.x, pos.y) == (0.25, 0.5)


def test_lerp_passes_velocity_through_without_aliasing():
    vel_in = Vec2(3.0, 4.0)
    _, vel_out = LerpStrategy().update(Vec2(), Vec2(1, 0), 0.1, LerpConfig(), vel_in, {})
    assert (vel_out.x, vel_out.y) == (3.0, 4.0)
    assert vel_out is not vel_in


def test_spring_first_step():
    pos, vel = SpringStrategy().update(
        Vec2(0, 0), Vec2(1, 0), 0.01, SpringConfig(stiffness=150, damping=10), Vec2(0, 0), {})
    assert vel.x == pytest.approx(1.5)
    assert vel.y == 0.0
    assert pos.x == pytest.approx(0.015)
    assert pos.y == 0.0


def test_spring_at_rest_stays_at_rest():
    pos, vel = run(SpringStrategy(), SpringConfig(), Vec2(0, 0), Vec2(0, 0), 1 / 60, 1000)
    assert (pos.x, pos.y) == (0.0, 0.0)
    assert (vel.x, vel.y) == (0.0, 0.0)


def test_spring_axes_independent():
    pos, vel = SpringStrategy().update(Vec2(0, 0), Vec2(0, 2), 0.01, SpringConfig(), Vec2(0, 0), {})
    assert pos.x == 0.0 and vel.x == 0.0
    assert vel.y == pytest.approx(3.0)


def test_spring_settles_on_target():
    pos, vel = run(SpringStrategy(), SpringConfig(), Vec2(0, 0), Vec2(1, -1), 1 / 120, 2400)
    assert pos.x == pytest.approx(1.0, abs=1e-6)
    assert pos.y == pytest.approx(-1.0, abs=1e-6)


def test_easing_functions_endpoints():
    for fn in (ease_out_cubic, ease_out_quad, ease_in_out_cubic):
        assert fn(0.0) == 0.0
        assert fn(1.0) == 1.0
    assert ease_out_cubic(0.5) == pytest.approx(0.875)
    assert ease_out_quad(0.5) == pytest.approx(0.75)
    assert ease_in_out_cubic(0.25) == pytest.approx(0.0625)
    assert ease_in_out_cubic(0.5) == pytest.approx(0.5)
    assert ease_in_out_cubic(0.75) == pytest.approx(0.9375)


def test_easing_lookup_by_name():
    assert get_easing_function("easeOutCubic") is ease_out_cubic
    assert get_easing_function("easeOutQuad") is ease_out_quad
    assert get_easing_function("easeInOutCubic") is ease_in_out_cubic
    with pytest.raises(ConfigurationError):
        get_easing_function("bounce")


def test_easing_zero_dt_returns_start():
    slot = {}
    pos, _ = EasingStrategy().update(Vec2(0.2, 0.3), Vec2(1, 1), 0.0, EasingConfig(), Vec2(), slot)
    assert (pos.x, pos.y) == (0.2, 0.3)
    assert slot["easing"].phase is EasingPhase.ANIMATING


def test_easing_reaches_target_exactly():
    slot = {}
    easing = EasingStrategy()
    cfg = EasingConfig(duration=0.3)
    pos, _ = run(easing, cfg, Vec2(0, 0), Vec2(1, -0.5), 0.1, 4, slot=slot)
    assert (pos.x, pos.y) == (1.0, -0.5)
    assert slot["easing"].phase is EasingPhase.HOLDING


def test_easing_progress_follows_curve():
    slot = {}
    easing = EasingStrategy()
    cfg = EasingConfig(duration=0.4, easing="easeOutQuad")
    current, _ = easing.update(Vec2(0, 0), Vec2(2, 0), 0.0, cfg, Vec2(), slot)
    current, _ = easing.update(current, Vec2(2, 0), 0.2, cfg, Vec2(), slot)
    assert current.x == pytest.approx(2.0 * 0.75)


def test_easing_restart_reanchors_at_current():
    slot = {}
    easing = EasingStrategy()
    cfg = EasingConfig(duration=0.3)
    current, _ = easing.update(Vec2(0, 0), Vec2(1, 0), 0.0, cfg, Vec2(), slot)
    current, _ = easing.update(current, Vec2(1, 0), 0.1, cfg, Vec2(), slot)
    assert current.x == pytest.approx(ease_out_cubic(1 / 3))
    mid = current.copy()

    # new target: no jump, animation restarts from where we are
    current, _ = easing.update(current, Vec2(0, 1), 0.0, cfg, Vec2(), slot)
    assert (current.x, current.y) == (mid.x, mid.y)
    assert slot["easing"].start_pos == mid
    assert slot["easing"].elapsed == 0.0

    current, _ = easing.update(current, Vec2(0, 1), 0.15, cfg, Vec2(), slot)
    assert current.x == pytest.approx(mid.x * (1 - 0.875))
    assert current.y == pytest.approx(0.875)


def test_easing_same_target_does_not_restart():
    slot = {}
    easing = EasingStrategy()
    cfg = EasingConfig(duration=1.0)
    current, _ = easing.update(Vec2(0, 0), Vec2(1, 0), 0.0, cfg, Vec2(), slot)
    for _ in range(5):
        current, _ = easing.update(current, Vec2(1.0, 0.0), 0.1, cfg, Vec2(), slot)
    assert slot["easing"].elapsed == pytest.approx(0.5)
    assert slot["easing"].start_pos == Vec2(0, 0)


def test_easing_unknown_function_raises_before_touching_state():
    slot = {}
    with pytest.raises(ConfigurationError):
        EasingStrategy().update(Vec2(), Vec2(1, 0), 0.1, EasingConfig(easing="nope"), Vec2(), slot)
    assert "easing" not in slot


def test_get_strategy():
    assert isinstance(get_strategy("lerp"), LerpStrategy)
    assert isinstance(get_strategy(StrategyKind.SPRING), SpringStrategy)
    assert isinstance(get_strategy("easing"), EasingStrategy)
    with pytest.raises(ConfigurationError):
        get_strategy("bogus")
