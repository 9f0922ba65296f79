import math

import pytest

from cursorlight.types import ConfigurationError, CursorFrame, Vec2
from cursorlight.effects import (
    HandShakeConfig, HandShakeEffect, IdleDriftConfig, IdleDriftEffect,
    hand_shake_effect, idle_drift_effect, resolve_apply,
)


def frame(pos=(0.0, 0.0), vel=(0.0, 0.0), target=(0.0, 0.0)):
    return CursorFrame(position=Vec2(*pos), velocity=Vec2(*vel), target=Vec2(*target))


STILL_SHAKE = HandShakeConfig(intensity=1.0, frequency=1.0, velocity_scale=0.0, min_velocity=0.0)


def test_hand_shake_offset_at_quarter_period():
    out = hand_shake_effect.apply(frame(pos=(10.0, 20.0)), 0.25, {}, STILL_SHAKE)
    assert out.position.x == pytest.approx(10.0 + math.cos(math.radians(67.5)))
    assert out.position.y == pytest.approx(20.0, abs=1e-12)


def test_hand_shake_amplitude_grows_with_speed():
    cfg = HandShakeConfig(intensity=2.0, frequency=1.3, velocity_scale=0.5, min_velocity=1.0)
    slow = HandShakeEffect.offset(0.1, 0.0, cfg)
    fast = HandShakeEffect.offset(0.1, 5.0, cfg)
    # velocity factor (5 - 1) * 0.5 = 2, amplitude triples
    assert fast[0] == pytest.approx(slow[0] * 3.0)
    assert fast[1] == pytest.approx(slow[1] * 3.0)


def test_hand_shake_below_threshold_uses_base_intensity():
    cfg = HandShakeConfig(intensity=1.0, frequency=1.0, velocity_scale=10.0, min_velocity=50.0)
    assert HandShakeEffect.offset(0.1, 30.0, cfg) == HandShakeEffect.offset(0.1, 0.0, cfg)


def test_hand_shake_leaves_velocity_and_target():
    f = frame(pos=(1, 1), vel=(3, 4), target=(7, 8))
    out = hand_shake_effect.apply(f, 0.1, {}, STILL_SHAKE)
    assert out.velocity == Vec2(3, 4)
    assert out.target == Vec2(7, 8)
    assert f.position == Vec2(1, 1)


def test_effect_time_accumulates():
    state = {}
    hand_shake_effect.apply(frame(), 0.1, state, STILL_SHAKE)
    hand_shake_effect.apply(frame(), 0.15, state, STILL_SHAKE)
    assert state["time"] == pytest.approx(0.25)
    assert set(state) == {"time"}


def drift(pattern, intensity=2.0, max_velocity=100.0):
    return IdleDriftConfig(intensity=intensity, frequency=1.0, max_velocity=max_velocity, pattern=pattern)


def test_idle_drift_patterns_at_time_zero():
    circ = idle_drift_effect.apply(frame(), 0.0, {}, drift("circular"))
    fig8 = idle_drift_effect.apply(frame(), 0.0, {}, drift("figure8"))
    org = idle_drift_effect.apply(frame(), 0.0, {}, drift("organic"))
    assert (circ.position.x, circ.position.y) == pytest.approx((2.0, 0.0))
    assert (fig8.position.x, fig8.position.y) == pytest.approx((0.0, 0.0))
    assert (org.position.x, org.position.y) == pytest.approx((0.0, 2.0))


def test_idle_drift_figure8_quarter_period():
    out = idle_drift_effect.apply(frame(), 0.25, {}, drift("figure8"))
    assert out.position.x == pytest.approx(2.0)
    assert out.position.y == pytest.approx(0.0, abs=1e-12)


def test_idle_drift_default_pattern_is_organic():
    assert IdleDriftConfig().pattern == "organic"


def test_idle_drift_fades_with_speed():
    half = IdleDriftEffect.offset(0.0, 50.0, drift("circular"))
    gone = IdleDriftEffect.offset(0.0, 150.0, drift("circular"))
    assert half == pytest.approx((1.0, 0.0))
    assert gone == (0.0, 0.0)


def test_idle_drift_unknown_pattern_rejected_on_build():
    with pytest.raises(ConfigurationError):
        IdleDriftConfig(pattern="spiral")
    with pytest.raises(ConfigurationError):
        idle_drift_effect.coerce_config({"pattern": "spiral"})


def test_idle_drift_zero_max_velocity_moving_turns_drift_off():
    state = {}
    out = idle_drift_effect.apply(frame(pos=(1.0, 2.0), vel=(3.0, 4.0)), 0.1, state, drift("organic", max_velocity=0.0))
    assert (out.position.x, out.position.y) == (1.0, 2.0)
    assert state["time"] == pytest.approx(0.1)


def test_idle_drift_zero_max_velocity_still_is_non_finite():
    out = idle_drift_effect.apply(frame(), 0.1, {}, drift("organic", max_velocity=0.0))
    assert math.isnan(out.position.x) and math.isnan(out.position.y)


def test_config_mapping_accepts_camel_case():
    cfg = hand_shake_effect.coerce_config({"intensity": 0.5, "velocityScale": 0.25, "minVelocity": 2})
    assert cfg == HandShakeConfig(intensity=0.5, frequency=8.0, velocity_scale=0.25, min_velocity=2)
    cfg = idle_drift_effect.coerce_config({"maxVelocity": 3.0, "pattern": "circular"})
    assert cfg.max_velocity == 3.0 and cfg.pattern == "circular"
    assert idle_drift_effect.coerce_config(None) == IdleDriftConfig()


def test_config_mapping_rejects_unknown_key():
    with pytest.raises(ConfigurationError):
        hand_shake_effect.coerce_config({"amplitude": 1.0})


def test_resolve_apply():
    def plain(f, dt, st, cfg):
        return f

    assert resolve_apply(plain) is plain
    assert resolve_apply(hand_shake_effect) == hand_shake_effect.apply
    with pytest.raises(TypeError):
        resolve_apply(42)
