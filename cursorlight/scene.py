"""Pure scene math - no side effects, no raylib.

The demo looks at a textured quad filling the view at QUAD_DISTANCE.
A cone light at the eye points along the ray through the smoothed cursor.
"""

from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Tuple

from . import config as cfg
from .types import Vec2
from .math_utils import clamp

Vec3 = Tuple[float, float, float]


@dataclass(frozen=True)
class SceneView:
    """Screen size and camera parameters for one frame."""
    screen_w: int
    screen_h: int
    fov: float = math.radians(cfg.FIELD_OF_VIEW_DEG)
    distance: float = cfg.QUAD_DISTANCE

    @property
    def aspect(self) -> float:
        if self.screen_h == 0:
            return 1.0
        return self.screen_w / self.screen_h

    @property
    def tan_half_fov(self) -> float:
        return math.tan(self.fov / 2.0)


def pointer_to_ndc(px: float, py: float, screen_w: int, screen_h: int) -> Tuple[float, float]:
    """Map window pixels to normalized device coordinates.

    x runs left to right and y bottom to top, both in [-1, 1].
    """
    if screen_w <= 0 or screen_h <= 0:
        return (0.0, 0.0)
    x = (px / screen_w) * 2.0 - 1.0
    y = -((py / screen_h) * 2.0 - 1.0)
    return (x, y)


def light_direction(pos: Vec2, view: SceneView) -> Vec3:
    """Unit direction of the ray from the eye through the cursor."""
    dx = pos.x * view.aspect * view.tan_half_fov
    dy = pos.y * view.tan_half_fov
    dz = -1.0
    n = math.sqrt(dx * dx + dy * dy + dz * dz)
    return (dx / n, dy / n, dz / n)


def quad_half_extents(view: SceneView) -> Tuple[float, float]:
    """Half width and half height of a quad that fills the view."""
    height = 2.0 * view.distance * view.tan_half_fov
    return (height * view.aspect / 2.0, height / 2.0)


def spot_center(direction: Vec3, view: SceneView) -> Tuple[float, float]:
    """Screen pixel where the light ray meets the quad plane."""
    dx, dy, dz = direction
    if dz >= 0.0:
        return (view.screen_w / 2.0, view.screen_h / 2.0)
    wx = dx / -dz * view.distance
    wy = dy / -dz * view.distance
    half_w, half_h = quad_half_extents(view)
    sx = (wx / half_w * 0.5 + 0.5) * view.screen_w
    sy = (0.5 - wy / half_h * 0.5) * view.screen_h
    return (sx, sy)


def spot_radii(cone_angle: float, cone_softness: float, view: SceneView) -> Tuple[float, float]:
    """Inner (full intensity) and outer (fade end) spot radius in pixels."""
    _, half_h = quad_half_extents(view)
    px_per_unit = (view.screen_h / 2.0) / half_h
    inner = view.distance * math.tan(max(0.0, cone_angle)) * px_per_unit
    outer = view.distance * math.tan(max(0.0, cone_angle + cone_softness)) * px_per_unit
    return (inner, outer)


def camera_tilt(pos: Vec2, max_tilt: float = cfg.CAMERA_MAX_TILT_PX) -> Tuple[float, float]:
    """Quad offset in pixels; the scene leans away from the cursor."""
    x = clamp(pos.x, -1.0, 1.0)
    y = clamp(pos.y, -1.0, 1.0)
    return (-x * max_tilt, y * max_tilt)
