"""Renderer - draws the lit quad from a cursor position.

The renderer only reads values handed to it; it never holds a reference
to the controller.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Optional

from .rl_compat import (
    rl, make_rect as RL_Rect, make_vec2 as RL_V2, make_color as RL_Color,
    draw_text as RL_DrawText, load_texture, is_texture_valid,
)
from .scene import SceneView, light_direction, spot_center, spot_radii, camera_tilt
from .types import Vec2
from .config import (
    SPOT_CONE_ANGLE, SPOT_CONE_SOFTNESS, AMBIENT_DARKNESS,
    CAMERA_MAX_TILT_PX, FONT_SIZE, HUD_MARGIN,
)
from .logging import log


@dataclass
class FrameInputs:
    """Everything the renderer needs for one frame, by value."""
    position: Vec2
    screen_w: int
    screen_h: int
    strategy: str = ""
    effects_on: bool = True
    show_hud: bool = True
    fps: int = 0


@dataclass
class Renderer:
    """
    Draws one frame:
        1. the texture, shifted by the camera tilt
        2. an ambient darkening overlay
        3. the spotlight footprint, additive
        4. the HUD line
    """

    texture_path: Optional[str] = None
    texture: Any = field(default=None, repr=False)

    def load(self) -> None:
        if self.texture_path:
            self.texture = load_texture(self.texture_path)
            if is_texture_valid(self.texture):
                log(f"[RENDER] Texture {self.texture.width}x{self.texture.height} uploaded")
            else:
                log(f"[RENDER][ERR] Texture upload failed: {self.texture_path}")
                self.texture = None

    def unload(self) -> None:
        if self.texture is not None:
            rl.UnloadTexture(self.texture)
            self.texture = None

    def draw_frame(self, f: FrameInputs) -> None:
        view = SceneView(f.screen_w, f.screen_h)
        rl.BeginDrawing()
        rl.ClearBackground(RL_Color(0, 0, 0, 255))
        self.draw_quad(f, view)
        self.draw_spot(f, view)
        if f.show_hud:
            self.draw_hud(f)
        rl.EndDrawing()

    def draw_quad(self, f: FrameInputs, view: SceneView) -> None:
        tx, ty = camera_tilt(f.position, CAMERA_MAX_TILT_PX)
        # overscan so the tilt never shows an edge
        pad = CAMERA_MAX_TILT_PX
        dest = RL_Rect(tx - pad, ty - pad, view.screen_w + 2 * pad, view.screen_h + 2 * pad)
        if self.texture is not None:
            src = RL_Rect(0, 0, self.texture.width, self.texture.height)
            rl.DrawTexturePro(self.texture, src, dest, RL_V2(0, 0), 0.0, RL_Color(255, 255, 255, 255))
        else:
            rl.DrawRectangleRec(dest, RL_Color(90, 84, 76, 255))

        rl.DrawRectangle(0, 0, view.screen_w, view.screen_h,
                         RL_Color(0, 0, 0, int(255 * AMBIENT_DARKNESS)))

    def draw_spot(self, f: FrameInputs, view: SceneView) -> None:
        direction = light_direction(f.position, view)
        cx, cy = spot_center(direction, view)
        inner, outer = spot_radii(SPOT_CONE_ANGLE, SPOT_CONE_SOFTNESS, view)

        rl.BeginBlendMode(getattr(rl, "BLEND_ADDITIVE", 1))
        rl.DrawCircleGradient(int(cx), int(cy), float(outer),
                              RL_Color(255, 236, 200, 150), RL_Color(0, 0, 0, 0))
        rl.DrawCircleGradient(int(cx), int(cy), float(inner),
                              RL_Color(255, 244, 220, 90), RL_Color(0, 0, 0, 0))
        rl.EndBlendMode()

    def draw_hud(self, f: FrameInputs) -> None:
        effects = "on" if f.effects_on else "off"
        line = (f"{f.strategy}  effects:{effects}  "
                f"x={f.position.x:+.3f} y={f.position.y:+.3f}  {f.fps} fps")
        RL_DrawText(line, HUD_MARGIN, HUD_MARGIN, FONT_SIZE, RL_Color(230, 230, 230, 200))
        RL_DrawText("1 lerp  2 spring  3 easing  E effects  R reset  I hud  Esc quit",
                    HUD_MARGIN, f.screen_h - HUD_MARGIN - FONT_SIZE, FONT_SIZE,
                    RL_Color(230, 230, 230, 120))
