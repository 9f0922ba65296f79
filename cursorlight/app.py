"""Application - the demo's main loop.

Each frame:
- pointer movement -> controller target (normalized device coordinates)
- hotkeys -> controller configuration
- controller.update(dt)
- renderer reads the smoothed position by value
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional, Tuple
import os
import sys
import traceback

from .controller import CursorController, create_controller, install_demo_effects
from .renderer import Renderer, FrameInputs
from .rl_compat import rl, init_window
from .scene import pointer_to_ndc
from .texture import prepare_texture
from .types import StrategyKind
from . import config as cfg
from .logging import log, increment_frame, get_frame


STRATEGY_KEYS = {
    cfg.KEY_STRATEGY_LERP: StrategyKind.LERP,
    cfg.KEY_STRATEGY_SPRING: StrategyKind.SPRING,
    cfg.KEY_STRATEGY_EASING: StrategyKind.EASING,
}


@dataclass
class Application:
    """
    Main loop orchestrator.

    Usage:
        app = Application(controller=create_controller("spring"))
        app.run()
    """

    controller: CursorController = field(default_factory=create_controller)
    renderer: Renderer = field(default_factory=Renderer)
    running: bool = False
    effects_on: bool = True
    show_hud: bool = True
    _last_mouse: Optional[Tuple[float, float]] = None

    def run(self) -> None:
        self.running = True
        log("[APP] Starting main loop")
        try:
            while self.running:
                self._frame()
        except Exception as e:
            log(f"[APP][CRITICAL] Unhandled exception: {e!r}")
            log(f"[APP][CRITICAL] Traceback:\n{traceback.format_exc()}")
        finally:
            self._cleanup()

    def _frame(self) -> None:
        if rl.WindowShouldClose():
            self.running = False
            return

        self._handle_keys()
        if not self.running:
            return

        w, h = rl.GetScreenWidth(), rl.GetScreenHeight()
        self._poll_pointer(w, h)

        self.controller.update(rl.GetFrameTime())

        self.renderer.draw_frame(FrameInputs(
            position=self.controller.position,
            screen_w=w,
            screen_h=h,
            strategy=self.controller.strategy,
            effects_on=self.effects_on,
            show_hud=self.show_hud,
            fps=rl.GetFPS(),
        ))
        increment_frame()

    def _poll_pointer(self, w: int, h: int) -> None:
        pos = rl.GetMousePosition()
        mouse = (pos.x, pos.y)
        # only movement counts as input, like a pointermove event
        if mouse != self._last_mouse:
            self._last_mouse = mouse
            self.controller.set_target(*pointer_to_ndc(mouse[0], mouse[1], w, h))

    def _handle_keys(self) -> None:
        if rl.IsKeyPressed(cfg.KEY_CLOSE):
            log("[APP] Close requested")
            self.running = False
            return

        for key, kind in STRATEGY_KEYS.items():
            if rl.IsKeyPressed(key) and self.controller.strategy != kind.value:
                self.controller.strategy = kind

        if rl.IsKeyPressed(cfg.KEY_TOGGLE_EFFECTS):
            self.toggle_effects()

        if rl.IsKeyPressed(cfg.KEY_RESET):
            target = self.controller.target
            self.controller.reset(target.x, target.y)
            log("[APP] Cursor reset")

        if rl.IsKeyPressed(cfg.KEY_TOGGLE_HUD):
            self.show_hud = not self.show_hud

    def toggle_effects(self) -> None:
        """Remove the effects, or re-add them with fresh state."""
        if self.effects_on:
            self.controller.clear_effects()
        else:
            install_demo_effects(self.controller)
        self.effects_on = not self.effects_on
        log(f"[APP] Effects {'on' if self.effects_on else 'off'}")

    def _cleanup(self) -> None:
        log("[APP] Starting cleanup")
        try:
            self.renderer.unload()
        finally:
            log("[APP] Closing window")
            rl.CloseWindow()
        log(f"[APP] Cleanup complete after {get_frame()} frames")


def parse_args(argv: List[str]) -> Tuple[str, Optional[str]]:
    """Pick a strategy name and an optional texture path from argv.

    A strategy name that is not recognised is kept as given, so the
    controller reports it on the first frame.
    """
    strategy = cfg.DEFAULT_STRATEGY
    texture = None
    for a in argv:
        if a.startswith("--strategy="):
            strategy = a.split("=", 1)[1]
        elif a in {k.value for k in StrategyKind}:
            strategy = a
        elif os.path.isfile(a):
            texture = os.path.abspath(a)
        else:
            log(f"[ARGS] Ignoring argument: {a}")
    return strategy, texture


def main() -> None:
    log("[MAIN] Starting cursorlight")
    strategy, texture_src = parse_args(sys.argv[1:])
    log(f"[ARGS] strategy={strategy} texture={texture_src or '<generated>'}")

    controller = create_controller(strategy)

    try:
        log("[INIT] Initializing window")
        rl.SetConfigFlags(getattr(rl, "FLAG_WINDOW_RESIZABLE", 4) | getattr(rl, "FLAG_MSAA_4X_HINT", 32))
        init_window(cfg.WINDOW_WIDTH, cfg.WINDOW_HEIGHT, cfg.WINDOW_TITLE)
        rl.SetTargetFPS(cfg.TARGET_FPS)
    except Exception as e:
        log(f"[INIT][CRITICAL] Failed to initialize window: {e!r}")
        log(f"[INIT][CRITICAL] Traceback:\n{traceback.format_exc()}")
        return

    renderer = Renderer(texture_path=prepare_texture(texture_src))
    renderer.load()

    Application(controller=controller, renderer=renderer).run()


if __name__ == "__main__":
    main()
