"""Application configuration constants."""

from __future__ import annotations

# Smoothing
DEFAULT_STRATEGY = "lerp"
LERP_DAMPING = 10.0
SPRING_STIFFNESS = 150.0
SPRING_DAMPING = 10.0
EASING_DURATION_S = 0.3
EASING_FUNCTION = "easeOutCubic"

# Hand-shake effect defaults (coordinate units, Hz)
HANDSHAKE_INTENSITY = 1.5
HANDSHAKE_FREQUENCY = 8.0
HANDSHAKE_VELOCITY_SCALE = 0.02
HANDSHAKE_MIN_VELOCITY = 50.0

# Idle drift effect defaults
IDLE_DRIFT_INTENSITY = 3.0
IDLE_DRIFT_FREQUENCY = 0.8
IDLE_DRIFT_MAX_VELOCITY = 100.0
IDLE_DRIFT_PATTERN = "organic"

# Demo tuning - the defaults above are in pixel units, the demo drives
# the controller in normalized device coordinates
DEMO_HANDSHAKE = {
    "intensity": 0.00002,
    "frequency": 8.0,
    "velocityScale": 0.5,
    "minVelocity": 1.0,
}
DEMO_IDLE_DRIFT = {
    "intensity": 0.002,
    "frequency": 0.2,
    "maxVelocity": 0.0001,
}

# Window
WINDOW_TITLE = "cursorlight"
WINDOW_WIDTH = 1280
WINDOW_HEIGHT = 720
TARGET_FPS = 120

# Scene
FIELD_OF_VIEW_DEG = 45.0
QUAD_DISTANCE = 6.0
CAMERA_MAX_TILT_PX = 24.0
SPOT_CONE_ANGLE = 0.2       # radians
SPOT_CONE_SOFTNESS = 0.08   # radians
AMBIENT_DARKNESS = 0.82     # overlay alpha outside the spot

# Texture
TEXTURE_SIZE = 512
TEXTURE_CHECKER_CELLS = 8
TEXTURE_CACHE_DIR = ".cursorlight_cache"

# HUD
FONT_SIZE = 20
HUD_MARGIN = 12

# Hotkeys (raylib key codes)
# See: https://github.com/raysan5/raylib/blob/master/src/raylib.h
KEY_STRATEGY_LERP = 49      # KEY_ONE
KEY_STRATEGY_SPRING = 50    # KEY_TWO
KEY_STRATEGY_EASING = 51    # KEY_THREE
KEY_TOGGLE_EFFECTS = 69     # KEY_E
KEY_RESET = 82              # KEY_R
KEY_TOGGLE_HUD = 73         # KEY_I
KEY_CLOSE = 256             # KEY_ESCAPE
