"""Raylib compatibility layer - abstracts differences between raylibpy and python-raylib."""

from __future__ import annotations
from typing import Any

try:
    import raylibpy as rl
    RL_VERSION = "raylibpy"
except ImportError:
    import raylib as rl
    RL_VERSION = "python-raylib"


def _ffi_struct(kind: str, **values: float) -> Any:
    s = rl.ffi.new(f"{kind} *")
    for name, value in values.items():
        setattr(s[0], name, value)
    return s[0]


def make_rect(x: float, y: float, w: float, h: float) -> Any:
    """Create a raylib Rectangle compatible with the current binding."""
    if hasattr(rl, 'Rectangle'):
        return rl.Rectangle(float(x), float(y), float(w), float(h))
    return _ffi_struct("Rectangle", x=float(x), y=float(y), width=float(w), height=float(h))


def make_vec2(x: float, y: float) -> Any:
    """Create a raylib Vector2 compatible with the current binding."""
    if hasattr(rl, 'Vector2'):
        return rl.Vector2(float(x), float(y))
    return _ffi_struct("Vector2", x=float(x), y=float(y))


def make_color(r: int, g: int, b: int, a: int) -> Any:
    """Create a raylib Color compatible with the current binding."""
    if hasattr(rl, 'Color'):
        return rl.Color(int(r), int(g), int(b), int(a))
    return _ffi_struct("Color", r=int(r), g=int(g), b=int(b), a=int(a))


def _text(s: str) -> Any:
    # python-raylib wants bytes, raylibpy wants str
    return s.encode('utf-8') if RL_VERSION == "python-raylib" else s


def init_window(w: int, h: int, title: str) -> None:
    rl.InitWindow(w, h, _text(title))


def draw_text(text: str, x: int, y: int, size: int, color: Any) -> None:
    rl.DrawText(_text(text), int(x), int(y), int(size), color)


def load_texture(path: str) -> Any:
    return rl.LoadTexture(_text(path))


def is_texture_valid(tex: Any) -> bool:
    """Check if texture is loaded (GPU id > 0)."""
    return (getattr(tex, 'id', 0) or 0) > 0


__all__ = [
    'rl',
    'RL_VERSION',
    'make_rect',
    'make_vec2',
    'make_color',
    'init_window',
    'draw_text',
    'load_texture',
    'is_texture_valid',
]
