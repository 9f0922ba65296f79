"""Texture preparation for the demo quad.

Textures are built with PIL and written to the cache directory as PNG, so
the renderer only ever loads a ready, power-of-two file.
"""

from __future__ import annotations
import os
import hashlib
from typing import Optional

from PIL import Image, ImageDraw, ImageOps

from .config import TEXTURE_SIZE, TEXTURE_CHECKER_CELLS, TEXTURE_CACHE_DIR
from .logging import log


def is_power_of_two(n: int) -> bool:
    return n > 0 and (n & (n - 1)) == 0


def next_power_of_two(n: int) -> int:
    """Smallest power of two >= n (1 for n <= 1)."""
    if n <= 1:
        return 1
    return 1 << (int(n) - 1).bit_length()


def generate_texture(size: int = TEXTURE_SIZE, cells: int = TEXTURE_CHECKER_CELLS) -> Image.Image:
    """Procedural checkerboard with a soft radial falloff."""
    img = Image.new("RGB", (size, size), (46, 42, 38))
    draw = ImageDraw.Draw(img)
    cell = max(1, size // max(1, cells))
    for row in range(0, size, cell):
        for col in range(0, size, cell):
            if ((row // cell) + (col // cell)) % 2 == 0:
                draw.rectangle([col, row, col + cell - 1, row + cell - 1], fill=(214, 200, 178))

    # radial_gradient is black in the centre, white at the rim
    falloff = Image.radial_gradient("L").resize((size, size))
    shade = Image.new("RGB", (size, size), (0, 0, 0))
    return Image.composite(shade, img, falloff.point(lambda v: v // 3))


def fit_power_of_two(img: Image.Image, size: Optional[int] = None) -> Image.Image:
    """Crop and resize to a square power-of-two texture."""
    side = size or next_power_of_two(max(img.size))
    if not is_power_of_two(side):
        side = next_power_of_two(side)
    return ImageOps.fit(img.convert("RGBA"), (side, side), method=Image.LANCZOS)


def cache_path_for(source: Optional[str], size: int, cache_dir: str = TEXTURE_CACHE_DIR) -> str:
    """Cache file for a source image (or the generated texture)."""
    if source:
        try:
            stat = os.stat(source)
            key_data = f"{source}|{stat.st_mtime_ns}|{stat.st_size}|{size}".encode('utf-8')
        except OSError:
            key_data = f"{source}|{size}".encode('utf-8')
    else:
        key_data = f"<generated>|{size}".encode('utf-8')
    cache_key = hashlib.sha1(key_data).hexdigest()
    os.makedirs(cache_dir, exist_ok=True)
    return os.path.join(cache_dir, f"{cache_key}_tex.png")


def prepare_texture(source: Optional[str] = None, size: int = TEXTURE_SIZE,
                    cache_dir: str = TEXTURE_CACHE_DIR) -> str:
    """Return the path of a PNG texture ready for upload.

    Opens `source` when given, otherwise generates the checkerboard.
    An unreadable source falls back to the generated texture.
    """
    if not is_power_of_two(size):
        size = next_power_of_two(size)
    out = cache_path_for(source, size, cache_dir)
    if os.path.exists(out):
        return out

    img = None
    if source:
        try:
            with Image.open(source) as src:
                img = fit_power_of_two(src, size)
            log(f"[TEXTURE] Loaded {os.path.basename(source)} -> {size}x{size}")
        except (OSError, ValueError) as e:
            log(f"[TEXTURE][ERR] Cannot open {source}: {e!r}, using generated texture")
    if img is None:
        img = generate_texture(size)
        out = cache_path_for(None, size, cache_dir)
        log(f"[TEXTURE] Generated {size}x{size} checkerboard")

    img.save(out, format="PNG", optimize=True)
    return out
