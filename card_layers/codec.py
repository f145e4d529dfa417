"""Pillow-backed decode/encode helpers for greyscale layers."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence, Tuple, Union

from PIL import Image, UnidentifiedImageError

from .config import WHITE
from .errors import DecodeError

PathLike = Union[str, Path]

# Background used when flattening: white, fully transparent.
FLATTEN_BACKGROUND = (WHITE, WHITE, WHITE, 0)


def decode(path: PathLike) -> Tuple[bytes, int, int]:
    """Load ``path`` as greyscale and return ``(buffer, width, height)``."""

    try:
        with Image.open(path) as img:
            gray = img.convert("L")
    except (OSError, UnidentifiedImageError, Image.DecompressionBombError, ValueError) as exc:
        raise DecodeError(str(exc), path=path) from exc
    width, height = gray.size
    return gray.tobytes(), width, height


def layer_image(buffer: bytes, width: int, height: int, transparent_white: bool = False) -> Image.Image:
    img = Image.frombytes("L", (width, height), bytes(buffer))
    if not transparent_white:
        return img
    alpha = img.point(lambda value: 0 if value == WHITE else 255)
    layer = img.convert("LA")
    layer.putalpha(alpha)
    return layer


def write_layer(
    buffer: bytes,
    width: int,
    height: int,
    path: PathLike,
    transparent_white: bool = False,
) -> Path:
    target = Path(path)
    layer_image(buffer, width, height, transparent_white).save(target, "PNG", optimize=True)
    return target


def flatten(base: Image.Image, overlays: Sequence[Image.Image]) -> Image.Image:
    """Alpha-composite ``overlays`` over ``base`` in order and flatten onto white."""

    canvas = Image.new("RGBA", base.size, FLATTEN_BACKGROUND)
    canvas.alpha_composite(base.convert("RGBA"))
    for overlay in overlays:
        if overlay.size != base.size:
            raise ValueError(f"Layer size {overlay.size} does not match canvas {base.size}")
        canvas.alpha_composite(overlay.convert("RGBA"))
    white = Image.new("RGBA", base.size, FLATTEN_BACKGROUND[:3] + (255,))
    white.alpha_composite(canvas)
    return white.convert("L")


def save_image(img: Image.Image, path: PathLike) -> Path:
    target = Path(path)
    fmt = "PNG" if target.suffix.lower() == ".png" else None
    if fmt is None and img.mode == "LA":
        img = flatten(img, ())
    img.save(target, fmt)
    return target
