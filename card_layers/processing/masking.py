from __future__ import annotations

from typing import Sequence

from ..config import WHITE
from ..regions import Region


def extract(buffer: bytes, width: int, regions: Sequence[Region]) -> bytearray:
    """Return a copy of ``buffer`` with every pixel outside ``regions`` set to white.

    ``buffer`` is a row-major greyscale buffer ``width`` pixels wide. Regions
    reaching past the image edges only contribute the part that overlaps it.
    """

    if width <= 0:
        raise ValueError(f"Image width must be positive, got {width}")
    height = len(buffer) // width
    out = bytearray([WHITE]) * len(buffer)
    for region in regions:
        left = max(region.x, 0)
        right = min(region.right, width)
        if right <= left:
            continue
        for y in range(max(region.y, 0), min(region.bottom, height)):
            start = y * width
            out[start + left : start + right] = buffer[start + left : start + right]
    return out

