from __future__ import annotations

from typing import Callable, Dict, Sequence, Tuple

from ..config import BLACK, INK_BANDWIDTH, WHITE
from ..regions import FilterMode, Region
from .masking import extract

Step = Callable[[bytearray, int], bytearray]

_FADE_LUT = bytes(WHITE if value == BLACK else value for value in range(256))


def darkest_value(buffer: bytes) -> int:
    if BLACK in buffer:
        return BLACK
    return min(buffer, default=WHITE)


def threshold_lut(min_value: int, bandwidth: int = INK_BANDWIDTH) -> bytes:
    max_value = min_value + bandwidth
    return bytes(BLACK if min_value <= value <= max_value else WHITE for value in range(256))


def contrast_threshold(buffer: bytearray, width: int) -> bytearray:
    """Blacken the ink band above the darkest tone; everything else turns white.

    A buffer whose darkest tone is already white carries no ink and is
    returned unchanged.
    """

    min_value = darkest_value(buffer)
    if min_value == WHITE:
        return buffer
    return bytearray(buffer.translate(threshold_lut(min_value)))


def halftone_fade(buffer: bytearray, width: int) -> bytearray:
    """Whiten black pixels on even rows or even columns, leaving a sparse dot grid."""

    out = bytearray(buffer)
    for start in range(0, len(out), width):
        y = start // width
        end = start + width
        if y % 2 == 0:
            out[start:end] = out[start:end].translate(_FADE_LUT)
        else:
            out[start:end:2] = out[start:end:2].translate(_FADE_LUT)
    return out


FILTER_STEPS: Dict[FilterMode, Tuple[Step, ...]] = {
    FilterMode.BASE: (),
    FilterMode.DARKEST: (contrast_threshold,),
    FilterMode.DOTTED: (contrast_threshold, halftone_fade),
}


def apply_filter(masked: bytearray, width: int, mode: FilterMode) -> bytearray:
    out = masked
    for step in FILTER_STEPS[mode]:
        out = step(out, width)
    return out


def render_layer(
    buffer: bytes, width: int, regions: Sequence[Region], mode: FilterMode
) -> bytearray:
    """Mask ``buffer`` to ``regions`` and run the ``mode`` filter over the result."""

    masked = extract(buffer, width, regions)
    filtered = apply_filter(masked, width, mode)
    if filtered is masked:
        return masked
    # Background stays white even when the ink band reaches 255.
    return extract(filtered, width, regions)
