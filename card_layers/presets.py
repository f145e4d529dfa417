"""Region layouts for a 735x1025 trading card scan.

Each preset is rebuilt on every call, so callers are free to modify the
returned list.
"""

from __future__ import annotations

from typing import Callable, Dict, List

from .regions import FilterMode, Region

BASE = FilterMode.BASE
DOTTED = FilterMode.DOTTED
DARKEST = FilterMode.DARKEST


def card_regions() -> List[Region]:
    return [
        # card edges
        Region(0, 0, 735, 39),
        Region(0, 986, 735, 39),
        Region(0, 0, 33, 1025),
        Region(702, 0, 33, 1025),
        # previous stage
        Region(63, 60, 93, 25),
        Region(38, 85, 25, 78),
        Region(156, 85, 25, 78),
        Region(63, 85, 93, 78),
        Region(63, 163, 93, 25),
        # artwork
        Region(74, 118, 585, 421),
        # name and HP, second attack, weakness row, power name
        Region(191, 70, 420, 50, DOTTED),
        Region(150, 740, 515, 80, DOTTED),
        Region(70, 842, 630, 20, DOTTED),
        Region(0, 552, 720, 174, DOTTED),
        # evolution details, stage
        Region(162, 46, 558, 20, DARKEST),
        Region(75, 67, 70, 16, DARKEST),
        # stats and power text
        Region(0, 552, 720, 40, DARKEST),
        Region(470, 600, 190, 28, DARKEST),
        Region(0, 628, 720, 96, DARKEST),
        # type, attack energy, bottom line
        Region(615, 65, 50, 55, DARKEST),
        Region(50, 735, 90, 90, DARKEST),
        Region(50, 832, 640, 5, DARKEST),
        # weakness, resistance, retreat cost
        Region(100, 862, 70, 35, DARKEST),
        Region(350, 862, 70, 35, DARKEST),
        Region(550, 862, 110, 35, DARKEST),
        # description, illustrator, copyright
        Region(85, 910, 6, 40, DARKEST),
        Region(91, 910, 575, 42, DARKEST),
        Region(535, 964, 150, 20, DARKEST),
        Region(91, 995, 575, 15, DARKEST),
    ]


def artwork_regions() -> List[Region]:
    """Artwork and energy symbols only, unfiltered."""

    return [
        Region(75, 90, 70, 50),
        Region(80, 120, 620, 432),
        Region(615, 70, 50, 50),
        Region(50, 720, 640, 5),
        Region(50, 735, 90, 90),
        Region(50, 832, 640, 5),
        Region(105, 865, 30, 35),
        Region(350, 865, 30, 35),
        Region(550, 865, 105, 35),
        Region(45, 964, 640, 45),
        Region(45, 950, 50, 20),
    ]


PRESETS: Dict[str, Callable[[], List[Region]]] = {
    "card": card_regions,
    "artwork": artwork_regions,
}


def preset_regions(name: str) -> List[Region]:
    try:
        factory = PRESETS[name]
    except KeyError:
        raise ValueError(f"Unknown preset {name!r}; expected one of {sorted(PRESETS)}") from None
    return factory()
