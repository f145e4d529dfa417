"""Rectangular regions of interest and the filter modes attached to them."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, List, Mapping, Sequence

from .config import LOGGER_NAME

log = logging.getLogger(LOGGER_NAME)


class FilterMode(Enum):
    """Per-region pixel filter. Declaration order is the compositing order."""

    BASE = "base"
    DOTTED = "dotted"
    DARKEST = "darkest"

    @classmethod
    def parse(cls, value: str | None) -> "FilterMode":
        name = "" if value is None else str(value).lower()
        if name in ("", "none", "base"):
            return cls.BASE
        try:
            return cls(name)
        except ValueError:
            raise ValueError(f"Unknown region filter: {value!r}") from None


@dataclass(frozen=True)
class Region:
    x: int
    y: int
    width: int
    height: int
    filter: FilterMode = FilterMode.BASE

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Region size must be positive, got {self.width}x{self.height}"
            )

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    def contains(self, x: int, y: int) -> bool:
        return self.x <= x < self.right and self.y <= y < self.bottom

    @classmethod
    def from_mapping(cls, record: Mapping[str, Any]) -> "Region":
        if not isinstance(record, Mapping):
            raise ValueError(f"Region must be an object, got {type(record).__name__}")
        try:
            return cls(
                x=int(record["x"]),
                y=int(record["y"]),
                width=int(record["width"]),
                height=int(record["height"]),
                filter=FilterMode.parse(record.get("filter")),
            )
        except KeyError as exc:
            raise ValueError(f"Region is missing field {exc.args[0]!r}") from None
        except TypeError as exc:
            raise ValueError(f"Invalid region {dict(record)!r}: {exc}") from None

    def to_mapping(self) -> dict:
        record = {"x": self.x, "y": self.y, "width": self.width, "height": self.height}
        if self.filter is not FilterMode.BASE:
            record["filter"] = self.filter.value
        return record


def contains(regions: Iterable[Region], x: int, y: int) -> bool:
    return any(region.contains(x, y) for region in regions)


def regions_from_records(records: Iterable[Mapping[str, Any]]) -> List[Region]:
    if not isinstance(records, (list, tuple)):
        raise ValueError(f"Regions must be a list, got {type(records).__name__}")
    return [Region.from_mapping(record) for record in records]


def clip_regions(regions: Sequence[Region], width: int, height: int) -> List[Region]:
    """Clip ``regions`` to a ``width`` x ``height`` image.

    Regions that do not overlap the image at all are dropped with a warning.
    """

    clipped: List[Region] = []
    for region in regions:
        left = max(region.x, 0)
        top = max(region.y, 0)
        right = min(region.right, width)
        bottom = min(region.bottom, height)
        if right <= left or bottom <= top:
            log.warning("Dropping region outside %dx%d image: %s", width, height, region)
            continue
        if (left, top, right, bottom) == (region.x, region.y, region.right, region.bottom):
            clipped.append(region)
        else:
            clipped.append(Region(left, top, right - left, bottom - top, region.filter))
    return clipped
