from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

PathLike = Union[str, Path]


class LayerBuildError(Exception):
    """Base error for a layer build, tagged with the stage and path involved."""

    stage = "build"

    def __init__(self, message: str, *, path: Optional[PathLike] = None) -> None:
        self.path = Path(path) if path is not None else None
        detail = f"{self.stage}: {message}"
        if self.path is not None:
            detail = f"{detail} ({self.path})"
        super().__init__(detail)


class SourceError(LayerBuildError):
    stage = "fetch"


class DecodeError(LayerBuildError):
    stage = "decode"


class JobFailure(LayerBuildError):
    stage = "extract"

    def __init__(self, tag: str, message: str, *, path: Optional[PathLike] = None) -> None:
        self.tag = tag
        super().__init__(f"[{tag}] {message}", path=path)


class CompositeError(LayerBuildError):
    stage = "composite"


class CleanupError(LayerBuildError):
    stage = "cleanup"
