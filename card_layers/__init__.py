"""Region-based layer extraction and compositing for greyscale images."""

from .pipeline import BuildRequest, build, build_sync
from .regions import FilterMode, Region, contains
from . import infrastructure, processing

__version__ = "1.0.0"

__all__ = [
    "__version__",
    "BuildRequest",
    "build",
    "build_sync",
    "FilterMode",
    "Region",
    "contains",
    "infrastructure",
    "processing",
]
