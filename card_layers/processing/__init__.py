"""Pixel processing stages: masking, filtering, layer jobs and compositing."""

from .compositor import compose, remove_layers
from .filters import (
    FILTER_STEPS,
    apply_filter,
    contrast_threshold,
    darkest_value,
    halftone_fade,
    render_layer,
)
from .jobs import Job, JobResult, partition, run_jobs
from .masking import extract

__all__ = [
    "compose",
    "remove_layers",
    "FILTER_STEPS",
    "apply_filter",
    "contrast_threshold",
    "darkest_value",
    "halftone_fade",
    "render_layer",
    "Job",
    "JobResult",
    "partition",
    "run_jobs",
    "extract",
]
