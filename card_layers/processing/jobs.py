from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from ..codec import write_layer
from ..config import LOGGER_NAME
from ..errors import JobFailure
from ..regions import FilterMode, Region
from .filters import render_layer

log = logging.getLogger(LOGGER_NAME)

Handler = Callable[[bytes, int, Sequence[Region]], bytearray]


@dataclass(frozen=True)
class Job:
    mode: FilterMode
    regions: Sequence[Region]
    handler: Handler

    @property
    def tag(self) -> str:
        return self.mode.value

    def layer_path(self, directory: Path, stem: str) -> Path:
        return directory / f"{stem}.{self.tag}.png"


@dataclass(frozen=True)
class JobResult:
    tag: str
    path: Optional[Path] = None
    error: Optional[JobFailure] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _handler_for(mode: FilterMode) -> Handler:
    def handler(buffer: bytes, width: int, regions: Sequence[Region]) -> bytearray:
        return render_layer(buffer, width, regions, mode)

    return handler


def partition(regions: Sequence[Region]) -> List[Job]:
    """Group ``regions`` by filter, one job per non-empty group, in compositing order."""

    jobs = []
    for mode in FilterMode:
        group = tuple(region for region in regions if region.filter is mode)
        if group:
            jobs.append(Job(mode=mode, regions=group, handler=_handler_for(mode)))
    return jobs


def run_job(job: Job, buffer: bytes, width: int, height: int, path: Path) -> Path:
    pixels = job.handler(buffer, width, job.regions)
    # Filtered layers only carry ink; white must not cover the layers beneath.
    return write_layer(pixels, width, height, path, transparent_white=job.mode is not FilterMode.BASE)


async def run_jobs(
    jobs: Sequence[Job],
    buffer: bytes,
    width: int,
    height: int,
    directory: Path,
    stem: str,
) -> List[JobResult]:
    """Run every job concurrently and wait for all of them to settle.

    A failing job does not cancel its siblings; its error is recorded on the
    matching result. Results follow the order of ``jobs``.
    """

    paths = [job.layer_path(directory, stem) for job in jobs]
    outcomes = await asyncio.gather(
        *(
            asyncio.to_thread(run_job, job, buffer, width, height, path)
            for job, path in zip(jobs, paths)
        ),
        return_exceptions=True,
    )

    results = []
    for job, path, outcome in zip(jobs, paths, outcomes):
        if isinstance(outcome, BaseException):
            failure = JobFailure(job.tag, str(outcome), path=path)
            failure.__cause__ = outcome
            log.warning("Layer job failed: %s", failure)
            results.append(JobResult(tag=job.tag, error=failure))
        else:
            log.debug("Layer %s written to %s", job.tag, outcome)
            results.append(JobResult(tag=job.tag, path=outcome))
    return results
