"""Build entry point: decode, extract layers concurrently, compose."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence, Tuple, Union

from .codec import decode
from .config import LOGGER_NAME, LayerSettings
from .errors import DecodeError
from .infrastructure.storage import ensure_directory
from .processing.compositor import compose
from .processing.jobs import partition, run_jobs
from .regions import Region, clip_regions

log = logging.getLogger(LOGGER_NAME)

PathLike = Union[str, Path]


@dataclass(frozen=True)
class BuildRequest:
    src: Path
    dest: Path
    regions: Tuple[Region, ...] = field(default_factory=tuple)

    @classmethod
    def create(cls, src: PathLike, dest: PathLike, regions: Sequence[Region] = ()) -> "BuildRequest":
        return cls(src=Path(src), dest=Path(dest), regions=tuple(regions))

    def output_path(self) -> Path:
        """``dest`` itself, or ``dest/<src name>`` when ``dest`` names a directory."""

        if self.dest.is_dir() or not self.dest.suffix:
            return self.dest / self.src.name
        return self.dest


async def run_build(request: BuildRequest) -> Path:
    output = request.output_path()
    await asyncio.to_thread(ensure_directory, output.parent)

    if not request.regions:
        return await asyncio.to_thread(compose, [], output, request.src)

    buffer, width, height = await asyncio.to_thread(decode, request.src)
    regions = clip_regions(request.regions, width, height)
    jobs = partition(regions)
    log.info(
        "Building %s from %s: %d regions, jobs=%s",
        output,
        request.src,
        len(regions),
        [job.tag for job in jobs],
    )

    results = await run_jobs(jobs, buffer, width, height, output.parent, request.src.stem)
    failures = [result.error for result in results if not result.ok]
    layers = [result.path for result in results if result.ok]
    if jobs and not layers:
        raise failures[0]
    if failures:
        log.warning(
            "Composing %d of %d layers; failed: %s",
            len(layers),
            len(results),
            ", ".join(failure.tag for failure in failures),
        )

    return await asyncio.to_thread(compose, layers, output, request.src)


async def build(
    src: PathLike,
    dest: PathLike | None = None,
    regions: Sequence[Region] = (),
    settings: LayerSettings | None = None,
) -> Path:
    """Build ``dest`` from ``src`` and return the output path.

    ``dest`` may be a file or a directory; in the latter case the output keeps
    the source file name. Without ``dest`` the output lands in
    ``settings.output_dir``. Raises :class:`~card_layers.errors.DecodeError`
    when the source cannot be read, the first job's error when every layer
    job fails, and :class:`~card_layers.errors.CompositeError` when merging
    fails.
    """

    if dest is None:
        dest = (settings or LayerSettings.from_env()).output_dir
    request = BuildRequest.create(src, dest, regions)
    if not request.src.exists():
        raise DecodeError("Source image does not exist", path=request.src)
    return await run_build(request)


def build_sync(
    src: PathLike,
    dest: PathLike | None = None,
    regions: Sequence[Region] = (),
    settings: LayerSettings | None = None,
) -> Path:
    return asyncio.run(build(src, dest, regions, settings=settings))
