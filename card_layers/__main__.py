"""Command line entry point for building layered card images."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from .config import LayerSettings, configure_logging
from .errors import LayerBuildError
from .infrastructure.network import SessionFactory, SourceFetcher, is_url
from .pipeline import build_sync
from .presets import PRESETS, preset_regions
from .regions import Region, regions_from_records


def load_regions(path: Optional[str], preset: Optional[str]) -> List[Region]:
    if path:
        records = json.loads(Path(path).read_text(encoding="utf-8"))
        return regions_from_records(records)
    if preset:
        return preset_regions(preset)
    return []


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="card-layers", description=__doc__)
    sub = parser.add_subparsers(dest="command", required=True)

    build_cmd = sub.add_parser("build", help="Extract region layers and compose them")
    build_cmd.add_argument("src", help="Source image path or URL")
    build_cmd.add_argument("dest", nargs="?", help="Output file or directory")
    group = build_cmd.add_mutually_exclusive_group()
    group.add_argument("--regions", help="JSON file with a list of regions")
    group.add_argument("--preset", choices=sorted(PRESETS), help="Built-in region layout")

    fetch_cmd = sub.add_parser("fetch", help="Download a source image into the cache directory")
    fetch_cmd.add_argument("url", nargs="?", help="Image URL (defaults to SOURCE_URL)")
    fetch_cmd.add_argument("--name", help="File name to store the download under")

    sub.add_parser("serve", help="Run the HTTP service")
    return parser


def main(
    argv: Optional[Sequence[str]] = None,
    session_factory: Optional[SessionFactory] = None,
) -> int:
    args = _parser().parse_args(argv)
    settings = LayerSettings.from_env()
    log = configure_logging(settings)

    if args.command == "serve":
        from .app import create_app

        create_app(settings).run(host="0.0.0.0", port=settings.port, debug=False)
        return 0

    try:
        if args.command == "fetch":
            path = SourceFetcher(settings, session_factory).download(args.url or settings.source_url, args.name)
            print(path)
            return 0

        regions = load_regions(args.regions, args.preset)
        src = args.src
        if is_url(src):
            src = SourceFetcher(settings, session_factory).download(src)
        out = build_sync(src, args.dest, regions, settings=settings)
    except (LayerBuildError, OSError, ValueError) as exc:
        log.error("%s", exc)
        return 1

    print(out)
    return 0


if __name__ == "__main__":
    sys.exit(main())
