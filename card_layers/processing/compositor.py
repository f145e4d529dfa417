from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Sequence, Union

from PIL import Image

from ..codec import flatten, save_image
from ..config import LOGGER_NAME
from ..errors import CleanupError, CompositeError
from ..infrastructure.storage import copy_file, move_file, remove_file

log = logging.getLogger(LOGGER_NAME)

PathLike = Union[str, Path]


def _is_png(path: Path) -> bool:
    return path.suffix.lower() == ".png"


def remove_layers(paths: Sequence[Path]) -> List[CleanupError]:
    """Delete intermediate layers; failures are logged and returned, never raised."""

    failures = []
    for path in paths:
        try:
            remove_file(path)
        except OSError as exc:
            failure = CleanupError(str(exc), path=path)
            failure.__cause__ = exc
            log.error("%s", failure)
            failures.append(failure)
    return failures


def compose(layer_paths: Sequence[PathLike], dest: PathLike, src: PathLike) -> Path:
    """Merge ``layer_paths`` into ``dest``.

    No layers copies ``src`` unchanged, a single layer is moved into place,
    and two or more layers are stacked in the given order over the first one
    and flattened onto white. Intermediate layers are deleted once ``dest``
    has been written.
    """

    target = Path(dest)
    layers = [Path(path) for path in layer_paths]

    if not layers:
        log.info("No layers, copying %s to %s", src, target)
        return copy_file(src, target)

    if len(layers) == 1:
        layer = layers[0]
        if _is_png(target):
            return move_file(layer, target)
        try:
            with Image.open(layer) as img:
                img.load()
                save_image(img, target)
        except (OSError, ValueError) as exc:
            raise CompositeError(str(exc), path=target) from exc
        remove_layers(layers)
        return target

    try:
        with Image.open(layers[0]) as base:
            base.load()
            overlays = []
            for path in layers[1:]:
                with Image.open(path) as overlay:
                    overlay.load()
                    overlays.append(overlay)
            flattened = flatten(base, overlays)
        save_image(flattened, target)
    except (OSError, ValueError) as exc:
        raise CompositeError(str(exc), path=target) from exc

    log.info("Composed %d layers into %s", len(layers), target)
    # ``dest`` may coincide with one of the layers; never delete the output.
    remove_layers([path for path in layers if path.resolve() != target.resolve()])
    return target
