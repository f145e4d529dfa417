from __future__ import annotations

import os
import shutil
from pathlib import Path
from typing import Union

PathLike = Union[str, Path]


def ensure_directory(path: PathLike) -> Path:
    directory = Path(path)
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def copy_file(src: PathLike, dest: PathLike) -> Path:
    target = Path(dest)
    if Path(src).resolve() != target.resolve():
        shutil.copyfile(src, target)
    return target


def move_file(src: PathLike, dest: PathLike) -> Path:
    target = Path(dest)
    if Path(src).resolve() != target.resolve():
        os.replace(src, target)
    return target


def remove_file(path: PathLike) -> None:
    Path(path).unlink()
