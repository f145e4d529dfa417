from __future__ import annotations

import io
from pathlib import Path
from typing import Union

from flask import send_file


def send_png(path: Union[str, Path], download_name: str | None = None):
    # Read eagerly so the file can be removed once the response is built.
    data = Path(path).read_bytes()
    return send_file(
        io.BytesIO(data),
        mimetype="image/png",
        download_name=download_name or Path(path).name,
    )
