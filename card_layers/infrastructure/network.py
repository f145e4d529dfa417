from __future__ import annotations

import posixpath
import re
import time
from pathlib import Path
from typing import Callable
from urllib.parse import unquote, urlsplit

import requests

from ..config import LayerSettings
from ..errors import SourceError
from .storage import ensure_directory


SessionFactory = Callable[[], requests.Session]

FILE_PATTERN = re.compile(r"^[A-Z]?:?[\/\\]{1}[^\/\\]+")
URL_PATTERN = re.compile(r"^[a-zA-Z]{3,5}:\/\/[^\/]+")

_CHUNK_SIZE = 64 * 1024


def is_url(value: str) -> bool:
    return bool(URL_PATTERN.match(value))


def is_file_path(value: str) -> bool:
    """Absolute POSIX or drive-letter path, e.g. ``/tmp/a.png`` or ``D:\\a.png``."""

    return bool(FILE_PATTERN.match(value))


def filename_from_url(url: str, default: str = "source.png") -> str:
    name = posixpath.basename(unquote(urlsplit(url).path))
    return name or default


def _check_headers(response: requests.Response, url: str, max_content_length: int) -> None:
    content_type = response.headers.get("content-type", "")
    if not content_type.startswith("image"):
        raise SourceError(f"Content type is not an image: {content_type or 'missing'}", path=url)
    content_length = response.headers.get("content-length")
    if content_length is None:
        return
    try:
        length = int(content_length)
    except ValueError:
        raise SourceError(f"Invalid content length: {content_length!r}", path=url) from None
    if length > max_content_length:
        raise SourceError(f"Content length is too large: {content_length}", path=url)


class SourceFetcher:
    def __init__(self, settings: LayerSettings, session_factory: SessionFactory | None = None) -> None:
        self._settings = settings
        self._session_factory = session_factory or requests.Session
        self._session = self._create_session()

    def _create_session(self) -> requests.Session:
        session = self._session_factory()
        session.headers.update({"User-Agent": "card-layers/1.0"})
        return session

    def download(self, url: str, filename: str | None = None, cache_dir: str | Path | None = None) -> Path:
        """Download the image at ``url`` into the cache directory and return its path."""

        directory = ensure_directory(cache_dir or self._settings.cache_dir)
        target = directory / (filename or filename_from_url(url))
        last_exception: Exception | None = None
        for attempt in range(1, self._settings.retries + 2):
            try:
                with self._session.get(url, timeout=self._settings.timeout, stream=True) as response:
                    response.raise_for_status()
                    _check_headers(response, url, self._settings.max_content_length)
                    with open(target, "wb") as handle:
                        for chunk in response.iter_content(chunk_size=_CHUNK_SIZE):
                            handle.write(chunk)
                return target
            except requests.RequestException as exc:
                last_exception = exc
                if attempt <= self._settings.retries:
                    time.sleep(0.4 * attempt)
        raise SourceError(str(last_exception), path=url) from last_exception
