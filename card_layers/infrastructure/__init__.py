"""Infrastructure helpers for fetching sources and touching the filesystem."""

from .network import SourceFetcher, filename_from_url, is_file_path, is_url
from .storage import copy_file, ensure_directory, move_file, remove_file

__all__ = [
    "SourceFetcher",
    "filename_from_url",
    "is_file_path",
    "is_url",
    "copy_file",
    "ensure_directory",
    "move_file",
    "remove_file",
]
