"""Predicates choosing which files of a results directory get processed."""

import os
import stat
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import TypeAlias

from plugin_results.layout import DEFAULT_ERROR_FILE

FileSelector: TypeAlias = Callable[[Path, os.stat_result | None], bool]


def _is_file(info: os.stat_result | None) -> bool:
    return info is not None and not stat.S_ISDIR(info.st_mode)


def file_or_default(files: Sequence[str], default_file: str) -> FileSelector:
    """Match any of ``files`` by base name, or only ``default_file`` if none given."""

    def selector(path: Path, info: os.stat_result | None) -> bool:
        if not _is_file(info):
            return False

        filename = Path(path).name
        if files:
            return filename in files
        return filename == default_file

    return selector


def file_or_extension(files: Sequence[str], ext: str) -> FileSelector:
    """Match any of ``files`` by base name, or paths ending in ``ext``.

    The extension is only used when no file names are given. An extension of
    ``"*"`` matches every file.
    """

    def selector(path: Path, info: os.stat_result | None) -> bool:
        if not _is_file(info):
            return False

        if files:
            return Path(path).name in files
        return ext == "*" or str(path).endswith(ext)

    return selector


def file_or_any(files: Sequence[str]) -> FileSelector:
    """Match any of ``files`` by base name, or every file if none given."""
    return file_or_extension(files, "*")


def error_selector() -> FileSelector:
    """Match the error reports written for a plugin."""
    return file_or_extension([DEFAULT_ERROR_FILE], "")
