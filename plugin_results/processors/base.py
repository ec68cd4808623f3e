"""Shared types for per-file result processors."""

import logging
import os
from collections.abc import Callable
from pathlib import Path
from typing import TypeAlias

from plugin_results.models.item import Item

log = logging.getLogger(__name__)

# Takes the plugin directory and the file to process and returns its Item.
PostProcessor: TypeAlias = Callable[[Path, Path], Item]


class FileProcessingError(Exception):
    """Raised when a result file could not be fully processed.

    Carries the best-effort Item built before the failure so that the file is
    still represented in the result tree.
    """

    def __init__(self, message: str, item: Item) -> None:
        super().__init__(message)
        self.item = item


def relative_path(plugin_dir: Path, path: Path) -> str:
    """Return ``path`` relative to the plugin directory, or as-is if it can't be."""
    try:
        return os.path.relpath(path, plugin_dir)
    except ValueError as err:
        log.error("Error making path %s relative to %s: %s", path, plugin_dir, err)
        return str(path)
