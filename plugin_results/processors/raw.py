"""Processor recording each raw result file as a passed leaf."""

from pathlib import Path

from plugin_results.models.item import (
    METADATA_ERROR_KEY,
    METADATA_FILE_KEY,
    METADATA_TYPE_FILE,
    METADATA_TYPE_KEY,
    Item,
)
from plugin_results.processors.base import FileProcessingError, relative_path
from plugin_results.status import STATUS_PASSED, STATUS_UNKNOWN


def raw_processor(plugin_dir: Path, path: Path) -> Item:
    """Record that the plugin produced ``path``; the content is not inspected."""
    item = Item(
        name=Path(path).name,
        status=STATUS_PASSED,
        metadata={
            METADATA_FILE_KEY: relative_path(plugin_dir, path),
            METADATA_TYPE_KEY: METADATA_TYPE_FILE,
        },
    )

    try:
        with open(path, "rb"):
            pass
    except OSError as err:
        item.metadata[METADATA_ERROR_KEY] = str(err)
        item.status = STATUS_UNKNOWN
        raise FileProcessingError(f"opening file {path}: {err}", item) from err

    return item
