"""Processor for the error reports captured while running a plugin."""

import json
from pathlib import Path

from plugin_results.models.item import (
    METADATA_ERROR_KEY,
    METADATA_FILE_KEY,
    Item,
    stringify,
)
from plugin_results.processors.base import FileProcessingError, relative_path
from plugin_results.status import STATUS_FAILED, STATUS_TIMEOUT, STATUS_UNKNOWN


def error_processor(plugin_dir: Path, path: Path) -> Item:
    """Turn a captured error report into a failed leaf.

    The report is a JSON object whose keys are copied into the details. Its
    ``error`` entry, when present, becomes the item name since the error file
    name itself tells the user nothing.
    """
    item = Item(
        name=Path(path).name,
        status=STATUS_FAILED,
        metadata={METADATA_FILE_KEY: relative_path(plugin_dir, path)},
    )

    try:
        infile = open(path, encoding="utf-8")
    except OSError as err:
        item.metadata[METADATA_ERROR_KEY] = str(err)
        item.status = STATUS_UNKNOWN
        raise FileProcessingError(f"opening file {path}: {err}", item) from err

    with infile:
        try:
            report = json.load(infile)
        except ValueError as err:
            raise FileProcessingError(f"decoding file {path}: {err}", item) from err

    if not isinstance(report, dict):
        raise FileProcessingError(
            f"decoding file {path}: expected a JSON object,"
            f" got {type(report).__name__}",
            item,
        )

    item.details = {key: stringify(value) for key, value in report.items()}

    if error := item.details.get("error"):
        item.name = error

    if is_timeout_error(item):
        item.status = STATUS_TIMEOUT

    return item


def is_timeout_error(item: Item) -> bool:
    """Whether the item reports that results were not received in time."""
    return "timeout" in item.details.get("error", "")
