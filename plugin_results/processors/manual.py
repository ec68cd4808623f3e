"""Processor for result files that plugins write in the canonical format."""

from pathlib import Path

import yaml
from pydantic import ValidationError

from plugin_results.models.item import (
    METADATA_ERROR_KEY,
    METADATA_FILE_KEY,
    METADATA_TYPE_FILE,
    METADATA_TYPE_KEY,
    Item,
)
from plugin_results.processors.base import FileProcessingError, relative_path
from plugin_results.status import STATUS_UNKNOWN, manual_results_aggregation


def manual_processor(plugin_dir: Path, path: Path) -> Item:
    """Load a user-authored result document.

    The document is a single item (a mapping) or a list of items. Its content
    is kept as written; only a missing status is filled in from the statuses
    of its direct children.
    """
    item = Item(
        name=Path(path).name,
        metadata={
            METADATA_FILE_KEY: relative_path(plugin_dir, path),
            METADATA_TYPE_KEY: METADATA_TYPE_FILE,
        },
    )

    try:
        with open(path, encoding="utf-8") as infile:
            document = yaml.safe_load(infile)
    except OSError as err:
        _mark_unreadable(item, err)
        raise FileProcessingError(f"opening file {path}: {err}", item) from err
    except (yaml.YAMLError, UnicodeDecodeError) as err:
        _mark_unreadable(item, err)
        raise FileProcessingError(f"decoding file {path}: {err}", item) from err

    if isinstance(document, list):
        document = {"items": document}

    try:
        provided = Item.model_validate(document)
    except ValidationError as err:
        _mark_unreadable(item, err)
        raise FileProcessingError(f"decoding file {path}: {err}", item) from err

    item.name = provided.name or item.name
    item.metadata = {**provided.metadata, **item.metadata}
    item.details = provided.details
    item.items = provided.items
    item.status = provided.status or manual_results_aggregation(*provided.items)
    return item


def _mark_unreadable(item: Item, err: Exception) -> None:
    item.metadata[METADATA_ERROR_KEY] = str(err)
    item.status = STATUS_UNKNOWN
