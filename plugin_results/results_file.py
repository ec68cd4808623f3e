"""Reading and writing the post-processed results file of a plugin."""

import logging
from pathlib import Path

import yaml

from plugin_results.layout import POST_PROCESSED_RESULTS_FILE
from plugin_results.models.item import Item

log = logging.getLogger(__name__)


def save_results(item: Item, plugin_dir: Path) -> Path:
    """Write ``item`` as the post-processed results file of ``plugin_dir``."""
    path = Path(plugin_dir) / POST_PROCESSED_RESULTS_FILE
    path.parent.mkdir(parents=True, exist_ok=True)

    with path.open("w", encoding="utf-8") as outfile:
        yaml.safe_dump(item.to_dict(), outfile, sort_keys=False)

    log.info("Saved results for %s to %s", item.name, path)
    return path


def load_results(path: Path) -> Item:
    """Read a results file written by ``save_results``.

    Raises:
        ValueError: If the file does not hold a results document

    """
    with Path(path).open(encoding="utf-8") as infile:
        document = yaml.safe_load(infile)

    if not isinstance(document, dict):
        raise ValueError(f"Invalid results file {path}: expected a mapping")
    return Item.from_dict(document)
