"""Walking plugin result directories and turning selected files into items."""

import logging
import os
import stat
from collections.abc import Iterator
from pathlib import Path

from plugin_results.models.item import (
    METADATA_ERROR_KEY,
    METADATA_FILE_KEY,
    METADATA_TYPE_KEY,
    METADATA_TYPE_NODE,
    Item,
)
from plugin_results.processors.base import (
    FileProcessingError,
    PostProcessor,
    relative_path,
)
from plugin_results.selectors import FileSelector
from plugin_results.status import STATUS_UNKNOWN

log = logging.getLogger(__name__)


def process_dir(
    plugin_dir: Path,
    directory: Path,
    processor: PostProcessor,
    selector: FileSelector,
) -> list[Item]:
    """Process every file under ``directory`` accepted by ``selector``.

    Args:
        plugin_dir: Plugin directory; processors record paths relative to it
        directory: Directory to walk recursively
        processor: Turns one selected file into an Item
        selector: Decides which files are processed

    Returns:
        One item per selected file, in walk order. A missing directory
        produces no items. A nested directory that can't be listed is logged
        and skipped, the files around it are still processed.

    Raises:
        OSError: If ``directory`` itself exists but can't be listed

    """
    results: list[Item] = []

    for path, info in _walk(Path(directory), root=True):
        if not selector(path, info):
            continue

        try:
            item = processor(Path(plugin_dir), path)
        except FileProcessingError as err:
            log.error("Error processing file %s: %s", path, err)
            item = err.item
        except Exception as err:
            log.exception("Unexpected error processing file %s", path)
            item = Item(
                name=path.name,
                status=STATUS_UNKNOWN,
                metadata={
                    METADATA_FILE_KEY: relative_path(Path(plugin_dir), path),
                    METADATA_ERROR_KEY: str(err),
                },
            )
        results.append(item)

    return results


def process_nodes(
    plugin_name: str,
    plugin_dir: Path,
    directory: Path,
    processor: PostProcessor,
    selector: FileSelector,
) -> list[Item]:
    """Run ``process_dir`` on each node subdirectory of ``directory``.

    ``directory`` is the results or errors directory of a plugin that ran on
    every node, with one subdirectory per node. Each node becomes a branch
    holding that node's items. Problems with a single node are logged and do
    not stop the others; a node whose directory can't be listed is kept with
    no children.

    Raises:
        OSError: If ``directory`` exists but can't be listed

    """
    try:
        with os.scandir(directory) as entries:
            node_entries = sorted(entries, key=lambda entry: entry.name)
    except FileNotFoundError:
        log.debug("No node directories found in %s", directory)
        return []

    results: list[Item] = []

    for entry in node_entries:
        if not entry.is_dir(follow_symlinks=False):
            continue

        node = Item(name=entry.name, metadata={METADATA_TYPE_KEY: METADATA_TYPE_NODE})
        try:
            node.items = process_dir(plugin_dir, Path(entry.path), processor, selector)
        except OSError as err:
            log.warning(
                "Error processing results entries for node %s, plugin %s: %s",
                entry.name,
                plugin_name,
                err,
            )
        results.append(node)

    return results


def _walk(path: Path, *, root: bool = False) -> Iterator[tuple[Path, os.stat_result]]:
    """Yield ``path`` and everything below it, entries sorted by name."""
    try:
        info = os.lstat(path)
    except FileNotFoundError:
        log.debug("No results found in %s", path)
        return
    except OSError as err:
        if root:
            raise
        log.error("Error reading %s, skipping it: %s", path, err)
        return

    yield path, info

    if not stat.S_ISDIR(info.st_mode):
        return

    try:
        names = sorted(os.listdir(path))
    except OSError as err:
        if root:
            raise
        log.error("Error listing directory %s, skipping it: %s", path, err)
        return

    for name in names:
        yield from _walk(path / name)
