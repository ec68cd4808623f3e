"""Post-processing of a single plugin's results into one result tree."""

import logging
from pathlib import Path

from plugin_results.layout import ERRORS_DIR, RESULTS_DIR, plugin_dir
from plugin_results.models.definition import RESULT_FORMAT_MANUAL, PluginDefinition
from plugin_results.models.item import METADATA_TYPE_KEY, METADATA_TYPE_SUMMARY, Item
from plugin_results.processors.base import PostProcessor
from plugin_results.processors.errors import error_processor
from plugin_results.processors.registry import load_format_manifest
from plugin_results.selectors import FileSelector, error_selector
from plugin_results.status import aggregate_status, manual_results_aggregation
from plugin_results.walker import process_dir, process_nodes

log = logging.getLogger(__name__)


class PluginProcessingError(Exception):
    """A results or errors directory of a plugin could not be processed."""

    def __init__(self, plugin_name: str, directory: Path) -> None:
        super().__init__(
            f"processing plugin {plugin_name!r}, directory {str(directory)!r}"
        )
        self.plugin_name = plugin_name
        self.directory = directory

    def __str__(self) -> str:
        if self.__cause__ is None:
            return super().__str__()
        return f"{super().__str__()}: {self.__cause__}"


def post_process_plugin(
    plugin: PluginDefinition, base_dir: Path
) -> tuple[Item, list[Exception]]:
    """Build the result tree of a plugin from the files it produced.

    Args:
        plugin: Definition of the plugin whose results are processed
        base_dir: Root of the results directory, which holds ``plugins/``

    Returns:
        The plugin summary item with its status already aggregated, and every
        directory-level error encountered. Errors in individual files are
        logged and represented in the tree instead.

    """
    manifest = load_format_manifest(plugin.result_format)
    return process_plugin_with_processor(
        plugin,
        base_dir,
        manifest.processor,
        manifest.selector_factory(plugin.result_files),
    )


def process_plugin_with_processor(
    plugin: PluginDefinition,
    base_dir: Path,
    processor: PostProcessor,
    selector: FileSelector,
) -> tuple[Item, list[Exception]]:
    """Apply ``processor`` to the selected results and process the errors directory.

    Errors are always read with the error processor, whatever the result
    format of the plugin.
    """
    pdir = plugin_dir(base_dir, plugin.name)
    errors: list[Exception] = []

    log.info(
        "Processing results for plugin %s (format=%s, multi_node=%s)",
        plugin.name,
        plugin.result_format,
        plugin.multi_node,
    )

    items = _process_location(
        plugin, pdir, pdir / RESULTS_DIR, processor, selector, errors
    )
    error_items = _process_location(
        plugin, pdir, pdir / ERRORS_DIR, error_processor, error_selector(), errors
    )

    summary = Item(
        name=plugin.name,
        metadata={METADATA_TYPE_KEY: METADATA_TYPE_SUMMARY},
        items=[*items, *error_items],
    )

    if plugin.result_format == RESULT_FORMAT_MANUAL:
        summary.status = _manual_status(summary, multi_node=plugin.multi_node)
    else:
        summary.status = aggregate_status(*summary.items)

    log.info("Plugin %s finished with status: %s", plugin.name, summary.status)
    return summary, errors


def _process_location(
    plugin: PluginDefinition,
    pdir: Path,
    directory: Path,
    processor: PostProcessor,
    selector: FileSelector,
    errors: list[Exception],
) -> list[Item]:
    """Process one plugin location, recording a failure in ``errors``.

    The failure is raised from the ``OSError`` and caught straight away so it
    carries its cause the same way a propagated error would.
    """
    try:
        try:
            if plugin.multi_node:
                return process_nodes(plugin.name, pdir, directory, processor, selector)
            return process_dir(pdir, directory, processor, selector)
        except OSError as err:
            raise PluginProcessingError(plugin.name, directory) from err
    except PluginProcessingError as error:
        log.error("%s", error)
        errors.append(error)
        return []


def _manual_status(summary: Item, *, multi_node: bool) -> str:
    # The plugin provided its own results; only a label for the summary is
    # computed, never a reinterpretation of what the user wrote.
    if not multi_node:
        return manual_results_aggregation(*summary.items)

    # Each node is labelled from its own result files while the plugin label
    # counts every result file across all nodes.
    all_results: list[Item] = []
    for node in summary.items:
        all_results.extend(node.items)
        node.status = manual_results_aggregation(*node.items)
    return manual_results_aggregation(*all_results)
