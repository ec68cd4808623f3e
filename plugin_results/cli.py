"""CLI entry point for post-processing plugin results."""

import argparse
import json
import logging
import sys
from collections import Counter
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from plugin_results.definition_loader import (
    load_plugin_definition,
    parse_plugin_definition,
)
from plugin_results.layout import plugin_dir
from plugin_results.models.definition import PluginDefinition
from plugin_results.models.item import METADATA_FILE_KEY, Item
from plugin_results.orchestrator import post_process_plugin
from plugin_results.results_file import save_results
from plugin_results.status import (
    STATUS_FAILED,
    STATUS_PASSED,
    STATUS_SKIPPED,
    STATUS_TIMEOUT,
    STATUS_UNKNOWN,
    is_failure_status,
)

STATUS_SYMBOLS = {
    STATUS_PASSED: "✅",
    STATUS_FAILED: "❌",
    STATUS_SKIPPED: "⏭️",
    STATUS_TIMEOUT: "⏱️",
    STATUS_UNKNOWN: "❔",
}


def count_statuses(item: Item) -> Mapping[str, int]:
    """Count the statuses of the leaves below ``item``."""
    return Counter(
        leaf.status or STATUS_UNKNOWN for leaf in item.leaves() if leaf is not item
    )


def log_results_summary(log: logging.Logger, item: Item) -> None:
    """Log a formatted summary of a plugin's results, listing every failure."""
    counts = count_statuses(item)

    log.info("=" * 80)
    log.info("Results Summary: %s", item.name)
    log.info("=" * 80)
    log.info("Status: %s", item.status)
    log.info("Total: %d", sum(counts.values()))

    for status in sorted(counts):
        symbol = STATUS_SYMBOLS.get(status, "?")
        log.info("%s %s: %d", symbol, status, counts[status])

    for leaf in item.leaves():
        if leaf is item or not is_failure_status(leaf.status):
            continue
        symbol = STATUS_SYMBOLS[leaf.status]
        log.info("%s %s", symbol, leaf.name)
        if source := leaf.metadata.get(METADATA_FILE_KEY):
            log.info("  File: %s", source)


def format_output(item: Item) -> dict[str, Any]:
    """Format a plugin's results for document output."""
    counts = count_statuses(item)
    return {
        "plugin": item.name,
        "status": item.status,
        "total": sum(counts.values()),
        "passed": counts.get(STATUS_PASSED, 0),
        "failed": counts.get(STATUS_FAILED, 0),
        "skipped": counts.get(STATUS_SKIPPED, 0),
        "timeouts": counts.get(STATUS_TIMEOUT, 0),
        "unknown": counts.get(STATUS_UNKNOWN, 0),
        "results": item.to_dict(),
    }


def load_definition(
    definition_path: Path | None, plugin_config_json: str | None
) -> PluginDefinition:
    """Load the plugin definition from a file or an inline JSON document."""
    if definition_path is not None:
        return load_plugin_definition(definition_path)
    if plugin_config_json is None:
        raise ValueError("A plugin definition file or plugin config is required")
    return parse_plugin_definition(json.loads(plugin_config_json))


def run(
    results_dir: Path,
    plugin: PluginDefinition,
    save: bool = False,
    output_format: str = "json",
) -> int:
    """Post-process a plugin's results and return exit code."""
    log = logging.getLogger("plugin_results")

    log.info("Post-processing plugin %s in %s", plugin.name, results_dir)
    item, errors = post_process_plugin(plugin, results_dir)

    for error in errors:
        log.error("Error processing results: %s", error)

    log_results_summary(log, item)

    if save:
        save_results(item, plugin_dir(results_dir, plugin.name))

    output = format_output(item)
    if output_format == "yaml":
        print(yaml.safe_dump(output, sort_keys=False), end="")
    else:
        print(json.dumps(output, indent=2))

    return 1 if is_failure_status(item.status) else 0


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Aggregate plugin result files into a single result tree"
    )
    parser.add_argument(
        "--results-dir",
        type=Path,
        required=True,
        help="Root of the results directory (containing plugins/)",
    )
    definition = parser.add_mutually_exclusive_group(required=True)
    definition.add_argument(
        "--plugin-definition",
        type=Path,
        help="Path to the plugin definition YAML file",
    )
    definition.add_argument(
        "--plugin-config",
        help="Inline JSON plugin definition (plugin-name, driver, result-format)",
    )
    parser.add_argument(
        "--save",
        action="store_true",
        help="Write the post-processed results file into the plugin directory",
    )
    parser.add_argument(
        "--output",
        choices=("json", "yaml"),
        default="json",
        help="Format of the document printed to stdout",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    plugin = load_definition(args.plugin_definition, args.plugin_config)
    exit_code = run(
        results_dir=args.results_dir,
        plugin=plugin,
        save=args.save,
        output_format=args.output,
    )
    sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()
