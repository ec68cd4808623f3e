"""Helpers writing plugin result directories for tests."""

import json
from pathlib import Path
from typing import Any

from plugin_results.layout import (
    DEFAULT_ERROR_FILE,
    ERRORS_DIR,
    RESULTS_DIR,
    plugin_dir,
)


def write_result(
    base_dir: Path,
    plugin_name: str,
    relative: str,
    content: str,
    *,
    node: str | None = None,
) -> Path:
    """Write a result file of ``plugin_name``, optionally under a node directory."""
    directory = plugin_dir(base_dir, plugin_name) / RESULTS_DIR
    if node is not None:
        directory = directory / node
    path = directory / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def write_error(
    base_dir: Path,
    plugin_name: str,
    report: dict[str, Any],
    *,
    node: str | None = None,
) -> Path:
    """Write an error report of ``plugin_name``, optionally under a node directory."""
    directory = plugin_dir(base_dir, plugin_name) / ERRORS_DIR
    if node is not None:
        directory = directory / node
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / DEFAULT_ERROR_FILE
    path.write_text(json.dumps(report), encoding="utf-8")
    return path


def junit_report(*cases: tuple[str, str], suite: str = "suite") -> str:
    """Build a JUnit report from ``(name, status)`` pairs."""
    lines = [f'<testsuite name="{suite}" tests="{len(cases)}">']
    for name, status in cases:
        if status == "failed":
            failure = f'<failure message="{name} failed"/>'
            lines.append(f'  <testcase name="{name}">{failure}</testcase>')
        elif status == "skipped":
            lines.append(f'  <testcase name="{name}"><skipped/></testcase>')
        else:
            lines.append(f'  <testcase name="{name}"/>')
    lines.append("</testsuite>")
    return "\n".join(lines)
