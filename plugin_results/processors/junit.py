"""Processor for JUnit XML test reports."""

import xml.etree.ElementTree as ET
from pathlib import Path

from plugin_results.models.item import (
    METADATA_ERROR_KEY,
    METADATA_FILE_KEY,
    METADATA_TYPE_FILE,
    METADATA_TYPE_KEY,
    Item,
)
from plugin_results.processors.base import FileProcessingError, relative_path
from plugin_results.status import (
    STATUS_FAILED,
    STATUS_PASSED,
    STATUS_SKIPPED,
    STATUS_UNKNOWN,
    aggregate_status,
)


def junit_processor(plugin_dir: Path, path: Path) -> Item:
    """Parse a JUnit report into a file item with one child per test suite.

    Both a ``<testsuites>`` root and a bare ``<testsuite>`` root are accepted.
    The file status is rolled up from the individual test cases.
    """
    item = Item(
        name=Path(path).name,
        metadata={
            METADATA_FILE_KEY: relative_path(plugin_dir, path),
            METADATA_TYPE_KEY: METADATA_TYPE_FILE,
        },
    )

    try:
        root = ET.parse(path).getroot()
    except OSError as err:
        _mark_unreadable(item, err)
        raise FileProcessingError(f"opening file {path}: {err}", item) from err
    except ET.ParseError as err:
        _mark_unreadable(item, err)
        raise FileProcessingError(f"decoding file {path}: {err}", item) from err

    if root.tag not in ("testsuite", "testsuites"):
        message = f"unexpected root element <{root.tag}>"
        _mark_unreadable(item, message)
        raise FileProcessingError(f"decoding file {path}: {message}", item)

    item.items = [_suite_item(suite) for suite in root.iter("testsuite")]
    item.status = aggregate_status(*item.items)
    return item


def _mark_unreadable(item: Item, err: Exception | str) -> None:
    item.metadata[METADATA_ERROR_KEY] = str(err)
    item.status = STATUS_UNKNOWN


def _suite_item(suite: ET.Element) -> Item:
    return Item(
        name=suite.get("name", ""),
        items=[_case_item(case) for case in suite.findall("testcase")],
    )


def _case_item(case: ET.Element) -> Item:
    item = Item(name=case.get("name", ""), status=STATUS_PASSED)

    problem = case.find("failure")
    if problem is None:
        problem = case.find("error")

    if problem is not None:
        item.status = STATUS_FAILED
        item.details["failure"] = problem.get("message") or (problem.text or "")
    elif case.find("skipped") is not None:
        item.status = STATUS_SKIPPED

    for stream in ("system-out", "system-err"):
        if (output := case.findtext(stream)) is not None:
            item.details[stream] = output

    return item
