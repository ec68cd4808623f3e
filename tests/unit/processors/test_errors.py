"""Tests for the error report processor."""

import json
from pathlib import Path

import pytest

from plugin_results.processors.base import FileProcessingError
from plugin_results.processors.errors import error_processor, is_timeout_error


def write_report(plugin_dir: Path, content: str) -> Path:
    """Write an error report under the plugin's errors directory."""
    path = plugin_dir / "errors" / "error.json"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path


def test_error_becomes_failed_leaf(tmp_path: Path) -> None:
    """The error text names the leaf and all keys are kept as details."""
    path = write_report(
        tmp_path, json.dumps({"error": "container exited", "exit_code": 137})
    )

    item = error_processor(tmp_path, path)

    assert item.name == "container exited"
    assert item.status == "failed"
    assert item.metadata == {"file": "errors/error.json"}
    assert item.details == {"error": "container exited", "exit_code": "137"}


def test_timeout_error_is_escalated(tmp_path: Path) -> None:
    """Errors mentioning a timeout get the timeout status."""
    path = write_report(tmp_path, json.dumps({"error": "pod timeout exceeded"}))

    item = error_processor(tmp_path, path)

    assert item.name == "pod timeout exceeded"
    assert item.status == "timeout"
    assert is_timeout_error(item)


def test_report_without_error_keeps_file_name(tmp_path: Path) -> None:
    """Without an error entry the leaf keeps the file name."""
    path = write_report(tmp_path, json.dumps({"reason": "unschedulable"}))

    item = error_processor(tmp_path, path)

    assert item.name == "error.json"
    assert item.status == "failed"
    assert item.details == {"reason": "unschedulable"}


def test_empty_error_keeps_file_name(tmp_path: Path) -> None:
    """An empty error entry is not promoted."""
    path = write_report(tmp_path, json.dumps({"error": ""}))

    assert error_processor(tmp_path, path).name == "error.json"


def test_missing_file_is_unknown(tmp_path: Path) -> None:
    """Unreadable reports produce an unknown leaf and an error."""
    path = tmp_path / "errors" / "error.json"

    with pytest.raises(FileProcessingError, match="opening file") as exc_info:
        error_processor(tmp_path, path)

    item = exc_info.value.item
    assert item.name == "error.json"
    assert item.status == "unknown"
    assert item.metadata["file"] == "errors/error.json"
    assert "error" in item.metadata


@pytest.mark.parametrize("content", ["{not json", "[1, 2]"])
def test_undecodable_report_stays_failed(tmp_path: Path, content: str) -> None:
    """Reports that aren't JSON objects keep the unpopulated failed leaf."""
    path = write_report(tmp_path, content)

    with pytest.raises(FileProcessingError, match="decoding file") as exc_info:
        error_processor(tmp_path, path)

    item = exc_info.value.item
    assert item.name == "error.json"
    assert item.status == "failed"
    assert item.details == {}
