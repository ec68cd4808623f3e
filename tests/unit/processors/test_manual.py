"""Tests for the manual results processor."""

from pathlib import Path

import pytest

from plugin_results.processors.base import FileProcessingError
from plugin_results.processors.manual import manual_processor


def write(plugin_dir: Path, content: str) -> Path:
    """Write a user results file into the plugin's results directory."""
    path = plugin_dir / "results" / "sonobuoy_results.yaml"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path


def test_keeps_user_content(tmp_path: Path) -> None:
    """Names, details, children and statuses are kept as written."""
    path = write(
        tmp_path,
        """
name: cis-benchmark
status: custom-status
meta:
  owner: security
details:
  version: 1.6
items:
  - name: check 1.1
    status: passed
  - name: check 1.2
    status: warn
""",
    )

    item = manual_processor(tmp_path, path)

    assert item.name == "cis-benchmark"
    assert item.status == "custom-status"
    assert item.details == {"version": "1.6"}
    assert item.metadata == {
        "owner": "security",
        "file": "results/sonobuoy_results.yaml",
        "type": "file",
    }
    assert [(i.name, i.status) for i in item.items] == [
        ("check 1.1", "passed"),
        ("check 1.2", "warn"),
    ]


def test_missing_status_is_aggregated_from_children(tmp_path: Path) -> None:
    """Without a status, the direct children provide one."""
    path = write(
        tmp_path,
        """
items:
  - name: a
    status: passed
  - name: b
    status: passed
  - name: c
    status: passed
""",
    )

    item = manual_processor(tmp_path, path)

    assert item.name == "sonobuoy_results.yaml"
    assert item.status == "passed"
    assert len(item.items) == 3


def test_list_document_becomes_children(tmp_path: Path) -> None:
    """A list of items is accepted as the children of the file."""
    path = write(
        tmp_path,
        """
- name: a
  status: passed
- name: b
  status: failed
""",
    )

    item = manual_processor(tmp_path, path)

    assert [i.name for i in item.items] == ["a", "b"]
    assert item.status == "failed: 1, passed: 1"


@pytest.mark.parametrize("content", ["", "name: [unclosed", "just a string"])
def test_invalid_document_is_unknown(tmp_path: Path, content: str) -> None:
    """Documents that aren't results produce an unknown item."""
    with pytest.raises(FileProcessingError, match="decoding file") as exc_info:
        manual_processor(tmp_path, write(tmp_path, content))

    item = exc_info.value.item
    assert item.status == "unknown"
    assert "error" in item.metadata


def test_missing_file_is_unknown(tmp_path: Path) -> None:
    """Files that can't be opened are unknown."""
    with pytest.raises(FileProcessingError, match="opening file") as exc_info:
        manual_processor(tmp_path, tmp_path / "results" / "sonobuoy_results.yaml")

    assert exc_info.value.item.status == "unknown"


def test_numeric_names_are_kept_as_text(tmp_path: Path) -> None:
    """Check IDs written as bare numbers are read as names."""
    path = write(
        tmp_path,
        """
items:
  - name: 1.1
    status: passed
  - name: 4
    status: passed
""",
    )

    item = manual_processor(tmp_path, path)

    assert item.status == "passed"
    assert "error" not in item.metadata
    assert [i.name for i in item.items] == ["1.1", "4"]
