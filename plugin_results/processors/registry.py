"""Lookup of the processor and file selector used for each result format."""

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass

from plugin_results.layout import POST_PROCESSED_RESULTS_FILE
from plugin_results.models.definition import (
    RESULT_FORMAT_E2E,
    RESULT_FORMAT_JUNIT,
    RESULT_FORMAT_MANUAL,
    RESULT_FORMAT_RAW,
)
from plugin_results.processors.base import PostProcessor
from plugin_results.processors.junit import junit_processor
from plugin_results.processors.manual import manual_processor
from plugin_results.processors.raw import raw_processor
from plugin_results.selectors import (
    FileSelector,
    file_or_any,
    file_or_default,
    file_or_extension,
)

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class FormatManifest:
    """How the result files of one format are chosen and turned into items.

    The selector factory receives the plugin's explicit result file names,
    which take precedence over the format defaults.
    """

    processor: PostProcessor
    selector_factory: Callable[[Sequence[str]], FileSelector]


def _junit_selector(files: Sequence[str]) -> FileSelector:
    return file_or_extension(files, ".xml")


def _manual_selector(files: Sequence[str]) -> FileSelector:
    # Only the listed files or the canonical results file are user results.
    return file_or_default(files, POST_PROCESSED_RESULTS_FILE)


junit_manifest = FormatManifest(
    processor=junit_processor, selector_factory=_junit_selector
)
raw_manifest = FormatManifest(processor=raw_processor, selector_factory=file_or_any)
manual_manifest = FormatManifest(
    processor=manual_processor, selector_factory=_manual_selector
)

FORMAT_MANIFESTS: Mapping[str, FormatManifest] = {
    RESULT_FORMAT_JUNIT: junit_manifest,
    RESULT_FORMAT_E2E: junit_manifest,
    RESULT_FORMAT_RAW: raw_manifest,
    RESULT_FORMAT_MANUAL: manual_manifest,
}


def load_format_manifest(result_format: str) -> FormatManifest:
    """Return the manifest for ``result_format``.

    Unknown formats fall back to raw so consumers can still expect a results
    tree that lists what the plugin produced.
    """
    if (manifest := FORMAT_MANIFESTS.get(result_format)) is not None:
        return manifest

    log.debug("Unknown result format %r, processing as raw", result_format)
    return raw_manifest
