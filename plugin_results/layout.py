"""On-disk layout of a results directory."""

from pathlib import Path

PLUGINS_DIR = "plugins"
RESULTS_DIR = "results"
ERRORS_DIR = "errors"

# Name of the file holding an error captured while running a plugin.
DEFAULT_ERROR_FILE = "error.json"

# Name of the file written after post-processing a plugin. Manual plugins
# write it themselves to provide their final results.
POST_PROCESSED_RESULTS_FILE = "sonobuoy_results.yaml"


def plugin_dir(base_dir: Path, plugin_name: str) -> Path:
    """Return the directory holding everything a plugin produced."""
    return Path(base_dir) / PLUGINS_DIR / plugin_name
