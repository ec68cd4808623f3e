"""Loading of plugin definitions from YAML files."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from plugin_results.models.definition import PluginDefinition

CONFIG_SECTION = "sonobuoy-config"


class DefinitionError(ValueError):
    """Raised when a plugin definition can't be parsed or validated."""


def load_plugin_definition(path: Path) -> PluginDefinition:
    """Load and validate a plugin definition file.

    The plugin settings are read from the ``sonobuoy-config`` section when the
    document has one, and from the top level otherwise.

    Raises:
        FileNotFoundError: If the file does not exist
        DefinitionError: If the file is empty, not YAML, or fails validation

    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Plugin definition not found: {path}")

    try:
        document = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as err:
        raise DefinitionError(f"Invalid YAML in {path}: {err}") from err

    if document is None:
        raise DefinitionError(f"Empty plugin definition: {path}")

    return parse_plugin_definition(document, source=str(path))


def parse_plugin_definition(
    document: Any, source: str = "<config>"
) -> PluginDefinition:
    """Validate an already decoded plugin definition document."""
    if isinstance(document, dict) and isinstance(document.get(CONFIG_SECTION), dict):
        document = document[CONFIG_SECTION]

    try:
        return PluginDefinition.model_validate(document)
    except ValidationError as err:
        raise DefinitionError(
            f"Invalid plugin definition schema in {source}: {err}"
        ) from err
