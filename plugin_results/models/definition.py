"""Models for plugin definitions loaded from plugin YAML files."""

from collections.abc import Sequence
from typing import Literal, TypeAlias

from pydantic import Field

from plugin_results.models.base import Model

RESULT_FORMAT_JUNIT = "junit"
RESULT_FORMAT_E2E = "e2e"
RESULT_FORMAT_RAW = "raw"
RESULT_FORMAT_MANUAL = "manual"

Driver: TypeAlias = Literal["Job", "DaemonSet"]


class PluginDefinition(Model):
    """Describes a plugin whose results are being post-processed."""

    name: str = Field(..., alias="plugin-name", description="Plugin name")
    driver: Driver = Field(
        default="Job",
        description="Job plugins run once; DaemonSet plugins run on every node",
    )
    result_format: str = Field(
        default=RESULT_FORMAT_RAW,
        alias="result-format",
        description="How result files are interpreted (junit, e2e, raw, manual)",
    )
    result_files: Sequence[str] = Field(
        default_factory=list,
        alias="result-files",
        description="Explicit result file names (empty means use format defaults)",
    )

    @property
    def multi_node(self) -> bool:
        """Whether results are laid out per node under the plugin directory."""
        return self.driver == "DaemonSet"
