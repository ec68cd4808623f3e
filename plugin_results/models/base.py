"""Base model configuration for plugin descriptors."""

from pydantic import BaseModel, ConfigDict


class Model(BaseModel):
    """Base model with standard configuration.

    Descriptors are immutable once loaded and accept both the field names and
    the dashed keys used in plugin definition files.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)
