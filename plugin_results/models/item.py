"""Canonical result tree shared by every plugin result format."""

import json
from collections.abc import Iterator
from typing import Any

from pydantic import (
    AliasChoices,
    BaseModel,
    Field,
    SerializerFunctionWrapHandler,
    field_validator,
    model_serializer,
)

METADATA_FILE_KEY = "file"
METADATA_ERROR_KEY = "error"
METADATA_TYPE_KEY = "type"

METADATA_TYPE_NODE = "node"
METADATA_TYPE_FILE = "file"
METADATA_TYPE_SUMMARY = "summary"

_OPTIONAL_KEYS = ("meta", "metadata", "details", "items")


def stringify(value: Any) -> str:
    """Render a decoded document value as a detail string."""
    if isinstance(value, str):
        return value
    if value is None:
        return ""
    return json.dumps(value)


class Item(BaseModel):
    """A node of the result tree.

    Leaves are produced by file processors (a test case, a raw file, an error
    report); branches are files, nodes and the plugin summary. A branch status
    is only meaningful after aggregation has run over it.
    """

    name: str = ""
    status: str = ""
    metadata: dict[str, str] = Field(
        default_factory=dict,
        validation_alias=AliasChoices("metadata", "meta"),
        serialization_alias="meta",
    )
    details: dict[str, str] = Field(default_factory=dict)
    items: list["Item"] = Field(default_factory=list)

    @field_validator("name", "status", mode="before")
    @classmethod
    def _stringify_scalar(cls, value: Any) -> Any:
        # Numeric IDs such as `name: 1.1` arrive as numbers from YAML.
        return stringify(value)

    @field_validator("metadata", "details", mode="before")
    @classmethod
    def _stringify_values(cls, value: Any) -> Any:
        if value is None:
            return {}
        if isinstance(value, dict):
            return {str(k): stringify(v) for k, v in value.items()}
        return value

    @field_validator("items", mode="before")
    @classmethod
    def _default_items(cls, value: Any) -> Any:
        return [] if value is None else value

    @model_serializer(mode="wrap")
    def _omit_empty(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        for key in _OPTIONAL_KEYS:
            if key in data and not data[key]:
                del data[key]
        return data

    def empty(self) -> bool:
        """Return True if nothing was recorded on this item."""
        return (
            not self.name and not self.status and not self.items and not self.metadata
        )

    def get_subtree_by_name(self, name: str) -> "Item | None":
        """Return the first node, in pre-order, whose name matches.

        An empty name returns the item itself. The returned node is the one
        held by the tree, so changes to it are visible from the root.
        """
        if not name or self.name == name:
            return self

        for child in self.items:
            if (found := child.get_subtree_by_name(name)) is not None:
                return found

        return None

    def walk(self) -> Iterator["Item"]:
        """Yield this item and all of its descendants in pre-order."""
        yield self
        for child in self.items:
            yield from child.walk()

    def leaves(self) -> Iterator["Item"]:
        """Yield every descendant (or self) that has no children."""
        return (item for item in self.walk() if not item.items)

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the canonical document keys."""
        return self.model_dump(by_alias=True)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Item":
        """Build an item tree from a canonical document."""
        return cls.model_validate(data)


def get_subtree_by_name(item: Item | None, name: str) -> Item | None:
    """Search ``item`` for ``name``, tolerating a missing tree."""
    if item is None:
        return None
    return item.get_subtree_by_name(name)
