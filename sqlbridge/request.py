"""Bridge request and result containers."""

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Optional

from typing_extensions import TypeAlias

__all__ = (
    "BridgeRequest",
    "Record",
    "RecordList",
)

Record: TypeAlias = "dict[str, Optional[str]]"
"""A single row keyed by field label."""


def _freeze(mapping: "Optional[Mapping[str, Any]]") -> "Mapping[str, Any]":
    return MappingProxyType(dict(mapping or {}))


@dataclass(frozen=True)
class BridgeRequest:
    """One generic read request against one structure.

    Args:
        structure: Target table or view name.
        fields: Requested field names, in order. Empty means all fields.
        query: Filter expression, using ``<%= parameter["name"] %>`` references.
        parameters: Values for the parameters referenced by ``query``.
        metadata: Per-request options such as ``order``, ``offset`` and ``pageSize``.
    """

    structure: str
    fields: "Sequence[str]" = ()
    query: str = ""
    parameters: "Mapping[str, Any]" = field(default_factory=dict)
    metadata: "Mapping[str, Any]" = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", tuple(name for name in (self.fields or ()) if name and name.strip()))
        object.__setattr__(self, "parameters", _freeze(self.parameters))
        object.__setattr__(self, "metadata", _freeze(self.metadata))

    @property
    def field_string(self) -> str:
        """The requested fields joined with commas, or an empty string."""
        return ",".join(self.fields)

    @property
    def selects_all_fields(self) -> bool:
        """True when no fields were requested or the only field is ``*``."""
        return not self.fields or self.field_string.strip() == "*"

    def get_parameter(self, name: str) -> "Optional[Any]":
        return self.parameters.get(name)

    def get_metadata(self, name: str) -> "Optional[Any]":
        return self.metadata.get(name)


@dataclass
class RecordList:
    """Records returned by a search, plus the pagination metadata that produced them."""

    fields: "list[str]"
    records: "list[Record]"
    metadata: "dict[str, Any]" = field(default_factory=dict)

    def __iter__(self) -> "Iterator[Record]":
        return iter(self.records)

    def __len__(self) -> int:
        return len(self.records)
