"""
Result tuples and query preset schemas.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, NamedTuple, Optional


class FieldChange(NamedTuple):
    field: str
    old: str
    new: str


class FilteredTotal(NamedTuple):
    matched: int          # rows passing the filter
    total: float


class Average(NamedTuple):
    counted: int          # rows whose value parsed
    average: Optional[float]


class GroupCount(NamedTuple):
    key: str
    count: int


class RankedGroup(NamedTuple):
    key: str
    name: str
    total: float


class RankedRow(NamedTuple):
    values: tuple[str, ...]   # cells in header order
    rank_value: float
    other_value: float


class QueryKind(str, Enum):
    FILTERED_TOTAL = "filtered_total"
    PARSEABLE_AVERAGE = "parseable_average"
    GROUP_COUNTS = "group_counts"
    TOP_GROUPS = "top_groups"
    RANKED_ROWS = "ranked_rows"
    ANTI_JOIN = "anti_join"


@dataclass
class QueryPreset:
    """A named query with its arguments, as declared in config.QUERY_PRESETS."""
    name: str
    kind: QueryKind
    label: str
    params: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, raw: dict) -> "QueryPreset":
        return cls(
            name=raw["name"],
            kind=QueryKind(raw["kind"]),
            label=raw.get("label", raw["name"]),
            params=dict(raw.get("params", {})),
        )


@dataclass
class PresetOutcome:
    """Result of one preset run. ``error`` is set when the preset was skipped."""
    preset: QueryPreset
    result: Any = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None
