"""Query result models and retention policy records."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

RP_COLUMN_LEN = 8


class SortOrder(str, enum.Enum):
    """Ordering of query results by time."""

    ASC = "ASC"
    DESC = "DESC"


class QueryError(Exception):
    """Raised when the server reports an error inside a query result."""


@dataclass
class Series:
    """One series of a query result."""

    name: str = ""
    tags: dict[str, str] = field(default_factory=dict)
    columns: list[str] = field(default_factory=list)
    values: list[list[Any]] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Series":
        return cls(
            name=data.get("name") or "",
            tags=dict(data.get("tags") or {}),
            columns=list(data.get("columns") or []),
            values=[list(row) for row in data.get("values") or []],
        )


@dataclass
class SeriesResult:
    """The series returned for a single statement."""

    series: list[Series] = field(default_factory=list)
    error: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SeriesResult":
        return cls(
            series=[Series.from_dict(item) for item in data.get("series") or []],
            error=data.get("error") or "",
        )


@dataclass
class RetentionPolicy:
    """A retention policy as listed by SHOW RETENTION POLICIES."""

    name: str = ""
    duration: str = ""
    shard_group_duration: str = ""
    hot_duration: str = ""
    warm_duration: str = ""
    index_duration: str = ""
    replica_num: int = 0
    is_default: bool = False

    @classmethod
    def from_values(cls, values: Sequence[Any]) -> "RetentionPolicy":
        """Build a policy from one result row; raise TypeError on a mistyped column."""
        if len(values) < RP_COLUMN_LEN:
            raise ValueError(
                f"retention policy row needs {RP_COLUMN_LEN} columns, got {len(values)}"
            )
        string_columns = (
            "name",
            "duration",
            "shardGroupDuration",
            "hotDuration",
            "warmDuration",
            "indexDuration",
        )
        strings = []
        for label, value in zip(string_columns, values):
            if not isinstance(value, str):
                raise TypeError(
                    f"set RetentionPolicy {label}: {label} must be a string"
                )
            strings.append(value)

        replica = values[6]
        if isinstance(replica, bool) or not isinstance(replica, (int, float)):
            raise TypeError(
                "set RetentionPolicy replicaNum: replicaNum must be a number"
            )
        is_default = values[7]
        if not isinstance(is_default, bool):
            raise TypeError("set RetentionPolicy isDefault: isDefault must be a bool")

        return cls(*strings, replica_num=int(replica), is_default=is_default)


@dataclass
class QueryResult:
    """Top-level response of a query."""

    results: list[SeriesResult] = field(default_factory=list)
    error: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "QueryResult":
        return cls(
            results=[SeriesResult.from_dict(item) for item in data.get("results") or []],
            error=data.get("error") or "",
        )

    def raise_for_error(self) -> None:
        """Raise QueryError with the first error the result carries."""
        if self.error:
            raise QueryError(self.error)
        for result in self.results:
            if result.error:
                raise QueryError(result.error)

    def _first_series_values(self) -> list[list[Any]]:
        if not self.results or not self.results[0].series:
            return []
        return self.results[0].series[0].values

    def retention_policies(self) -> list[RetentionPolicy]:
        """Retention policies held in the first series; mistyped rows are skipped."""
        policies = []
        for row in self._first_series_values():
            if len(row) < RP_COLUMN_LEN:
                break
            try:
                policies.append(RetentionPolicy.from_values(row))
            except TypeError:
                continue
        return policies

    def measurements(self) -> list[str]:
        """Measurement names held in the first column of the first series."""
        return [
            row[0]
            for row in self._first_series_values()
            if row and isinstance(row[0], str)
        ]