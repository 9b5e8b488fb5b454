"""Column-oriented record building for the write service."""

from __future__ import annotations

import enum
import time
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping

from .retention_policy import InvalidNameError

TIME_FIELD = "time"
DEFAULT_RETENTION_POLICY = "autogen"

_INT64_MIN = -(2**63)
_UINT64_LIMIT = 2**64

_INVALID_TIME_COLUMN = "key can't be time"
_EMPTY_NAME = "empty name not allowed"
_INVALID_FIELD_TYPE = "invalid field type"
_UNKNOWN_FIELD_TYPE = "unknown field type"
_EMPTY_RECORD = "empty record"


class FieldType(enum.Enum):
    """Type of a record column."""

    UNKNOWN = "unknown"
    INT = "integer"
    UINT = "unsigned"
    FLOAT = "float"
    STRING = "string"
    BOOLEAN = "boolean"
    TAG = "tag"


class RecordError(ValueError):
    """Raised when record lines cannot be turned into a write request."""


def _field_type(value: Any) -> FieldType:
    if isinstance(value, bool):
        return FieldType.BOOLEAN
    if isinstance(value, str):
        return FieldType.STRING
    if isinstance(value, float):
        return FieldType.FLOAT
    if isinstance(value, int):
        return FieldType.INT
    return FieldType.UNKNOWN


def _storable(value: Any) -> Any:
    """Return the value as it is stored in a column, or raise RecordError."""
    if isinstance(value, (bool, str, float)):
        return value
    if isinstance(value, int) and _INT64_MIN <= value < _UINT64_LIMIT:
        # unsigned values above the signed range wrap like a 64-bit cast
        return value - _UINT64_LIMIT if value >= 2**63 else value
    raise RecordError(_UNKNOWN_FIELD_TYPE)


@dataclass
class Column:
    """A named, typed column; ``None`` marks a null cell."""

    name: str
    type: FieldType
    values: list[Any] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.values)

    def append_nulls(self, count: int) -> None:
        if self.type is FieldType.UNKNOWN:
            raise RecordError(_INVALID_FIELD_TYPE)
        self.values.extend([None] * count)


class MeasurementColumns:
    """All rows of one measurement, stored column by column."""

    def __init__(self) -> None:
        self.row_count = 0
        self.min_time = 0
        self.max_time = 0
        self.columns: dict[str, Column] = {}

    def append_record(self, line: "RecordBuilder") -> None:
        """Append one line as a row, padding absent columns with nulls.

        Nothing is changed when the line is rejected.
        """
        created: dict[str, Column] = {}

        def column_for(name: str, ftype: FieldType) -> Column:
            column = self.columns.get(name) or created.get(name)
            if column is None:
                column = Column(name, ftype)
                column.append_nulls(self.row_count)
                created[name] = column
            return column

        cells: list[tuple[Column, Any]] = []
        for name, value in line.tags:
            cells.append((column_for(name, FieldType.TAG), value))
        for name, ftype, value in line.fields:
            column = column_for(name, ftype)
            cells.append((column, _storable(value)))

        timestamp = line.timestamp or time.time_ns()
        cells.append((column_for(TIME_FIELD, FieldType.INT), timestamp))

        self.columns.update(created)
        touched = {TIME_FIELD}
        for column, value in cells:
            column.values.append(value)
            touched.add(column.name)

        self.min_time = min(self.min_time, timestamp)
        self.max_time = max(self.max_time, timestamp)
        self.row_count += 1

        for name, column in self.columns.items():
            if name not in touched and len(column) < self.row_count:
                column.append_nulls(self.row_count - len(column))

    def sorted_columns(self) -> list[Column]:
        """Columns ordered by name with the time column last."""
        if not self.columns:
            raise RecordError(_EMPTY_RECORD)
        ordered = sorted(
            self.columns.values(), key=lambda c: (c.name == TIME_FIELD, c.name)
        )
        for column in ordered:
            if len(column) != self.row_count:
                raise RecordError(
                    f"column {column.name} has {len(column)} rows, "
                    f"expected {self.row_count}"
                )
        return ordered


class RecordBuilder:
    """Builds one record line; the builder itself is the finished line."""

    def __init__(self, measurement: str) -> None:
        if not measurement:
            raise InvalidNameError("empty measurement name")
        self.measurement = measurement
        self.tags: list[tuple[str, str]] = []
        self.fields: list[tuple[str, FieldType, Any]] = []
        self.timestamp = 0
        self.compression: Any = None
        self.errors: list[str] = []

    def new_line(self) -> "RecordBuilder":
        """Start a fresh line for the same measurement."""
        return RecordBuilder(self.measurement)

    def _check_key(self, kind: str, key: str) -> bool:
        if not key:
            self.errors.append(f"miss {kind} name: {_EMPTY_NAME}")
            return False
        if key == TIME_FIELD:
            self.errors.append(f"{kind} name {key} invalid: {_INVALID_TIME_COLUMN}")
            return False
        return True

    def add_tag(self, key: str, value: str) -> "RecordBuilder":
        if self._check_key("tag", key):
            self.tags.append((key, value))
        return self

    def add_tags(self, tags: Mapping[str, str]) -> "RecordBuilder":
        for key, value in tags.items():
            self.add_tag(key, value)
        return self

    def add_field(self, key: str, value: Any) -> "RecordBuilder":
        if self._check_key("field", key):
            self.fields.append((key, _field_type(value), value))
        return self

    def add_fields(self, fields: Mapping[str, Any]) -> "RecordBuilder":
        for key, value in fields.items():
            self.add_field(key, value)
        return self

    def compress_method(self, method: Any) -> "RecordBuilder":
        self.compression = method
        return self

    def build(self, timestamp: int = 0) -> "RecordBuilder":
        """Set the line's timestamp in nanoseconds; zero means the current time."""
        self.timestamp = timestamp
        return self


@dataclass
class RecordBlock:
    """The rows of one measurement in a write request."""

    measurement: str
    min_time: int
    max_time: int
    row_count: int
    columns: list[Column]


@dataclass
class WriteRequest:
    """A batch of records bound for one database and retention policy."""

    database: str
    retention_policy: str
    username: str = ""
    password: str = ""
    records: list[RecordBlock] = field(default_factory=list)


class WriteRequestBuilder:
    """Collects record lines and turns them into a WriteRequest."""

    def __init__(self, database: str, retention_policy: str = "") -> None:
        if not database:
            raise InvalidNameError("empty database name")
        self.database = database
        self.retention_policy = retention_policy
        self.username = ""
        self.password = ""
        self._measurements: dict[str, MeasurementColumns] = {}
        self._errors: list[str] = []

    def authenticate(self, username: str, password: str) -> "WriteRequestBuilder":
        self.username = username
        self.password = password
        return self

    def add_record(self, *args: Any) -> "WriteRequestBuilder":
        """Add lines; anything that is not a RecordBuilder is ignored."""
        for line in args:
            if not isinstance(line, RecordBuilder):
                continue
            if line.errors:
                self._errors.extend(line.errors)
                continue
            columns = self._measurements.get(line.measurement) or MeasurementColumns()
            try:
                columns.append_record(line)
            except RecordError as err:
                self._errors.append(str(err))
                continue
            self._measurements[line.measurement] = columns
        return self

    def build(self) -> WriteRequest:
        """Produce the request; collected rows are cleared either way."""
        try:
            if self._errors:
                raise RecordError("\n".join(self._errors))
            if not self.database:
                raise InvalidNameError("empty database name")
            if not self.retention_policy:
                self.retention_policy = DEFAULT_RETENTION_POLICY
            request = WriteRequest(
                database=self.database,
                retention_policy=self.retention_policy,
                username=self.username,
                password=self.password,
            )
            for name, columns in self._measurements.items():
                try:
                    ordered = columns.sorted_columns()
                except RecordError as err:
                    raise RecordError(f"failed to convert records: {err}") from err
                request.records.append(
                    RecordBlock(
                        measurement=name,
                        min_time=columns.min_time,
                        max_time=columns.max_time,
                        row_count=columns.row_count,
                        columns=ordered,
                    )
                )
            return request
        finally:
            self._measurements = {}

    @staticmethod
    def lines(measurement: str, rows: Iterable[Mapping[str, Any]]) -> list[RecordBuilder]:
        """Build one line per mapping of field values, each with the current time."""
        return [RecordBuilder(measurement).add_fields(row).build() for row in rows]