# opengemini-client

Pure-Python building blocks for working with an openGemini time-series
database. The package uses only the standard library.

## Modules

### `opengemini_client.models`

- `QueryResult.from_dict(data)` turns a decoded JSON query response into
  `QueryResult`, `SeriesResult` and `Series` objects.
- `QueryResult.raise_for_error()` raises `QueryError` with the first error in
  the response. It checks the top-level error first, then each statement's
  error.
- `QueryResult.retention_policies()` reads the rows of the first series as
  `RetentionPolicy` objects. It stops at the first row with fewer than eight
  columns and skips rows whose columns have the wrong types.
- `QueryResult.measurements()` returns the string values in the first column of
  the first series.
- `RetentionPolicy.from_values(values)` builds a policy from one row. It raises
  `ValueError` if the row is too short and `TypeError` if a column has the
  wrong type.
- `SortOrder` has two members, `ASC` and `DESC`.

### `opengemini_client.statement_parser`

- `parse_statement_type(command)` returns a `StatementType`: `QUERY`
  (SELECT, SHOW, EXPLAIN, DESCRIBE, DESC, WITH), `COMMAND` (CREATE, DROP,
  ALTER, UPDATE, DELETE), `INSERT` or `UNKNOWN`. The first keyword may be in
  any case, and comments are ignored.
- `clean_command(command)` removes a trailing `--` comment and any complete
  `/* ... */` comments, then trims whitespace.
- `parse_insert_statement(command)` parses `INSERT <line protocol>` and returns
  a list with one `ParsedPoint`.
- `parse_line_protocol_to_point(lp)` parses one line of line protocol. It
  honours backslash escapes and quoted field values.
- `parse_field_value(text)` infers a field value's type:
  - `42i` becomes a signed integer and `42u` an unsigned one.
  - `"text"` becomes a string.
  - `true`, `TRUE`, `t`, `T` become `True`, and the matching false forms become
    `False`.
  - Any other number becomes a float.
  - Anything left over stays a bare string.
- Malformed input raises `LineProtocolError`, which is a `ValueError`.

### `opengemini_client.retention_policy`

- `RpConfig(name, duration, shard_group_duration, index_duration)` holds the
  settings for a retention policy.
- `create_retention_policy_command`, `update_retention_policy_command` and
  `drop_retention_policy_command` return the matching statement text.
- An empty database name or policy name raises `InvalidNameError`.

### `opengemini_client.endpoints`

- `EndpointPool(urls)` hands out URLs round-robin through `next_url()` and
  skips endpoints marked down. If every endpoint is down it returns a random
  one.
- `mark(index, is_down)` sets one endpoint's state by hand.
- `check_all(ping)` calls `ping(url)` for every endpoint in parallel and marks
  an endpoint down when its call raises. It returns the new down state of each
  endpoint.
- `watch(ping, stop, period=10.0)` repeats `check_all` every `period` seconds
  until the `threading.Event` `stop` is set.
- `requires_auth(path, method)` is false only for these requests, and true for
  everything else:
  - `HEAD` and `GET` on `/ping` and `/status`
  - `OPTIONS` on `/query`

### `opengemini_client.record_builder`

- `RecordBuilder(measurement)` builds one record line. Its methods chain:
  - `add_tag`, `add_tags`, `add_field` and `add_fields` add columns.
  - `compress_method` records a compression choice.
  - `build(timestamp)` sets the timestamp in nanoseconds. Zero means the
    current time.
  - `new_line()` starts a fresh line for the same measurement.
- An empty key, or the key `time`, is not added. The builder records an error
  for it instead.
- `WriteRequestBuilder(database, retention_policy)` collects lines with
  `add_record(*lines)` and sets credentials with `authenticate(...)`.
- `WriteRequestBuilder.build()` returns a `WriteRequest`:
  - It holds one `RecordBlock` per measurement.
  - The columns in each block are sorted by name, with `time` last.
  - Missing cells are filled with `None`.
  - An empty retention policy becomes `autogen`.
  - Errors collected from the lines raise `RecordError`.
  - The collected rows are cleared after each build.
- `WriteRequestBuilder.lines(measurement, rows)` makes one line per mapping of
  field values, each stamped with the current time.

## Examples

```python
from opengemini_client.statement_parser import StatementType, parse_insert_statement, parse_statement_type

assert parse_statement_type("select * from weather") is StatementType.QUERY
point, = parse_insert_statement("INSERT weather,location=beijing temperature=25.5,humidity=60i")
print(point.measurement, point.tags, point.fields)
```

```python
from opengemini_client.retention_policy import RpConfig, create_retention_policy_command

cmd = create_retention_policy_command("mydb", RpConfig(name="rp1", duration="3d"), is_default=False)
# CREATE RETENTION POLICY rp1 ON "mydb" DURATION 3d REPLICATION 1
```

```python
from opengemini_client.record_builder import RecordBuilder, WriteRequestBuilder

line = RecordBuilder("cpu")
request = (
    WriteRequestBuilder("mydb", "autogen")
    .add_record(
        line.new_line().add_tag("host", "a").add_field("usage", 0.5).build(1_700_000_000_000_000_000),
        line.new_line().add_tag("host", "b").add_field("usage", 0.7).build(1_700_000_000_000_000_001),
    )
    .build()
)
print([c.name for c in request.records[0].columns])  # ['host', 'usage', 'time']
```

## What this package does not do

The package contains no network client. It does not:

- open HTTP or gRPC connections;
- send queries or writes;
- encode points as line protocol for writing;
- serialise a `WriteRequest` to a wire format.

It builds statement text, request objects and endpoint choices, and parses
responses you have already decoded. Transport is up to the caller. For example,
`EndpointPool.check_all` takes the `ping` function to call.

## Running the tests

```
pip install -e ".[test]"
pytest
```