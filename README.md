# binlogkit

Pure-Python decoders for the values found in MySQL row-based binary log
events: column values (integers, floats, decimals, dates, times, timestamps,
years, strings, blobs, bits, enums, sets) and MySQL's binary JSON format.

## Installation

```
pip install binlogkit
```

There are no runtime dependencies.

## Decoding column values

`binlogkit.column_value.parse_column_value(reader, column_type, column_meta,
column_length)` reads one value from a binary stream. Pass it the column's
`ColumnType` (or its integer code), the column metadata from the table map
event, and the resolved column length (used by STRING, ENUM and SET columns).

```python
import io

from binlogkit.column_type import ColumnType
from binlogkit.column_value import parse_column_value

reader = io.BytesIO(bytes([0x80, 0x7B]))  # DECIMAL(4,0) holding 123
value = parse_column_value(reader, ColumnType.NEWDECIMAL, 4, 0)
print(value.kind, value.value)  # ValueKind.DECIMAL 123
```

The result is a frozen `ColumnValue` with two fields:

- `kind`: a `ValueKind` member (`TINY`, `SHORT`, `LONG`, `LONGLONG`, `FLOAT`,
  `DOUBLE`, `DECIMAL`, `TIME`, `DATE`, `DATETIME`, `TIMESTAMP`, `YEAR`,
  `STRING`, `BLOB`, `BIT`, `SET`, `ENUM`, `JSON`, `NONE`);
- `value`: the decoded Python value.

Notes on the decoded values:

- Integers keep their signed binlog width, so unsigned columns come back
  wrapped (an `INT UNSIGNED` of 4294967295 decodes as -1).
- DECIMAL, DATE, TIME and DATETIME values are strings, e.g. `"-12.3400"`,
  `"2022-01-02"`, `"-03:04:05.120000"`, `"2022-01-02 03:04:05.123000"`.
- TIMESTAMP values are microseconds since the Unix epoch.
- STRING, BLOB and JSON values are raw `bytes`; the character set is not
  stored in the binlog.

`binlogkit.column_value.parse_decimal(reader, precision, scale)` decodes a
packed DECIMAL by itself.

`ColumnType.from_code(code)` maps a type code to a `ColumnType`, returning
`ColumnType.UNKNOWN` for codes it does not know. In a table map event, CHAR,
ENUM and SET columns are all recorded as `ColumnType.STRING`;
`parse_string_column_meta` recovers the real type code and length from the
metadata:

```python
from binlogkit.column_type import parse_string_column_meta

real_type, length = parse_string_column_meta(column_meta, column_type)
```

## Decoding binary JSON

```python
from binlogkit.json_binary import parse_as_string

text = parse_as_string(json_bytes)  # e.g. '{"a":1}'
```

If the first byte of the value is above `0x0F`, the value is taken to be JSON
text already and is returned decoded as UTF-8.

For output other than a compact JSON string, subclass
`binlogkit.json_formatter.JsonFormatter` and pass an instance to
`binlogkit.json_binary.parse(data, formatter)`; it receives callbacks such as
`begin_object`, `name`, `value_long` and `next_entry` in document order.
`binlogkit.json_string_formatter.JsonStringFormatter` is the formatter that
`parse_as_string` uses; its `getvalue()` method returns the text built so far.
Opaque values are written as base64 strings.

`binlogkit.json_value_type.JsonValueType` lists the type tags of the binary
format; `JsonValueType.by_code(code)` returns `None` for unknown tags.

## Errors

Every decoding failure raises a subclass of `binlogkit.errors.BinlogError`:
`UnsupportedColumnTypeError`, `UnexpectedDataError` (for example, truncated
input) or `ParseJsonError`. `ConnectError` and `InvalidGtidError` are also
defined in the hierarchy.

## What this package does not do

binlogkit decodes individual values only. It does not connect to a server,
request or follow a binary log, read binlog files, or parse event headers,
table map events or row events; the caller supplies the bytes of each value
along with its column type and metadata.

## Running the tests

```
pip install -e .[test]
pytest
```