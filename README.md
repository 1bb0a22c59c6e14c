# chnative

Pure-Python building blocks for a ClickHouse native-protocol client:
binding arguments into query text, encoding per-query settings, and a few
value types. The package has no third-party dependencies.

## Modules

### `chnative.statement`

- `bind(query, args, quote)` returns `(text, external_tables)`. `args` is a
  sequence of `NamedValue`. A `?` is replaced by the next unnamed argument
  when it follows an operator or bracket (`= < > ( , + - * / [`) or one of
  the words `LIKE`, `LIMIT`, `OFFSET`, `IN`, `FROM`, `JOIN`, `SELECT`,
  `BETWEEN`, or the `AND` of a `BETWEEN`, with only whitespace in between;
  any other `?` is left as it is. `@name` is replaced by every argument with
  that name. Values are written with the `quote` callable you pass in;
  a value that has `name`, `values` and `columns` attributes is treated as
  an external table, written by its name and returned in `external_tables`.
  With no arguments the query is returned unchanged.
- `NamedValue(value, name="", ordinal=0)` is one argument.
- `convert_old_args(args)` wraps plain values as unnamed `NamedValue`s
  numbered from 1.

### `chnative.settings`

- `QuerySettings.from_query(query)` and `make_query_settings(query)` pick
  the known server settings out of connection options, given either as a
  query string or as a mapping of names to a string or a list of strings.
  Unknown names and empty values are ignored. Integer and time settings must
  be unsigned decimal numbers within 64 bits; boolean settings accept
  `1 t T TRUE true True` and `0 f F FALSE false False`. A bad value raises
  `ValueError`.
- `QuerySettings.settings` holds the parsed integer values,
  `QuerySettings.text` (also `str()`) the settings as `name=value` pairs
  joined by `&`. `is_empty()` tells whether none were given, and
  `serialize()` encodes each as a length-prefixed name followed by a varint
  value.
- `SETTINGS` lists every known setting as a `SettingInfo(name, type)` with a
  `SettingType` of `UINT`, `INT`, `BOOL` or `TIME`.
- `encode_uvarint(value)` and `encode_string(text)` are the wire encoders.

### `chnative.types`

- `UUID` is a `str` holding canonical UUID text; `to_bytes()` gives its 16
  raw bytes and `UUID.from_bytes(data)` builds one from 16 bytes.
- `uuid_to_bytes(text)` raises `InvalidUUIDFormatError` (a `ValueError`) for
  text that is not in the `8-4-4-4-12` hex layout; `bytes_to_uuid(data)`
  raises `ValueError` unless given exactly 16 bytes.
- `date_value(value)` keeps only the calendar date, at midnight UTC.
  `datetime_value(value)` keeps the wall-clock fields to the second and
  labels them UTC, without converting between zones.

### `chnative.tls_registry`

`register_tls_config(key, context)`, `deregister_tls_config(key)` and
`get_tls_config(key)` keep a thread-safe, process-wide map of names to
`ssl.SSLContext` objects. `get_tls_config` returns `None` for an unknown
name.

### `chnative.word_matcher`

`WordMatcher(needle)` matches one word case-insensitively; feed it one
character at a time with `match(char)`, which returns `True` on the
character that completes the word.

### `chnative.result`

`Result.last_insert_id()` and `Result.rows_affected()` always raise
`NotSupportedError`.

## Example

```python
from chnative.settings import make_query_settings
from chnative.statement import bind, convert_old_args
from chnative.types import UUID

text, external = bind("SELECT * FROM t WHERE id = ?", convert_old_args([42]), quote=repr)
# text == "SELECT * FROM t WHERE id = 42", external == []

settings = make_query_settings({"max_threads": "4", "extremes": "true"})
payload = settings.serialize()

raw = UUID("123e4567-e89b-12d3-a456-426655440000").to_bytes()
```

## What it does not do

The package opens no connections and speaks no network protocol: it does
not send queries, read result blocks, manage transactions or provide a
DB-API driver. It does not quote values itself either; `bind` uses the
`quote` function you supply.

## Running the tests

```
pip install -e .[test]
pytest
```