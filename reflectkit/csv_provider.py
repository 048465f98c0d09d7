"""Record types inferred from a CSV schema, and loaders that fill them.

A schema is read from the header line of a CSV file. When types are wanted,
the first data line decides each column: a value that parses completely as
a floating-point number makes the column ``float``, anything else ``str``.
:func:`define_type` turns a schema into a dataclass. :func:`read_csv_file`
checks a file's header against such a class and loads every row.
"""

from __future__ import annotations

import argparse
import dataclasses
import random
import re
import sys
from pathlib import Path
from typing import Any, Sequence, TextIO


class CsvError(ValueError):
    """Raised when a CSV file or schema cannot be read or does not fit."""


@dataclasses.dataclass
class Field:
    """One column of a schema: its identifier and, once known, its type."""

    field_name: str
    field_type: type | None = None


@dataclasses.dataclass
class Schema:
    """The ordered columns of a CSV file."""

    fields: list[Field] = dataclasses.field(default_factory=list)

    @property
    def names(self) -> list[str]:
        """The column identifiers in order."""
        return [f.field_name for f in self.fields]


_DOUBLE = re.compile(
    r"""[ \t\n\v\f\r]*[+-]?(?:
        0x(?:[0-9a-f]+\.?[0-9a-f]*|\.[0-9a-f]+)(?:p[+-]?\d+)?
      | (?:\d+\.?\d*|\.\d+)(?:e[+-]?\d+)?
      | inf(?:inity)?
      | nan(?:\([0-9a-z_]*\))?
    )""",
    re.IGNORECASE | re.VERBOSE,
)


def _parse_double(text: str) -> float | None:
    """Return *text* as a float if the whole of it is a number, else None."""
    if _DOUBLE.fullmatch(text) is None:
        return None
    stripped = text.strip(" \t\n\v\f\r")
    if "x" in stripped.lower():
        return float.fromhex(stripped)
    return float(stripped.split("(", 1)[0])


def _is_float_type(annotation: Any) -> bool:
    return annotation is float or annotation == "float"


def good_getline(stream: TextIO) -> str:
    """Read one line and cut it at the first carriage return or newline."""
    line = stream.readline()
    return re.split(r"[\r\n]", line, maxsplit=1)[0]


def make_ident(s: str) -> str:
    """Turn *s* into an identifier.

    A leading digit gets an underscore in front; every character that is
    not an ASCII letter, digit or underscore becomes an underscore.
    """
    if s[:1].isdigit() and s[:1].isascii():
        s = "_" + s
    return "".join(
        c if c == "_" or (c.isascii() and c.isalnum()) else "_" for c in s
    )


def read_csv_schema(stream: TextIO, read_types: bool) -> Schema:
    """Read the header of *stream*; with *read_types*, infer column types.

    Types come from the line after the header. An empty value makes the
    column a string column.
    """
    header = good_getline(stream)
    names = header.split(",") if header else []
    schema = Schema([Field(make_ident(name)) for name in names])

    if read_types:
        values = good_getline(stream).split(",")
        for index, column in enumerate(schema.fields):
            if index >= len(values):
                raise CsvError(
                    f"field {column.field_name} not found at line 2 in CSV file"
                )
            column.field_type = (
                float if _parse_double(values[index]) is not None else str
            )
    return schema


def _open_csv(path: str | Path) -> TextIO:
    try:
        return open(path, encoding="utf-8", newline="\n")
    except OSError as exc:
        raise CsvError(f"cannot open CSV file {path}") from exc


def load_csv_schema(path: str | Path) -> Schema:
    """Read the schema, with types, from the CSV file at *path*."""
    with _open_csv(path) as stream:
        return read_csv_schema(stream, True)


def define_type(name: str, schema: Schema) -> type:
    """Build a dataclass called *name* with one attribute per schema column.

    Columns of unknown type are strings. Float attributes default to 0.0
    and string attributes to the empty string.
    """
    spec = []
    for column in schema.fields:
        column_type = column.field_type or str
        default = 0.0 if column_type is float else ""
        spec.append((column.field_name, column_type, dataclasses.field(default=default)))
    try:
        return dataclasses.make_dataclass(name, spec)
    except TypeError as exc:
        raise CsvError(f"cannot define type {name}: {exc}") from exc


def define_csv_type(name: str, path: str | Path) -> type:
    """Build a dataclass called *name* from the schema of the file at *path*."""
    return define_type(name, load_csv_schema(path))


def verify_schema(record_type: type, schema: Schema) -> None:
    """Check that *schema* names the same fields, in order, as *record_type*."""
    record_fields = dataclasses.fields(record_type)
    type_name = record_type.__name__
    if len(schema.fields) != len(record_fields):
        raise CsvError(
            f"{type_name} has {len(record_fields)} fields while schema has "
            f"{len(schema.fields)} fields"
        )
    for index, (member, column) in enumerate(zip(record_fields, schema.fields)):
        if member.name != column.field_name:
            raise CsvError(
                f"field {index} is called {member.name} in {type_name} and "
                f"{column.field_name} in schema"
            )


def read_csv_line(record_type: type, text: str, line: int) -> Any:
    """Parse one comma-separated line into an instance of *record_type*.

    *line* is the line number used in error messages. Values beyond the
    record's fields are ignored; an empty float value reads as 0.0.
    """
    values = text.split(",")
    attributes: dict[str, Any] = {}
    for index, member in enumerate(dataclasses.fields(record_type)):
        if index >= len(values):
            raise CsvError(f"field {member.name} not found at line {line} in CSV file")
        raw = values[index]
        if _is_float_type(member.type):
            number = 0.0
            if raw:
                parsed = _parse_double(raw)
                if parsed is None:
                    raise CsvError(
                        f"field {member.name} at line {line} '{raw}' is not a number"
                    )
                number = parsed
            attributes[member.name] = number
        else:
            attributes[member.name] = raw
    return record_type(**attributes)


def read_csv_file(record_type: type, path: str | Path) -> list[Any]:
    """Load every row of the CSV file at *path* as *record_type* instances.

    The header must match the record's fields. Reading stops at the first
    empty line.
    """
    with _open_csv(path) as stream:
        schema = read_csv_schema(stream, False)
        verify_schema(record_type, schema)
        records = []
        line = 1
        while True:
            line += 1
            text = good_getline(stream)
            if not text:
                break
            records.append(read_csv_line(record_type, text, line))
    return records


def _display(value: Any) -> str:
    return f"{value:g}" if isinstance(value, float) else str(value)


def main(argv: Sequence[str] | None = None) -> int:
    """Infer a record type from a schema file and load a data file with it."""
    parser = argparse.ArgumentParser(description="Load a CSV file through its schema.")
    parser.add_argument("schema", nargs="?", default="schema.csv")
    parser.add_argument("data", nargs="?", default="earthquakes1970-2014.csv")
    parser.add_argument("--samples", type=int, default=10)
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args(argv)

    try:
        record_type = define_csv_type("Record", args.schema)
        members = dataclasses.fields(record_type)
        for member in members:
            print(f"{member.type.__name__} {member.name}")
        data = read_csv_file(record_type, args.data)
    except CsvError as exc:
        print(exc, file=sys.stderr)
        return 1

    print(f"Read {len(data)} records")
    if not data:
        return 0

    rng = random.Random(args.seed)
    types = {member.name: member.type for member in members}
    if _is_float_type(types.get("Latitude")) and _is_float_type(types.get("Longitude")):
        for _ in range(args.samples):
            index = rng.randrange(len(data))
            record = data[index]
            print(
                f"line = {index + 2:4d} Latitude = {record.Latitude:+10f}  "
                f"Longitude = {record.Longitude:+10f}"
            )

    index = rng.randrange(len(data))
    record = data[index]
    print(f"{index + 2}:")
    for member in members:
        print(f"  {member.name}: {_display(getattr(record, member.name))}")
    return 0


if __name__ == "__main__":
    sys.exit(main())