# reflectkit

Utilities for turning text into typed data and computed values, and for
rendering Python objects back into text. No third-party dependencies.

## Modules

- **`reflectkit.csv_provider`** – reads a CSV header into a `Schema` of
  `Field`s (`read_csv_schema`, `load_csv_schema`). With types requested, the
  first data row decides each column: a value that parses completely as a
  number makes it `float`, anything else `str`. `define_type` and
  `define_csv_type` build a dataclass from a schema; `verify_schema` checks a
  record class against a header; `read_csv_line` and `read_csv_file` load
  rows. Problems raise `CsvError`.
- **`reflectkit.rpn`** – `parse` turns a reverse-Polish formula into an
  `RpnNode` tree and `evaluate` / `eval_rpn` compute it. Supports
  `+ - * /`, `^` (same as `pow`), the unary functions
  `abs exp log sqrt sin cos tan asin acos atan` and the binary functions
  `atan2 pow`. Malformed formulas and unknown variables raise `RpnError`.
- **`reflectkit.stream`** – `to_display_string` / `stream_simple` give a
  one-line rendering of enums, strings, lists, tuples, sets, mappings,
  dataclasses and named tuples (`None` as `null`); `stream_pretty` gives an
  indented rendering with each value's type name. `enum_to_name` and
  `name_to_enum` convert between enum members and their names.
- **`reflectkit.eformat`** – `eformat` fills `{expression}` placeholders in a
  format string from a namespace (plus `math` functions and a few builtins);
  `%{` writes a literal `{`. `eprint` also writes the result to standard
  output. `transform_format` and `parse_braces` expose the scanning step.
- **`reflectkit.expr`** – `evaluate` computes a restricted arithmetic
  expression over named variables, and `make_function` compiles one into a
  positional-argument function. Unknown names or syntax raise
  `ExpressionError`; division by zero yields an infinity and domain errors
  yield NaN.
- **`reflectkit.exprfuncs`** – `FunctionTable` holds named functions of
  `x` and `y`, added with `inject`, `inject_from_json` (a JSON object of
  `name: expression` pairs) or `inject_from_dir` (every `.json` file in a
  directory; failing files are reported, not raised), and looked up with
  `get`. Also `read_series` and `series_value` for polynomial coefficients,
  `capture_call` to run a shell command and capture its output, and
  `version_banner`, which reports the current git commit.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Quick look

```python
from reflectkit.rpn import eval_rpn

value = eval_rpn("z 1 x / sin y * ^", {"x": 0.3, "y": 0.6, "z": 0.9})
```

```python
from reflectkit.eformat import eformat

x = 5.0
print(eformat("x = {x} root = {sqrt(x)} and %{literal}", {"x": x}))
```

```python
from reflectkit.exprfuncs import FunctionTable

table = FunctionTable()
table.inject("F1", "(x + y) / x")
table.inject("F2", "2 * x * sin(y)")
print(table.get("F2")(1.0, 0.5))
```

```python
from reflectkit.csv_provider import define_csv_type, read_csv_file

Record = define_csv_type("Record", "schema.csv")
rows = read_csv_file(Record, "data.csv")
```

## Commands

| Command | What it does |
| --- | --- |
| `reflectkit-csv [SCHEMA] [DATA] [--samples N] [--seed S]` | infer a record type from `SCHEMA` (default `schema.csv`), load `DATA` (default `earthquakes1970-2014.csv`), print the field types, the record count, sample latitude/longitude lines and one full record |
| `reflectkit-rpn [-e FORMULA] [name=value ...]` | evaluate a reverse-Polish formula; defaults to `z 1 x / sin y * ^` with `x=0.3 y=0.6 z=0.9` |
| `reflectkit-funcs NAME X Y [--json PATH] [--dir DIR]` | call a named function with `x` and `y`; `F1` and `F2` are built in, more come from JSON files |

Run any of them with `--help` for details, for example:

```
reflectkit-rpn --help
reflectkit-funcs --help
```

## What it does not do

The package has no regular-expression engine or named pattern library, no
loader that maps JSON documents onto typed settings classes, and no
field-introspection helpers beyond what `stream` renders. `version_banner`
needs `git` on the path and a git checkout to run in.