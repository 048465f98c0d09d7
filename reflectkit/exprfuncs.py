"""Named functions of ``x`` and ``y`` built from expression text.

A :class:`FunctionTable` holds functions made from expressions, loaded one
at a time, from a JSON object of ``name: expression`` pairs, or from every
``.json`` file in a directory. The module also reads polynomial
coefficients from a file, runs shell commands and captures their output,
and offers a command that evaluates a named function.
"""

from __future__ import annotations

import argparse
import json
import logging
import re
import subprocess
import sys
from pathlib import Path
from typing import Callable, Iterable, Iterator, Sequence

from reflectkit.expr import make_function

PARAMS = ("x", "y")
DEFAULT_FUNCTIONS = {
    "F1": "(x + y) / x",
    "F2": "2 * x * sin(y)",
}

_log = logging.getLogger(__name__)


def _extension(filename: str) -> str:
    return filename.rpartition(".")[2]


class FunctionTable:
    """Functions of ``(x, y)`` looked up by name."""

    def __init__(self) -> None:
        self._functions: dict[str, Callable[..., float]] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._functions

    def __iter__(self) -> Iterator[str]:
        return iter(self._functions)

    def __len__(self) -> int:
        return len(self._functions)

    def _build(self, name: str, expression: str) -> Callable[..., float]:
        if not isinstance(name, str) or not name.isidentifier():
            raise ValueError(f"{name!r} is not a valid function name")
        if name in self._functions:
            raise ValueError(f"function {name!r} is already defined")
        if not isinstance(expression, str):
            raise ValueError(f"expression for {name!r} is not a string")
        function = make_function(expression, PARAMS)
        function.__name__ = function.__qualname__ = name
        return function

    def _register(self, name: str, function: Callable[..., float]) -> None:
        _log.info("Injecting function %r", name)
        self._functions[name] = function

    def inject(self, name: str, expression: str) -> Callable[..., float]:
        """Define function *name* from *expression* and return it."""
        function = self._build(name, expression)
        self._register(name, function)
        return function

    def inject_from_json(self, path: str | Path) -> list[str]:
        """Define every function in a JSON object file; return their names.

        Nothing is defined unless every entry in the file is valid.
        """
        with open(path, encoding="utf-8") as handle:
            data = json.load(handle)
        if not isinstance(data, dict):
            raise ValueError(f"{path}: expected a JSON object of functions")
        built = [(name, self._build(name, expression)) for name, expression in data.items()]
        for name, function in built:
            self._register(name, function)
        return [name for name, _ in built]

    def inject_from_dir(self, dirname: str | Path) -> list[tuple[Path, str]]:
        """Load every ``.json`` file in *dirname*; return the files that failed.

        A file that cannot be read or holds a bad definition is skipped and
        reported as ``(path, message)``; the others are still loaded.
        """
        failures: list[tuple[Path, str]] = []
        for path in sorted(Path(dirname).iterdir()):
            if _extension(path.name) != "json":
                continue
            try:
                self.inject_from_json(path)
            except (OSError, ValueError) as exc:
                _log.warning("Failure injecting from file '%s': %s", path.name, exc)
                failures.append((path, str(exc)))
        return failures

    def get(self, name: str) -> Callable[..., float] | None:
        """Return the function called *name*, or None if there is none."""
        return self._functions.get(name)


def read_series(path: str | Path) -> list[float]:
    """Read whitespace-separated numbers, stopping at the first non-number."""
    try:
        with open(path, encoding="utf-8") as handle:
            text = handle.read()
    except OSError as exc:
        raise OSError(f"could not open file {path}") from exc
    coefficients: list[float] = []
    for token in text.split():
        try:
            coefficients.append(float(token))
        except ValueError:
            break
    return coefficients


def series_value(coefficients: Iterable[float], x: float) -> float:
    """Return the sum of ``c[i] * x**i`` over the coefficients."""
    total = 0.0
    power = 1.0
    for coefficient in coefficients:
        total += power * coefficient
        power *= x
    return total


def capture_call(cmd: str) -> str:
    """Run shell command *cmd* and return its combined stdout and stderr.

    A non-zero exit status raises :class:`RuntimeError` carrying the output.
    """
    completed = subprocess.run(
        cmd,
        shell=True,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        text=True,
        errors="replace",
    )
    output = completed.stdout or ""
    if completed.returncode:
        raise RuntimeError(output)
    return output


def version_banner() -> str:
    """Return a banner holding the first ten digits of the current commit."""
    commit = capture_call("git rev-parse HEAD")
    return f"  reflectkit\n  hash: {commit[:10]}\n"


_LEADING_NUMBER = re.compile(r"\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def _atof(text: str) -> float:
    found = _LEADING_NUMBER.match(text)
    return float(found.group()) if found else 0.0


def main(argv: Sequence[str] | None = None) -> int:
    """Evaluate a named function of x and y and print the result."""
    parser = argparse.ArgumentParser(description="Evaluate a named function of x and y.")
    parser.add_argument("name")
    parser.add_argument("x", type=_atof)
    parser.add_argument("y", type=_atof)
    parser.add_argument("--json", action="append", default=[], metavar="PATH")
    parser.add_argument("--dir", metavar="DIR")
    args = parser.parse_args(argv)

    table = FunctionTable()
    for name, expression in DEFAULT_FUNCTIONS.items():
        table.inject(name, expression)
    try:
        for path in args.json:
            table.inject_from_json(path)
    except (OSError, ValueError) as exc:
        print(exc, file=sys.stderr)
        return 1
    if args.dir:
        for path, message in table.inject_from_dir(args.dir):
            print(f"Failure injecting from file '{path.name}'")
            print(f"  {message}")

    function = table.get(args.name)
    if function is None:
        print(f"{args.name} is not a recognized function", file=sys.stderr)
        return 1
    print(f"result is {function(args.x, args.y):f}")
    return 0


if __name__ == "__main__":
    sys.exit(main())