"""Parse and evaluate formulas written in reverse Polish notation.

Tokens are separated by whitespace. ``+ - * /`` and the binary functions
``atan2`` and ``pow`` take two operands; ``^`` is another spelling of
``pow``. The unary functions are ``abs exp log sqrt sin cos tan asin acos
atan``. Any other token is a number or a variable name.
"""

from __future__ import annotations

import argparse
import enum
import math
import sys
from dataclasses import dataclass
from typing import Callable, Mapping, Sequence


class TokenKind(enum.Enum):
    """What a token in a formula stands for."""

    VAR = "var"
    OP = "op"
    F1 = "f1"
    F2 = "f2"


class RpnError(ValueError):
    """Raised for a malformed formula or an unknown variable."""


@dataclass
class RpnNode:
    """A node of a parsed formula; operands in *a* and *b*."""

    kind: TokenKind
    text: str
    a: RpnNode | None = None
    b: RpnNode | None = None


def _divide(x: float, y: float) -> float:
    if y != 0:
        return x / y
    if x == 0 or math.isnan(x):
        return math.nan
    return math.copysign(math.inf, x) * math.copysign(1.0, y)


def _log(x: float) -> float:
    if x == 0:
        return -math.inf
    return math.log(x)


def _pow(x: float, y: float) -> float:
    if x == 0 and y < 0:
        if y.is_integer() and int(y) % 2:
            return math.copysign(math.inf, x)
        return math.inf
    return math.pow(x, y)


_OPERATORS: dict[str, Callable[[float, float], float]] = {
    "+": lambda x, y: x + y,
    "-": lambda x, y: x - y,
    "*": lambda x, y: x * y,
    "/": _divide,
}

_UNARY: dict[str, Callable[[float], float]] = {
    "abs": abs,
    "exp": math.exp,
    "log": _log,
    "sqrt": math.sqrt,
    "sin": math.sin,
    "cos": math.cos,
    "tan": math.tan,
    "asin": math.asin,
    "acos": math.acos,
    "atan": math.atan,
}

_BINARY: dict[str, Callable[[float, float], float]] = {
    "atan2": math.atan2,
    "pow": _pow,
}


def find_token_kind(text: str) -> TokenKind:
    """Classify a token as operator, unary or binary function, or variable."""
    if text in _OPERATORS:
        return TokenKind.OP
    if text in _UNARY:
        return TokenKind.F1
    if text in _BINARY:
        return TokenKind.F2
    return TokenKind.VAR


def parse(text: str) -> RpnNode:
    """Parse an RPN formula into a tree; raise :class:`RpnError` if invalid."""
    stack: list[RpnNode] = []
    for token in text.split():
        if token == "^":
            token = "pow"
        node = RpnNode(find_token_kind(token), token)
        if node.kind is TokenKind.F1:
            if not stack:
                raise RpnError("RPN formula is invalid")
            node.a = stack.pop()
        elif node.kind in (TokenKind.OP, TokenKind.F2):
            if len(stack) < 2:
                raise RpnError("RPN formula is invalid")
            node.b = stack.pop()
            node.a = stack.pop()
        stack.append(node)

    if len(stack) != 1:
        raise RpnError("RPN formula is invalid")
    return stack[0]


def _apply(func: Callable[..., float], *args: float) -> float:
    try:
        return func(*args)
    except OverflowError:
        return math.inf
    except ValueError:
        return math.nan


def evaluate(node: RpnNode, variables: Mapping[str, float] | None = None) -> float:
    """Evaluate a parsed formula, looking names up in *variables*."""
    variables = variables or {}
    if node.kind is TokenKind.VAR:
        if node.text in variables:
            return float(variables[node.text])
        try:
            return float(node.text)
        except ValueError:
            raise RpnError(f"unknown variable {node.text!r}") from None
    if node.kind is TokenKind.F1:
        return _apply(_UNARY[node.text], evaluate(node.a, variables))
    table = _OPERATORS if node.kind is TokenKind.OP else _BINARY
    return _apply(
        table[node.text], evaluate(node.a, variables), evaluate(node.b, variables)
    )


def eval_rpn(text: str, variables: Mapping[str, float] | None = None) -> float:
    """Parse and evaluate an RPN formula in one step."""
    return evaluate(parse(text), variables)


DEFAULT_FORMULA = "z 1 x / sin y * ^"
DEFAULT_VARIABLES = {"x": 0.3, "y": 0.6, "z": 0.9}


def _assignment(text: str) -> tuple[str, float]:
    name, sep, value = text.partition("=")
    if not sep or not name:
        raise argparse.ArgumentTypeError(f"expected name=value, got {text!r}")
    try:
        return name, float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{value!r} is not a number") from None


def main(argv: Sequence[str] | None = None) -> int:
    """Evaluate a formula with ``name=value`` assignments and print the result."""
    parser = argparse.ArgumentParser(description="Evaluate an RPN formula.")
    parser.add_argument("-e", "--expr", default=DEFAULT_FORMULA)
    parser.add_argument("assignments", nargs="*", type=_assignment)
    args = parser.parse_args(argv)

    variables = dict(DEFAULT_VARIABLES)
    variables.update(args.assignments)
    try:
        result = eval_rpn(args.expr, variables)
    except RpnError as exc:
        print(exc, file=sys.stderr)
        return 1
    print(f"{result:f}")
    return 0


if __name__ == "__main__":
    sys.exit(main())