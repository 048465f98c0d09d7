"""Format strings with embedded expressions.

A format string holds expressions in braces, ``"x = {x} root = {sqrt(x)}"``.
Each braced expression is evaluated against a namespace and replaced by its
text. ``%{`` writes a literal ``{``. The remaining text is a printf-style
template, so ``%%`` writes a single ``%``.

Expressions may use names from the namespace, the functions and constants
of :mod:`math`, a few builtins, attribute access, indexing, calls and
arithmetic.
"""

from __future__ import annotations

import ast
import math
import operator
import sys
from typing import Any, Mapping

from reflectkit.stream import to_display_string

_BINARY_OPS = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: operator.truediv,
    ast.FloorDiv: operator.floordiv,
    ast.Mod: operator.mod,
    ast.Pow: operator.pow,
}

_UNARY_OPS = {
    ast.USub: operator.neg,
    ast.UAdd: operator.pos,
    ast.Not: operator.not_,
}

_BUILTINS = {
    "abs": abs,
    "min": min,
    "max": max,
    "round": round,
    "len": len,
    "int": int,
    "float": float,
    "str": str,
}


def parse_braces(text: str, start: int = 0) -> int:
    """Scan *text* from *start* and return the index just past the closing brace.

    *start* is the position just after an opening brace. An opening brace
    met on the way is scanned recursively and its end is returned.
    """
    for offset, c in enumerate(text[start:]):
        if c == "{":
            return parse_braces(text, start + offset + 1)
        if c == "}":
            return start + offset + 1
    raise ValueError("mismatched { } in parse_braces")


def transform_format(fmt: str) -> tuple[str, list[str]]:
    """Replace each braced expression with ``%s`` and collect the expressions."""
    pieces: list[str] = []
    expressions: list[str] = []
    pos = 0
    while pos < len(fmt):
        c = fmt[pos]
        if c == "{":
            end = parse_braces(fmt, pos + 1)
            expressions.append(fmt[pos + 1:end - 1])
            pieces.append("%s")
            pos = end
        elif c == "%" and fmt.startswith("{", pos + 1):
            pieces.append("{")
            pos += 2
        else:
            pieces.append(c)
            pos += 1
    return "".join(pieces), expressions


class _Evaluator:
    def __init__(self, namespace: Mapping[str, Any]) -> None:
        self.namespace = namespace

    def lookup(self, name: str) -> Any:
        if name in self.namespace:
            return self.namespace[name]
        if not name.startswith("_") and hasattr(math, name):
            return getattr(math, name)
        if name in _BUILTINS:
            return _BUILTINS[name]
        raise NameError(f"name {name!r} is not defined")

    def visit(self, node: ast.AST) -> Any:
        match node:
            case ast.Constant(value=value):
                return value
            case ast.Name(id=name):
                return self.lookup(name)
            case ast.Attribute(value=target, attr=attr):
                if attr.startswith("_"):
                    raise ValueError(f"attribute {attr!r} is not accessible")
                return getattr(self.visit(target), attr)
            case ast.Subscript(value=target, slice=index):
                return self.visit(target)[self.visit(index)]
            case ast.Call(func=func, args=args, keywords=keywords):
                positional = [self.visit(arg) for arg in args]
                named = {kw.arg: self.visit(kw.value) for kw in keywords if kw.arg}
                return self.visit(func)(*positional, **named)
            case ast.BinOp(left=left, op=op, right=right) if type(op) in _BINARY_OPS:
                return _BINARY_OPS[type(op)](self.visit(left), self.visit(right))
            case ast.UnaryOp(op=op, operand=operand) if type(op) in _UNARY_OPS:
                return _UNARY_OPS[type(op)](self.visit(operand))
            case ast.Tuple(elts=items):
                return tuple(self.visit(item) for item in items)
            case ast.List(elts=items):
                return [self.visit(item) for item in items]
        raise ValueError(f"unsupported expression syntax: {type(node).__name__}")


def _evaluate(expression: str, namespace: Mapping[str, Any]) -> Any:
    try:
        tree = ast.parse(expression.strip(), mode="eval")
    except SyntaxError as exc:
        raise ValueError(f"invalid expression {expression!r}") from exc
    return _Evaluator(namespace).visit(tree.body)


def _to_string(value: Any) -> str:
    if isinstance(value, bool):
        return str(int(value))
    if isinstance(value, float):
        return f"{value:f}"
    if isinstance(value, int):
        return str(value)
    return to_display_string(value)


def eformat(fmt: str, namespace: Mapping[str, Any] | None = None) -> str:
    """Evaluate the braced expressions of *fmt* in *namespace* and fill them in."""
    template, expressions = transform_format(fmt)
    scope = namespace or {}
    values = tuple(_to_string(_evaluate(expr, scope)) for expr in expressions)
    return template % values


def eprint(fmt: str, namespace: Mapping[str, Any] | None = None) -> str:
    """Write the result of :func:`eformat` to standard output and return it."""
    text = eformat(fmt, namespace)
    sys.stdout.write(text)
    return text