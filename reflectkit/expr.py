"""Evaluate arithmetic expressions over named numeric variables.

Expressions use Python syntax restricted to numbers, names, the operators
``+ - * / % **``, unary ``+`` and ``-``, and calls to a fixed set of
mathematical functions (``sin``, ``sqrt``, ``pow``, ``atan2`` and so on).
The constants ``pi`` and ``e`` are known unless a variable shadows them.
Arithmetic follows IEEE rules: division by zero gives an infinity, and a
domain error such as ``sqrt(-1)`` gives NaN.
"""

from __future__ import annotations

import ast
import keyword
import math
import operator
from typing import Any, Callable, Iterable, Mapping


class ExpressionError(ValueError):
    """Raised for an expression that is malformed or uses unknown names."""


def _divide(x: float, y: float) -> float:
    if y != 0:
        return x / y
    if x == 0 or math.isnan(x):
        return math.nan
    return math.copysign(math.inf, x) * math.copysign(1.0, y)


def _pow(x: float, y: float) -> float:
    if x == 0 and y < 0:
        if float(y).is_integer() and int(y) % 2:
            return math.copysign(math.inf, x)
        return math.inf
    return math.pow(x, y)


def _logarithm(func: Callable[[float], float]) -> Callable[[float], float]:
    def log(x: float) -> float:
        return -math.inf if x == 0 else func(x)

    return log


def _cbrt(x: float) -> float:
    return math.copysign(abs(x) ** (1.0 / 3.0), x)


_FUNCTIONS: dict[str, Callable[..., float]] = {
    "abs": abs,
    "fabs": math.fabs,
    "sqrt": math.sqrt,
    "cbrt": _cbrt,
    "exp": math.exp,
    "log": _logarithm(math.log),
    "log10": _logarithm(math.log10),
    "log2": _logarithm(math.log2),
    "sin": math.sin,
    "cos": math.cos,
    "tan": math.tan,
    "asin": math.asin,
    "acos": math.acos,
    "atan": math.atan,
    "sinh": math.sinh,
    "cosh": math.cosh,
    "tanh": math.tanh,
    "atan2": math.atan2,
    "hypot": math.hypot,
    "pow": _pow,
    "fmod": math.fmod,
    "floor": math.floor,
    "ceil": math.ceil,
    "trunc": math.trunc,
    "round": round,
    "fmin": min,
    "fmax": max,
}

_CONSTANTS: dict[str, float] = {"pi": math.pi, "e": math.e}

_BINARY: dict[type, Callable[[float, float], float]] = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: _divide,
    ast.Mod: math.fmod,
    ast.Pow: _pow,
}

_UNARY: dict[type, Callable[[float], float]] = {
    ast.USub: operator.neg,
    ast.UAdd: operator.pos,
}


def _apply(func: Callable[..., Any], *args: float) -> float:
    try:
        return float(func(*args))
    except OverflowError:
        return math.inf
    except (ValueError, ZeroDivisionError):
        return math.nan
    except TypeError as exc:
        raise ExpressionError(str(exc)) from exc


def _parse(expression: str) -> ast.expr:
    if not isinstance(expression, str):
        raise ExpressionError(f"expression must be a string, not {type(expression).__name__}")
    try:
        tree = ast.parse(expression.strip(), mode="eval")
    except SyntaxError as exc:
        raise ExpressionError(f"invalid expression {expression!r}") from exc
    return tree.body


def _check(node: ast.AST, names: frozenset[str]) -> None:
    """Reject any syntax or name the evaluator does not support."""
    match node:
        case ast.Constant(value=value) if isinstance(value, (int, float)) and not isinstance(
            value, bool
        ):
            return
        case ast.Name(id=name):
            if name in names or name in _CONSTANTS:
                return
            if name in _FUNCTIONS:
                raise ExpressionError(f"function {name!r} used as a value")
            raise ExpressionError(f"unknown name {name!r}")
        case ast.BinOp(left=left, op=op, right=right) if type(op) in _BINARY:
            _check(left, names)
            _check(right, names)
            return
        case ast.UnaryOp(op=op, operand=operand) if type(op) in _UNARY:
            _check(operand, names)
            return
        case ast.Call(func=ast.Name(id=name), args=args, keywords=[]):
            if name not in _FUNCTIONS:
                raise ExpressionError(f"unknown function {name!r}")
            for arg in args:
                if isinstance(arg, ast.Starred):
                    raise ExpressionError("unpacked arguments are not supported")
                _check(arg, names)
            return
    raise ExpressionError(f"unsupported expression syntax: {type(node).__name__}")


def _run(node: ast.AST, values: Mapping[str, float]) -> float:
    match node:
        case ast.Constant(value=value):
            return float(value)
        case ast.Name(id=name):
            return values[name] if name in values else _CONSTANTS[name]
        case ast.BinOp(left=left, op=op, right=right):
            return _apply(_BINARY[type(op)], _run(left, values), _run(right, values))
        case ast.UnaryOp(op=op, operand=operand):
            return _apply(_UNARY[type(op)], _run(operand, values))
        case ast.Call(func=ast.Name(id=name), args=args):
            return _apply(_FUNCTIONS[name], *(_run(arg, values) for arg in args))
    raise ExpressionError(f"unsupported expression syntax: {type(node).__name__}")


def evaluate(expression: str, variables: Mapping[str, float] | None = None) -> float:
    """Evaluate *expression* with names taken from *variables*."""
    values = {name: float(value) for name, value in (variables or {}).items()}
    body = _parse(expression)
    _check(body, frozenset(values))
    return _run(body, values)


def make_function(expression: str, params: Iterable[str]) -> Callable[..., float]:
    """Return a function of *params* (positional) that evaluates *expression*.

    The expression is checked at once: unknown names and unsupported syntax
    raise :class:`ExpressionError` here rather than on the first call.
    """
    names = tuple(params)
    for name in names:
        if not isinstance(name, str) or not name.isidentifier() or keyword.iskeyword(name):
            raise ExpressionError(f"{name!r} is not a valid parameter name")
    if len(set(names)) != len(names):
        raise ExpressionError("parameter names must be unique")

    body = _parse(expression)
    _check(body, frozenset(names))

    def function(*args: float) -> float:
        if len(args) != len(names):
            raise TypeError(f"expected {len(names)} arguments, got {len(args)}")
        return _run(body, {name: float(arg) for name, arg in zip(names, args)})

    function.expression = expression  # type: ignore[attr-defined]
    function.params = names  # type: ignore[attr-defined]
    function.__doc__ = f"Evaluate {expression!r} for ({', '.join(names)})."
    return function