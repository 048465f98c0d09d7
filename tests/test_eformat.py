from dataclasses import dataclass

import pytest

from reflectkit.eformat import eformat, eprint, parse_braces, transform_format


@dataclass
class Point:
    x: float
    y: float


def test_parse_braces_finds_closing_brace():
    text = "abc}rest"
    assert parse_braces(text, 0) == text.index("}") + 1


def test_parse_braces_nested_returns_after_inner_close():
    text = "a{b}c}"
    assert parse_braces(text, 0) == text.index("c")


def test_parse_braces_mismatched():
    with pytest.raises(ValueError, match="mismatched"):
        parse_braces("no close", 0)


def test_transform_format_collects_expressions():
    fmt, exprs = transform_format("x = {x} sqrt = {sqrt(x)} exp = {exp(x)}\n")
    assert fmt == "x = %s sqrt = %s exp = %s\n"
    assert exprs == ["x", "sqrt(x)", "exp(x)"]


def test_transform_format_escaped_brace():
    fmt, exprs = transform_format("%{literal} {v}")
    assert fmt == "{literal} %s"
    assert exprs == ["v"]


def test_eformat_float_uses_fixed_notation():
    assert eformat("x = {x}", {"x": 5.0}) == "x = 5.000000"


def test_eformat_math_function():
    assert eformat("{sqrt(x)}", {"x": 4.0}) == "2.000000"


def test_eformat_int_and_string():
    assert eformat("{n}:{s}", {"n": 7, "s": "hi"}) == "7:hi"


def test_eformat_attribute_and_arithmetic():
    p = Point(1.5, 2.5)
    assert eformat("{p.x + p.y}", {"p": p}) == "4.000000"


def test_eformat_percent_escape_kept():
    assert eformat("100%% of {n}", {"n": 3}) == "100% of 3"


def test_eformat_unknown_name():
    with pytest.raises(NameError):
        eformat("{missing}", {})


def test_eformat_private_attribute_rejected():
    with pytest.raises(ValueError):
        eformat("{p.__class__}", {"p": Point(0.0, 0.0)})


def test_eprint_writes_stdout(capsys):
    text = eprint("v={v}\n", {"v": 2})
    assert text == "v=2\n"
    assert capsys.readouterr().out == "v=2\n"