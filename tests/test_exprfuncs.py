import json
import subprocess
import sys
from unittest import mock

import pytest

from reflectkit.expr import ExpressionError, evaluate
from reflectkit.exprfuncs import (
    DEFAULT_FUNCTIONS,
    FunctionTable,
    capture_call,
    main,
    read_series,
    series_value,
    version_banner,
)


def _write_json(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_inject_and_get():
    table = FunctionTable()
    table.inject("F1", DEFAULT_FUNCTIONS["F1"])
    function = table.get("F1")
    assert function(2, 6) == pytest.approx(4.0)
    assert function.__name__ == "F1"
    assert "F1" in table and len(table) == 1


def test_get_unknown_is_none():
    assert FunctionTable().get("missing") is None


def test_inject_rejects_duplicates_and_bad_names():
    table = FunctionTable()
    table.inject("F", "x")
    with pytest.raises(ValueError, match="already defined"):
        table.inject("F", "y")
    with pytest.raises(ValueError, match="not a valid function name"):
        table.inject("bad name", "x")


def test_inject_rejects_bad_expression():
    with pytest.raises(ExpressionError):
        FunctionTable().inject("F", "x + z")


def test_inject_from_json(tmp_path):
    path = _write_json(tmp_path / "funcs.json", DEFAULT_FUNCTIONS)
    table = FunctionTable()
    assert table.inject_from_json(path) == ["F1", "F2"]
    expected = evaluate(DEFAULT_FUNCTIONS["F2"], {"x": 0.5, "y": 1.5})
    assert table.get("F2")(0.5, 1.5) == expected


def test_inject_from_json_is_all_or_nothing(tmp_path):
    path = _write_json(tmp_path / "funcs.json", {"G": "x", "H": 3})
    table = FunctionTable()
    with pytest.raises(ValueError):
        table.inject_from_json(path)
    assert list(table) == []


def test_inject_from_dir_skips_failures(tmp_path):
    _write_json(tmp_path / "good.json", {"G": "x * y"})
    (tmp_path / "bad.json").write_text("{not json", encoding="utf-8")
    _write_json(tmp_path / "notes.txt", {"N": "x"})
    table = FunctionTable()
    failures = table.inject_from_dir(tmp_path)
    assert [path.name for path, _ in failures] == ["bad.json"]
    assert list(table) == ["G"]


def test_read_series_stops_at_non_number(tmp_path):
    path = tmp_path / "series.txt"
    path.write_text("1 2.5\n-3 word 4\n", encoding="utf-8")
    assert read_series(path) == [1.0, 2.5, -3.0]


def test_read_series_missing_file(tmp_path):
    with pytest.raises(OSError, match="could not open file"):
        read_series(tmp_path / "absent.txt")


def test_series_value_invariants():
    coefficients = [1.5, -2.0, 0.25, 4.0]
    assert series_value([], 3.0) == 0.0
    assert series_value(coefficients, 0.0) == coefficients[0]
    assert series_value(coefficients, 1.0) == pytest.approx(sum(coefficients))


def test_capture_call_returns_output():
    output = capture_call(f'"{sys.executable}" -c "print(42)"')
    assert output.strip() == "42"


def test_capture_call_raises_with_output():
    cmd = f'"{sys.executable}" -c "import sys; print(\'broken\'); sys.exit(3)"'
    with pytest.raises(RuntimeError, match="broken"):
        capture_call(cmd)


def test_version_banner_uses_ten_digits():
    completed = subprocess.CompletedProcess("git", 0, stdout="0123456789abcdef\n")
    with mock.patch("reflectkit.exprfuncs.subprocess.run", return_value=completed):
        banner = version_banner()
    assert "hash: 0123456789\n" in banner
    assert "abcdef" not in banner


def test_version_banner_propagates_failure():
    completed = subprocess.CompletedProcess("git", 128, stdout="fatal: not a repository\n")
    with mock.patch("reflectkit.exprfuncs.subprocess.run", return_value=completed):
        with pytest.raises(RuntimeError, match="fatal"):
            version_banner()


def test_main_prints_result(capsys):
    assert main(["F1", "2", "6"]) == 0
    assert capsys.readouterr().out == "result is 4.000000\n"


def test_main_unknown_function(capsys):
    assert main(["nope", "1", "2"]) == 1
    assert "nope is not a recognized function" in capsys.readouterr().err


def test_main_loads_json(tmp_path, capsys):
    path = _write_json(tmp_path / "extra.json", {"G": "x - y"})
    assert main(["G", "5", "5", "--json", str(path)]) == 0
    assert capsys.readouterr().out == "result is 0.000000\n"