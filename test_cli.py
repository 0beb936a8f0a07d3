"""
Tests for the command-line boundary and its fallback defaults.
"""

import json

import pytest

from biomegrid.inference.cli import main, parse_int_prefix, parse_seed, parse_size


def test_parse_int_prefix():
    assert parse_int_prefix("42") == 42
    assert parse_int_prefix("  -7 ") == -7
    assert parse_int_prefix("12abc") == 12
    assert parse_int_prefix("abc") is None
    assert parse_int_prefix("") is None
    assert parse_int_prefix(None) is None
    # only ASCII digits count
    assert parse_int_prefix("\u0663") is None
    assert parse_int_prefix("12\u0663") == 12
    assert parse_seed("\u0663") == 1


def test_seed_fallback():
    assert parse_seed(None) == 1
    assert parse_seed("") == 1
    assert parse_seed("zero") == 1
    assert parse_seed("0") == 1
    assert parse_seed("12345") == 12345
    assert parse_seed("-3") == -3


def test_size_fallback():
    assert parse_size("160x100", 1, 1) == (160, 100)
    assert parse_size("160×100", 1, 1) == (160, 100)
    assert parse_size("20X8", 1, 1) == (20, 8)
    assert parse_size("20", 100, 120) == (20, 120)
    assert parse_size("x30", 100, 120) == (100, 30)
    assert parse_size("0x0", 100, 120) == (100, 120)
    assert parse_size(None, 100, 120) == (100, 120)
    assert parse_size("wide", 160, 100) == (160, 100)


def test_main_json_output(capsys):
    assert main(["--seed", "7", "--size", "5x3"]) == 0
    rows = json.loads(capsys.readouterr().out)
    assert len(rows) == 3 and all(len(r) == 5 for r in rows)
    assert all(cell.startswith("#") for row in rows for cell in row)


def test_main_is_deterministic(capsys):
    main(["--seed", "abc", "--size", "4x2", "--output", "elevation"])
    first = capsys.readouterr().out
    main(["--seed", "1", "--size", "4x2", "--output", "elevation"])
    second = capsys.readouterr().out
    assert first == second


def test_main_text_output_with_preset_defaults(capsys):
    assert main(["--preset", "wide", "--output", "biomes", "--format", "text"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 100
    assert all(len(line.split("\t")) == 160 for line in lines)


def test_main_overrides(capsys):
    assert main(["--size", "3x3", "--octaves", "2", "--strategy", "hashed", "--backend", "reference",
                 "--output", "elevation"]) == 0
    rows = json.loads(capsys.readouterr().out)
    assert all(0.0 <= v <= 1.0 for row in rows for v in row)


def test_main_reports_core_errors(capsys):
    assert main(["--size=-3x4"]) == 2
    assert "Error:" in capsys.readouterr().err
    assert main(["--size", "3x3", "--persistence", "0"]) == 2
    assert "persistence" in capsys.readouterr().err


def test_main_rejects_unknown_preset():
    with pytest.raises(SystemExit):
        main(["--preset", "tall"])
