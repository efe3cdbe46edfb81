"""Tests for the imguri command-line interface."""

import json

import pytest

from imguri.cli import main, parse_args

from conftest import PNG_BYTES


def test_parse_args_defaults():
    args = parse_args(["a.png"])
    assert args.inputs == ["a.png"]
    assert args.force is None
    assert args.size_limit is None
    assert args.json is False
    assert args.log_level == "none"


def test_json_output(png_file, capsys):
    exit_code = main(["test.png", "--json"])

    payload = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert payload["test.png"]["data"].startswith("data:image/png;base64,")
    assert payload["test.png"]["error"] is None


def test_failure_sets_exit_code(png_file, capsys):
    exit_code = main(["test.png", "missing.png", "--json"])

    payload = json.loads(capsys.readouterr().out)
    assert exit_code == 1
    assert payload["missing.png"]["data"] is None
    assert payload["missing.png"]["error"].startswith("NotFound:")


def test_size_limit_flag(workdir, capsys):
    (workdir / "big.png").write_bytes(b"\x00" * 100)

    assert main(["big.png", "--size-limit", "50", "--json"]) == 1
    assert "SizeLimitExceeded" in capsys.readouterr().out
    assert main(["big.png", "--size-limit", "50", "--force", "--json"]) == 0


def test_env_defaults(workdir, capsys, monkeypatch):
    (workdir / "big.png").write_bytes(b"\x00" * 100)
    monkeypatch.setenv("IMGURI_SIZE_LIMIT", "50")

    assert main(["big.png", "--json"]) == 1
    assert main(["big.png", "--size-limit", "200", "--json"]) == 0


def test_no_force_overrides_env(workdir, capsys, monkeypatch):
    (workdir / "big.png").write_bytes(b"\x00" * 100)
    monkeypatch.setenv("IMGURI_FORCE", "1")

    assert main(["big.png", "--size-limit", "50", "--json"]) == 0
    assert main(["big.png", "--size-limit", "50", "--no-force", "--json"]) == 1
    assert "SizeLimitExceeded" in capsys.readouterr().out


def test_parse_args_force_flags():
    assert parse_args(["a.png", "--force"]).force is True
    assert parse_args(["a.png", "--no-force"]).force is False


def test_invalid_option(png_file, capsys):
    assert main(["test.png", "--concurrency", "0"]) == 2
    assert "concurrency" in capsys.readouterr().err


def test_table_output(png_file, capsys):
    assert main(["test.png"]) == 0
    out = capsys.readouterr().out
    assert "test.png" in out
    assert "image/png" in out


def test_requires_input():
    with pytest.raises(SystemExit):
        parse_args([])
