"""Tests for ``python -m lambdaworld``."""

from __future__ import annotations

import io
import sys

import pytest

from lambdaworld.__main__ import build_parser, main


@pytest.fixture
def stdin(monkeypatch):
    def feed(text: str) -> None:
        monkeypatch.setattr(sys, "stdin", io.StringIO(text))

    return feed


@pytest.mark.parametrize("carrier", ["identity", "deferred", "task"])
@pytest.mark.parametrize("style", ["bind", "syntax", "do"])
def test_cli_echoes_one_line(stdin, capsys, carrier, style):
    stdin("hello\nignored\n")
    assert main(["--carrier", carrier, "--style", style, "--timeout", "1"]) == 0
    assert capsys.readouterr().out == "hello\n"


def test_cli_without_input_exits_with_error(stdin, capsys):
    stdin("")
    assert main([]) == 1
    assert capsys.readouterr().out == ""


def test_cli_defaults():
    args = build_parser().parse_args([])
    assert args.carrier == "identity"
    assert args.style == "bind"
    assert args.timeout is None


def test_cli_rejects_unknown_carrier():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["--carrier", "lazy"])


@pytest.mark.parametrize(
    "flags",
    [
        ["--timeout", "0"],
        ["--timeout", "-1"],
        ["--timeout", "soon"],
        ["--max-workers", "0"],
        ["--max-workers", "-1"],
        ["--max-workers", "2.5"],
    ],
)
def test_cli_rejects_out_of_range_numbers(flags, capsys):
    with pytest.raises(SystemExit) as excinfo:
        build_parser().parse_args(flags)
    assert excinfo.value.code == 2
    assert flags[0] in capsys.readouterr().err


def test_cli_max_workers_flag_overrides_environment(stdin, capsys, monkeypatch):
    monkeypatch.setenv("LAMBDAWORLD_MAX_WORKERS", "not a number")
    stdin("pooled\n")
    assert main(["--carrier", "deferred", "--max-workers", "1", "--timeout", "1"]) == 0
    assert capsys.readouterr().out == "pooled\n"
