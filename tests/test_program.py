"""End-to-end tests for the echo program under every carrier and notation."""

from __future__ import annotations

import io

import pytest

from lambdaworld import (
    PROGRAMS,
    EndOfInputError,
    deferred_backend,
    echo,
    echo_do,
    echo_syntax,
    identity_backend,
    join,
    run,
    run_async,
    task_backend,
)

from tests.conftest import GatedInput, RecordingInput, RecordingOutput

STYLES = sorted(PROGRAMS)


def test_echo_identity_hello():
    stdout = io.StringIO()
    backend = identity_backend(stdin=io.StringIO("hello\n"), stdout=stdout)

    assert echo(backend.io, backend.monad) == "hello"
    assert stdout.getvalue() == "hello\n"


def test_echo_deferred_world():
    stdout = io.StringIO()
    with deferred_backend(stdin=io.StringIO("world\n"), stdout=stdout) as backend:
        handle = echo(backend.io, backend.monad)
        assert join(handle, timeout=1.0) == "world"
    assert stdout.getvalue() == "world\n"


@pytest.mark.asyncio
async def test_echo_task():
    stdout = io.StringIO()
    backend = task_backend(stdin=io.StringIO("loop\n"), stdout=stdout)
    assert await run_async(echo, backend, timeout=1.0) == "loop"
    assert stdout.getvalue() == "loop\n"


@pytest.mark.parametrize("style", STYLES)
@pytest.mark.parametrize("carrier", ["identity", "deferred"])
def test_read_happens_before_write(journal, carrier, style):
    stdin = RecordingInput("ordered\n", journal)
    stdout = RecordingOutput(journal)
    factory = identity_backend if carrier == "identity" else deferred_backend

    with factory(stdin=stdin, stdout=stdout) as backend:
        assert run(PROGRAMS[style], backend, timeout=1.0) == "ordered"

    assert journal.operations == ["read", "write"]
    assert journal.timestamp("read") <= journal.timestamp("write")


@pytest.mark.asyncio
@pytest.mark.parametrize("style", STYLES)
async def test_read_happens_before_write_task(journal, style):
    stdin = RecordingInput("ordered\n", journal)
    stdout = RecordingOutput(journal)
    backend = task_backend(stdin=stdin, stdout=stdout)

    assert await run_async(PROGRAMS[style], backend, timeout=1.0) == "ordered"
    assert journal.operations == ["read", "write"]
    assert journal.timestamp("read") <= journal.timestamp("write")


@pytest.mark.parametrize("carrier", ["identity", "deferred"])
def test_notations_are_equivalent(carrier):
    """bind chain, method chaining and do-notation agree on output and value."""
    factory = identity_backend if carrier == "identity" else deferred_backend
    observed = []
    for program in (echo, echo_syntax, echo_do):
        stdout = io.StringIO()
        with factory(stdin=io.StringIO("same\nextra\n"), stdout=stdout) as backend:
            value = run(program, backend, timeout=1.0)
        observed.append((value, stdout.getvalue()))

    assert observed == [("same", "same\n")] * 3


@pytest.mark.asyncio
async def test_notations_are_equivalent_task():
    observed = []
    for program in (echo, echo_syntax, echo_do):
        stdout = io.StringIO()
        backend = task_backend(stdin=io.StringIO("same\n"), stdout=stdout)
        value = await run_async(program, backend, timeout=1.0)
        observed.append((value, stdout.getvalue()))

    assert observed == [("same", "same\n")] * 3


@pytest.mark.parametrize("style", STYLES)
def test_deferred_echo_does_not_block_caller(style):
    """Building the program returns a pending handle while input is still unavailable."""
    stdin = GatedInput("eventually\n")
    stdout = io.StringIO()
    with deferred_backend(stdin=stdin, stdout=stdout) as backend:
        try:
            handle = PROGRAMS[style](backend.io, backend.monad)
            assert not handle.done()
            assert stdout.getvalue() == ""
            stdin.gate.set()
            assert join(handle, timeout=1.0) == "eventually"
        finally:
            stdin.gate.set()
    assert stdout.getvalue() == "eventually\n"


@pytest.mark.parametrize("style", STYLES)
def test_identity_echo_without_input_is_fatal(style):
    stdout = io.StringIO()
    backend = identity_backend(stdin=io.StringIO(""), stdout=stdout)
    with pytest.raises(EndOfInputError):
        run(PROGRAMS[style], backend)
    assert stdout.getvalue() == ""


@pytest.mark.parametrize("style", STYLES)
def test_deferred_echo_without_input_fails_handle(style):
    stdout = io.StringIO()
    with deferred_backend(stdin=io.StringIO(""), stdout=stdout) as backend:
        handle = PROGRAMS[style](backend.io, backend.monad)
        with pytest.raises(EndOfInputError):
            join(handle, timeout=1.0)
    assert stdout.getvalue() == ""


def test_independent_instantiations_share_nothing():
    first_out, second_out = io.StringIO(), io.StringIO()
    with deferred_backend(stdin=io.StringIO("one\n"), stdout=first_out) as first, \
            deferred_backend(stdin=io.StringIO("two\n"), stdout=second_out) as second:
        first_handle = echo(first.io, first.monad)
        second_handle = echo(second.io, second.monad)
        assert join(second_handle, 1.0) == "two"
        assert join(first_handle, 1.0) == "one"
    assert first_out.getvalue() == "one\n"
    assert second_out.getvalue() == "two\n"
