"""Shared fixtures for shell tests."""

import pytest

from linecmd.shell import StringWriter
from linecmd.shell import repl


@pytest.fixture(autouse=True)
def reset_shell_state(monkeypatch):
    """Start every test without an active session or default writer."""
    monkeypatch.setattr(repl, "_session", None)
    monkeypatch.setattr(repl, "_default_writer", None)
    yield
    repl.destroy()


@pytest.fixture
def writer():
    """In-memory output writer."""
    return StringWriter()


@pytest.fixture
def calls():
    """List collecting handler invocations."""
    return []


@pytest.fixture
def commands(calls):
    """Command table in the plain mapping shape."""
    return {
        'create': {
            'parameters': ['objectUri', 'objectValue'],
            'description': '\tCreate a new object. The object is specified using the /type/id OMA notation.',
            'handler': calls.append,
        },
        'list': {
            'parameters': [],
            'description': '\tList all objects.',
            'handler': lambda args: None,
        },
    }
