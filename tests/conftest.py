"""Shared fixtures and fakes."""

from pathlib import Path

import pytest

pytest_plugins = ["js_coverage_keeper.pytest_plugin"]


class FakeChannel:
    """Script channel that records every call and answers reads from memory."""

    def __init__(self, coverage=None, read_error=None, write_error=None):
        self.coverage = coverage
        self.read_error = read_error
        self.write_error = write_error
        self.calls = []

    async def execute_script(self, script, *args):
        self.calls.append((script, *args))
        if args:
            if self.write_error is not None:
                raise self.write_error
            self.coverage = args[0]
            return None
        if self.read_error is not None:
            raise self.read_error
        return self.coverage


class RecordingWriter:
    """JSON writer that keeps writes in memory."""

    def __init__(self, error=None):
        self.error = error
        self.writes = []

    def write_json_sync(self, path, data):
        if self.error is not None:
            raise self.error
        self.writes.append((path, data))


@pytest.fixture
def fixtures_path():
    return Path(__file__).parent / "fixtures" / "sample_pages"


@pytest.fixture
def channel():
    return FakeChannel(coverage={"coverage": "object"})


@pytest.fixture
def writer():
    return RecordingWriter()
