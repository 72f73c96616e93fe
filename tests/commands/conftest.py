"""Fixtures for CLI command tests."""

from __future__ import annotations

import pytest
from typer.testing import CliRunner

from sift.adapters.memory import MemoryStore
from sift.main import app


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def task_file(tmp_path, sample_tasks):
    """A saved task file holding the sample tasks."""
    path = tmp_path / "tasks.sift"
    MemoryStore.from_task_list(sample_tasks).save(path)
    return path


@pytest.fixture()
def invoke(runner, task_file):
    """Run the CLI against ``task_file``."""

    def _invoke(*args, input=None):
        return runner.invoke(app, ["--file", str(task_file), *args], input=input)

    return _invoke
