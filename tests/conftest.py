"""Shared test fixtures and configuration.

Provides infrastructure to isolate tests from the real config, data and
log directories.
"""

from __future__ import annotations

from datetime import UTC, date, datetime
from unittest.mock import patch

import pytest

from sift.adapters.memory import MemoryStore
from sift.models import Task, TaskList

# ---------------------------------------------------------------------------
# Directory isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolate_dirs(tmp_path):
    """Point every platformdirs lookup at *tmp_path* and reset cached services."""
    from sift.commands.session import set_data_file
    from sift.services.config_service import get_config_service
    from sift.utils.ui.console import set_color

    config_dir = tmp_path / "config"
    data_dir = tmp_path / "data"
    log_dir = tmp_path / "log"

    get_config_service.cache_clear()
    with patch("sift.services.config_service.user_config_dir", return_value=str(config_dir)):
        with patch("sift.models.config_models.user_data_dir", return_value=str(data_dir)):
            with patch("sift.utils.logger.user_log_dir", return_value=str(log_dir)):
                yield tmp_path
    get_config_service.cache_clear()
    set_data_file(None)
    set_color(True)


@pytest.fixture()
def data_file(isolate_dirs):
    """Default task file location inside the isolated data directory."""
    return isolate_dirs / "data" / "tasks.sift"


# ---------------------------------------------------------------------------
# Sample data
# ---------------------------------------------------------------------------


@pytest.fixture()
def today() -> date:
    return date(2024, 6, 15)


@pytest.fixture()
def fixed_now() -> datetime:
    return datetime(2024, 6, 15, 12, 30, 45, tzinfo=UTC)


@pytest.fixture()
def sample_tasks() -> TaskList:
    """Three tasks covering every optional field combination."""
    return TaskList(
        tasks=[
            Task.new("Write report", due=date(2024, 6, 20)),
            Task.new("Buy milk", completed=datetime(2024, 6, 14, 9, 0, tzinfo=UTC)),
            Task.new("Call plumber", snoozed=date(2024, 6, 22)),
        ]
    )


@pytest.fixture()
def store(sample_tasks) -> MemoryStore:
    return MemoryStore.from_task_list(sample_tasks)
