"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from taskcli.manager import TaskManager


@pytest.fixture
def tasks_file(tmp_path: Path) -> Path:
    return tmp_path / "tasks.json"


@pytest.fixture
def manager(tasks_file: Path) -> TaskManager:
    return TaskManager(tasks_file=tasks_file)
