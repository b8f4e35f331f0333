"""Shared pytest fixtures and configuration for the taskwright test suite.

Guidelines
----------
* No test reads the real environment, cwd or TTY state: ``main`` gets
  them injected.
* questionary is mocked at the prompt boundary.
* Core tests must be pure — no side effects.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from pathlib import Path
from typing import Any

import pytest

from taskwright.cli import console as console_module
from taskwright.cli.builtin_tasks import create_default_registry
from taskwright.core.argument_types import ParamType
from taskwright.core.models import TaskParamDefinition
from taskwright.core.registry import TaskRegistry
from taskwright.logging_config import LOGGER_NAME


@pytest.fixture(autouse=True)
def _reset_process_state() -> Iterator[None]:
    """Undo emoji and logging changes made by ``main`` between tests."""
    yield
    console_module.disable_emoji()
    package_logger = logging.getLogger(LOGGER_NAME)
    for handler in package_logger.handlers[:]:
        package_logger.removeHandler(handler)
    package_logger.setLevel(logging.NOTSET)


class RecordingAction:
    """Task body that records every call it receives."""

    def __init__(self) -> None:
        self.calls: list[tuple[dict[str, Any], Any]] = []

    def __call__(self, arguments: Mapping[str, Any], env: Any) -> None:
        self.calls.append((dict(arguments), env))


@pytest.fixture
def deploy_action() -> RecordingAction:
    return RecordingAction()


@pytest.fixture
def registry(deploy_action: RecordingAction) -> TaskRegistry:
    """Default registry plus a ``deploy`` task requiring ``--network``."""
    tasks = create_default_registry()
    tasks.define(
        "deploy",
        "Deploys the project",
        deploy_action,
        params=(
            TaskParamDefinition(name="network", description="Target network"),
            TaskParamDefinition(
                name="dry_run",
                description="Only print what would happen",
                type=ParamType.BOOLEAN,
                is_flag=True,
            ),
        ),
    )
    return tasks


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """A directory recognised as a taskwright project."""
    (tmp_path / "taskwright.toml").write_text("[taskwright]\n", encoding="utf-8")
    return tmp_path


@pytest.fixture
def outside_dir(tmp_path: Path) -> Path:
    """A directory with no taskwright.toml at or above it (tmp dirs have none)."""
    directory = tmp_path / "not-a-project"
    directory.mkdir()
    return directory
