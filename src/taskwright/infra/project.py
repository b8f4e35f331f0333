"""Infrastructure: project detection and config file loading.

A directory is inside a taskwright project when it, or one of its
ancestors, contains a ``taskwright.toml`` file.

Rules
-----
* Filesystem access only; the working directory is always passed in.
* No ``print()`` — callers handle user-facing output.
* Every ``OSError`` / TOML error is re-raised as a
  :class:`~taskwright.exceptions.TaskwrightError`.
"""

from __future__ import annotations

import logging
import tomllib
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any

from taskwright.core.models import Config
from taskwright.exceptions import ErrorKind, TaskwrightError

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "taskwright.toml"
CONFIG_SECTION = "taskwright"

DEFAULT_CONFIG_TEMPLATE = """\
# taskwright project configuration.

[taskwright]
default_network = "develop"
"""


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------

def find_config_file(cwd: Path) -> Path | None:
    """Return the nearest ``taskwright.toml`` at or above *cwd*, or ``None``."""
    start = cwd.resolve()
    for directory in (start, *start.parents):
        candidate = directory / CONFIG_FILE_NAME
        if candidate.is_file():
            return candidate
    return None


def is_cwd_inside_project(cwd: Path) -> bool:
    return find_config_file(cwd) is not None


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

def load_config(cwd: Path, explicit_path: str | None = None) -> Config:
    """Load the project configuration.

    Parameters
    ----------
    cwd:
        Directory the CLI was started from.
    explicit_path:
        Value of ``--config``; relative paths resolve against *cwd*.

    Returns
    -------
    Config
        A default config rooted at *cwd* when no file exists and none
        was requested explicitly.

    Raises
    ------
    TaskwrightError
        ``CONFIG_LOAD_FAILURE`` if the requested file is missing, cannot
        be read, or is not valid TOML.
    """
    if explicit_path is not None:
        path = (cwd / explicit_path).resolve()
        if not path.is_file():
            raise TaskwrightError(
                ErrorKind.CONFIG_LOAD_FAILURE,
                path=path,
                reason="file does not exist",
            )
    else:
        found = find_config_file(cwd)
        if found is None:
            logger.debug("No %s found from %s, using defaults", CONFIG_FILE_NAME, cwd)
            return Config(root=cwd.resolve())
        path = found

    data = _read_toml(path)
    section = data.get(CONFIG_SECTION, {})
    if not isinstance(section, Mapping):
        raise TaskwrightError(
            ErrorKind.CONFIG_LOAD_FAILURE,
            path=path,
            reason=f"[{CONFIG_SECTION}] must be a table",
        )

    default_network = section.get("default_network")
    if default_network is not None and not isinstance(default_network, str):
        raise TaskwrightError(
            ErrorKind.CONFIG_LOAD_FAILURE,
            path=path,
            reason="default_network must be a string",
        )

    logger.debug("Loaded config from %s", path)
    return Config(
        root=path.parent,
        path=path,
        default_network=default_network,
        data=MappingProxyType(data),
    )


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise TaskwrightError(
            ErrorKind.CONFIG_LOAD_FAILURE,
            path=path,
            reason=exc.strerror or str(exc),
        ) from exc
    except tomllib.TOMLDecodeError as exc:
        raise TaskwrightError(
            ErrorKind.CONFIG_LOAD_FAILURE,
            path=path,
            reason=f"invalid TOML ({exc})",
        ) from exc


# ---------------------------------------------------------------------------
# Project creation
# ---------------------------------------------------------------------------

def write_default_config(directory: Path) -> Path:
    """Create a starter ``taskwright.toml`` in *directory* and return its path.

    Raises
    ------
    TaskwrightError
        ``PROJECT_CREATION_FAILURE`` if the file already exists or cannot
        be written.
    """
    path = directory / CONFIG_FILE_NAME
    try:
        with path.open("x", encoding="utf-8") as handle:
            handle.write(DEFAULT_CONFIG_TEMPLATE)
    except FileExistsError as exc:
        raise TaskwrightError(
            ErrorKind.PROJECT_CREATION_FAILURE,
            path=directory,
            reason=f"{CONFIG_FILE_NAME} already exists",
        ) from exc
    except OSError as exc:
        raise TaskwrightError(
            ErrorKind.PROJECT_CREATION_FAILURE,
            path=directory,
            reason=exc.strerror or str(exc),
        ) from exc
    logger.debug("Wrote %s", path)
    return path
