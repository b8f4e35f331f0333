"""Tests for project detection and config loading (infra/project.py).

Every test works inside ``tmp_path``; nothing depends on the real cwd.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from taskwright.exceptions import ErrorKind, TaskwrightError
from taskwright.infra.project import (
    CONFIG_FILE_NAME,
    DEFAULT_CONFIG_TEMPLATE,
    find_config_file,
    is_cwd_inside_project,
    load_config,
    write_default_config,
)


def _write_config(directory: Path, content: str = "[taskwright]\n") -> Path:
    path = directory / CONFIG_FILE_NAME
    path.write_text(content, encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------

class TestFindConfigFile:
    def test_in_cwd(self, tmp_path: Path) -> None:
        path = _write_config(tmp_path)
        assert find_config_file(tmp_path) == path.resolve()

    def test_in_ancestor(self, tmp_path: Path) -> None:
        path = _write_config(tmp_path)
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        assert find_config_file(nested) == path.resolve()

    def test_directory_with_config_name_is_ignored(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILE_NAME).mkdir()
        assert find_config_file(tmp_path) is None

    def test_missing(self, outside_dir: Path) -> None:
        assert find_config_file(outside_dir) is None


class TestIsCwdInsideProject:
    def test_inside(self, project_dir: Path) -> None:
        assert is_cwd_inside_project(project_dir) is True

    def test_outside(self, outside_dir: Path) -> None:
        assert is_cwd_inside_project(outside_dir) is False


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

class TestLoadConfig:
    def test_defaults_without_file(self, outside_dir: Path) -> None:
        config = load_config(outside_dir)
        assert config.path is None
        assert config.root == outside_dir.resolve()
        assert config.default_network is None
        assert dict(config.data) == {}

    def test_discovered_file(self, tmp_path: Path) -> None:
        path = _write_config(tmp_path, '[taskwright]\ndefault_network = "staging"\n[extra]\nkey = 1\n')
        config = load_config(tmp_path)
        assert config.path == path.resolve()
        assert config.root == tmp_path.resolve()
        assert config.default_network == "staging"
        assert config.data["extra"] == {"key": 1}

    def test_explicit_relative_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "conf" / "custom.toml"
        custom.parent.mkdir()
        custom.write_text('[taskwright]\ndefault_network = "x"\n', encoding="utf-8")
        config = load_config(tmp_path, "conf/custom.toml")
        assert config.path == custom.resolve()
        assert config.default_network == "x"

    def test_explicit_missing(self, tmp_path: Path) -> None:
        with pytest.raises(TaskwrightError) as exc_info:
            load_config(tmp_path, "missing.toml")
        assert exc_info.value.kind is ErrorKind.CONFIG_LOAD_FAILURE

    def test_invalid_toml(self, tmp_path: Path) -> None:
        _write_config(tmp_path, "[taskwright\n")
        with pytest.raises(TaskwrightError) as exc_info:
            load_config(tmp_path)
        assert exc_info.value.kind is ErrorKind.CONFIG_LOAD_FAILURE
        assert "invalid TOML" in exc_info.value.context["reason"]

    def test_section_must_be_table(self, tmp_path: Path) -> None:
        _write_config(tmp_path, 'taskwright = "oops"\n')
        with pytest.raises(TaskwrightError, match="must be a table"):
            load_config(tmp_path)

    def test_default_network_must_be_string(self, tmp_path: Path) -> None:
        _write_config(tmp_path, "[taskwright]\ndefault_network = 3\n")
        with pytest.raises(TaskwrightError, match="default_network must be a string"):
            load_config(tmp_path)


# ---------------------------------------------------------------------------
# Project creation
# ---------------------------------------------------------------------------

class TestWriteDefaultConfig:
    def test_creates_file(self, tmp_path: Path) -> None:
        path = write_default_config(tmp_path)
        assert path == tmp_path / CONFIG_FILE_NAME
        assert path.read_text(encoding="utf-8") == DEFAULT_CONFIG_TEMPLATE
        assert load_config(tmp_path).default_network == "develop"

    def test_refuses_to_overwrite(self, project_dir: Path) -> None:
        with pytest.raises(TaskwrightError) as exc_info:
            write_default_config(project_dir)
        assert exc_info.value.kind is ErrorKind.PROJECT_CREATION_FAILURE
        assert (project_dir / CONFIG_FILE_NAME).read_text(encoding="utf-8") == "[taskwright]\n"

    def test_missing_directory(self, tmp_path: Path) -> None:
        with pytest.raises(TaskwrightError) as exc_info:
            write_default_config(tmp_path / "nope")
        assert exc_info.value.kind is ErrorKind.PROJECT_CREATION_FAILURE
