"""Tests for path_utils module."""

from pathlib import Path

import pytest

from aicli.path_utils import default_config_path, has_home_path_prefix, map_path


def test_map_path_home():
    assert map_path("~") == str(Path.home().resolve())
    assert map_path("~/.ai_cli_config") == str(Path.home().resolve() / ".ai_cli_config")


def test_map_path_absolute(tmp_path):
    target = tmp_path / "cfg"

    assert map_path(str(target)) == str(target.resolve())


def test_map_path_relative_rejected():
    with pytest.raises(ValueError, match="Relative paths without prefix"):
        map_path("config/file")


def test_map_path_escape_home_rejected():
    with pytest.raises(ValueError, match="escapes home directory"):
        map_path("~/../../etc/passwd")


def test_map_path_rejects_nul():
    with pytest.raises(ValueError, match="NUL"):
        map_path("~/bad\x00name")


def test_has_home_path_prefix():
    assert has_home_path_prefix("~")
    assert has_home_path_prefix("~/x")
    assert not has_home_path_prefix("~user/x")


def test_default_config_path():
    assert default_config_path() == str(Path.home().resolve() / ".ai_cli_config")
