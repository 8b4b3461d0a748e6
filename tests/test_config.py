"""Tests for .envscan.toml config loading."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from envscan.config import EnvscanConfig, find_config_file, load_config


def test_load_config_invalid_toml_syntax(tmp_path):
    """Invalid TOML syntax in project file raises when loading config."""
    toml = tmp_path / ".envscan.toml"
    toml.write_text("[envscan\nmax_depth = 3")  # unclosed bracket
    with pytest.raises(ValueError):  # TOMLDecodeError subclasses ValueError
        load_config(toml)


def test_load_config_env_files_not_a_list(tmp_path):
    toml = tmp_path / ".envscan.toml"
    toml.write_text("[envscan]\nenv_files = 3\n")
    with pytest.raises(ValueError, match="env_files"):
        load_config(toml)


def test_load_config_max_depth_not_int(tmp_path):
    toml = tmp_path / ".envscan.toml"
    toml.write_text('[envscan]\nmax_depth = "deep"\n')
    with pytest.raises(ValueError, match="max_depth"):
        load_config(toml)


def test_load_config_from_file(tmp_path):
    toml = tmp_path / ".envscan.toml"
    toml.write_text("""\
[envscan]
env_files = [".env", "config/.env.local"]
max_depth = 5
override = false
""")
    cfg = load_config(toml)
    assert cfg.env_files == [".env", "config/.env.local"]
    assert cfg.max_depth == 5
    assert cfg.override is False
    assert cfg.config_path == toml
    assert cfg.resolve_env_files() == [tmp_path / ".env", tmp_path / "config" / ".env.local"]


def test_load_config_single_env_file_string(tmp_path):
    toml = tmp_path / ".envscan.toml"
    toml.write_text('[envscan]\nenv_files = ".env.dev"\n')
    assert load_config(toml).env_files == [".env.dev"]


def test_load_config_defaults():
    cfg = load_config(path=None)
    assert cfg.env_files == [".env"]
    assert cfg.max_depth == 20
    assert cfg.override is True
    assert cfg.config_path is None


def test_load_config_environ_overrides(tmp_path, monkeypatch):
    toml = tmp_path / ".envscan.toml"
    toml.write_text("[envscan]\nmax_depth = 5\n")
    monkeypatch.setenv("ENVSCAN_MAX_DEPTH", "7")
    monkeypatch.setenv("ENVSCAN_FILES", os.pathsep.join(["a.env", "/abs/b.env"]))
    cfg = load_config(toml)
    assert cfg.max_depth == 7
    assert cfg.env_files[0].endswith("a.env")
    assert cfg.env_files[1] == "/abs/b.env"


def test_load_config_environ_max_depth_invalid(monkeypatch):
    monkeypatch.setenv("ENVSCAN_MAX_DEPTH", "lots")
    with pytest.raises(ValueError, match="ENVSCAN_MAX_DEPTH"):
        load_config()


def test_find_config_file_walks_upward(tmp_path):
    toml = tmp_path / ".envscan.toml"
    toml.write_text("[envscan]\n")
    nested = tmp_path / "a" / "b"
    nested.mkdir(parents=True)
    assert find_config_file(nested) == toml.resolve()


def test_find_config_file_none(tmp_path):
    assert find_config_file(tmp_path) is None


def test_resolve_env_files_without_config_uses_cwd(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    cfg = EnvscanConfig(env_files=[".env", "/etc/app.env"])
    assert cfg.resolve_env_files() == [tmp_path / ".env", Path("/etc/app.env")]
