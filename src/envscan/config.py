"""``.envscan.toml`` configuration loading.

Searches upward from cwd for ``.envscan.toml``. ``ENVSCAN_FILES`` and
``ENVSCAN_MAX_DEPTH`` in the environment take precedence over the file.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    try:
        import tomllib  # type: ignore[import-not-found]
    except ModuleNotFoundError:
        import tomli as tomllib  # type: ignore[no-redef]

from envscan.expand import DEFAULT_MAX_DEPTH

CONFIG_FILENAME = ".envscan.toml"
DEFAULT_ENV_FILE = ".env"


@dataclass
class EnvscanConfig:
    """Resolved configuration for the current invocation."""

    env_files: list[str] = field(default_factory=lambda: [DEFAULT_ENV_FILE])
    max_depth: int = DEFAULT_MAX_DEPTH
    override: bool = True
    config_path: Path | None = None

    def resolve_env_files(self) -> list[Path]:
        """Return ``env_files`` with relative entries anchored at the config file's directory."""
        base = self.config_path.parent if self.config_path is not None else Path.cwd()
        out: list[Path] = []
        for name in self.env_files:
            p = Path(name).expanduser()
            out.append(p if p.is_absolute() else base / p)
        return out


def find_config_file(start: Path | None = None) -> Path | None:
    """Walk upward from *start* (default cwd) looking for ``.envscan.toml``."""
    cur = (start or Path.cwd()).resolve()
    while True:
        candidate = cur / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        if cur.parent == cur:
            return None
        cur = cur.parent


def _apply_environ(cfg: EnvscanConfig) -> EnvscanConfig:
    files = os.environ.get("ENVSCAN_FILES")
    if files:
        # Relative to cwd, not to the config file.
        cfg.env_files = [str(Path.cwd() / f) for f in files.split(os.pathsep) if f]
    depth = os.environ.get("ENVSCAN_MAX_DEPTH")
    if depth:
        try:
            cfg.max_depth = int(depth)
        except ValueError:
            raise ValueError(f"ENVSCAN_MAX_DEPTH must be an integer, got {depth!r}") from None
    return cfg


def load_config(path: Path | None = None) -> EnvscanConfig:
    """Load and return config.  Returns defaults if no file found."""
    if path is None:
        path = find_config_file()
    if path is None:
        return _apply_environ(EnvscanConfig())

    raw: dict[str, Any] = tomllib.loads(path.read_text())
    section = raw.get("envscan", {})

    env_files = section.get("env_files", [DEFAULT_ENV_FILE])
    if isinstance(env_files, str):
        env_files = [env_files]
    if not isinstance(env_files, list) or not all(isinstance(f, str) for f in env_files):
        raise ValueError(f"envscan.env_files must be a list of paths in {path}")

    max_depth = section.get("max_depth", DEFAULT_MAX_DEPTH)
    if not isinstance(max_depth, int) or isinstance(max_depth, bool):
        raise ValueError(f"envscan.max_depth must be an integer in {path}")

    return _apply_environ(
        EnvscanConfig(
            env_files=list(env_files),
            max_depth=max_depth,
            override=bool(section.get("override", True)),
            config_path=path,
        )
    )
