"""SDK for loading .env files into the environment (python-dotenv style)."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

from envscan.config import EnvscanConfig, load_config
from envscan.env_file import parse_files

logger = logging.getLogger(__name__)


def _collect(
    paths: tuple[str | Path, ...],
    environ: Mapping[str, str] | None,
    max_depth: int | None,
    cfg: EnvscanConfig,
) -> dict[str, str]:
    """Parse explicit *paths*, or the configured default files if none are given.

    Default files are optional: a missing or unreadable one is skipped. An
    explicit path that can't be read raises :class:`FileAccessError`.
    """
    depth = cfg.max_depth if max_depth is None else max_depth
    if paths:
        return parse_files(*paths, environ=environ, max_depth=depth)
    return parse_files(*cfg.resolve_env_files(), environ=environ, max_depth=depth, missing_ok=True)


def dotenv_values(
    *paths: str | Path,
    environ: Mapping[str, str] | None = None,
    max_depth: int | None = None,
) -> dict[str, str]:
    """Return the parsed variables as a dict without modifying os.environ.

    Parameters
    ----------
    *paths : str or Path
        Files to parse, in order; later files win. When omitted, the files
        listed in ``.envscan.toml`` (default ``.env``) are used and any that
        are missing are ignored.
    environ : mapping, optional
        Variables used to resolve references the files don't define.
        Defaults to a copy of ``os.environ``.
    max_depth : int, optional
        Maximum expansion passes. Defaults from config (20).

    Returns
    -------
    dict[str, str]
        Mapping of variable name to expanded value.

    Raises
    ------
    FileAccessError
        An explicitly named file could not be read.
    ParseError
        A file is malformed.
    """
    return _collect(paths, environ, max_depth, load_config())


def load_dotenv(
    *paths: str | Path,
    override: bool | None = None,
    max_depth: int | None = None,
) -> bool:
    """Load variables from .env files into os.environ (python-dotenv compatible API).

    Parameters
    ----------
    *paths : str or Path
        Files to load. Same defaults as :func:`dotenv_values`.
    override : bool, optional
        If True, overwrite existing keys in os.environ. If False, only set
        keys that are not already set. Defaults from config (True).
    max_depth : int, optional
        Maximum expansion passes.

    Returns
    -------
    bool
        True if at least one variable was set, False otherwise.

    Examples
    --------
    >>> from envscan import load_dotenv
    >>> load_dotenv()  # .env in cwd, if present
    True
    >>> load_dotenv(".env", ".env.local", override=False)
    False
    """
    cfg = load_config()
    merged = _collect(paths, None, max_depth, cfg)
    if override is None:
        override = cfg.override
    count = 0
    for key, value in merged.items():
        if key in os.environ and not override:
            continue
        os.environ[key] = value
        count += 1
    logger.debug("Set %d of %d variable(s) in the environment", count, len(merged))
    return count > 0
