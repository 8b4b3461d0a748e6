# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""envscan -- parse .env files with quoting, comments and variable expansion."""

import logging

from envscan.env_file import parse_env_file, parse_files, parse_strings
from envscan.errors import EnvscanError, FileAccessError, ParseError
from envscan.parser import Parser
from envscan.sdk import dotenv_values, load_dotenv

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    "EnvscanError",
    "FileAccessError",
    "ParseError",
    "Parser",
    "dotenv_values",
    "load_dotenv",
    "parse_env_file",
    "parse_files",
    "parse_strings",
]
__version__ = "0.1.0"
