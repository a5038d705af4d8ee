# Copyright (c) 2026 Ramin Firoozye
# SPDX-License-Identifier: AGPL-3.0-or-later

"""xenv -- parse .env files with shell-like quoting and substitution."""

from xenv.env_file import iter_env, parse_env_file, parse_stream, parse_string
from xenv.errors import EnvFileIOError, LineParseError, XenvError
from xenv.sdk import dotenv_values, load_dotenv

__all__ = [
    "__version__",
    "EnvFileIOError",
    "LineParseError",
    "XenvError",
    "dotenv_values",
    "iter_env",
    "load_dotenv",
    "parse_env_file",
    "parse_stream",
    "parse_string",
]
__version__ = "0.1.0"
