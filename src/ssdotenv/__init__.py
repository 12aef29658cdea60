# Copyright 2024 Michael Maillet, Damien Davison, Sacha Davison
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
ssdotenv - stupid simple dotenv

Reads KEY=VALUE pairs from a .env file and makes them available as
environment variables.

    >>> import ssdotenv
    >>> ssdotenv.parse('USER="someone" # the login')[0].as_tuple()
    ('USER', 'someone')
"""
from typing import List, MutableMapping, Optional, Tuple

from .MODELS.entry import Entry, ParseResult, SkippedLine, SkipReason
from .MODELS.errors import SimpleEnvError
from .MODELS.load_options import DEFAULT_ENV_FILE, LoadOptions
from .PARSERS.env_parser import EnvParser
from .MANAGERS.environment_manager import EnvironmentManager

__version__ = "0.1.0"
__author__ = "Michael Maillet, Damien Davison, Sacha Davison"
__license__ = "Apache-2.0"

__all__ = [
    "Entry",
    "EnvParser",
    "EnvironmentManager",
    "LoadOptions",
    "ParseResult",
    "SimpleEnvError",
    "SkippedLine",
    "SkipReason",
    "file_to_env",
    "file_to_vec",
    "get_or",
    "parse",
    "to_env",
    "to_vec",
]


def parse(text: str) -> List[Entry]:
    """Parses .env text into entries in file order."""
    return EnvParser().parse_from_string(text)


def file_to_vec(path: str, strict: bool = False) -> List[Tuple[str, str]]:
    """
    Reads a .env file into a list of (key, value) tuples.

    :raises SimpleEnvError: ``kind="io"`` if the file cannot be read,
        ``kind="lines"`` if ``strict`` and some lines were skipped.
    """
    try:
        result = EnvParser().parse_file(path)
    except (OSError, UnicodeDecodeError) as e:
        raise SimpleEnvError.from_os_error(e) from e
    if strict and result.skipped:
        raise SimpleEnvError.from_skipped_lines(result.skipped, result.entries)
    return result.as_tuples()


def to_vec(path: str = DEFAULT_ENV_FILE, strict: bool = False) -> List[Tuple[str, str]]:
    """Reads ``.env`` (or ``path``) into a list of (key, value) tuples."""
    return file_to_vec(path, strict=strict)


def file_to_env(path: str,
                override: bool = True,
                strict: bool = False,
                environ: Optional[MutableMapping[str, str]] = None) -> List[Entry]:
    """
    Reads a .env file and stores its pairs as environment variables.

    :param path: Path to the file.
    :param override: Replace variables that are already set.
    :param strict: Raise ``SimpleEnvError(kind="lines")`` for skipped lines,
        after the parsed entries have been applied.
    :param environ: Environment to update instead of ``os.environ``.
    :return: The entries that were written.
    """
    manager = EnvironmentManager(environ)
    return manager.load_file(path, override=override, strict=strict)


def to_env(path: str = DEFAULT_ENV_FILE,
           override: bool = True,
           strict: bool = False,
           environ: Optional[MutableMapping[str, str]] = None) -> List[Entry]:
    """Reads ``.env`` (or ``path``) and stores its pairs as environment variables."""
    return file_to_env(path, override=override, strict=strict, environ=environ)


def get_or(key: str,
           default: str,
           environ: Optional[MutableMapping[str, str]] = None) -> str:
    """Returns the environment variable ``key``, or ``default`` if it is not set."""
    return EnvironmentManager(environ).get_or(key, default)
