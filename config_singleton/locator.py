# Copyright 2025 Roger Cibrian
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

"""Configuration file lookup along a search path.

A relative filename is tried against each directory of the search path in
order and the first existing candidate wins, so local locations come before
global ones. An absolute filename is used as-is.

Default Search Path
-------------------
1. current directory (./)
2. parent directory (../)
3. LOC/, the directory holding the running program (symlinks resolved)
4. LOC/../etc/
5. the user's home directory (~/)
6. /usr/local/etc/
7. /etc/

The locator never caches; callers keep the resolved path if they need it.

Example:
    Find a file with the default path or a custom one:
        ```python
        from config_singleton.locator import find_file_in_path

        path = find_file_in_path("myapp.yaml")
        path = find_file_in_path("myapp.yaml", ["/srv/myapp/conf", "~/.myapp"])
        ```
"""

from __future__ import annotations

from collections.abc import Sequence
import os
from pathlib import Path
import sys

from config_singleton.exceptions import ConfigNotFoundError
from config_singleton.logging import get_global_logger

__all__ = ["default_search_path", "find_file_in_path"]


def _program_dir() -> Path:
    """Return the directory of the running program with symlinks resolved."""
    program = sys.argv[0] if sys.argv and sys.argv[0] else ""
    if not program or program == "-c":
        # interactive interpreter or `python -c`
        return Path.cwd()
    return Path(os.path.realpath(program)).parent


def default_search_path() -> list[Path]:
    """Build the default list of directories to search, most specific first.

    Returns:
        Absolute directories in lookup order. Entries are computed on every
        call so changes to the working directory are honored.
    """
    cwd = Path.cwd()
    program_dir = _program_dir()
    return [
        cwd,
        cwd.parent,
        program_dir,
        Path(os.path.normpath(program_dir / ".." / "etc")),
        Path.home(),
        Path("/usr/local/etc"),
        Path("/etc"),
    ]


def find_file_in_path(
    filename: str | Path, path: Sequence[str | Path] | str | Path | None = None
) -> Path:
    """Return the first existing file for 'filename' along 'path'.

    Args:
        filename: Basename or relative path to look for, or an absolute path.
        path: Directories to try in order. Entries may be relative (to the
            working directory) and may start with '~'. A single str or Path
            is one directory. Defaults to default_search_path().

    Returns:
        Absolute path of the first candidate that exists.

    Raises:
        ValueError: If filename is empty.
        ConfigNotFoundError: If the absolute file is missing, or if no
            directory in the path holds the file. The error lists every
            directory that was tried.
    """
    logger = get_global_logger()

    if not str(filename):
        raise ValueError("config filename must not be empty")

    candidate = Path(filename).expanduser()
    if candidate.is_absolute():
        logger.debug("LOCATOR", f"Trying {candidate}")
        if not candidate.exists():
            raise ConfigNotFoundError(str(filename))
        return candidate

    if path is None:
        search_path = default_search_path()
    elif isinstance(path, (str, Path)):
        search_path = [path]
    else:
        search_path = list(path)

    for directory in search_path:
        this_file = Path(directory).expanduser() / candidate
        logger.debug("LOCATOR", f"Trying {this_file}")
        if this_file.exists():
            found = Path(os.path.abspath(this_file))
            logger.verbose("LOCATOR", f"Found {filename} at {found}")
            return found

    raise ConfigNotFoundError(str(filename), search_path)
