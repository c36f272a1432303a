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

"""Exception hierarchy for config_singleton.

This module defines the errors raised while declaring, locating, loading and
reading configuration classes:

- ConfigError: Problems with the configuration file itself (not found,
  invalid YAML, empty template)
- Setup and protocol errors: reserved key names, conflicting default
  filenames, unknown or misplaced directives

All exceptions inherit from ConfigSingletonError, so callers can catch every
library error with a single except clause. Several also inherit from the
matching builtin (FileNotFoundError, ValueError, TypeError, KeyError) so that
generic handlers keep working.

Example:
    Catching specific error types:
        ```python
        from config_singleton.exceptions import ConfigNotFoundError

        try:
            AppConfig.use("-load")
        except ConfigNotFoundError as e:
            print(f"No config file: {e.filename} (tried {e.search_path})")
        ```

    Catching all library errors:
        ```python
        from config_singleton.exceptions import ConfigSingletonError

        try:
            hostname = AppConfig.hostname
        except ConfigSingletonError as e:
            print(f"Configuration error: {e}")
        ```
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

__all__ = [
    "ConfigSingletonError",
    "ConfigError",
    "ConfigNotFoundError",
    "ConfigFileInvalidError",
    "EmptySchemaError",
    "ReservedKeyConflictError",
    "FilenameConflictError",
    "NotConfiguredError",
    "UnknownDirectiveError",
    "ImportOnInstanceError",
    "UnknownSettingError",
]


class ConfigSingletonError(Exception):
    """Base exception for all config_singleton errors."""

    pass


class ConfigError(ConfigSingletonError):
    """Raised for problems with a configuration file or its template.

    This exception is raised when there are problems with:

    - Locating the configuration file on the search path
    - YAML parsing (syntax errors, wrong top-level shape)
    - An empty template at singleton resolution time
    """

    pass


class ConfigNotFoundError(ConfigError, FileNotFoundError):
    """Raised when no candidate path holds the requested file.

    Attributes:
        filename: The filename that was searched for.
        search_path: Directories tried, in order. Empty when the filename
            was absolute.
    """

    def __init__(self, filename: str, search_path: Sequence[str | Path] = ()):
        tried = [str(p) for p in search_path]
        if tried:
            message = f"config file {filename} not found in path ({', '.join(tried)})"
        else:
            message = f"config file {filename} not found"
        super().__init__(message)
        # OSError owns a filename slot; set it after OSError.__init__ runs
        self.filename = filename
        self.search_path = tried

    def __str__(self) -> str:
        return self.args[0]


class ConfigFileInvalidError(ConfigError):
    """Raised when a configuration file cannot be parsed into a mapping.

    Attributes:
        path: The file that failed to parse.
    """

    def __init__(self, path: Path, reason: str):
        self.path = path
        super().__init__(f"invalid config file {path}: {reason}")


class EmptySchemaError(ConfigError):
    """Raised when the singleton is resolved for a class with no template keys."""

    pass


class ReservedKeyConflictError(ConfigSingletonError, ValueError):
    """Raised at class definition when a template key shadows a reserved name."""

    pass


class FilenameConflictError(ConfigSingletonError):
    """Raised when a class's default filename is fixed to a second value.

    Attributes:
        existing: The filename already fixed for the class.
        requested: The filename that was rejected.
    """

    def __init__(self, class_name: str, existing: str, requested: str):
        self.existing = existing
        self.requested = requested
        super().__init__(
            f"{class_name} already configured with {existing!r}; "
            f"can't change default filename to {requested!r}"
        )


class NotConfiguredError(ConfigSingletonError):
    """Raised when a class is used as a client before anyone configured it."""

    pass


class UnknownDirectiveError(ConfigSingletonError, ValueError):
    """Raised for a dash-prefixed argument to use() that is not a directive."""

    pass


class ImportOnInstanceError(ConfigSingletonError, TypeError):
    """Raised when use() is called on a configuration object, not its class."""

    pass


class UnknownSettingError(ConfigSingletonError, KeyError):
    """Raised by get() for a key that is not part of the template."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""
