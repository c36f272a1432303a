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

"""Per-class configuration state and the lazy singleton protocol.

The registry maps each configuration class to its ClassState: the declared
Schema, the default filename once fixed, the cached singleton, and a lock
guarding both.

State Machine
-------------
Each class moves forward only:

    unconfigured --(use(), use(filename), set_default_filename)--> filename_fixed
    filename_fixed --(first setting read, use("-load"))--> loaded
    unconfigured --(first setting read, use("-load"))--> loaded   (filename derived)

- The default filename is fixed at most once. Fixing it again to the same
  value is a no-op; fixing it to another value raises FilenameConflictError.
- The singleton is built at most once per process. Later reads are cache
  hits with no disk access. There is no reload.
- A failed load leaves the singleton unset; the next read tries again.

Directives
----------
use() takes an optional argument. Names starting with "-" are reserved:

- "-load": load the singleton now instead of on first read
- "-client": require that some other code already configured the class

Anything else is a filename to fix as the class default.

Example:
    Driving the registry directly:
        ```python
        from config_singleton.registry import get_registry

        registry = get_registry()
        registry.use(AppConfig, "special.yaml")
        registry.state(AppConfig)            # "filename_fixed"
        registry.resolve_singleton(AppConfig).hostname
        ```
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
import threading
from typing import Any, Literal

from config_singleton.exceptions import (
    EmptySchemaError,
    FilenameConflictError,
    ImportOnInstanceError,
    NotConfiguredError,
    UnknownDirectiveError,
)
from config_singleton.loader import load_yaml_file, merge_data
from config_singleton.locator import find_file_in_path
from config_singleton.logging import get_global_logger
from config_singleton.schema import Schema, class_name_for
from config_singleton.settings import DroppedSetting, ScalarSetting, build_setting
from config_singleton.sources import InstanceSource

__all__ = [
    "CLIENT_DIRECTIVE",
    "LOAD_DIRECTIVE",
    "ClassState",
    "ConfigRegistry",
    "ConfigState",
    "get_registry",
]

ConfigState = Literal["unconfigured", "filename_fixed", "loaded"]

DIRECTIVE_PREFIX = "-"
LOAD_DIRECTIVE = "-load"
CLIENT_DIRECTIVE = "-client"


@dataclass
class ClassState:
    """Mutable per-class state. Only the registry touches it."""

    schema: Schema
    filename: str | None = None
    singleton: Any = None
    lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    @property
    def status(self) -> ConfigState:
        if self.singleton is not None:
            return "loaded"
        if self.filename is not None:
            return "filename_fixed"
        return "unconfigured"


def _inherited_settings(cls: type) -> list[str]:
    """Names that 'cls' would resolve to a base class's setting descriptor."""
    names = []
    seen = set(vars(cls))
    for base in cls.__mro__[1:]:
        for name, attr in vars(base).items():
            if name in seen:
                continue
            seen.add(name)
            if isinstance(attr, ScalarSetting):
                names.append(name)
    return names


class ConfigRegistry:
    """Owns the state of every configuration class, keyed by the class."""

    def __init__(self) -> None:
        self._states: dict[type, ClassState] = {}

    # -------------------------------
    # Setup
    # -------------------------------

    def setup(
        self, cls: type, schema: Schema, reserved: frozenset[str] = frozenset()
    ) -> Schema:
        """Register 'cls' and install one read-only accessor per template key.

        Args:
            cls: The configuration class being defined.
            schema: Its declared schema. A missing name is filled in from
                the class's module and qualified name.
            reserved: Names no template key may use.

        Returns:
            The schema as registered.

        Raises:
            ReservedKeyConflictError: If a template key is reserved.
        """
        schema.validate(reserved)
        if schema.name is None:
            schema = replace(schema, name=class_name_for(cls))

        self._states[cls] = ClassState(schema=schema)
        for key, default in schema.template.items():
            setattr(cls, key, build_setting(key, default))
        for key in _inherited_settings(cls):
            setattr(cls, key, DroppedSetting(key))

        get_global_logger().debug(
            "CONFIG",
            f"Registered {schema.name} with {len(schema.template)} key(s): "
            f"{', '.join(schema.template) or '(none)'}",
        )
        return schema

    def is_registered(self, cls: type) -> bool:
        return cls in self._states

    def _state(self, cls: type) -> ClassState:
        try:
            return self._states[cls]
        except KeyError:
            raise NotConfiguredError(
                f"{cls.__qualname__} has no config template; "
                f"declare one with template={{...}}"
            ) from None

    def schema_for(self, cls: type) -> Schema:
        return self._state(cls).schema

    def state(self, cls: type) -> ConfigState:
        return self._state(cls).status

    # -------------------------------
    # Default filename
    # -------------------------------

    def default_filename(self, cls: type) -> str:
        """Return the fixed default filename, or the one that would be fixed.

        Never fixes the filename itself.
        """
        state = self._state(cls)
        return state.filename or state.schema.default_filename()

    def set_default_filename(self, cls: type, filename: str | Path) -> str:
        """Fix the class's default filename, at most once.

        Returns:
            The fixed filename.

        Raises:
            ValueError: If filename is empty.
            FilenameConflictError: If a different filename is already fixed.
        """
        filename = str(filename)
        if not filename:
            raise ValueError("config filename must not be empty")

        state = self._state(cls)
        with state.lock:
            if state.filename is None:
                state.filename = filename
                get_global_logger().verbose(
                    "CONFIG", f"Default filename for {state.schema.name}: {filename}"
                )
            elif state.filename != filename:
                raise FilenameConflictError(
                    state.schema.name or cls.__qualname__, state.filename, filename
                )
            return state.filename

    def fix_default_filename(self, cls: type) -> str:
        """Fix the declared or derived default filename unless one is fixed."""
        state = self._state(cls)
        with state.lock:
            if state.filename is not None:
                return state.filename
            return self.set_default_filename(cls, state.schema.default_filename())

    # -------------------------------
    # Activation
    # -------------------------------

    def use(self, target: Any, directive: str | Path | None = None) -> Any:
        """Activate a configuration class, optionally with a filename or directive.

        Args:
            target: The configuration class. Passing an object is an error.
            directive: None to fix the default filename, a filename to fix
                instead, "-load" to load now, or "-client" to require prior
                configuration.

        Returns:
            The singleton for "-load"; None otherwise.

        Raises:
            ImportOnInstanceError: If target is not a class.
            NotConfiguredError: For "-client" on an unconfigured class.
            UnknownDirectiveError: For any other "-" argument.
            FilenameConflictError: If a different filename is already fixed.
        """
        if not isinstance(target, type):
            raise ImportOnInstanceError(
                f"use() called on {type(target).__qualname__} object; "
                f"call it on the class"
            )
        cls = target

        if directive is None or directive == "":
            self.fix_default_filename(cls)
            return None

        directive = str(directive)
        if not directive.startswith(DIRECTIVE_PREFIX):
            self.set_default_filename(cls, directive)
            return None

        if directive == LOAD_DIRECTIVE:
            return self.resolve_singleton(cls)
        if directive == CLIENT_DIRECTIVE:
            if self.state(cls) == "unconfigured":
                raise NotConfiguredError(
                    f"{self.schema_for(cls).name} used as a client before "
                    f"anything configured it"
                )
            return None
        raise UnknownDirectiveError(
            f"unknown directive for {self.schema_for(cls).name}: {directive}"
        )

    # -------------------------------
    # Loading
    # -------------------------------

    def load_source(self, cls: type, filename: str | Path | None = None) -> InstanceSource:
        """Find, parse and merge one configuration file for an object of 'cls'.

        Without a filename the class default is used as the basename; it is
        not fixed, and the singleton is neither consulted nor created.

        Raises:
            ConfigNotFoundError: If the file is not on the search path.
            ConfigFileInvalidError: If the file is not a YAML mapping.
        """
        schema = self.schema_for(cls)
        basename = str(filename) if filename else self.default_filename(cls)
        path = find_file_in_path(basename, schema.path)
        config = merge_data(schema.template, load_yaml_file(path))
        return InstanceSource(basename=basename, filename=path, config=config)

    def resolve_singleton(self, cls: type) -> Any:
        """Return the class singleton, loading it on first call.

        Raises:
            EmptySchemaError: If the template declares no keys.
            ConfigNotFoundError: If the file is not on the search path.
            ConfigFileInvalidError: If the file is not a YAML mapping.
        """
        state = self._state(cls)
        singleton = state.singleton
        if singleton is not None:
            return singleton

        with state.lock:
            if state.singleton is None:
                basename = self.fix_default_filename(cls)
                if not state.schema.template:
                    raise EmptySchemaError(
                        f"{state.schema.name} has no config entries; "
                        f"define them in its template"
                    )
                singleton = cls(basename)
                state.singleton = singleton
                get_global_logger().verbose(
                    "CONFIG",
                    f"Loaded singleton for {state.schema.name} "
                    f"from {singleton._source.filename}",
                )
            return state.singleton

    def default_object(self, cls: type) -> Any:
        """Return the singleton if it has been loaded, else None."""
        return self._state(cls).singleton


# Global registry instance
_registry = ConfigRegistry()


def get_registry() -> ConfigRegistry:
    """Get the process-wide registry used by Config subclasses."""
    return _registry
