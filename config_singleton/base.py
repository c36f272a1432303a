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

"""The Config base class consumers subclass to declare a configuration.

Declaring a class registers its schema and installs one read-only setting
per template key:

    ```python
    from config_singleton import Config

    class AppConfig(Config, template={
        "username": None,
        "hostname": None,
        "facility": "local1",
        "path": ["/var/spool", "/tmp/jobs"],
    }):
        pass
    ```

Class keywords:
    template: Keys and their defaults (required for a usable class).
    filename: Default filename. Derived from the class name when omitted.
    path: Directories to search instead of the default search path, or a
        single directory.
    extension: Suffix for derived filenames (default ".yaml").
    name: Dotted name to derive the filename from, in place of
        "<module>.<qualname>" (without "<locals>" segments).

A subclass without a template inherits its parent's schema and gets its own
default filename and singleton.

Class-level reads go to the lazily loaded singleton; object-level reads go
to the object's own file:

    ```python
    AppConfig.use("your_program.yaml")   # optional: fix the default file
    AppConfig.hostname                   # loads your_program.yaml once
    AppConfig.path                       # ('/var/spool/jobs', ...)

    other = AppConfig.new("other.yaml")  # independent of the singleton
    other.hostname
    ```
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from dataclasses import replace
import functools
from pathlib import Path
import types
from typing import Any

from config_singleton.registry import ConfigState, get_registry
from config_singleton.schema import DEFAULT_EXTENSION, Schema
from config_singleton.sources import ConfigSource, InstanceSource, SingletonSource

__all__ = ["Config", "RESERVED_NAMES"]


class _hybridmethod:
    """Method that binds to the class or to the object it is called on."""

    def __init__(self, func: Callable[..., Any]) -> None:
        self.func = func
        functools.update_wrapper(self, func)

    def __get__(self, obj: Any, owner: type | None = None) -> Callable[..., Any]:
        return types.MethodType(self.func, owner if obj is None else obj)


def _source_of(target: Any) -> ConfigSource:
    if isinstance(target, type):
        return target._singleton_source()
    return target._source


class Config:
    """Base class for configuration classes.

    Objects hold the configuration loaded from one file. The class itself
    stands for its singleton, loaded on first read.

    Attributes:
        basename: Filename the object was asked to load.
        filename: Absolute path the basename resolved to.
    """

    _source: InstanceSource

    def __init_subclass__(
        cls,
        *,
        template: Mapping[str, Any] | None = None,
        filename: str | None = None,
        path: Sequence[str | Path] | str | Path | None = None,
        extension: str | None = None,
        name: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init_subclass__(**kwargs)
        registry = get_registry()

        if template is not None:
            schema = Schema(
                template=template,
                filename=filename,
                path=path,
                extension=extension or DEFAULT_EXTENSION,
                name=name,
            )
        else:
            parent = next(
                (base for base in cls.__mro__[1:] if registry.is_registered(base)),
                None,
            )
            if parent is None:
                # abstract intermediate class
                return
            overrides: dict[str, Any] = {"name": name}
            if filename is not None:
                overrides["filename"] = filename
            if path is not None:
                overrides["path"] = path
            if extension is not None:
                overrides["extension"] = extension
            schema = replace(registry.schema_for(parent), **overrides)

        registry.setup(cls, schema, reserved=RESERVED_NAMES.union(vars(cls)))

    def __init__(self, filename: str | Path | None = None) -> None:
        self._source = get_registry().load_source(type(self), filename)

    @classmethod
    def new(cls, filename: str | Path | None = None) -> Config:
        """Load an independent configuration object.

        Args:
            filename: File to load. Defaults to the class's default filename,
                which is looked up but not fixed.

        Raises:
            ConfigNotFoundError: If the file is not on the search path.
            ConfigFileInvalidError: If the file is not a YAML mapping.
        """
        return cls(filename)

    @classmethod
    def _singleton_source(cls) -> SingletonSource:
        return SingletonSource(get_registry(), cls)

    @_hybridmethod
    def use(target, directive: str | Path | None = None) -> Any:
        """Activate the class: fix its default filename, or apply a directive.

        See ConfigRegistry.use for the accepted arguments.
        """
        return get_registry().use(target, directive)

    @_hybridmethod
    def get(target, key: str) -> Any:
        """Return the merged value of 'key' (lists come back as tuples)."""
        return _source_of(target).get(key)

    @_hybridmethod
    def as_dict(target) -> dict[str, Any]:
        """Return a copy of the merged configuration."""
        return _source_of(target).as_dict()

    @classmethod
    def schema(cls) -> Schema:
        return get_registry().schema_for(cls)

    @classmethod
    def template(cls) -> Mapping[str, Any]:
        return get_registry().schema_for(cls).template

    @classmethod
    def state(cls) -> ConfigState:
        return get_registry().state(cls)

    @classmethod
    def default_filename(cls) -> str:
        return get_registry().default_filename(cls)

    @classmethod
    def set_default_filename(cls, filename: str | Path) -> str:
        return get_registry().set_default_filename(cls, filename)

    @classmethod
    def default_object(cls) -> Config | None:
        """Return the singleton if it is already loaded; never loads it."""
        return get_registry().default_object(cls)

    @property
    def basename(self) -> str:
        return self._source.basename

    @property
    def filename(self) -> Path:
        return self._source.filename

    def __repr__(self) -> str:
        return f"<{type(self).__qualname__} from {self.filename}>"


RESERVED_NAMES: frozenset[str] = frozenset(dir(Config)) | {"_source"}
