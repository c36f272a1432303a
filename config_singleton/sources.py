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

"""Where a setting's value comes from.

Every accessor reads through a ConfigSource. There are two variants:

- InstanceSource: the loaded data of one configuration object (basename,
  resolved path and merged mapping). Immutable once built: nested lists
  are stored as tuples and nested mappings as read-only views.
- SingletonSource: a handle on a configuration class that resolves the
  class-level singleton on first use and reads from its InstanceSource.

Accessed on a class, a setting binds to a SingletonSource; accessed on an
object, it binds to that object's InstanceSource.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Protocol

from config_singleton.exceptions import UnknownSettingError

if TYPE_CHECKING:
    from config_singleton.registry import ConfigRegistry

__all__ = ["ConfigSource", "InstanceSource", "SingletonSource", "freeze_value"]


def freeze_value(value: Any) -> Any:
    """Return a read-only equivalent of a merged value.

    Lists and tuples become tuples, mappings become MappingProxyType views;
    both are frozen recursively. Scalars are returned as they are.
    """
    if isinstance(value, (list, tuple)):
        return tuple(freeze_value(item) for item in value)
    if isinstance(value, Mapping):
        return MappingProxyType({k: freeze_value(v) for k, v in value.items()})
    return value


class ConfigSource(Protocol):
    """Anything that can answer a setting lookup."""

    def get(self, key: str) -> Any:
        """Return the merged value for 'key'.

        Raises:
            UnknownSettingError: If 'key' is not in the template.
        """
        ...

    def as_dict(self) -> dict[str, Any]:
        """Return a shallow copy of the merged configuration."""
        ...


@dataclass(frozen=True)
class InstanceSource:
    """Loaded configuration owned by a single object.

    Attributes:
        basename: Filename the object was asked to load.
        filename: Absolute path the basename resolved to.
        config: Read-only merged mapping of every template key.
    """

    basename: str
    filename: Path
    config: Mapping[str, Any]

    def __post_init__(self) -> None:
        object.__setattr__(self, "config", freeze_value(self.config))

    def get(self, key: str) -> Any:
        try:
            return self.config[key]
        except KeyError:
            raise UnknownSettingError(f"no config entry named {key!r}") from None

    def as_dict(self) -> dict[str, Any]:
        return dict(self.config)


class SingletonSource:
    """Routes lookups to a class's lazily loaded singleton."""

    def __init__(self, registry: ConfigRegistry, cls: type) -> None:
        self._registry = registry
        self._cls = cls

    def _resolve(self) -> InstanceSource:
        return self._registry.resolve_singleton(self._cls)._source

    def get(self, key: str) -> Any:
        return self._resolve().get(key)

    def as_dict(self) -> dict[str, Any]:
        return self._resolve().as_dict()
