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

"""Read-only accessors installed on configuration classes.

One descriptor is installed per template key when the class is defined. The
descriptor type is picked from the shape of the key's default:

- ScalarSetting: the default is a scalar or None; returns the merged value.
- SequenceSetting: the default is a list or tuple; returns the merged
  value's elements as a tuple.

A subclass with its own template shadows inherited keys it does not declare
with a DroppedSetting.

Read on the class (`AppConfig.hostname`) a setting resolves the class
singleton. Read on an object (`AppConfig.new("other.yaml").hostname`) it
returns that object's own value.
"""

from __future__ import annotations

from typing import Any

from config_singleton.schema import is_sequence_default

__all__ = ["DroppedSetting", "ScalarSetting", "SequenceSetting", "build_setting"]


class ScalarSetting:
    """Descriptor returning a setting's merged value unchanged."""

    def __init__(self, key: str, default: Any = None) -> None:
        self.key = key
        self.default = default

    def __get__(self, obj: Any, owner: type | None = None) -> Any:
        if owner is None:
            owner = type(obj)
        source = owner._singleton_source() if obj is None else obj._source
        return self.convert(source.get(self.key))

    def __set__(self, obj: Any, value: Any) -> None:
        raise AttributeError(f"config entry {self.key!r} is read-only")

    def __delete__(self, obj: Any) -> None:
        raise AttributeError(f"config entry {self.key!r} is read-only")

    def convert(self, value: Any) -> Any:
        return value

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.key!r}, default={self.default!r})"


class SequenceSetting(ScalarSetting):
    """Descriptor returning a sequence setting as a tuple of its elements.

    A file may put a single scalar where a list is expected; it comes back
    as a one-element tuple. None comes back as an empty tuple.
    """

    def convert(self, value: Any) -> tuple[Any, ...]:
        if value is None:
            return ()
        if isinstance(value, (list, tuple)):
            return tuple(value)
        return (value,)


def build_setting(key: str, default: Any) -> ScalarSetting:
    """Pick the accessor shape for 'key' from its template default."""
    if is_sequence_default(default):
        return SequenceSetting(key, default)
    return ScalarSetting(key, default)


class DroppedSetting:
    """Hides an inherited setting whose key a subclass's template omits.

    Reads behave like a missing attribute, so hasattr() is False on both
    the class and its objects.
    """

    def __init__(self, key: str) -> None:
        self.key = key

    def __get__(self, obj: Any, owner: type | None = None) -> Any:
        if owner is None:
            owner = type(obj)
        raise AttributeError(
            f"{owner.__qualname__!r} has no config entry {self.key!r}"
        )

    def __set__(self, obj: Any, value: Any) -> None:
        raise AttributeError(f"config entry {self.key!r} is not defined")

    def __delete__(self, obj: Any) -> None:
        raise AttributeError(f"config entry {self.key!r} is not defined")
