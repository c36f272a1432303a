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

"""Schema declaration and default filename derivation.

A Schema is what a configuration class declares once, at definition time:
the template of recognized keys and their defaults, plus optional overrides
for the filename, the search path and the file extension.

Default Filename
----------------
When no filename is declared, one is derived from the class's dotted name:
the final segment is dropped and the remaining dots become underscores, so
"your.thing.Config" has the module base "your_thing". If the environment
variable YOUR_THING_CONFIG_FILE is set and non-empty, its value is the
filename; otherwise it is "your_thing.yaml".
"""

from __future__ import annotations

from collections.abc import Collection, Mapping, Sequence
from dataclasses import dataclass, field
import os
from pathlib import Path
from types import MappingProxyType
from typing import Any

from config_singleton.exceptions import ReservedKeyConflictError

__all__ = [
    "DEFAULT_EXTENSION",
    "Schema",
    "class_name_for",
    "derive_default_filename",
    "is_sequence_default",
    "module_base",
]

DEFAULT_EXTENSION = ".yaml"


@dataclass(frozen=True)
class Schema:
    """Declared configuration of one class.

    Attributes:
        template: Recognized keys mapped to their default values. Defaults
            are scalars, lists of scalars, or None.
        filename: Explicit default filename. Derived from name when None.
        path: Directories to search instead of the default search path. A
            single str or Path is taken as one directory.
        extension: Suffix appended to derived filenames.
        name: Dotted class name used for derivation. The registry fills it
            in from the class when it is not declared.
    """

    template: Mapping[str, Any] = field(default_factory=dict)
    filename: str | None = None
    path: Sequence[str | Path] | None = None
    extension: str = DEFAULT_EXTENSION
    name: str | None = None

    def __post_init__(self) -> None:
        # freeze the caller's dict so later edits can't change the key set
        object.__setattr__(self, "template", MappingProxyType(dict(self.template)))
        if isinstance(self.path, (str, Path)):
            # a single directory, not a sequence of one-character names
            object.__setattr__(self, "path", (self.path,))
        elif self.path is not None:
            object.__setattr__(self, "path", tuple(self.path))

    def validate(self, reserved: Collection[str]) -> None:
        """Reject template keys that would shadow a reserved name.

        Raises:
            ReservedKeyConflictError: For the first offending key.
        """
        for key in self.template:
            if not isinstance(key, str):
                raise ReservedKeyConflictError(
                    f"config entry names must be strings, got {key!r}"
                )
            if key in reserved:
                raise ReservedKeyConflictError(
                    f"can't use reserved name {key!r} as config entry"
                )

    def default_filename(self, environ: Mapping[str, str] | None = None) -> str:
        """Return the declared filename, or derive one from the class name."""
        if self.filename:
            return self.filename
        if not self.name:
            raise ValueError("schema has neither a filename nor a class name")
        return derive_default_filename(self.name, self.extension, environ)


def is_sequence_default(value: Any) -> bool:
    """True when a template default declares a sequence-valued key."""
    return isinstance(value, (list, tuple))


def class_name_for(cls: type) -> str:
    """Return the dotted name used to derive a class's default filename.

    This is the module plus the qualified name. The "<locals>" segments of
    classes defined inside a function are dropped.
    """
    parts = [part for part in cls.__qualname__.split(".") if part != "<locals>"]
    return ".".join([cls.__module__, *parts])


def module_base(class_name: str) -> str:
    """Drop the final dotted segment and join the rest with underscores.

    A name without dots is kept whole.
    """
    base, sep, _last = class_name.rpartition(".")
    if not sep:
        base = class_name
    return base.replace(".", "_")


def derive_default_filename(
    class_name: str,
    extension: str = DEFAULT_EXTENSION,
    environ: Mapping[str, str] | None = None,
) -> str:
    """Derive a class's default config filename.

    Args:
        class_name: Dotted class name (e.g., "myapp.Config").
        extension: Suffix for the derived filename.
        environ: Environment to consult. Defaults to os.environ.

    Returns:
        The value of <BASE>_CONFIG_FILE if set and non-empty, else the
        lowercased base plus extension.

    Example:
        ```python
        derive_default_filename("your.thing.Config")  # "your_thing.yaml"
        derive_default_filename(
            "your.thing.Config", environ={"YOUR_THING_CONFIG_FILE": "/etc/t.yml"}
        )  # "/etc/t.yml"
        ```
    """
    if environ is None:
        environ = os.environ
    base = module_base(class_name)
    return environ.get(f"{base.upper()}_CONFIG_FILE") or f"{base.lower()}{extension}"
