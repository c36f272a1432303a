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

"""YAML loading and template merging.

Merge Behavior
--------------
The template is the full set of recognized keys. For each template key:
  - a file value that is present and not null wins
  - a missing key, or a key explicitly set to null (`~`, `null` or an empty
    value), falls back to the template default
  - keys in the file that the template does not declare are ignored

Only the top level is merged; a file value replaces the default wholesale
(lists are not appended, mappings are not merged key by key). Defaults are
deep-copied so merged configurations never share mutable values with the
template or with each other.

Error Handling
--------------
- ConfigFileInvalidError: YAML syntax errors, undecodable text, or a top
  level that is not a mapping. The parser's exception is chained.
- An empty document is treated as an empty mapping.
"""

from __future__ import annotations

from collections.abc import Mapping
import copy
from pathlib import Path
from typing import Any

import yaml

from config_singleton.exceptions import ConfigFileInvalidError
from config_singleton.logging import get_global_logger

__all__ = ["load_yaml_file", "merge_data"]


def load_yaml_file(p: Path) -> dict[str, Any]:
    """
    Load a YAML configuration file and return its top-level mapping.

    Raises:
      ConfigFileInvalidError - invalid YAML, bad encoding, or non-mapping top level
      OSError                - the file cannot be opened
    """
    logger = get_global_logger()
    logger.debug("LOADER", f"Parsing {p}")

    try:
        with p.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as err:
        raise ConfigFileInvalidError(p, str(err)) from err
    except UnicodeDecodeError as err:
        raise ConfigFileInvalidError(p, f"not valid UTF-8 ({err})") from err

    if data is None:
        logger.verbose("LOADER", f"{p} is empty; using template defaults")
        return {}
    if not isinstance(data, dict):
        raise ConfigFileInvalidError(
            p, f"top-level YAML must be a mapping, got {type(data).__name__}"
        )
    return data


def merge_data(
    template: Mapping[str, Any], override: Mapping[str, Any] | None
) -> dict[str, Any]:
    """
    Merge file data over a template of defaults.

    Every template key appears in the result. A key counts as overridden only
    when the file has it with a non-null value; null in the file means "use
    the default". Keys only present in the file are dropped.

    This function does not mutate inputs; returns a new dict.
    """
    override = override or {}
    merged: dict[str, Any] = {}
    for key, default in template.items():
        value = override.get(key)
        merged[key] = value if value is not None else copy.deepcopy(default)
    return merged
