"""
config_singleton - one place for your app's configuration

Declare a configuration class with a template of keys and defaults. The
library finds a YAML file on a search path, merges it over the defaults and
exposes each key as a read-only setting, on the class (a lazily loaded
singleton) and on independently loaded objects.

Quick Start
-----------
    from config_singleton import Config

    class AppConfig(Config, template={
        "hostname": "localhost",
        "username": None,
        "charset": "ISO-8859-1",
    }, name="myapp.Config"):
        pass

    AppConfig.use()          # fix the default file (myapp.yaml or $MYAPP_CONFIG_FILE)
    AppConfig.hostname       # first read finds, parses and caches the file

Package Structure
-----------------
base : module
    Config base class and the class-keyword setup.
registry : module
    Per-class state machine, directives and singleton cache.
locator : module
    Default search path and file lookup.
loader : module
    YAML parsing and template merging.
schema : module
    Schema declaration and default filename derivation.
settings : module
    Scalar and sequence setting descriptors.
sources : module
    Singleton and instance configuration sources.
exceptions : module
    Exception hierarchy.
logging : module
    Verbose/debug logger protocol.

Project Information
-------------------
License: Apache-2.0
"""

__version__ = "0.2.0"
__license__ = "Apache-2.0"
__description__ = "Lazy singleton YAML configuration classes"

from config_singleton.base import Config
from config_singleton.exceptions import (
    ConfigError,
    ConfigFileInvalidError,
    ConfigNotFoundError,
    ConfigSingletonError,
    EmptySchemaError,
    FilenameConflictError,
    ImportOnInstanceError,
    NotConfiguredError,
    ReservedKeyConflictError,
    UnknownDirectiveError,
    UnknownSettingError,
)
from config_singleton.locator import default_search_path, find_file_in_path
from config_singleton.schema import Schema, derive_default_filename

__all__ = [
    "__version__",
    "__license__",
    "__description__",
    "Config",
    "Schema",
    "derive_default_filename",
    "default_search_path",
    "find_file_in_path",
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
