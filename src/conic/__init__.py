"""conic: load, bind, save and watch a JSON/YAML/TOML configuration file."""

from .adapters import Adapter, JsonAdapter, YamlAdapter, TomlAdapter, get_adapter, register_adapter, supported_formats
from .bindings import Binding, BindingRegistry
from .bridge import Bindable, Ref
from .controller import Conic, ConicState, SubConic
from .errors import (
    ConicError, UnsupportedFormatError, MissingSourceError, ConfigReadError,
    ConfigWriteError, ConfigEncodeError, ConfigFileAlreadyExistsError,
    BindingError, ConfigKeyError
)
from .logging import setup_logging, setup_logging_from_config, get_logger
from .logging_config import LoggingConfig
from .paths import split_path, navigate, lookup, deep_merge
from .settings import ConicSettings
from .source import ConfigSource, RegularFile, default_search_paths, find_config_file

__version__ = "0.1.0"

__all__ = [
    'Conic',
    'ConicState',
    'SubConic',
    'ConicSettings',
    'Adapter',
    'JsonAdapter',
    'YamlAdapter',
    'TomlAdapter',
    'get_adapter',
    'register_adapter',
    'supported_formats',
    'Binding',
    'BindingRegistry',
    'Bindable',
    'Ref',
    'ConfigSource',
    'RegularFile',
    'default_search_paths',
    'find_config_file',
    'split_path',
    'navigate',
    'lookup',
    'deep_merge',
    'LoggingConfig',
    'setup_logging',
    'setup_logging_from_config',
    'get_logger',
    'ConicError',
    'UnsupportedFormatError',
    'MissingSourceError',
    'ConfigReadError',
    'ConfigWriteError',
    'ConfigEncodeError',
    'ConfigFileAlreadyExistsError',
    'BindingError',
    'ConfigKeyError',
]
