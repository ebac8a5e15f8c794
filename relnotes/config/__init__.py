"""Configuration module."""

from .settings import (
    Config,
    FilterOptions,
    get_config,
    load_json_config,
    find_config_file,
    create_sample_config,
    compile_pattern,
)

__all__ = [
    "Config",
    "FilterOptions",
    "get_config",
    "load_json_config",
    "find_config_file",
    "create_sample_config",
    "compile_pattern",
]
