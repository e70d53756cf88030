"""
pikegen Configuration Module.

Output, naming and logging options loaded from a JSON or YAML file.
"""

from .config import (
    PikegenConfig,
    OutputConfig,
    NamingConfig,
    LoggingConfig,
    get_config,
    set_config,
    load_config,
    validate_config,
)

__all__ = [
    'PikegenConfig',
    'OutputConfig',
    'NamingConfig',
    'LoggingConfig',
    'get_config',
    'set_config',
    'load_config',
    'validate_config',
]
