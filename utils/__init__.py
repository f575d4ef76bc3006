"""Utils package for the ClamAV signature check"""
from .common import (
    run_command,
    command_exists,
    is_numeric,
    extract_field,
    load_json_file
)
from .severity import (
    SeverityLevel,
    CheckResult,
    classify_delta
)
from .config import (
    CheckConfig,
    ConfigError,
    load_config
)
from .base_checker import BaseChecker, CheckError

__all__ = [
    'run_command',
    'command_exists',
    'is_numeric',
    'extract_field',
    'load_json_file',
    'SeverityLevel',
    'CheckResult',
    'classify_delta',
    'CheckConfig',
    'ConfigError',
    'load_config',
    'BaseChecker',
    'CheckError'
]
