#!/usr/bin/env python3
"""
Check configuration - defaults, optional JSON file and command line overrides
"""

import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Union

from utils.common import load_json_file

logger = logging.getLogger(__name__)

DEFAULT_SIGNATURE_DIR = '/var/lib/clamav'
DEFAULT_TIMEOUT = 30


class ConfigError(ValueError):
    """Raised when a configuration file or value cannot be used."""


@dataclass(frozen=True)
class CheckConfig:
    """
    Immutable settings for one check run.

    Attributes:
        path: Directory holding the installed signature databases
        critical: Daily delta above which the check is CRITICAL
        warning: Daily delta above which the check is WARNING
        timeout: Seconds allowed for each external call
    """
    path: str = DEFAULT_SIGNATURE_DIR
    critical: int = 0
    warning: int = 0
    timeout: int = DEFAULT_TIMEOUT

    def __post_init__(self):
        for name in ('critical', 'warning'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ConfigError(f"Invalid configuration: {name} must be a non-negative integer, got {value!r}")
        if isinstance(self.timeout, bool) or not isinstance(self.timeout, int) or self.timeout <= 0:
            raise ConfigError(f"Invalid configuration: timeout must be a positive integer, got {self.timeout!r}")
        if not isinstance(self.path, str) or not self.path:
            raise ConfigError(f"Invalid configuration: path must be a non-empty string, got {self.path!r}")

    @property
    def signature_dir(self) -> Path:
        return Path(self.path)

    def merged(self, overrides: Dict[str, Any]) -> 'CheckConfig':
        """
        Return a copy with the given settings replaced.

        Keys with a None value are ignored so unset command line flags
        keep the current value. Unknown keys are logged and dropped.
        """
        known = {f.name for f in fields(self)}
        changes = {}
        for key, value in overrides.items():
            if value is None:
                continue
            if key not in known:
                logger.warning(f"Ignoring unknown configuration key: {key}")
                continue
            changes[key] = value
        return replace(self, **changes)


def load_config(config_path: Optional[Union[str, Path]] = None, **overrides) -> CheckConfig:
    """
    Build the check configuration.

    Precedence is defaults, then the JSON config file (if given), then
    keyword overrides from the command line.

    Args:
        config_path: Optional path to a JSON config file
        **overrides: Values from command line flags (None means unset)

    Returns:
        CheckConfig instance

    Raises:
        ConfigError: If the file cannot be loaded or a value is invalid
    """
    config = CheckConfig()

    if config_path is not None:
        data = load_json_file(config_path)
        if data is None:
            raise ConfigError(f"Unable to load configuration file {config_path}")
        logger.debug(f"Loaded configuration from {config_path}: {data}")
        config = config.merged(data)

    return config.merged(overrides)
