#!/usr/bin/env python3
"""
Common utilities for the ClamAV signature check
"""

import subprocess
import logging
import re
from pathlib import Path
from typing import Optional, List, Union
import json

logger = logging.getLogger(__name__)

NUMERIC_PATTERN = re.compile(r'[0-9]+')


def run_command(cmd: List[str], timeout: int = 30) -> Optional[subprocess.CompletedProcess]:
    """
    Run a system command with a timeout.

    Args:
        cmd: Command and arguments
        timeout: Timeout in seconds

    Returns:
        CompletedProcess object or None on error
    """
    try:
        return subprocess.run(cmd, capture_output=True, text=True, timeout=timeout)
    except subprocess.TimeoutExpired:
        logger.error(f"Command timed out after {timeout}s: {cmd}")
        return None
    except FileNotFoundError:
        logger.error(f"Command not found: {cmd}")
        return None
    except OSError as e:
        logger.error(f"Unexpected error running command {cmd}: {e}")
        return None


def is_regular_file(path: Path) -> bool:
    """is_file() that reports unreadable paths as missing"""
    try:
        return path.is_file()
    except OSError as e:
        logger.debug(f"Cannot stat {path}: {e}")
        return False


def is_directory(path: Path) -> bool:
    """is_dir() that reports unreadable paths as missing"""
    try:
        return path.is_dir()
    except OSError as e:
        logger.debug(f"Cannot stat {path}: {e}")
        return False


def command_exists(name: str) -> bool:
    """
    Check whether an external tool is available in PATH.

    Args:
        name: Executable name

    Returns:
        True if the tool can be invoked
    """
    result = run_command(['which', name], timeout=5)
    if result and result.returncode == 0 and result.stdout.strip():
        logger.debug(f'{name} found in PATH: {result.stdout.strip()}')
        return True
    return False


def is_numeric(value: Optional[str]) -> bool:
    """True if value consists of ASCII digits only (and is not empty)"""
    if value is None:
        return False
    return NUMERIC_PATTERN.fullmatch(value) is not None


def extract_field(text: str, name: str) -> str:
    """
    Extract the value of a "Name: value" line from tool output.

    Args:
        text: Output to search
        name: Field name (case-sensitive)

    Returns:
        Stripped value of the first matching line, or empty string
    """
    match = re.search(rf'^{re.escape(name)}:[ \t]*(.*)$', text or '', re.MULTILINE)
    if not match:
        return ''
    return match.group(1).strip()


def load_json_file(filepath: Union[str, Path]) -> Optional[dict]:
    """
    Load JSON file safely.

    Args:
        filepath: Path to JSON file

    Returns:
        Dictionary or None on error
    """
    try:
        with open(filepath, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except FileNotFoundError:
        logger.warning(f"JSON file not found: {filepath}")
        return None
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in {filepath}: {e}")
        return None
    except OSError as e:
        logger.error(f"Error loading JSON {filepath}: {e}")
        return None

    if not isinstance(data, dict):
        logger.error(f"Expected a JSON object in {filepath}")
        return None
    return data
