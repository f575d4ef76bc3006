#!/usr/bin/env python3
"""
Severity levels and classification for the signature freshness check
"""

from enum import Enum
from typing import Dict, Any
from dataclasses import dataclass, field


class SeverityLevel(Enum):
    """Severity levels following the monitoring plugin convention"""
    OK = "OK"
    WARNING = "WARNING"
    CRITICAL = "CRITICAL"
    UNKNOWN = "UNKNOWN"

    @property
    def exit_code(self) -> int:
        """Process exit code expected by the monitoring caller"""
        return _EXIT_CODES[self]


_EXIT_CODES = {
    SeverityLevel.OK: 0,
    SeverityLevel.WARNING: 1,
    SeverityLevel.CRITICAL: 2,
    SeverityLevel.UNKNOWN: 3,
}


@dataclass
class CheckResult:
    """
    Outcome of a single check run
    """
    status: SeverityLevel
    message: str
    details: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization"""
        return {
            'status': self.status.value,
            'message': self.message,
            'details': self.details,
        }

    def format_line(self) -> str:
        """Single status line written to stdout"""
        return f"{self.status.value}: {self.message}"

    @property
    def exit_code(self) -> int:
        return self.status.exit_code


def classify_delta(main_delta: int, daily_delta: int, critical: int = 0, warning: int = 0) -> SeverityLevel:
    """
    Classify the version gap between installed and published signatures.

    Any main version gap is critical regardless of thresholds. The daily gap
    is compared against the critical threshold first, then the warning one.

    Args:
        main_delta: Published main version minus installed main version
        daily_delta: Published daily version minus installed daily version
        critical: Daily delta above which the status is CRITICAL
        warning: Daily delta above which the status is WARNING

    Returns:
        SeverityLevel enum
    """
    if main_delta > 0:
        return SeverityLevel.CRITICAL
    elif daily_delta > critical:
        return SeverityLevel.CRITICAL
    elif daily_delta > warning:
        return SeverityLevel.WARNING
    else:
        return SeverityLevel.OK
