#!/usr/bin/env python3
"""
Base checker class for single-result monitoring checks
"""

from abc import ABC, abstractmethod
import logging

from utils.config import CheckConfig
from utils.severity import CheckResult, SeverityLevel

logger = logging.getLogger(__name__)


class CheckError(Exception):
    """
    Raised inside a check when a precondition fails.

    The message becomes the text of the UNKNOWN result.
    """


class BaseChecker(ABC):
    """
    Abstract base class for checks that produce exactly one result.

    Subclasses implement evaluate(). Any CheckError raised while
    evaluating short-circuits the run into an UNKNOWN result.
    """

    def __init__(self, config: CheckConfig):
        """
        Initialize the checker.

        Args:
            config: Immutable check configuration
        """
        self.config = config
        self.category = self.__class__.__name__.replace('Checker', '')

    @abstractmethod
    def evaluate(self) -> CheckResult:
        """
        Perform the check.

        Returns:
            CheckResult for a completed evaluation

        Raises:
            CheckError: If a precondition is not met
        """

    def run(self) -> CheckResult:
        """
        Run the check, turning precondition failures into UNKNOWN.

        Returns:
            CheckResult object
        """
        try:
            result = self.evaluate()
        except CheckError as e:
            logger.debug(f"{self.category} check aborted: {e}")
            return self.unknown(str(e))
        logger.debug(f"{self.category} check finished with {result.status.value}")
        return result

    def result(self, status: SeverityLevel, message: str, details: dict = None) -> CheckResult:
        """
        Build a check result.

        Args:
            status: SeverityLevel enum
            message: Human-readable message
            details: Additional details dictionary

        Returns:
            The created CheckResult
        """
        if details is None:
            details = {}
        return CheckResult(status=status, message=message, details=details)

    def unknown(self, message: str, details: dict = None) -> CheckResult:
        """Convenience method for an UNKNOWN result"""
        return self.result(SeverityLevel.UNKNOWN, message, details)
