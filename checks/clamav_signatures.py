#!/usr/bin/env python3
"""
ClamAV Signature Freshness Checker

Compares the installed daily and main signature versions against the
versions published in the current.cvd.clamav.net TXT record.
"""

import logging
from pathlib import Path
from typing import Optional, Sequence, Tuple

import dns.exception
import dns.resolver

from utils import common
from utils.base_checker import BaseChecker, CheckError
from utils.config import CheckConfig
from utils.severity import CheckResult, SeverityLevel, classify_delta

logger = logging.getLogger(__name__)

CURRENT_VERSION_HOST = 'current.cvd.clamav.net'

# First existing file wins. The order differs between the two kinds.
DAILY_CANDIDATES = ('daily.cld', 'daily.cvd')
MAIN_CANDIDATES = ('main.cvd', 'main.cld')

# 0-indexed positions in the colon-delimited TXT payload
MAIN_FIELD = 1
DAILY_FIELD = 2


class PublishedVersionError(Exception):
    """Raised when the published versions cannot be fetched."""


class SigtoolVersionReader:
    """Read the embedded version of a signature database with sigtool"""

    dependencies = ('sigtool',)

    def __init__(self, timeout: int = 30):
        self.timeout = timeout

    def read_version(self, path: Path) -> str:
        """
        Return the "Version" field reported by `sigtool --info`.

        Tool failures give an empty string; the caller validates the value.
        """
        result = common.run_command(['sigtool', '--info', str(path)], timeout=self.timeout)
        if not result:
            return ''
        if result.returncode != 0:
            logger.debug(f"sigtool exited with {result.returncode} for {path}: {result.stderr.strip()}")
            return ''
        return common.extract_field(result.stdout, 'Version')


class DnsTxtVersionSource:
    """Fetch the published signature versions from a DNS TXT record"""

    dependencies = ()

    def __init__(self, hostname: str = CURRENT_VERSION_HOST, timeout: int = 30):
        self.hostname = hostname
        self.timeout = timeout

    def fetch_record(self) -> str:
        """
        Query the TXT record and return its text.

        Raises:
            PublishedVersionError: If the query fails or returns nothing
        """
        try:
            resolver = dns.resolver.Resolver()
            resolver.timeout = self.timeout
            resolver.lifetime = self.timeout
            answers = resolver.resolve(self.hostname, 'TXT')
        except dns.exception.DNSException as e:
            logger.debug(f"TXT lookup for {self.hostname} failed: {e!r}")
            raise PublishedVersionError(str(e)) from e

        for rdata in answers:
            txt = b''.join(rdata.strings).decode('ascii', errors='replace')
            logger.debug(f"TXT record for {self.hostname}: {txt}")
            return txt

        raise PublishedVersionError(f"No TXT record for {self.hostname}")


def resolve_artifact(directory: Path, candidates: Sequence[str]) -> Optional[Path]:
    """
    Return the first candidate file that exists in directory.

    Args:
        directory: Signature directory
        candidates: File names in order of preference

    Returns:
        Path of the chosen file or None
    """
    for name in candidates:
        path = directory / name
        if common.is_regular_file(path):
            return path
    return None


def parse_published_versions(record: str) -> Tuple[str, str]:
    """
    Split the TXT payload into raw (daily, main) version fields.

    Missing fields come back as empty strings.
    """
    parts = record.strip().strip('"').split(':')

    def field(index: int) -> str:
        return parts[index].strip() if index < len(parts) else ''

    return field(DAILY_FIELD), field(MAIN_FIELD)


class SignatureFreshnessChecker(BaseChecker):
    """Check that the installed ClamAV signatures are current"""

    def __init__(self, config: CheckConfig, version_reader=None, version_source=None):
        super().__init__(config)
        self.version_reader = version_reader or SigtoolVersionReader(timeout=config.timeout)
        self.version_source = version_source or DnsTxtVersionSource(timeout=config.timeout)

    def evaluate(self) -> CheckResult:
        self.check_dependencies()

        directory = self.config.signature_dir
        if not common.is_directory(directory):
            raise CheckError('Unable to locate ClamAV lib directory')

        daily_path = resolve_artifact(directory, DAILY_CANDIDATES)
        if daily_path is None:
            raise CheckError('Unable to locate installed daily signatures')

        main_path = resolve_artifact(directory, MAIN_CANDIDATES)
        if main_path is None:
            raise CheckError('Unable to locate installed main signatures')

        installed_daily = self.installed_version(daily_path, 'daily')
        installed_main = self.installed_version(main_path, 'main')

        current_daily, current_main = self.published_versions()

        daily_delta = current_daily - installed_daily
        main_delta = current_main - installed_main

        status = classify_delta(
            main_delta,
            daily_delta,
            critical=self.config.critical,
            warning=self.config.warning
        )

        summary = 'Signatures up to date' if status == SeverityLevel.OK else 'Signatures expired'
        message = (
            f"{summary}; daily version: {installed_daily} ({daily_delta} behind), "
            f"main version: {installed_main} ({main_delta} behind)"
        )
        details = {
            'daily_path': str(daily_path),
            'main_path': str(main_path),
            'installed_daily': installed_daily,
            'installed_main': installed_main,
            'current_daily': current_daily,
            'current_main': current_main,
            'daily_delta': daily_delta,
            'main_delta': main_delta,
        }
        return self.result(status, message, details)

    def check_dependencies(self):
        """Ensure every external tool used by the collaborators is invocable"""
        for collaborator in (self.version_reader, self.version_source):
            for name in getattr(collaborator, 'dependencies', ()):
                if not common.command_exists(name):
                    raise CheckError(f'Missing dependency: {name}')

    def installed_version(self, path: Path, kind: str) -> int:
        """Read and validate the version of an installed signature file"""
        version = self.version_reader.read_version(path)
        logger.debug(f"Installed {kind} signatures {path}: version {version!r}")
        if not common.is_numeric(version):
            raise CheckError(f'Unable to establish installed {kind} signatures version')
        return int(version)

    def published_versions(self) -> Tuple[int, int]:
        """Return the published (daily, main) versions"""
        try:
            record = self.version_source.fetch_record()
        except PublishedVersionError:
            hostname = getattr(self.version_source, 'hostname', CURRENT_VERSION_HOST)
            raise CheckError(f'DNS query to {hostname} failed')

        daily, main = parse_published_versions(record)
        if not common.is_numeric(daily):
            raise CheckError('Unable to establish current daily signatures version from DNS query')
        if not common.is_numeric(main):
            raise CheckError('Unable to establish current main signatures version from DNS query')
        return int(daily), int(main)
