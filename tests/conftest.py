"""Shared fixtures for the ClamAV signature check tests"""

from pathlib import Path

import pytest

from checks.clamav_signatures import PublishedVersionError
from utils.config import CheckConfig


class FakeVersionReader:
    """Version reader returning canned values keyed by file name"""

    dependencies = ()

    def __init__(self, versions):
        self.versions = versions
        self.calls = []

    def read_version(self, path: Path) -> str:
        self.calls.append(path.name)
        return self.versions.get(path.name, '')


class FakeVersionSource:
    """Published version source returning a fixed record or failing"""

    hostname = 'current.cvd.clamav.net'
    dependencies = ()

    def __init__(self, record=None, error=False):
        self.record = record
        self.error = error
        self.calls = 0

    def fetch_record(self) -> str:
        self.calls += 1
        if self.error:
            raise PublishedVersionError('SERVFAIL')
        return self.record


def make_record(daily, main):
    return f'0.103.8:{main}:{daily}:1697543940:1:90:49192:334'


@pytest.fixture
def signature_dir(tmp_path):
    """Signature directory with daily.cld and main.cvd present"""
    (tmp_path / 'daily.cld').write_bytes(b'daily')
    (tmp_path / 'main.cvd').write_bytes(b'main')
    return tmp_path


@pytest.fixture
def config(signature_dir):
    return CheckConfig(path=str(signature_dir))


@pytest.fixture
def make_checker(config):
    """Factory building a checker wired to fake collaborators"""
    from checks.clamav_signatures import SignatureFreshnessChecker

    def _make(installed=None, record=None, dns_error=False, check_config=None):
        if installed is None:
            installed = {'daily.cld': '23538', 'main.cvd': '58'}
        if record is None:
            record = make_record(23538, 58)
        reader = FakeVersionReader(installed)
        source = FakeVersionSource(record, error=dns_error)
        return SignatureFreshnessChecker(
            check_config or config,
            version_reader=reader,
            version_source=source
        )

    return _make
