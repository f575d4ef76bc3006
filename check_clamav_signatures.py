#!/usr/bin/env python3
"""
check_clamav_signatures - Monitoring plugin for ClamAV signature freshness

Reports whether the installed daily and main signature databases are
current, using the OK/WARNING/CRITICAL/UNKNOWN plugin convention.
"""

import sys
import argparse
import logging
from pathlib import Path
from typing import List, Optional

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent))

from utils import CheckConfig, ConfigError, SeverityLevel, load_config
from utils.config import DEFAULT_SIGNATURE_DIR
from checks.clamav_signatures import SignatureFreshnessChecker

__version__ = '1.0.0'

PROG = './check_clamav_signatures'

logger = logging.getLogger('check_clamav_signatures')


def setup_logging(verbose: bool = False, log_file: str = None):
    """Setup logging configuration (stderr only, stdout carries the status line)"""
    level = logging.DEBUG if verbose else logging.WARNING

    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=handlers
    )


def non_negative_int(value: str) -> int:
    """argparse type for delta thresholds"""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"must be a non-negative integer: {value!r}")
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be a non-negative integer: {value!r}")
    return number


def positive_int(value: str) -> int:
    """argparse type for timeouts"""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"must be a positive integer: {value!r}")
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer: {value!r}")
    return number


class UsageFormatter(argparse.RawDescriptionHelpFormatter):
    """Help formatter printing "Usage:" instead of argparse's "usage:" """

    def add_usage(self, usage, actions, groups, prefix=None):
        if prefix is None:
            prefix = 'Usage: '
        return super().add_usage(usage, actions, groups, prefix)


class PluginArgumentParser(argparse.ArgumentParser):
    """Argument parser that reports errors as UNKNOWN with exit code 3"""

    def error(self, message: str):
        self.exit_unknown(message)

    def exit_unknown(self, message: str):
        sys.stderr.write(f"{SeverityLevel.UNKNOWN.value}: {message}\n")
        self.print_usage(sys.stderr)
        sys.exit(SeverityLevel.UNKNOWN.exit_code)


def build_parser() -> PluginArgumentParser:
    parser = PluginArgumentParser(
        prog=PROG,
        description='Check whether the installed ClamAV signatures are up to date.',
        formatter_class=UsageFormatter,
        allow_abbrev=False,
        epilog='''
Examples:
  %(prog)s                          # Check signatures in the default directory
  %(prog)s -p /opt/clamav/db        # Use another signature directory
  %(prog)s -w 1 -c 3                # Warn above 1, critical above 3 daily versions behind
  %(prog)s --config check.json      # Read settings from a JSON file
        '''
    )

    parser.add_argument(
        '-p', '--path',
        metavar='DIR',
        help=f'Signature directory (default: {DEFAULT_SIGNATURE_DIR})'
    )

    parser.add_argument(
        '-c', '--critical',
        metavar='N',
        type=non_negative_int,
        help='Daily versions behind before CRITICAL (default: 0)'
    )

    parser.add_argument(
        '-w', '--warning',
        metavar='N',
        type=non_negative_int,
        help='Daily versions behind before WARNING (default: 0)'
    )

    parser.add_argument(
        '-t', '--timeout',
        metavar='SECONDS',
        type=positive_int,
        help='Timeout for sigtool and the DNS lookup (default: 30)'
    )

    parser.add_argument(
        '--config',
        metavar='FILE',
        help='JSON file with path, critical, warning and timeout settings'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Verbose logging output on stderr'
    )

    parser.add_argument(
        '--log-file',
        help='Save logs to file'
    )

    parser.add_argument(
        '-V', '--version',
        action='version',
        version=f'check_clamav_signatures {__version__}'
    )

    return parser


def parse_arguments(argv: List[str]) -> argparse.Namespace:
    """
    Parse command line arguments.

    Unrecognised arguments terminate the process with UNKNOWN (exit 3)
    before any check is performed.
    """
    parser = build_parser()
    args, unknown = parser.parse_known_args(argv)
    if unknown:
        parser.exit_unknown(f"Unrecognised argument: {unknown[0]}")
    return args


def build_config(args: argparse.Namespace) -> CheckConfig:
    """Combine defaults, config file and command line flags"""
    return load_config(
        args.config,
        path=args.path,
        critical=args.critical,
        warning=args.warning,
        timeout=args.timeout
    )


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    if argv is None:
        argv = sys.argv[1:]

    args = parse_arguments(argv)

    try:
        setup_logging(args.verbose, args.log_file)
    except OSError as e:
        print(f"{SeverityLevel.UNKNOWN.value}: Unable to open log file {args.log_file}")
        sys.stderr.write(f"{e}\n")
        return SeverityLevel.UNKNOWN.exit_code

    try:
        config = build_config(args)
    except ConfigError as e:
        print(f"{SeverityLevel.UNKNOWN.value}: {e}")
        return SeverityLevel.UNKNOWN.exit_code

    logger.debug(f"Running with {config}")

    checker = SignatureFreshnessChecker(config)
    result = checker.run()
    logger.debug(f"Check result: {result.to_dict()}")

    print(result.format_line())
    return result.exit_code


if __name__ == '__main__':
    sys.exit(main())
