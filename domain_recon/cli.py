"""
domain-recon CLI

Command-line interface for certificate-based subdomain discovery.
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from pydantic import ValidationError

from .config import DEFAULT_MAX_PARALLEL, ReconSettings, load_credentials
from .errors import ReconError
from .recon.domain_discovery import DomainDiscovery
from .schemas import DomainInfo, ResolutionRecord
from .writers import CsvWriter, StdWriter

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def _comma_list(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def parse_args(argv: Optional[List[str]] = None):
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(
        prog='domain-recon',
        description='Discover subdomains from certificate transparency logs',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # crt.sh only, Google DNS
  domain-recon -d example.com

  # Expand wildcard names with a wordlist
  domain-recon -d example.com -f words.txt

  # Several providers, credentials from a config file
  domain-recon -d example.com --certificate-providers crtsh,censys -c config.json

  # Combine resolvers and save to CSV
  domain-recon -d example.com --dns-resolver google,quad9 --csv
        """
    )

    parser.add_argument(
        '-d', '--domain',
        required=True,
        help='Domain name to be scanned'
    )

    parser.add_argument(
        '-f', '--file',
        default=None,
        help='Words file for extending wildcard domains'
    )

    parser.add_argument(
        '-p', '--plain',
        action='store_true',
        help='Display results in plain form'
    )

    parser.add_argument(
        '--csv',
        nargs='?',
        const='result.csv',
        default=None,
        metavar='PATH',
        help='Save output to CSV (default path: result.csv)'
    )

    parser.add_argument(
        '--use-system-resolver',
        action='store_true',
        help='Use the system DNS resolver configuration'
    )

    parser.add_argument(
        '--dns-resolver',
        type=_comma_list,
        default=['google'],
        help='DNS resolvers, comma separated: google, cloudflare, quad9 (default: google)'
    )

    parser.add_argument(
        '--certificate-providers',
        type=_comma_list,
        default=['crtsh'],
        help='Certificate providers, comma separated: crtsh, censys, certspotter (default: crtsh)'
    )

    parser.add_argument(
        '-c', '--config',
        default=None,
        help='JSON file with provider credentials'
    )

    parser.add_argument(
        '-n', '--number-of-parallel-requests',
        type=int,
        default=DEFAULT_MAX_PARALLEL,
        help=f'Maximum parallel DNS lookups (default: {DEFAULT_MAX_PARALLEL})'
    )

    parser.add_argument(
        '-s', '--silent',
        action='store_true',
        help='Only print the resolved names at the end'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Verbose output'
    )

    return parser.parse_args(argv)


def build_settings(args) -> ReconSettings:
    """Turn parsed arguments into run settings"""
    return ReconSettings.build(
        domain=args.domain,
        providers=args.certificate_providers,
        words_file=args.file,
        use_system_resolver=args.use_system_resolver,
        dns_resolvers=args.dns_resolver,
        config_path=args.config,
        max_parallel=args.number_of_parallel_requests,
        plain=args.plain,
    )


def progress_printer(plain: bool):
    """Return a callback printing each resolved record as it arrives"""
    def _print(record: ResolutionRecord) -> None:
        print(DomainInfo.from_record(record).pretty(plain), flush=True)
    return _print


async def recon_command(args) -> List[DomainInfo]:
    """Execute a discovery run"""
    settings = build_settings(args)
    credentials = load_credentials(settings.config_path)

    on_resolved = None if args.silent else progress_printer(settings.plain)
    discovery = DomainDiscovery(settings, credentials=credentials, on_resolved=on_resolved)
    domains = await discovery.run()

    if args.silent:
        StdWriter().write(domains)

    if args.csv:
        CsvWriter(args.csv).write(domains)

    return domains


async def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    args = parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)
    elif args.silent:
        logging.getLogger().setLevel(logging.WARNING)

    try:
        await recon_command(args)
    except ReconError as e:
        logger.error(str(e))
        return 1
    except ValidationError as e:
        logger.error(f"Invalid arguments: {e}")
        return 1

    return 0


def run() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == '__main__':
    run()
