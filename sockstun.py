#!/usr/bin/env python3
"""sockstun - route all traffic through a SOCKS5 proxy via tun2socks.

Main entry point for the sockstun command-line tool.
"""

import argparse
import asyncio
import shutil
import sys
import traceback
from pathlib import Path

import config
from config import ExitCode
from display import format_report
from exceptions import ProxyConfigError
from export import export_to_json
from logging_config import get_logger, setup_logging
from models import ProxyEndpoint
from orchestrator import check_dependencies, run_tunnel
from utils import detect_platform, sanitize_for_log


def parse_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed arguments namespace.

    Exits:
        Code 4 if invalid argument combinations.
    """
    parser = argparse.ArgumentParser(
        description="Route all traffic through a SOCKS5 proxy using tun2socks",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  sudo sockstun --proxy 203.0.113.5:1080
  sudo sockstun --proxy 203.0.113.5:1080:alice:secret
  sudo sockstun --host 203.0.113.5 --username alice --password secret
  sudo sockstun --proxy 203.0.113.5 --tun2socks ./tun2socks -v
  sudo sockstun --proxy 203.0.113.5 --report run.json --check-egress

Exit codes:
  0 - Tunnel ran (stopped by user or tun2socks exited)
  1 - Tunnel did not run
  4 - Invalid arguments
        """,
    )

    parser.add_argument(
        "--proxy",
        metavar="HOST:PORT[:USER[:PASS]]",
        help="Proxy settings in one string (port defaults to 1080)",
    )
    parser.add_argument("--host", help="Proxy host")
    parser.add_argument("--port", help="Proxy port (default: 1080)")
    parser.add_argument("--username", help="Proxy username")
    parser.add_argument("--password", help="Proxy password")

    parser.add_argument(
        "--tun2socks",
        metavar="PATH",
        help="Path to the tun2socks executable (default: search PATH)",
    )

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    verbosity.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Only log warnings and errors",
    )

    parser.add_argument(
        "--log-file",
        type=Path,
        metavar="PATH",
        help="Write logs to file",
    )
    parser.add_argument(
        "--report",
        type=Path,
        metavar="PATH",
        help="Write the run report as JSON",
    )
    parser.add_argument(
        "--check-egress",
        action="store_true",
        help="Query the public IP once the tunnel is running",
    )
    parser.add_argument(
        "--readiness-timeout",
        type=float,
        default=config.READINESS_TIMEOUT_SECONDS,
        metavar="SECONDS",
        help="Max wait for the virtual interface on Windows/macOS (default: %(default)s)",
    )

    args = parser.parse_args(argv)

    # Validation: exactly one way of giving the proxy
    if args.proxy and args.host:
        print("Error: use either --proxy or --host, not both", file=sys.stderr)
        sys.exit(ExitCode.INVALID_ARGUMENTS)

    if not args.proxy and not args.host:
        print("Error: --proxy or --host is required", file=sys.stderr)
        sys.exit(ExitCode.INVALID_ARGUMENTS)

    if args.proxy and (args.port or args.username or args.password):
        print("Error: --port/--username/--password require --host", file=sys.stderr)
        sys.exit(ExitCode.INVALID_ARGUMENTS)

    if args.readiness_timeout < 0:
        print("Error: --readiness-timeout must not be negative", file=sys.stderr)
        sys.exit(ExitCode.INVALID_ARGUMENTS)

    return args


def build_proxy(args: argparse.Namespace) -> ProxyEndpoint:
    """Build the proxy endpoint from parsed arguments.

    Raises:
        ProxyConfigError: If the proxy host is missing.
    """
    if args.proxy:
        return ProxyEndpoint.from_string(args.proxy)

    host = (args.host or "").strip()
    if not host:
        raise ProxyConfigError("Proxy host is required")

    return ProxyEndpoint(
        host=host,
        port=ProxyEndpoint.coerce_port(args.port),
        username=args.username or None,
        password=args.password or None,
    )


def resolve_executable(path: str | None) -> str | None:
    """Locate tun2socks: explicit path, else search PATH."""
    if path:
        return path
    return shutil.which(config.TUN2SOCKS_BINARY)


def main(argv: list[str] | None = None) -> None:
    """Main execution flow.

    Exit codes:
        0: Tunnel ran
        1: Tunnel did not run
        4: Invalid arguments
    """
    args = parse_arguments(argv)

    # Setup logging (must be called before any logger usage)
    setup_logging(
        verbose=args.verbose,
        quiet=args.quiet,
        log_file=args.log_file,
    )

    logger = get_logger(__name__)

    try:
        proxy = build_proxy(args)
    except ProxyConfigError as e:
        logger.error("Invalid proxy settings: %s", sanitize_for_log(str(e)))
        sys.exit(ExitCode.INVALID_ARGUMENTS)

    executable = resolve_executable(args.tun2socks)
    if not executable:
        logger.error("tun2socks not found in PATH - use --tun2socks PATH")
        sys.exit(ExitCode.INVALID_ARGUMENTS)

    logger.info("%s %s", config.TOOL_NAME, config.VERSION)
    logger.info("Proxy: %s", sanitize_for_log(proxy.masked_url()))

    platform = detect_platform()
    if not check_dependencies(platform):
        logger.warning("Some configuration commands are missing - their steps will fail")

    try:
        report = asyncio.run(
            run_tunnel(
                proxy,
                executable,
                platform=platform,
                readiness_timeout=args.readiness_timeout,
                check_egress=args.check_egress,
            )
        )
    except KeyboardInterrupt:
        logger.info("Interrupted by user, tunnel stopped")
        sys.exit(ExitCode.SUCCESS)
    except (OSError, ValueError, RuntimeError) as e:
        logger.error("Error during execution: %s", sanitize_for_log(str(e)))
        if args.verbose:
            traceback.print_exc()
        sys.exit(ExitCode.GENERAL_ERROR)

    format_report(report)

    if args.report:
        try:
            args.report.write_text(export_to_json(report))
            logger.info("Report written to %s", sanitize_for_log(str(args.report)))
        except OSError as e:
            logger.error("Cannot write report: %s", sanitize_for_log(str(e)))

    sys.exit(ExitCode.SUCCESS if report.ran else ExitCode.GENERAL_ERROR)


if __name__ == "__main__":
    main()
