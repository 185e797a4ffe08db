"""Command line interface for envcascade.

USAGE:
    envcascade show [--base-path PATH] [--config-dir PATH] [--format table|json]

Exit codes:
    0  Report produced and the structured config loaded
    1  The structured config failed to load (details in the report)
"""

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from envcascade.config import LoaderSettings
from envcascade.exceptions import ConfigurationError
from envcascade.logger import create_logger
from envcascade.report import StatusReport, build_status


def _print_table(report: StatusReport) -> None:
    print("Environment Configuration Status")
    print("")

    print(f"Base path:  {report.base_path}")
    print(f"Config dir: {report.config_dir}")
    print("")

    print("Dotenv cascade:")
    if not report.dotenv_enabled:
        print("  .env not found - cascade disabled")
    env_name = report.dotenv_environment or "(not set)"
    print(f"  Environment: {env_name} (policy: {report.missing_environment_policy})")
    for index, candidate in enumerate(report.dotenv_files, start=1):
        status = "exists" if candidate.exists else "not found"
        print(f"  {index}. {candidate.path.name:<28} {candidate.role.value:<24} {status}")
    print("")

    print("Structured config:")
    if report.config_environment:
        print(f"  Environment: {report.config_environment}")
    for index, candidate in enumerate(report.config_files, start=1):
        status = "exists" if candidate.exists else "not found"
        print(f"  {index}. {candidate.path.name:<28} {candidate.role.value:<24} {status}")

    if report.config_error is not None:
        print(f"  ERROR: {report.config_error.message}")
        return

    print("")
    print("Values:")
    for key, value in report.config_values.items():
        shown = "not set" if value is None else value
        print(f"  {key}: {shown}")


def cmd_show(
    base_path: Path,
    config_dir: Optional[Path],
    format: str = "table",
    verbose: bool = False,
) -> int:
    try:
        settings = LoaderSettings.from_env()
    except ConfigurationError as e:
        print(f"ERROR: {e.message}", file=sys.stderr)
        return 1

    logger = create_logger(
        "envcascade-cli", level=logging.DEBUG if verbose else logging.WARNING
    )
    report = build_status(base_path, settings=settings, config_dir=config_dir, logger=logger)

    if format == "json":
        print(json.dumps(report.to_dict(), indent=2, default=str))
    else:
        _print_table(report)

    return 0 if report.ok else 1


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        prog="envcascade",
        description="Inspect layered environment configuration",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
EXAMPLES:
  Show status for the current directory:
    %(prog)s show

  Machine-readable output for another project:
    %(prog)s show --base-path /srv/app --format json

ENVIRONMENT:
  ENVCASCADE_BASE_PATH, ENVCASCADE_ENV_VAR, ENVCASCADE_MISSING_ENV,
  ENVCASCADE_DEFAULT_ENV, ENVCASCADE_CONFIG_DIR, ENVCASCADE_MARKER_FILE,
  ENVCASCADE_MODE_KEY
        """,
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging output",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command")

    show = subparsers.add_parser(
        "show",
        help="Show environment configuration status",
        description="Display resolved environments and the files each cascade loads",
    )
    show.add_argument(
        "--base-path",
        type=Path,
        default=Path(os.environ.get("ENVCASCADE_BASE_PATH") or Path.cwd()),
        help="Directory holding the .env files. Default: %(default)s",
    )
    show.add_argument(
        "--config-dir",
        type=Path,
        default=None,
        help="Structured config directory. Default: <base-path>/$ENVCASCADE_CONFIG_DIR",
    )
    show.add_argument(
        "--format",
        choices=["table", "json"],
        default="table",
        help="Output format. Default: %(default)s",
    )

    args = parser.parse_args(argv)

    if args.command == "show":
        return cmd_show(args.base_path, args.config_dir, args.format, args.verbose)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
