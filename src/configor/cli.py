"""Command line interface for inspecting and converting configuration files."""
import argparse
import logging
import sys
from typing import List, Optional

from configor.exceptions.config import ConfigError
from configor.loader import ConfigLoader
from configor.utils.logging import configure_logging


logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="configor",
        description="Inspect environment-aware configuration files",
    )
    parser.add_argument("--env", help="Environment name (default: CONFIGOR_ENV or development)")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Emit structured logs on stderr at this level",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("env", help="Print the current environment name")

    resolve = subparsers.add_parser("resolve", help="Print the files that would be merged, in order")
    resolve.add_argument("files", nargs="+", help="Base file references, highest priority first")

    convert = subparsers.add_parser("convert", help="Re-encode a config file as YAML or JSON")
    convert.add_argument("source", help="File to read (YAML, JSON or TOML)")
    convert.add_argument("target", help="File to write (.yaml, .yml or .json)")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Run the CLI and return the process exit status."""
    args = _build_parser().parse_args(argv)

    if args.log_level:
        configure_logging(args.log_level)

    loader = ConfigLoader(environment=args.env)

    try:
        if args.command == "env":
            print(loader.environment)
        elif args.command == "resolve":
            for path in loader.resolve_files(*args.files):
                print(path)
        elif args.command == "convert":
            data = loader.codec.load(args.source)
            loader.codec.dump(data, args.target)
    except ConfigError as e:
        logger.debug("Command failed", extra={"error": e.to_dict()})
        print(f"configor: {e}", file=sys.stderr)
        return 1

    return 0
