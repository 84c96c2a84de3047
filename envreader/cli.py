"""envreader CLI - load configuration files and inspect the merged result.

Example:
    # Load two files and print selected keys
    envreader load config/app.yaml config/app.properties --get server.port --get app.name

    # Keep file values even when the environment defines the same key
    envreader load config/app.yaml --no-override

    # Load the bundled sample files
    envreader selftest
"""

import argparse
import logging
import sys

from envreader.observability.logging import configure_logging
from envreader.settings import ReaderSettings
from envreader.store import ConfigStore

logger = logging.getLogger(__name__)

# Bundled files loaded by the selftest command, relative to the envreader package
SELFTEST_RESOURCES = ("resources/sample.xml", "resources/sample.yaml")


# =============================================================================
# Commands
# =============================================================================


def _print_keys(store: ConfigStore, keys: list[str]) -> int:
    missing = 0
    for key in keys:
        if key not in store:
            logger.error("Key %s is not set", key)
            missing += 1
            continue
        print(f"{key}={store.get(key)}")
    return missing


def load_command(args: argparse.Namespace) -> int:
    """Load configuration files and print requested keys.

    Args:
        args: Parsed command-line arguments with 'paths', 'get', 'no_override'
            and 'no_system_properties' attributes

    Returns:
        Exit code (0 when every file loaded and every requested key is set)
    """
    settings = ReaderSettings(
        override_with_environment=not args.no_override,
        include_system_properties=not args.no_system_properties,
        dump_on_load=args.dump,
    )
    store = ConfigStore(settings=settings)

    for path in args.paths:
        store.load_file(path)

    missing = _print_keys(store, args.get or [])

    for result in store.failed_sources():
        print(f"failed: {result.source} ({result.error.value}): {result.message}", file=sys.stderr)

    return 0 if not store.failed_sources() and not missing else 1


def selftest_command(args: argparse.Namespace) -> int:
    """Load the bundled sample files.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    store = ConfigStore(settings=ReaderSettings(dump_on_load=args.dump))

    for resource in SELFTEST_RESOURCES:
        result = store.load_from_resource("envreader", resource)
        print(f"{result.source}: {'ok' if result.ok else result.message} ({result.entries} entries)")

    return 0 if not store.failed_sources() else 1


# =============================================================================
# Parser
# =============================================================================


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog="envreader",
        description="envreader - flat configuration from properties, XML, YAML and the environment",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  envreader load config/app.yaml --get server.port
  envreader load config/app.properties --no-override
  envreader selftest
        """,
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Set logging level (default: WARNING)",
    )
    parser.add_argument(
        "--log-format",
        choices=["text", "json"],
        default="text",
        help="Log output format (default: text)",
    )
    parser.add_argument(
        "--dump",
        action="store_true",
        help="Log every key after each file load (visible at INFO level)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    load_parser = subparsers.add_parser("load", help="Load configuration files")
    load_parser.add_argument("paths", nargs="+", help="Configuration files (.properties, .xml, .yaml, .yml)")
    load_parser.add_argument(
        "--get", "-g", action="append", metavar="KEY", help="Print the value of KEY (repeatable)"
    )
    load_parser.add_argument(
        "--no-override",
        action="store_true",
        help="Keep file values when the environment defines the same key",
    )
    load_parser.add_argument(
        "--no-system-properties",
        action="store_true",
        help="Do not add process system properties (os.name, user.dir, ...)",
    )
    load_parser.set_defaults(func=load_command)

    selftest_parser = subparsers.add_parser("selftest", help="Load the bundled sample files")
    selftest_parser.set_defaults(func=selftest_command)

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI.

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    configure_logging(args.log_level, args.log_format)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
