"""Command-line entry point for the Circonus API client."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional
import structlog
from pydantic import ValidationError

from . import __version__
from .client import CirconusClient
from .config import CirconusConfig
from .error_handler import ErrorHandler, EXIT_CONFIG_ERROR
from .exceptions import CirconusError


RESOURCES = ("maintenance", "annotation", "user")


def setup_logging(config: CirconusConfig) -> None:
    """Set up structured logging based on configuration."""
    # Logs go to stderr, stdout carries the JSON results
    logging.basicConfig(level=getattr(logging, config.log_level), stream=sys.stderr)

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if config.log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser."""
    parser = argparse.ArgumentParser(
        prog="circonus-api",
        description="Manage Circonus maintenance windows, annotations and users",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment Variables:
  CIRCONUS_API_TOKEN        Circonus API token (required)
  CIRCONUS_API_APP          App name approved for the token (default: circonus-api-client)
  CIRCONUS_API_URL          API URL (default: https://api.circonus.com/v2)
  CIRCONUS_API_DEBUG        Log request/response bodies (default: false)
  CIRCONUS_API_TIMEOUT      Request timeout in seconds (default: 30)
  CIRCONUS_API_MAX_RETRIES  Maximum retry attempts (default: 4)
  CIRCONUS_API_MIN_RETRY_DELAY  Minimum delay between retries in seconds (default: 1.0)
  CIRCONUS_API_MAX_RETRY_DELAY  Maximum delay between retries in seconds (default: 15.0)
  CIRCONUS_LOG_LEVEL        Log level: DEBUG, INFO, WARNING, ERROR, CRITICAL (default: INFO)
  CIRCONUS_LOG_FORMAT       Log format: json, text (default: text)

Examples:
  circonus-api maintenance list
  circonus-api maintenance get 1234
  circonus-api annotation search --query deploy --filter f_category=release
  circonus-api user get
  echo '{"item": "/check_bundle/1", "start": 1700000000, "stop": 1700003600}' \\
      | circonus-api maintenance create --file -
        """
    )

    parser.add_argument(
        "--config-file",
        type=Path,
        help="Path to configuration file (optional, environment variables take precedence)"
    )
    parser.add_argument(
        "--validate-config",
        action="store_true",
        help="Validate configuration and exit"
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Override log level from environment"
    )
    parser.add_argument(
        "--log-format",
        choices=["json", "text"],
        help="Override log format from environment"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log request and response bodies"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    resources = parser.add_subparsers(dest="resource", metavar="RESOURCE")

    for name in RESOURCES:
        resource_parser = resources.add_parser(name, help=f"{name} operations")
        actions = resource_parser.add_subparsers(dest="action", metavar="ACTION", required=True)

        actions.add_parser("list", help=f"List every {name}")

        get_parser = actions.add_parser("get", help=f"Fetch one {name} by CID")
        get_parser.add_argument("cid", nargs="?" if name == "user" else None,
                                help="CID, with or without the resource prefix")

        search_parser = actions.add_parser("search", help=f"Search {name} records")
        search_parser.add_argument("--query", "-q", help="Free-text search term")
        search_parser.add_argument(
            "--filter", "-f",
            action="append",
            default=[],
            metavar="NAME=VALUE",
            help="Filter criterion; repeat for several values"
        )

        for action in ("create", "update"):
            write_parser = actions.add_parser(action, help=f"{action.capitalize()} a {name} from JSON")
            write_parser.add_argument("--file", required=True, help="JSON file with the record, '-' for stdin")

        delete_parser = actions.add_parser("delete", help=f"Delete a {name} by CID")
        delete_parser.add_argument("cid", help="CID, with or without the resource prefix")

    return parser


def load_configuration(args: argparse.Namespace) -> Optional[CirconusConfig]:
    """Load configuration from environment, file and arguments.

    Returns None after reporting the problem on stderr if it cannot be loaded.
    """
    try:
        config = CirconusConfig.from_env_and_file(args.config_file)
    except ValidationError as e:
        print("Configuration validation error:", file=sys.stderr)
        for error in e.errors():
            field = " -> ".join(str(x) for x in error["loc"]) or "config"
            print(f"  {field}: {error['msg']}", file=sys.stderr)
        return None
    except FileNotFoundError as e:
        print(f"Configuration file error: {e}", file=sys.stderr)
        return None
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return None

    overrides: Dict[str, Any] = {}
    if args.log_level:
        overrides["log_level"] = args.log_level
    if args.log_format:
        overrides["log_format"] = args.log_format
    if args.debug:
        overrides["debug"] = True

    if overrides:
        config = config.model_copy(update=overrides)
    return config


def validate_configuration(config: CirconusConfig) -> int:
    """Print the configuration summary; returns the exit code."""
    summary = config.get_validation_summary()

    print("Current Configuration:")
    for key, value in summary["config"].items():
        print(f"  {key}: {value}")

    if summary["valid"]:
        print("\nConfiguration is valid")
        return 0

    print("\nConfiguration errors:")
    for field, message in summary["errors"].items():
        print(f"  {field}: {message}")
    return EXIT_CONFIG_ERROR


def parse_filters(pairs: List[str]) -> Dict[str, List[str]]:
    """Group ``NAME=VALUE`` arguments by name, keeping their order."""
    filters: Dict[str, List[str]] = {}
    for pair in pairs:
        name, sep, value = pair.partition("=")
        if not sep or not name:
            raise CirconusError(f"invalid filter '{pair}', expected NAME=VALUE")
        filters.setdefault(name, []).append(value)
    return filters


def read_record(path: str) -> Dict[str, Any]:
    """Read a JSON object from ``path`` or stdin."""
    if path == "-":
        text = sys.stdin.read()
    else:
        text = Path(path).read_text(encoding="utf-8")

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise CirconusError(f"invalid JSON in {path}: {e}") from e

    if not isinstance(data, dict):
        raise CirconusError(f"{path} must contain a JSON object, got {type(data).__name__}")
    return data


def run_command(client: CirconusClient, args: argparse.Namespace) -> Any:
    """Run one resource action and return a JSON-ready result."""
    resource = client.resources[args.resource]

    if args.action == "list":
        return [record.to_wire() for record in resource.fetch_all()]
    if args.action == "get":
        return resource.fetch(args.cid).to_wire()
    if args.action == "search":
        records = resource.search(args.query, parse_filters(args.filter))
        return [record.to_wire() for record in records]
    if args.action == "create":
        return resource.create(read_record(args.file)).to_wire()
    if args.action == "update":
        return resource.update(read_record(args.file)).to_wire()
    if args.action == "delete":
        cid = resource.resolve(args.cid)
        return {"_cid": cid, "deleted": resource.delete_by_cid(cid)}

    raise CirconusError(f"unknown action '{args.action}'")


def main(
    argv: Optional[List[str]] = None,
    client_factory: Callable[[CirconusConfig], CirconusClient] = CirconusClient
) -> int:
    """Main entry point; returns the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    config = load_configuration(args)
    if config is None:
        return EXIT_CONFIG_ERROR

    if args.validate_config:
        return validate_configuration(config)

    if not args.resource:
        parser.error("a resource is required (maintenance, annotation or user)")

    setup_logging(config)
    logger = structlog.get_logger(__name__)
    error_handler = ErrorHandler(config.app_name)
    command = f"{args.resource} {args.action}"

    try:
        with client_factory(config) as client:
            result = run_command(client, args)
    except (CirconusError, OSError) as e:
        exit_code, message = error_handler.handle_command_error(e, command, vars(args))
        print(message, file=sys.stderr)
        return exit_code

    logger.debug("Command completed", command=command)
    print(json.dumps(result, indent=2))
    return 0


def cli() -> None:
    """Console script wrapper."""
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    cli()
