"""Command-line interface for diaglsp."""

from __future__ import annotations

import argparse
import dataclasses
import shlex
from collections.abc import Sequence
from pathlib import Path
from typing import Literal

from diaglsp.diagnostics.checker import make_command_checker
from diaglsp.logging import configure_logging, get_logger
from diaglsp.lsp.server import create_server
from diaglsp.project.registry import ProjectRegistry


@dataclasses.dataclass(frozen=True)
class CliArgs:
    """Parsed command-line arguments."""

    transport: Literal["stdio", "tcp"]
    host: str
    port: int
    log_level: str
    log_file: Path | None
    debug: bool
    projects: dict[str, Path]
    check_command: tuple[str, ...]
    debounce_ms: int


def _parse_project(parser: argparse.ArgumentParser, value: str) -> tuple[str, Path]:
    name, sep, root = value.partition("=")
    if not sep or not name or not root:
        parser.error(f"--project expects NAME=PATH, got {value!r}")
    return name, Path(root)


def parse_args(argv: Sequence[str] | None = None) -> CliArgs:
    """
    Parse command-line arguments.

    Args:
        argv: Command-line arguments. If None, uses sys.argv[1:].

    Returns:
        Parsed arguments as CliArgs dataclass.
    """
    parser = argparse.ArgumentParser(
        prog="diaglsp",
        description="Language server publishing checker diagnostics and refreshing project files",
    )

    parser.add_argument(
        "--transport",
        choices=["stdio", "tcp"],
        default="stdio",
        help="Transport mode (default: stdio)",
    )

    parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Host for TCP transport (default: 127.0.0.1)",
    )

    parser.add_argument(
        "--port",
        type=int,
        default=4389,
        help="Port for TCP transport (default: 4389)",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Log level (default: INFO, or DEBUG if --debug is set)",
    )

    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Log file path (default: stderr)",
    )

    parser.add_argument(
        "-v",
        "--debug",
        action="store_true",
        help="Enable debug mode (sets log level to DEBUG unless --log-level is specified)",
    )

    parser.add_argument(
        "-p",
        "--project",
        action="append",
        default=[],
        metavar="NAME=PATH",
        help="Register a project root; may be repeated",
    )

    parser.add_argument(
        "--check-command",
        default=None,
        metavar="CMD",
        help="Checker to run on open/saved files, e.g. 'ruff check --output-format concise {file}'",
    )

    parser.add_argument(
        "--debounce-ms",
        type=int,
        default=400,
        help="Quiet period before a file is checked (default: 400)",
    )

    args = parser.parse_args(argv)

    if args.log_level is not None:
        log_level = args.log_level
    elif args.debug:
        log_level = "DEBUG"
    else:
        log_level = "INFO"

    projects = dict(_parse_project(parser, value) for value in args.project)

    check_command: tuple[str, ...] = ()
    if args.check_command is not None:
        check_command = tuple(shlex.split(args.check_command))
        if not check_command:
            parser.error("--check-command must not be empty")

    if args.debounce_ms < 0:
        parser.error("--debounce-ms must not be negative")

    return CliArgs(
        transport=args.transport,
        host=args.host,
        port=args.port,
        log_level=log_level,
        log_file=args.log_file,
        debug=args.debug,
        projects=projects,
        check_command=check_command,
        debounce_ms=args.debounce_ms,
    )


def run(argv: Sequence[str] | None = None) -> int:
    """
    Run the LSP server.

    Args:
        argv: Command-line arguments. If None, uses sys.argv[1:].

    Returns:
        Exit code (0 for success, 1 for error).
    """
    args = parse_args(argv)

    configure_logging(level=args.log_level, log_file=args.log_file)
    logger = get_logger("main")

    logger.info("Starting diaglsp server")
    logger.debug("Configuration: %s", args)

    try:
        registry = ProjectRegistry(args.projects)

        get_diagnostics = None
        if args.check_command:
            get_diagnostics = make_command_checker(args.check_command)
        else:
            logger.info("No --check-command given; diagnostics are disabled")

        server = create_server(
            project_service=registry,
            get_diagnostics=get_diagnostics,
            debounce_ms=args.debounce_ms,
        )

        if args.transport == "stdio":
            logger.info("Starting in stdio mode")
            server.start_io()
        else:
            logger.info("Starting in TCP mode on %s:%d", args.host, args.port)
            server.start_tcp(args.host, args.port)

        return 0

    except KeyboardInterrupt:
        logger.info("Server stopped by user")
        return 0

    except Exception:
        logger.critical("Fatal error in server", exc_info=True)
        return 1
