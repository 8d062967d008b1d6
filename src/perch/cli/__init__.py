"""perch CLI — serve a directory or an app.

Entry point registered as ``perch`` in ``pyproject.toml``::

    [project.scripts]
    perch = "perch.cli:main"
"""

import argparse
import sys

from perch.config import LOG_LEVELS


def _add_server_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--host", default=None, help="Bind host address")
    parser.add_argument("--port", type=int, default=None, help="Bind port number")
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default=None,
        help="Logging level (default info)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=None,
        help="Log at debug level regardless of --log-level",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="perch",
        description="perch — a minimal HTTP dispatcher with ETag caching.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- perch serve ------------------------------------------------------
    serve_parser = subparsers.add_parser("serve", help="Serve a directory with ETags")
    serve_parser.add_argument("directory", nargs="?", default=".", help="Directory to serve")
    serve_parser.add_argument(
        "--no-verify",
        action="store_true",
        help="Answer 304 from the etag store alone, without re-checking files",
    )
    serve_parser.add_argument(
        "--max-age",
        type=int,
        default=None,
        help="Cache-Control max-age in seconds (default 3600)",
    )
    _add_server_flags(serve_parser)

    # -- perch run --------------------------------------------------------
    run_parser = subparsers.add_parser("run", help="Serve an app")
    run_parser.add_argument("app", help="Import string (e.g. myapp:app)")
    _add_server_flags(run_parser)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``perch`` command."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    from perch.cli._run import run_app, serve_directory

    if args.command == "serve":
        serve_directory(args)
    elif args.command == "run":
        run_app(args)
