"""``perch serve`` and ``perch run`` — start uvicorn on a perch App."""

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

from perch.app import App
from perch.cli._resolve import resolve_app
from perch.config import AppConfig

logger = logging.getLogger("perch.cli")


def apply_overrides(config: AppConfig, args: argparse.Namespace) -> AppConfig:
    """Return *config* with any CLI flags the user actually passed."""
    changes: dict[str, object] = {}
    if args.host is not None:
        changes["host"] = args.host
    if args.port is not None:
        changes["port"] = args.port
    if getattr(args, "max_age", None) is not None:
        changes["cache_max_age"] = args.max_age
    if args.log_level is not None:
        changes["log_level"] = args.log_level
    if args.debug:
        changes["debug"] = True
    return replace(config, **changes) if changes else config


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
    )


def build_static_app(directory: str, config: AppConfig) -> App:
    """An app that serves *directory* through ``CachedFiles``."""
    app = App(replace(config, static_dir=directory))
    app.static()
    return app


def serve_directory(args: argparse.Namespace) -> None:
    directory = Path(args.directory)
    if not directory.is_dir():
        print(f"Error: {args.directory!r} is not a directory", file=sys.stderr)
        raise SystemExit(1)

    config = apply_overrides(AppConfig(verify_static=not args.no_verify), args)
    configure_logging(config.effective_log_level)
    app = build_static_app(str(directory), config)
    logger.info("serving %s on http://%s:%d", directory.resolve(), config.host, config.port)
    app.run()


def run_app(args: argparse.Namespace) -> None:
    try:
        app = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    app.config = apply_overrides(app.config, args)
    configure_logging(app.config.effective_log_level)
    app.run()
