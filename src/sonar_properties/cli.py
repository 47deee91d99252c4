"""Command line entrypoint: generate the analysis properties file.

Usage:
  sonar-properties [--config path] [--output-dir dir] [--target-version X.Y]
                   [--working-dir dir] [-d key=value ...] [--verbose]

Exit codes: 0 generated, 1 configuration or input error, 2 conflicting
sonar-project.properties files found, 3 no analysable projects.
"""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

from .config import ConfigError, load_config, parse_setting_arg
from .core import generate_properties_file
from .models import AnalysisConfig
from .report import result_report

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CONFIG_ERROR = 1
EXIT_CONFLICT = 2
EXIT_NO_PROJECTS = 3


def configure_logging(level: int = logging.INFO) -> None:
    """Configure application logging with Rich handler.

    Log output goes to stderr; stdout carries only the JSON report.
    """
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True, show_path=False)],
        force=True,
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="sonar-properties", description=__doc__.splitlines()[0])
    parser.add_argument("--config", type=Path, default=None, help="JSON or YAML analysis config")
    parser.add_argument("--output-dir", type=str, default=None, help="Override outputDir")
    parser.add_argument("--target-version", type=str, default=None, help="Analysis server version")
    parser.add_argument("--working-dir", type=str, default=None, help="Scanner working directory")
    parser.add_argument(
        "-d",
        "--setting",
        dest="settings",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Additional global setting (repeatable)",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> AnalysisConfig:
    config = load_config(args.config)
    overrides = {}
    if args.output_dir:
        overrides["output_dir"] = args.output_dir
    if args.target_version:
        overrides["target_version"] = args.target_version
    if args.working_dir:
        overrides["working_directory"] = args.working_dir
    if overrides:
        config = dataclasses.replace(config, **overrides)
    if args.settings:
        config = config.with_settings(parse_setting_arg(s) for s in args.settings)
    return config


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.INFO)

    try:
        config = build_config(args)
    except ConfigError as exc:
        logger.error("%s", exc)
        return EXIT_CONFIG_ERROR

    try:
        result = generate_properties_file(config)
    except OSError as exc:
        logger.error("Failed to generate the properties file: %s", exc)
        return EXIT_CONFIG_ERROR

    print(json.dumps(result_report(result), indent=2))

    if result.conflicting_dirs:
        return EXIT_CONFLICT
    if not result.succeeded:
        return EXIT_NO_PROJECTS
    return EXIT_OK


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
