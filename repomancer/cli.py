"""CLI entrypoints for repomancer commands."""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from .assembler import ProfileAssembler
from .config import ConfigError, RepoMancerConfig, load_config
from .errors import InvalidLocator, ProviderError
from .logging import configure_logging, get_logger
from .report import ReportRenderer
from .report.renderer import SUPPORTED_FORMATS

logger = get_logger("cli")


def _add_logging_options(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=argparse.SUPPRESS if suppress_default else False,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=argparse.SUPPRESS if suppress_default else None,
        help="Also write log records to this file.",
    )


def _add_config_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to .repomancer.yml or its directory (defaults to current directory).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="repomancer",
        description="Infer the capabilities, stack and architecture of a GitHub repository.",
    )
    _add_logging_options(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze_parser = subparsers.add_parser(
        "analyze",
        help="Analyze a repository and print a capability report.",
    )
    _add_logging_options(analyze_parser, suppress_default=True)
    analyze_parser.add_argument(
        "locator",
        help="Repository URL or owner/name shorthand.",
    )
    analyze_parser.add_argument(
        "--token",
        default=None,
        help="GitHub access token (overrides config and GITHUB_TOKEN).",
    )
    _add_config_option(analyze_parser)
    analyze_parser.add_argument(
        "--format",
        dest="format",
        choices=SUPPORTED_FORMATS,
        default=None,
        help="Report format (defaults to the configured format, markdown).",
    )
    analyze_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Write the report to this file instead of stdout.",
    )

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP analysis service.",
    )
    _add_logging_options(serve_parser, suppress_default=True)
    _add_config_option(serve_parser)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for repomancer commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    try:
        config = load_config(args.config)
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")
    logger.debug("Using configuration rooted at %s", config.root)

    if args.command == "analyze":
        _run_analyze(parser, args, config)
    elif args.command == "serve":
        from .service import run_service

        run_service(config, host=args.host, port=args.port)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _run_analyze(
    parser: argparse.ArgumentParser, args: argparse.Namespace, config: RepoMancerConfig
) -> None:
    assembler = ProfileAssembler.from_config(config, token=args.token)
    try:
        profile = asyncio.run(assembler.analyze(args.locator))
    except InvalidLocator as exc:
        parser.exit(1, f"{exc}\n")
    except ProviderError as exc:
        parser.exit(1, f"repomancer analyze failed: {exc}\nRun with --verbose for more details.\n")

    renderer = ReportRenderer(config.report.templates_dir)
    report = renderer.render(profile, args.format or config.report.format)
    if args.output is not None:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(report, encoding="utf-8")
        print(f"Report written to {_relativize(args.output)}")
    else:
        sys.stdout.write(report)


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
