"""CLI entrypoints for compdriver commands."""

from __future__ import annotations

import argparse
import shlex
import sys
from pathlib import Path

from .config import load_config
from .errors import ConfigError
from .logging import configure_logging
from .pipeline import run_pipeline


def _add_verbose_option(parser: argparse.ArgumentParser, *, subcommand: bool = False) -> None:
    # On subcommands the flag must not reset a -v given before the subcommand name.
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=argparse.SUPPRESS if subcommand else False,
        help="Log each compilation as it is analyzed.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="compdriver",
        description="Send compilation units, one at a time, to an analyzer.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser(
        "run",
        help="Analyze compilation units read from JSON or YAML files.",
    )
    _add_verbose_option(run_parser, subcommand=True)
    run_parser.add_argument(
        "units",
        nargs="*",
        help="Compilation unit files (defaults to queue.paths from the config).",
    )
    run_parser.add_argument(
        "--config",
        default=".",
        help="Path to .compdriver.yml or the directory holding it.",
    )
    run_parser.add_argument(
        "--file-data-service",
        help="Address forwarded to the analyzer with every request.",
    )
    run_parser.add_argument(
        "--analyzer",
        help="Analyzer name (builtin 'echo' or 'command', or an installed plugin).",
    )
    run_parser.add_argument(
        "--command",
        dest="analyzer_command",
        help="Command line for the 'command' analyzer.",
    )
    run_parser.add_argument(
        "--output",
        help="Write outputs as JSON lines to this file instead of stdout.",
    )
    run_parser.add_argument(
        "--keep-going",
        action="store_true",
        help="Record failed compilations and continue with the rest.",
    )

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP service.",
    )
    _add_verbose_option(serve_parser, subcommand=True)
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for compdriver commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command == "run":
        try:
            config = load_config(Path(args.config))
        except ConfigError as exc:
            parser.exit(1, f"{exc}\n")

        configure_logging(verbose=bool(args.verbose), log_file=config.log_file)

        if args.file_data_service is not None:
            config.file_data_service = args.file_data_service
        if args.analyzer:
            config.analyzer.name = args.analyzer
        if args.analyzer_command:
            config.analyzer.command = shlex.split(args.analyzer_command)
            if not args.analyzer:
                config.analyzer.name = "command"
        if args.output:
            config.output.path = Path(args.output)
        if args.keep_going:
            config.queue.keep_going = True

        unit_paths = [Path(path) for path in args.units] if args.units else None
        try:
            result = run_pipeline(config, unit_paths=unit_paths)
        except Exception as exc:
            parser.exit(1, f"compdriver run failed: {exc}\nRun with --verbose for more details.\n")

        summary = (
            f"Analyzed {result.stats.units} compilation(s), "
            f"{result.outputs_written} output(s) written"
        )
        if result.failures:
            summary += f", {len(result.failures)} failed"
        print(summary, file=sys.stderr)
        if result.failures:
            sys.exit(1)
    elif args.command == "serve":
        configure_logging(verbose=bool(args.verbose))
        from .service import run_service

        run_service(host=args.host, port=args.port)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


if __name__ == "__main__":
    main(sys.argv[1:])
