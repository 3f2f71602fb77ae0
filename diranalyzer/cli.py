"""CLI entrypoints for diranalyzer commands."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from .config import ConfigError, load_config
from .errors import AnalysisError, DirectoryNotFound, DirectoryValidationError
from .logging import configure_logging
from .models import AnalysisResult, DirectoryRecord
from .orchestrator import Orchestrator
from .stores import JsonDirectoryStore


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_output_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the result as JSON instead of a table.",
    )
    parser.add_argument(
        "--top",
        type=int,
        default=None,
        help="Number of ranked words to report (defaults to the configured top_n).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="diranalyzer",
        description="Report word-frequency statistics for directories of .txt files.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--config",
        default=".",
        help="Path to .diranalyzer.yml or the directory containing it (defaults to current directory).",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Also write logs to this file (overrides logging.file in .diranalyzer.yml).",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze_parser = subparsers.add_parser(
        "analyze",
        help="Analyze a directory under the documents root.",
    )
    _add_verbose_option(analyze_parser, suppress_default=True)
    _add_output_options(analyze_parser)
    analyze_parser.add_argument("name", help="Directory name under the documents root.")

    dirs_parser = subparsers.add_parser(
        "dirs",
        help="Manage the registry of known directories.",
    )
    _add_verbose_option(dirs_parser, suppress_default=True)
    dirs_sub = dirs_parser.add_subparsers(dest="dirs_command", required=True)
    dirs_sub.add_parser("list", help="List registered directories.")
    add_parser = dirs_sub.add_parser("add", help="Register a directory name.")
    add_parser.add_argument("name")
    show_parser = dirs_sub.add_parser("show", help="Show a registered directory.")
    show_parser.add_argument("id", type=int)
    remove_parser = dirs_sub.add_parser("remove", help="Remove a registered directory.")
    remove_parser.add_argument("id", type=int)
    evaluate_parser = dirs_sub.add_parser(
        "evaluate", help="Analyze a registered directory by id."
    )
    evaluate_parser.add_argument("id", type=int)
    _add_output_options(evaluate_parser)

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP service.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default=None, help="Bind address.")
    serve_parser.add_argument("--port", type=int, default=None, help="Bind port.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for diranalyzer commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        settings = load_config(Path(args.config))
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")

    log_file = Path(args.log_file) if args.log_file else settings.logging.file
    configure_logging(
        verbose=bool(args.verbose), level=settings.logging.level, log_file=log_file
    )

    top = getattr(args, "top", None)
    if top is not None:
        if top < 1:
            parser.exit(2, "--top must be at least 1\n")
        settings.analysis.top_n = top

    if args.command == "analyze":
        _run_analysis(
            parser,
            Orchestrator.from_settings(settings),
            args.name,
            bool(args.json),
            command="analyze",
        )
    elif args.command == "dirs":
        store = JsonDirectoryStore(settings.store.path)
        try:
            if args.dirs_command == "list":
                records = store.list()
                if not records:
                    print("No directories registered")
                for record in records:
                    print(_format_record(record))
            elif args.dirs_command == "add":
                print(f"Registered {_format_record(store.create({'name': args.name}))}")
            elif args.dirs_command == "show":
                print(_format_record(store.get_or_fail(args.id)))
            elif args.dirs_command == "remove":
                removed = store.delete(store.get_or_fail(args.id))
                print(f"Removed {_format_record(removed)}")
            elif args.dirs_command == "evaluate":
                record = store.get_or_fail(args.id)
                _run_analysis(
                    parser,
                    Orchestrator.from_settings(settings),
                    record.name,
                    bool(args.json),
                    command="dirs evaluate",
                )
        except DirectoryNotFound as exc:
            parser.exit(1, f"{exc}\n")
        except DirectoryValidationError as exc:
            parser.exit(1, f"Invalid directory: {exc}\n")
    elif args.command == "serve":
        from .service import run_service

        run_service(settings, host=args.host, port=args.port)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _run_analysis(
    parser: argparse.ArgumentParser,
    orchestrator: Orchestrator,
    name: str,
    as_json: bool,
    *,
    command: str,
) -> None:
    try:
        evaluation = orchestrator.evaluate_directory(name)
    except AnalysisError as exc:
        parser.exit(1, f"diranalyzer {command} failed: {exc}\nRun with --verbose for more details.\n")
    if not evaluation.ok or evaluation.result is None:
        parser.exit(1, f"{evaluation.error}\n")
    if as_json:
        print(json.dumps(evaluation.result.to_dict(), indent=2))
    else:
        print(_format_result(evaluation.result))


def _format_record(record: DirectoryRecord) -> str:
    return f"[{record.id}] {record.name} (added {record.inserted_at})"


def _format_result(result: AnalysisResult) -> str:
    lines = [
        f"Directory: {result.name}",
        f"Files: {result.file_count}",
        f"Words: {result.word_count}",
    ]
    if result.top_words:
        lines.append("Top words:")
        width = max(len(entry.word) for entry in result.top_words)
        for rank, entry in enumerate(result.top_words, start=1):
            lines.append(f"  {rank:>2}. {entry.word:<{width}}  {entry.count}")
    return "\n".join(lines)


if __name__ == "__main__":
    main(sys.argv[1:])
