"""
Command-line interface for codestructure.

Analyses one or more source files (or directories) and prints per-function
metrics plus dead code, deep nesting and weak typing locations.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from codestructure import __version__
from codestructure.analysis import analyze_structure
from codestructure.core.config import Config
from codestructure.core.errors import BinaryFileError, CodeStructureError, InputTooLargeError
from codestructure.core.languages import LanguageFamily, classify, language_for_path
from codestructure.reporting import FileReport, format_json, format_text
from codestructure.utils.files import iter_source_files, read_source

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_THRESHOLD = 2


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="codestructure",
        description="Structural metrics for JavaScript, TypeScript, Python, Rust, Go, Java and C# sources.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  codestructure analyze app.ts                     # One file
  codestructure analyze src/                       # Every supported file below src/
  codestructure analyze snippet.txt -l python      # Force the language
  codestructure analyze src/ --format json -o out  # JSON report to a file
        """,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose logging",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    analyze_parser = subparsers.add_parser("analyze", help="Analyse source files")
    analyze_parser.add_argument("paths", nargs="+", help="Files or directories to analyse")
    analyze_parser.add_argument(
        "-l", "--language",
        help="Language of every input (default: detect from file extension)",
    )
    analyze_parser.add_argument("-c", "--config", dest="config_path", help="Path to YAML/JSON config file")
    analyze_parser.add_argument(
        "-f", "--format",
        choices=["text", "json"],
        help="Output format (overrides config)",
    )
    analyze_parser.add_argument("-o", "--output", help="Write output to file instead of stdout")
    analyze_parser.add_argument(
        "--fail-complexity",
        type=int,
        metavar="N",
        help="Exit with status 2 when any function's complexity exceeds N",
    )
    analyze_parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output",
    )
    return parser


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )


def collect_reports(paths: List[str], config: Config, language: Optional[str] = None) -> List[FileReport]:
    forced = classify(language) if language else None
    reports = []
    for root in paths:
        if not Path(root).exists():
            raise FileNotFoundError(f"No such file or directory: {root}")
        for file_path in iter_source_files(root, config.languages(), config.ignored_dirs()):
            family = forced or language_for_path(file_path) or LanguageFamily.UNKNOWN
            try:
                code = read_source(file_path, config.max_input_bytes(), config.oversize_policy())
            except (BinaryFileError, InputTooLargeError) as e:
                logger.warning("Skipping %s", e)
                continue
            logger.info("Analysing %s as %s", file_path, family.value)
            reports.append(FileReport(path=file_path, structure=analyze_structure(code, family.value)))
    return reports


def exceeds_complexity(reports: List[FileReport], limit: Optional[int]) -> bool:
    if limit is None:
        return False
    return any(
        func.cyclomatic_complexity > limit
        for report in reports
        for func in report.structure.functions
    )


def cmd_analyze(args: argparse.Namespace) -> int:
    config = Config.load(args.config_path)
    reports = collect_reports(args.paths, config, args.language)

    fmt = args.format or config.reporting().get("format", "text")
    if fmt == "json":
        output = format_json(reports, indent=config.reporting().get("json_indent", 2))
    else:
        color = not args.no_color and args.output is None and sys.stdout.isatty()
        output = format_text(reports, color=color)

    if args.output:
        Path(args.output).write_text(output, encoding="utf-8")
    else:
        sys.stdout.write(output)

    if exceeds_complexity(reports, args.fail_complexity):
        return EXIT_THRESHOLD
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        if args.command == "analyze":
            return cmd_analyze(args)
    except (CodeStructureError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR
    return EXIT_OK
