"""Main CLI entry point for the simple-xml command-line tool.

Subcommands:
    parse    Parse files and report their structure or the first error
    format   Parse a file and write it back out, compact or indented
    profile  Measure parse time and memory use
"""

import argparse
import json
import logging
import sys
from concurrent.futures import ProcessPoolExecutor
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

from simple_xml import __version__
from simple_xml.api import from_file
from simple_xml.parsing import XMLError
from simple_xml.shared import (
    ConfigError,
    ParserConfig,
    SimpleXMLConfig,
    configure_logging,
    get_logger,
)
from simple_xml.tools import PerformanceProfiler

XML_SUFFIXES = {".xml", ".xhtml", ".svg"}


class CLIConfig:
    """Configuration management for CLI operations."""

    def __init__(self, settings: Optional[SimpleXMLConfig] = None):
        self.settings = settings or SimpleXMLConfig.default()
        self.max_workers = 1
        self.output_format = "json"

    @classmethod
    def from_file(cls, config_path: Path) -> "CLIConfig":
        """Load CLI configuration from a JSON settings file."""
        return cls(SimpleXMLConfig.from_file(config_path))


def summarize_file(file_path: Path, parser_config: ParserConfig) -> Dict[str, Any]:
    """Parse one file and describe the result as a JSON-ready dict."""
    try:
        root = from_file(file_path, config=parser_config)
    except XMLError as e:
        return {"file": str(file_path), "success": False, "error": e.to_dict()}

    elements = list(root.iter_nodes())
    return {
        "file": str(file_path),
        "success": True,
        "root_tag": root.tag or None,
        "element_count": len(elements),
        "attribute_count": sum(len(node.attributes) for node in elements),
        "max_depth": root.depth(),
    }


class XMLProcessor:
    """Core XML processing logic for CLI operations."""

    def __init__(self, config: CLIConfig):
        self.config = config
        self.logger = get_logger(__name__, None, "cli_processor")

    def process_single_file(self, file_path: Path) -> Dict[str, Any]:
        """Process a single XML file and return results."""
        result = summarize_file(file_path, self.config.settings.parser)
        if not result["success"]:
            self.logger.info(
                "File failed to parse",
                extra={"file": str(file_path), "error_kind": result["error"]["kind"]},
            )
        return result

    def find_xml_files(self, path: Path, recursive: bool = False) -> Iterator[Path]:
        """Find XML files in path; an explicit file is always included."""
        if path.is_file():
            yield path
        elif path.is_dir():
            candidates = path.rglob("*") if recursive else path.glob("*")
            for candidate in sorted(candidates):
                if candidate.is_file() and candidate.suffix.lower() in XML_SUFFIXES:
                    yield candidate
        else:
            self.logger.warning("Path does not exist", extra={"path": str(path)})

    def batch_process(self, paths: List[Path], recursive: bool = False) -> List[Dict[str, Any]]:
        """Process multiple XML files, in worker processes if configured."""
        all_files = []
        for path in paths:
            all_files.extend(self.find_xml_files(path, recursive))

        if not all_files:
            return []

        if len(all_files) == 1 or self.config.max_workers <= 1:
            return [self.process_single_file(file_path) for file_path in all_files]

        parser_config = self.config.settings.parser
        with ProcessPoolExecutor(max_workers=self.config.max_workers) as executor:
            return list(executor.map(
                summarize_file, all_files, [parser_config] * len(all_files)
            ))


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the main argument parser."""
    parser = argparse.ArgumentParser(
        prog="simple-xml",
        description="Read, check and rewrite simple XML documents"
    )

    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Quiet output"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    parse_parser = subparsers.add_parser("parse", help="Parse XML files")
    parse_parser.add_argument(
        "paths",
        nargs="+",
        type=Path,
        help="XML files or directories to parse"
    )
    parse_parser.add_argument(
        "--recursive", "-r",
        action="store_true",
        help="Recursively process directories"
    )
    parse_parser.add_argument(
        "--format", "-f",
        choices=["json", "csv", "text"],
        default="json",
        help="Output format (default: json)"
    )
    parse_parser.add_argument(
        "--output", "-o",
        type=Path,
        help="Output file (default: stdout)"
    )
    parse_parser.add_argument(
        "--config", "-c",
        type=Path,
        help="Configuration file path"
    )
    parse_parser.add_argument(
        "--workers", "-w",
        type=int,
        help="Number of parallel worker processes"
    )

    format_parser = subparsers.add_parser("format", help="Parse and re-emit an XML file")
    format_parser.add_argument("path", type=Path, help="XML file to format")
    format_parser.add_argument(
        "--pretty", "-p",
        action="store_true",
        help="Indent nested elements"
    )
    format_parser.add_argument(
        "--indent",
        type=int,
        help="Columns per nesting level (default: 4)"
    )
    format_parser.add_argument(
        "--escape",
        action="store_true",
        help="Escape special characters in attributes and content"
    )
    format_parser.add_argument(
        "--declaration",
        action="store_true",
        help="Start the output with an XML declaration"
    )
    format_parser.add_argument(
        "--output", "-o",
        type=Path,
        help="Output file (default: stdout)"
    )
    format_parser.add_argument(
        "--config", "-c",
        type=Path,
        help="Configuration file path"
    )

    profile_parser = subparsers.add_parser("profile", help="Profile parsing performance")
    profile_parser.add_argument(
        "paths",
        nargs="+",
        type=Path,
        help="XML files to profile"
    )
    profile_parser.add_argument(
        "--iterations", "-n",
        type=int,
        default=10,
        help="Parses per file (default: 10)"
    )
    profile_parser.add_argument(
        "--format", "-f",
        choices=["json", "text"],
        default="text",
        help="Output format"
    )

    return parser


def format_results(results: List[Dict[str, Any]], format_type: str) -> str:
    """Format processing results for output."""
    if format_type == "csv":
        if not results:
            return ""

        lines = ["file,success,root_tag,elements,attributes,max_depth,error_kind,line,column"]
        for result in results:
            error = result.get("error", {})
            lines.append(
                f"{result['file']},{result['success']},{result.get('root_tag') or ''},"
                f"{result.get('element_count', '')},{result.get('attribute_count', '')},"
                f"{result.get('max_depth', '')},{error.get('kind', '')},"
                f"{error.get('line', '')},{error.get('column', '')}"
            )
        return "\n".join(lines)

    if format_type == "text":
        if not results:
            return "No results to display."

        successful = sum(1 for r in results if r["success"])
        lines = [f"Processed {len(results)} files, {successful} successful", "-" * 60]
        for result in results:
            if result["success"]:
                lines.append(f"OK   {result['file']}")
                lines.append(
                    f"     Root: <{result['root_tag'] or ''}>, "
                    f"Elements: {result['element_count']}, "
                    f"Attributes: {result['attribute_count']}, "
                    f"Depth: {result['max_depth']}"
                )
            else:
                lines.append(f"FAIL {result['file']}")
                lines.append(f"     {result['error']['kind']}: {result['error']['message']}")
        return "\n".join(lines)

    return json.dumps(results, indent=2)


def _load_settings(config_path: Optional[Path]) -> SimpleXMLConfig:
    if config_path is None:
        return SimpleXMLConfig.default()
    return SimpleXMLConfig.from_file(config_path)


def cmd_parse(args: argparse.Namespace) -> int:
    """Handle parse command."""
    config = CLIConfig(_load_settings(args.config))
    if args.workers:
        config.max_workers = args.workers
    config.output_format = args.format

    processor = XMLProcessor(config)
    results = processor.batch_process(args.paths, args.recursive)
    formatted_output = format_results(results, args.format)

    if args.output:
        try:
            args.output.write_text(formatted_output)
        except OSError as e:
            print(f"Error writing output: {e}", file=sys.stderr)
            return 1
        print(f"Results written to {args.output}", file=sys.stderr)
    else:
        print(formatted_output)

    if not results:
        return 1
    return 0 if all(r["success"] for r in results) else 1


def cmd_format(args: argparse.Namespace) -> int:
    """Handle format command."""
    settings = _load_settings(args.config)
    writer_overrides: Dict[str, Any] = {}
    if args.indent is not None:
        writer_overrides["writer__indent"] = args.indent
    if args.escape:
        writer_overrides["writer__escape"] = True
    if writer_overrides:
        settings = settings.override(**writer_overrides)

    try:
        root = from_file(args.path, config=settings.parser)
    except XMLError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.pretty:
        rendered = root.to_string_pretty(settings.writer, declaration=args.declaration)
    else:
        rendered = root.to_string(settings.writer, declaration=args.declaration)

    if args.output:
        try:
            args.output.write_text(rendered)
        except OSError as e:
            print(f"Error writing output: {e}", file=sys.stderr)
            return 1
    else:
        sys.stdout.write(rendered if rendered.endswith("\n") or not rendered else rendered + "\n")
    return 0


def cmd_profile(args: argparse.Namespace) -> int:
    """Handle profile command."""
    if args.iterations <= 0:
        print("Error: --iterations must be > 0", file=sys.stderr)
        return 1

    profiler = PerformanceProfiler()
    for path in args.paths:
        try:
            profiler.profile_file(path, args.iterations)
        except (OSError, UnicodeDecodeError) as e:
            print(f"Could not read {path}: {e}", file=sys.stderr)

    report = profiler.generate_report()
    if args.format == "json":
        print(json.dumps(report.to_dict(), indent=2))
    else:
        print(f"Profiled {report.session_count} files, {report.success_count} parsed")
        print("-" * 60)
        for session in report.sessions:
            status = "OK  " if session.success else "FAIL"
            print(
                f"{status} {session.session_id}: "
                f"{session.average_duration_ms:.3f} ms/parse, "
                f"{session.throughput_mb_per_s:.2f} MB/s, "
                f"memory delta {session.memory_delta} bytes"
            )
    return 0 if report.session_count and report.success_count == report.session_count else 1


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    if args.verbose:
        configure_logging(logging.DEBUG)
    elif args.quiet:
        configure_logging(logging.ERROR)
    else:
        configure_logging(logging.WARNING)

    try:
        if args.command == "parse":
            return cmd_parse(args)
        if args.command == "format":
            return cmd_format(args)
        if args.command == "profile":
            return cmd_profile(args)
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return 1

    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2
    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return 130  # Standard exit code for SIGINT


if __name__ == "__main__":
    sys.exit(main())
