"""
ShipOrder command line tool.

Reads a shipOrder XML document, converts it to domain records and
prints the parsed values.

Usage:
    shiporder [FILE | -] [options]

Options:
    --sample                              Use the built-in example document
    --format {detailed,table,json}        Output format (default: detailed)
    --verbose                             Enable debug logging
    --version                             Show version and exit

Examples:
    shiporder --sample
    shiporder order.xml --format table
    cat order.xml | shiporder --format json

Exit codes:
    0  success
    1  file or configuration error
    2  document is not well-formed XML
    3  document does not match the shipOrder layout
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from shiporder.core.config import get_settings
from shiporder.core.logging_config import LogContext, setup_logging
from shiporder.services.orders.converters import XmlOrderConverter
from shiporder.services.orders.interfaces import IOrderConverter, IOrderRenderer
from shiporder.services.orders.report import OUTPUT_FORMATS, OrderReportRenderer
from shiporder.services.orders.sample import SAMPLE_SHIP_ORDER_XML
from shiporder.utils.error_handler import (
    AppException,
    ConfigurationException,
    MappingError,
    ParseError,
    create_error_response,
    log_error,
)
from shiporder.version import version_string

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_IO_ERROR = 1
EXIT_PARSE_ERROR = 2
EXIT_MAPPING_ERROR = 3

STDIN_SOURCE = "-"


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="shiporder",
        description="Convert a shipOrder XML document and print the parsed order.",
    )
    parser.add_argument(
        "source",
        nargs="?",
        default=STDIN_SOURCE,
        help="XML file to read ('-' or omitted reads standard input)",
    )
    parser.add_argument(
        "--sample",
        action="store_true",
        help="Use the built-in example document instead of reading input",
    )
    parser.add_argument(
        "--format",
        dest="output_format",
        choices=OUTPUT_FORMATS,
        default="detailed",
        help="Output format (default: detailed)",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {version_string()}")
    return parser


def read_document(source: str, use_sample: bool = False) -> str | bytes:
    """
    Read the XML document to convert.

    Files and stdin are read as bytes so the parser honours the
    document's own encoding declaration.

    Args:
        source: File path or '-' for standard input
        use_sample: Return the built-in example document

    Returns:
        The raw document
    """
    if use_sample:
        return SAMPLE_SHIP_ORDER_XML

    if source == STDIN_SOURCE:
        stream = getattr(sys.stdin, "buffer", None)
        return stream.read() if stream is not None else sys.stdin.read()

    return Path(source).read_bytes()


def _report_error(exc: AppException, output_format: str, err_console: Console) -> None:
    """Print an error to stderr, as JSON when JSON output was requested."""
    if output_format == "json":
        err_console.print_json(json.dumps(create_error_response(exc), ensure_ascii=False, default=str))
        return

    if isinstance(exc, ParseError):
        location = f" (line {exc.line}, column {exc.column})" if exc.line is not None else ""
        err_console.print(f"[red]Malformed XML{location}: {escape(exc.message)}[/red]", soft_wrap=True)
    elif isinstance(exc, MappingError):
        err_console.print(
            f"[red]Invalid shipOrder document: {escape(exc.message)} at {escape(exc.path)}[/red]",
            soft_wrap=True,
        )
    else:
        err_console.print(f"[red]{escape(exc.message)}[/red]", soft_wrap=True)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Run the command line tool.

    Args:
        argv: Arguments without the program name (defaults to sys.argv[1:])

    Returns:
        int: Process exit code
    """
    args = build_parser().parse_args(argv)
    console = Console()
    err_console = Console(stderr=True)

    try:
        settings = get_settings()
    except ValidationError as e:
        _report_error(ConfigurationException(f"Invalid configuration: {e}"), args.output_format, err_console)
        return EXIT_IO_ERROR

    setup_logging(level="DEBUG" if args.verbose else None, settings=settings)

    source_label = "<sample>" if args.sample else ("<stdin>" if args.source == STDIN_SOURCE else args.source)

    with LogContext(source=source_label):
        try:
            document = read_document(args.source, use_sample=args.sample)
        except OSError as e:
            exc = AppException(f"Cannot read {source_label}: {e.strerror or e}", details={"path": source_label})
            log_error(e, {"input_source": source_label}, level=logging.DEBUG)
            _report_error(exc, args.output_format, err_console)
            return EXIT_IO_ERROR

        logger.info(f"Converting shipOrder document from {source_label}")
        converter: IOrderConverter = XmlOrderConverter(settings)
        try:
            order = converter.convert(document)
        except ParseError as e:
            log_error(e, {"input_source": source_label}, level=logging.DEBUG)
            _report_error(e, args.output_format, err_console)
            return EXIT_PARSE_ERROR
        except MappingError as e:
            log_error(e, {"input_source": source_label}, level=logging.DEBUG)
            _report_error(e, args.output_format, err_console)
            return EXIT_MAPPING_ERROR

        logger.info(f"Converted order with {order.items_count} items")

    renderer: IOrderRenderer = OrderReportRenderer(console)
    renderer.render(order, args.output_format)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
