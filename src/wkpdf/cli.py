"""Command-line interface for wkpdf."""

import argparse
import logging
import shlex
import sys
from pathlib import Path

from wkpdf.config import load_config
from wkpdf.document import Document
from wkpdf.exceptions import DeliveryError, WkpdfError
from wkpdf.launchers import STREAM_SENTINEL
from wkpdf.page import Page
from wkpdf.pdfinfo import count_pages

URL_SCHEMES = ("http://", "https://", "file://")


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the CLI."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )


def make_page(source: str) -> Page:
    """Build a page from a command-line source argument.

    "-" reads HTML from stdin, a recognised URL scheme makes a URL page,
    and anything else is treated as a file path.
    """
    if source == STREAM_SENTINEL:
        return Page.from_reader(sys.stdin.buffer)
    if source.startswith(URL_SCHEMES):
        return Page.from_url(source)
    return Page.from_file(source)


def render(args: argparse.Namespace) -> int:
    """Execute the render command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    stdin_sources = args.sources.count(STREAM_SENTINEL) + (args.cover == STREAM_SENTINEL)
    if stdin_sources > 1:
        logger.error("Only one source can be read from stdin")
        return 1

    try:
        config = load_config(
            renderer=args.renderer,
            display_wrapper=args.display_wrapper,
            temp_dir=args.temp_dir,
            timeout=args.timeout,
        )

        doc = Document(config=config)
        for option in args.options:
            doc.add_options(*shlex.split(option))

        if args.cover is not None:
            doc.add_cover(make_page(args.cover))
        doc.add_pages(*(make_page(source) for source in args.sources))

        output = doc.render()
        page_count = count_pages(output)

        if args.output == STREAM_SENTINEL:
            try:
                sys.stdout.buffer.write(output)
                sys.stdout.buffer.flush()
            except OSError as e:
                raise DeliveryError(f"Error writing to stream: {e}") from e
        else:
            try:
                Path(args.output).write_bytes(output)
            except OSError as e:
                raise DeliveryError(f"Error creating file: {e}") from e

        logger.info(f"Created PDF: {args.output}")
        logger.info(f"  Sources: {len(doc.pages)}")
        logger.info(f"  Pages: {page_count}")

        return 0

    except WkpdfError as e:
        logger.error(f"Failed to render PDF: {e}")
        return 1


def inspect_pdf(args: argparse.Namespace) -> int:
    """Execute the inspect command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    pdf_path = args.pdf.resolve()
    if not pdf_path.exists():
        logger.error(f"PDF not found: {pdf_path}")
        return 1

    try:
        page_count = count_pages(pdf_path.read_bytes())
    except WkpdfError as e:
        logger.error(f"Failed to inspect PDF: {e}")
        return 1

    print(page_count)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code
    """
    parser = argparse.ArgumentParser(
        prog="wkpdf",
        description="Assemble HTML pages into a single PDF with wkhtmltopdf",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output",
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
    )

    render_parser = subparsers.add_parser(
        "render",
        help="Render HTML files, URLs or stdin into one PDF",
        description=(
            "Render one or more HTML sources into a single PDF. A source of '-' "
            "is read from stdin; http://, https:// and file:// sources are URLs."
        ),
    )
    render_parser.add_argument(
        "sources",
        nargs="+",
        help="HTML sources in render order",
    )
    render_parser.add_argument(
        "-o", "--output",
        required=True,
        help="Output PDF path ('-' for stdout)",
    )
    render_parser.add_argument(
        "--cover",
        default=None,
        help="Source rendered as the cover page, before all other sources",
    )
    render_parser.add_argument(
        "-O", "--option",
        dest="options",
        action="append",
        default=[],
        help="Renderer options, shell-split into tokens (repeatable), e.g. -O '--page-size A4'",
    )
    render_parser.add_argument(
        "--renderer",
        default=None,
        help="Renderer executable (default: $WKPDF_RENDERER or wkhtmltopdf)",
    )
    render_parser.add_argument(
        "--display-wrapper",
        default=None,
        help="Virtual-display wrapper (default: $WKPDF_DISPLAY_WRAPPER or xvfb-run)",
    )
    render_parser.add_argument(
        "--temp-dir",
        type=Path,
        default=None,
        help="Base directory for temporary page files (default: $WKPDF_TEMP_DIR)",
    )
    render_parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Seconds to wait for each renderer attempt (default: $WKPDF_TIMEOUT)",
    )
    render_parser.set_defaults(func=render)

    inspect_parser = subparsers.add_parser(
        "inspect",
        help="Print the page count of a PDF",
        description="Open a PDF with PyMuPDF and print its page count.",
    )
    inspect_parser.add_argument(
        "pdf",
        type=Path,
        help="Path to the PDF file",
    )
    inspect_parser.set_defaults(func=inspect_pdf)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
