"""Document: an ordered set of pages rendered into a single PDF.

The renderer accepts at most one page on standard input, so a Document
decides per render call how in-memory pages reach it:

- no content pages: every page is referenced by path or URL
- one content page: its source token is "-" and its bytes are piped on stdin
- two or more: each is written to page%08d.html in a fresh temp directory,
  which is removed again before the render call returns
"""

import logging
import shutil
import tempfile
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import IO

from schemas.config import RendererConfig

from .exceptions import CleanupError, DeliveryError, SetupError
from .launchers import STREAM_SENTINEL, Launcher, default_launchers, run_with_fallback
from .options import Option, OptionSet
from .page import Page

logger = logging.getLogger(__name__)

TEMP_PREFIX = "wkpdf-"


@dataclass
class ResolvedSources:
    """Source tokens and stdin for one render call.

    Attributes:
        tokens: Resolved source token keyed by page index
        stdin: Bytes to pipe to the renderer, if a single page reads stdin
        temp_dir: Temp directory holding spilled content pages, if any
    """

    tokens: dict[int, str] = field(default_factory=dict)
    stdin: bytes | None = None
    temp_dir: Path | None = None


class Document:
    """A single PDF assembled from one or more pages.

    Pages are rendered in the order they are added. A cover page is only
    flagged, never moved: place it first if the renderer should treat it
    as the opening page.

    Example:
        doc = Document(Setting("--page-size", "A4"))
        doc.add_cover(Page.from_reader(cover_html))
        doc.add_pages(Page.from_file("chapter1.html"), Page.from_url(url))
        doc.write_to_file("book.pdf")

    Attributes:
        pages: Pages in render order
        options: Document-level option tokens
        config: Renderer configuration
    """

    def __init__(
        self,
        *opts: Option | str,
        config: RendererConfig | None = None,
        launchers: Sequence[Launcher] | None = None,
    ):
        self.pages: list[Page] = []
        self.options = OptionSet(*opts)
        self.config = config or RendererConfig()
        self._launchers = list(launchers) if launchers is not None else None

    def __repr__(self) -> str:
        return f"Document(pages={len(self.pages)}, options={list(self.options)})"

    @property
    def launchers(self) -> list[Launcher]:
        if self._launchers is not None:
            return self._launchers
        return default_launchers(self.config)

    def add_pages(self, *pages: Page) -> None:
        self.pages.extend(pages)

    def add_cover(self, page: Page) -> None:
        page.mark_cover()
        self.pages.append(page)

    def add_options(self, *opts: Option | str) -> None:
        self.options.add(*opts)

    def count_reader_pages(self) -> int:
        return sum(1 for page in self.pages if page.is_reader)

    def compute_arguments(self, resolved: Mapping[int, str] | None = None) -> list[str]:
        """Compute the renderer argument vector.

        Args:
            resolved: Source token overrides keyed by page index. Pages
                      without an override use their literal path or URL,
                      or "-" for content pages.

        Returns:
            Document options, then each page's options and source token
        """
        resolved = resolved or {}
        args = list(self.options)
        for index, page in enumerate(self.pages):
            token = resolved.get(index)
            if token is None:
                token = page.source if page.source is not None else STREAM_SENTINEL
            args.extend(page.arguments(token))
        return args

    def render(self) -> bytes:
        """Render the document and return the PDF bytes.

        Raises:
            SetupError: If content pages cannot be spilled to temp files
            RenderError: If every launcher fails
            CleanupError: If the temp directory cannot be removed; the PDF
                          is available on its `output` when rendering succeeded
        """
        if not self.pages:
            logger.warning("Rendering a document with no pages")

        sources = self._resolve_sources()
        arguments = self.compute_arguments(sources.tokens)
        logger.info(
            f"Rendering {len(self.pages)} pages "
            f"({self.count_reader_pages()} from memory) with {self.config.renderer}"
        )
        logger.debug(f"Renderer arguments: {arguments}")

        output = None
        try:
            output = run_with_fallback(
                self.launchers,
                arguments,
                stdin=sources.stdin,
                timeout=self.config.timeout,
            )
        finally:
            if sources.temp_dir is not None:
                try:
                    self._remove_temp_dir(sources.temp_dir, output)
                except CleanupError as cleanup_error:
                    # A render failure in flight takes precedence.
                    if output is None:
                        logger.error(cleanup_error.message)
                    else:
                        raise

        logger.info(f"Rendered {len(output)} bytes")
        return output

    def write_to_file(self, path: str | Path) -> None:
        """Render the document and write the PDF to a file.

        The file is created or overwritten; its mode follows the process umask.

        Raises:
            DeliveryError: If the file cannot be written
        """
        output = self.render()
        try:
            Path(path).write_bytes(output)
        except OSError as e:
            raise DeliveryError(f"Error creating file: {e}") from e
        logger.debug(f"Wrote PDF to {path}")

    def write(self, stream: IO[bytes]) -> None:
        """Render the document and write the PDF to a binary stream.

        Raw streams may accept only part of a write; the remainder is
        written until the whole PDF has been delivered.

        Raises:
            DeliveryError: If the stream rejects or stalls on a write
        """
        output = self.render()
        remaining = memoryview(output)
        try:
            while remaining:
                written = stream.write(remaining)
                if not written:
                    raise DeliveryError(
                        f"Error writing to stream: wrote "
                        f"{len(output) - len(remaining)} of {len(output)} bytes"
                    )
                remaining = remaining[written:]
        except (OSError, ValueError) as e:
            raise DeliveryError(f"Error writing to stream: {e}") from e

    def _resolve_sources(self) -> ResolvedSources:
        """Decide how each content page reaches the renderer."""
        readers = [i for i, page in enumerate(self.pages) if page.is_reader]

        if not readers:
            return ResolvedSources()

        if len(readers) == 1:
            index = readers[0]
            return ResolvedSources(
                tokens={index: STREAM_SENTINEL}, stdin=self.pages[index].content
            )

        return self._write_temp_pages(readers)

    def _write_temp_pages(self, readers: list[int]) -> ResolvedSources:
        """Spill content pages to a fresh temp directory.

        Args:
            readers: Indexes of the content pages

        Raises:
            SetupError: If the directory or a page file cannot be written
        """
        base = self.config.temp_dir
        try:
            temp_dir = Path(
                tempfile.mkdtemp(prefix=TEMP_PREFIX, dir=str(base) if base else None)
            )
        except OSError as e:
            raise SetupError(f"Error creating temp directory: {e}") from e

        sources = ResolvedSources(temp_dir=temp_dir)
        try:
            for index in readers:
                page_path = temp_dir / f"page{index:08d}.html"
                page_path.write_bytes(self.pages[index].content)
                sources.tokens[index] = str(page_path)
                logger.debug(f"Wrote page {index} to {page_path}")
        except OSError as e:
            try:
                self._remove_temp_dir(temp_dir)
            except CleanupError as cleanup_error:
                logger.error(cleanup_error.message)
            raise SetupError(f"Error writing temp file: {e}") from e

        return sources

    def _remove_temp_dir(self, temp_dir: Path, output: bytes | None = None) -> None:
        try:
            shutil.rmtree(temp_dir)
        except OSError as e:
            raise CleanupError(
                f"Error removing temp directory {temp_dir}: {e}", output=output
            ) from e
        logger.debug(f"Removed temp directory {temp_dir}")
