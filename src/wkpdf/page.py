"""Page: one HTML input unit of a document."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import IO, Literal

from .exceptions import SetupError
from .options import Option, OptionSet

PageKind = Literal["file", "url", "content"]


@dataclass
class Page:
    """Represents one HTML input unit of a document.

    A page is a value holder: the Document that renders it computes the
    page's source token for each render call and never writes it back, so
    the same Page may be added to several Documents.

    Attributes:
        kind: Where the HTML comes from ("file", "url" or "content")
        source: Filesystem path or URL, verbatim (None for content pages)
        content: Buffered HTML bytes (None for file and URL pages)
        cover: Whether the page is rendered as a cover page
        options: Page-specific option tokens
    """

    kind: PageKind
    source: str | None = None
    content: bytes | None = None
    cover: bool = False
    options: OptionSet = field(default_factory=OptionSet)

    @classmethod
    def from_file(cls, path: str | Path) -> "Page":
        return cls(kind="file", source=str(path))

    @classmethod
    def from_url(cls, url: str) -> "Page":
        return cls(kind="url", source=url)

    @classmethod
    def from_reader(cls, reader: bytes | str | IO) -> "Page":
        """Create a page from in-memory HTML.

        Args:
            reader: Raw bytes, a string (encoded as UTF-8), or a file-like
                object opened in binary or text mode

        Returns:
            A content page holding a copy of the HTML

        Raises:
            SetupError: If the content cannot be read
        """
        if isinstance(reader, (bytes, bytearray, memoryview)):
            return cls(kind="content", content=bytes(reader))
        if isinstance(reader, str):
            return cls(kind="content", content=reader.encode("utf-8"))

        try:
            data = reader.read()
        except (OSError, ValueError) as e:
            raise SetupError(f"Error reading page content: {e}") from e

        if isinstance(data, str):
            data = data.encode("utf-8")
        return cls(kind="content", content=bytes(data))

    @property
    def is_reader(self) -> bool:
        return self.kind == "content"

    def add_options(self, *opts: Option | str) -> None:
        self.options.add(*opts)

    def mark_cover(self) -> None:
        self.cover = True

    def arguments(self, token: str) -> list[str]:
        """Return this page's slice of the renderer argument vector.

        Args:
            token: The resolved source token (path, URL, temp file or "-")
        """
        args = list(self.options)
        if self.cover:
            args.append("cover")
        args.append(token)
        return args
