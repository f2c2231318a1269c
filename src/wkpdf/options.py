"""Renderer options as opaque command-line tokens.

Options are not interpreted: each one contributes its tokens, in order, to
the argument vector handed to the renderer.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterator


class Option(ABC):
    """Abstract base class for anything that contributes renderer flags."""

    @abstractmethod
    def tokens(self) -> list[str]:
        """Return the command-line tokens for this option."""
        pass


class Flag(Option):
    """A bare switch such as `--grayscale`."""

    def __init__(self, name: str):
        self.name = name

    def __repr__(self) -> str:
        return f"Flag({self.name!r})"

    def tokens(self) -> list[str]:
        return [self.name]


class Setting(Option):
    """A switch followed by one or more values, such as `--page-size A4`."""

    def __init__(self, name: str, *values):
        self.name = name
        self.values = [str(v) for v in values]

    def __repr__(self) -> str:
        return f"Setting({self.name!r}, {', '.join(map(repr, self.values))})"

    def tokens(self) -> list[str]:
        return [self.name, *self.values]


class OptionSet:
    """Ordered, append-only list of option tokens."""

    def __init__(self, *opts: Option | str):
        self._tokens: list[str] = []
        self.add(*opts)

    def __repr__(self) -> str:
        return f"OptionSet({self._tokens!r})"

    def __iter__(self) -> Iterator[str]:
        return iter(self._tokens)

    def __len__(self) -> int:
        return len(self._tokens)

    def __eq__(self, other) -> bool:
        if not isinstance(other, OptionSet):
            return NotImplemented
        return self._tokens == other._tokens

    def add(self, *opts: Option | str) -> None:
        """Append the tokens of each option, preserving order.

        Plain strings are taken as a single token.

        Raises:
            TypeError: If an option is neither an Option nor a string
        """
        for opt in opts:
            if isinstance(opt, Option):
                self._tokens.extend(opt.tokens())
            elif isinstance(opt, str):
                self._tokens.append(opt)
            else:
                raise TypeError(f"Unsupported option type: {type(opt).__name__}")
