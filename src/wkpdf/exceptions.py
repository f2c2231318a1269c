"""Custom exceptions for document rendering."""

from schemas.attempt import Attempt


class WkpdfError(Exception):
    """Base exception for all rendering errors."""

    def __init__(self, message: str, *args, **kwargs):
        self.message = message
        super().__init__(message, *args, **kwargs)


class ConfigError(WkpdfError):
    """Raised when renderer configuration is invalid."""

    def __init__(self, message: str, errors: list | None = None, *args, **kwargs):
        self.errors = errors or []
        super().__init__(message, *args, **kwargs)


class SetupError(WkpdfError):
    """Raised when page content or temporary files cannot be prepared.

    Setup happens before any process is launched, so no fallback is tried.
    """

    pass


class RenderError(WkpdfError):
    """Raised when the renderer cannot be launched or exits non-zero."""

    def __init__(
        self, message: str, attempts: list[Attempt] | None = None, *args, **kwargs
    ):
        self.attempts = attempts or []
        super().__init__(message, *args, **kwargs)

    @property
    def stderr(self) -> str:
        """Standard error captured by the final attempt."""
        if not self.attempts:
            return ""
        return self.attempts[-1].stderr


class RenderTimeoutError(RenderError):
    """Raised when the renderer is killed at its deadline."""

    pass


class CleanupError(WkpdfError):
    """Raised when the temporary page directory cannot be removed.

    When rendering itself succeeded, the produced PDF is kept on `output`
    so callers can choose to use it despite the leaked directory.
    """

    def __init__(self, message: str, output: bytes | None = None, *args, **kwargs):
        self.output = output
        super().__init__(message, *args, **kwargs)


class DeliveryError(WkpdfError):
    """Raised when the rendered PDF cannot be written to a file or stream."""

    pass
