"""Base class for renderer launchers.

A launcher decides how the renderer process is started. All launchers share
the same contract: run the renderer with an argument vector and optional
stdin bytes, and return whatever it writes to stdout.

- DirectLauncher: starts the renderer executable itself
- DisplayLauncher: starts it under a virtual-display wrapper
"""

import logging
import subprocess
from abc import ABC, abstractmethod

from schemas.attempt import Attempt
from schemas.config import RendererConfig

from ..exceptions import RenderError, RenderTimeoutError

logger = logging.getLogger(__name__)

# As a page source: read the page from stdin. As the last argument: write
# the PDF to stdout.
STREAM_SENTINEL = "-"


class Launcher(ABC):
    """Abstract base class for renderer launchers.

    Attributes:
        config: Renderer configuration naming the executables
    """

    name = "launcher"

    def __init__(self, config: RendererConfig | None = None):
        self.config = config or RendererConfig()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.config.renderer!r})"

    @abstractmethod
    def command(self, arguments: list[str]) -> list[str]:
        """Build the full command line for an argument vector.

        Args:
            arguments: Renderer arguments, including the trailing sentinel

        Returns:
            Command line, executable first
        """
        pass

    def run(
        self,
        arguments: list[str],
        stdin: bytes | None = None,
        timeout: float | None = None,
    ) -> bytes:
        """Run the renderer and return its standard output.

        stdin is written while stdout and stderr are drained concurrently,
        so a renderer that starts writing before it has read all of its
        input cannot deadlock.

        Args:
            arguments: Renderer arguments, without the trailing sentinel
            stdin: Bytes to feed to the renderer's standard input
            timeout: Seconds to wait before killing the process

        Returns:
            The bytes the renderer wrote to stdout

        Raises:
            RenderError: If the process cannot be started or exits non-zero
            RenderTimeoutError: If the process outlives the timeout
        """
        cmd = self.command([*arguments, STREAM_SENTINEL])
        logger.debug(f"{self.name}: running {cmd}")

        try:
            result = subprocess.run(
                cmd,
                input=stdin if stdin is not None else b"",
                capture_output=True,
                timeout=timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as e:
            stderr = _decode(e.stderr)
            attempt = Attempt(
                launcher=self.name, command=cmd, stderr=stderr, timed_out=True
            )
            raise RenderTimeoutError(
                f"Error running {self.config.renderer}: "
                f"timed out after {timeout} seconds",
                attempts=[attempt],
            ) from e
        except OSError as e:
            attempt = Attempt(launcher=self.name, command=cmd, stderr=str(e))
            raise RenderError(
                f"Error running {self.config.renderer}: could not launch {cmd[0]}: {e}",
                attempts=[attempt],
            ) from e

        stderr = _decode(result.stderr)
        if result.returncode != 0:
            attempt = Attempt(
                launcher=self.name,
                command=cmd,
                returncode=result.returncode,
                stderr=stderr,
            )
            raise RenderError(
                f"Error running {self.config.renderer}: {stderr.strip()}",
                attempts=[attempt],
            )

        logger.debug(f"{self.name}: produced {len(result.stdout)} bytes")
        return result.stdout


def _decode(data: bytes | str | None) -> str:
    if data is None:
        return ""
    if isinstance(data, str):
        return data
    return data.decode("utf-8", errors="replace")
