"""Try an ordered chain of launchers until one succeeds."""

import logging
from collections.abc import Sequence

from schemas.attempt import Attempt
from schemas.config import RendererConfig

from ..exceptions import RenderError
from .direct import DirectLauncher
from .display import DisplayLauncher
from .launcher import Launcher

logger = logging.getLogger(__name__)


def default_launchers(config: RendererConfig) -> list[Launcher]:
    """Direct launch first, then the display-wrapped launch."""
    return [DirectLauncher(config), DisplayLauncher(config)]


def run_with_fallback(
    launchers: Sequence[Launcher],
    arguments: list[str],
    stdin: bytes | None = None,
    timeout: float | None = None,
) -> bytes:
    """Run the renderer with each launcher in turn.

    Every launcher receives the identical argument vector and stdin bytes.
    The first success is returned; each launcher is tried at most once.

    Args:
        launchers: Launchers in the order they should be tried
        arguments: Renderer arguments, without the trailing sentinel
        stdin: Bytes to feed to the renderer's standard input
        timeout: Per-attempt deadline in seconds

    Returns:
        The PDF bytes written by the first successful launcher

    Raises:
        RenderError: The last launcher's error, with every failed attempt
                     recorded on its `attempts`
    """
    if not launchers:
        raise ValueError("at least one launcher is required")

    attempts: list[Attempt] = []
    last_error: RenderError | None = None

    for launcher in launchers:
        if last_error is not None:
            logger.warning(
                f"Falling back to {launcher.name} launcher after: {last_error.message}"
            )
        try:
            output = launcher.run(arguments, stdin=stdin, timeout=timeout)
        except RenderError as e:
            attempts.extend(e.attempts)
            last_error = e
            continue

        logger.debug(f"Rendered with {launcher.name} launcher")
        return output

    last_error.attempts = attempts
    raise last_error
