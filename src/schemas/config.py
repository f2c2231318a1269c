"""Renderer configuration schema.

A RendererConfig names the external executables and the scratch location a
Document uses. It is passed explicitly to each Document instead of living in
process-wide globals, so tests can point at stub executables.
"""

from pathlib import Path

from pydantic import BaseModel


class RendererConfig(BaseModel):
    """Executables and limits used when rendering a document.

    Attributes:
        renderer: Renderer executable name or path
        display_wrapper: Virtual-display wrapper executable name or path
        display_wrapper_args: Arguments placed between the wrapper and the renderer
        temp_dir: Base directory for temporary page files (None: platform default)
        timeout: Per-attempt deadline in seconds (None: wait indefinitely)
    """

    renderer: str = "wkhtmltopdf"
    display_wrapper: str = "xvfb-run"
    display_wrapper_args: list[str] = []
    temp_dir: Path | None = None
    timeout: float | None = None

    model_config = {"frozen": True}
