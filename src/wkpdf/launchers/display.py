"""Launch the renderer under a virtual-display wrapper.

Some renderer builds need a graphical display even when producing PDFs. On
headless hosts the wrapper (xvfb-run by default) provides one and starts the
renderer as its own child.
"""

from .launcher import Launcher


class DisplayLauncher(Launcher):
    """Start the renderer through the configured display wrapper.

    The command line is the wrapper, its own arguments, then the renderer
    name followed by the renderer arguments.
    """

    name = "display"

    def command(self, arguments: list[str]) -> list[str]:
        return [
            self.config.display_wrapper,
            *self.config.display_wrapper_args,
            self.config.renderer,
            *arguments,
        ]
