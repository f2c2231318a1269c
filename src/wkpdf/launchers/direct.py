"""Launch the renderer executable directly."""

from .launcher import Launcher


class DirectLauncher(Launcher):
    """Start the renderer as a plain child process."""

    name = "direct"

    def command(self, arguments: list[str]) -> list[str]:
        return [self.config.renderer, *arguments]
