"""Launchers that start the external renderer process."""

from .direct import DirectLauncher
from .display import DisplayLauncher
from .fallback import default_launchers, run_with_fallback
from .launcher import STREAM_SENTINEL, Launcher

__all__ = [
    "Launcher",
    "DirectLauncher",
    "DisplayLauncher",
    "STREAM_SENTINEL",
    "default_launchers",
    "run_with_fallback",
]
