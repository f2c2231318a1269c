"""Assemble HTML pages into a single PDF with an external renderer."""

from .config import load_config
from .document import Document
from .exceptions import (
    CleanupError,
    ConfigError,
    DeliveryError,
    RenderError,
    RenderTimeoutError,
    SetupError,
    WkpdfError,
)
from .options import Flag, Option, OptionSet, Setting
from .page import Page

__all__ = [
    "Document",
    "Page",
    "Option",
    "Flag",
    "Setting",
    "OptionSet",
    "load_config",
    "WkpdfError",
    "ConfigError",
    "SetupError",
    "RenderError",
    "RenderTimeoutError",
    "CleanupError",
    "DeliveryError",
]
