"""Schema definitions for wkpdf."""

from .attempt import Attempt
from .config import RendererConfig

__all__ = [
    "Attempt",
    "RendererConfig",
]
