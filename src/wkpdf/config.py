"""Load renderer configuration from the environment.

Environment variables:
    WKPDF_RENDERER: renderer executable (default: wkhtmltopdf)
    WKPDF_DISPLAY_WRAPPER: virtual-display wrapper (default: xvfb-run)
    WKPDF_DISPLAY_WRAPPER_ARGS: shell-split arguments for the wrapper
    WKPDF_TEMP_DIR: base directory for temporary page files
    WKPDF_TIMEOUT: per-attempt deadline in seconds
"""

import logging
import os
import shlex
from collections.abc import Mapping

from pydantic import ValidationError

from schemas.config import RendererConfig

from .exceptions import ConfigError

logger = logging.getLogger(__name__)

ENV_PREFIX = "WKPDF_"


def load_config(
    environ: Mapping[str, str] | None = None, **overrides
) -> RendererConfig:
    """Build a RendererConfig from WKPDF_* variables.

    Args:
        environ: Mapping to read from (default: os.environ)
        **overrides: Field values that take precedence over the environment;
                     None values are ignored

    Returns:
        RendererConfig with unset fields left at their defaults

    Raises:
        ConfigError: If a value fails validation
    """
    environ = os.environ if environ is None else environ
    data: dict = {}

    for key in ("renderer", "display_wrapper", "temp_dir", "timeout"):
        value = environ.get(ENV_PREFIX + key.upper())
        if value:
            data[key] = value

    wrapper_args = environ.get(ENV_PREFIX + "DISPLAY_WRAPPER_ARGS")
    if wrapper_args:
        data["display_wrapper_args"] = shlex.split(wrapper_args)

    data.update({k: v for k, v in overrides.items() if v is not None})

    try:
        config = RendererConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(
            f"Invalid renderer configuration: {e}", errors=e.errors()
        ) from e

    logger.debug(f"Loaded renderer configuration: {config}")
    return config
