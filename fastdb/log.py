"""
Logging setup for fastdb.

Library modules only ever do ``logger = logging.getLogger(__name__)``;
handlers are installed by the application. The CLI calls
``configure_logging`` once at startup.
"""

import logging
from typing import Optional

from fastdb.config import LoggingConfig, get_config

_configured = False


def configure_logging(config: Optional[LoggingConfig] = None, force: bool = False) -> None:
    """
    Install a console handler on the ``fastdb`` logger.

    Args:
        config: Logging configuration. Defaults to get_config().logging.
        force: Re-configure even if already done.
    """
    global _configured

    if _configured and not force:
        return

    config = config or get_config().logging
    root = logging.getLogger("fastdb")

    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(config.format))
    root.addHandler(handler)
    root.setLevel(getattr(logging, config.level, logging.WARNING))

    _configured = True
