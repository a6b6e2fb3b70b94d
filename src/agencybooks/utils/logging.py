"""Application-wide logging helpers.

Modules create their logger with ``get_logger(__name__)``. The CLI calls
``configure_logging`` once with the level chosen by the operator; repeated
calls only adjust the level so handlers are never duplicated.
"""

import logging
import sys
from typing import Optional, Union

_HANDLER: Optional[logging.StreamHandler] = None

LOG_FORMAT = "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: Union[int, str] = logging.WARNING) -> None:
    """Attach a stream handler to the package logger and set its level."""
    global _HANDLER

    if isinstance(level, str):
        resolved = logging.getLevelName(level.strip().upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: '{level}'")
        level = resolved

    package_logger = logging.getLogger("agencybooks")
    package_logger.setLevel(level)
    if _HANDLER is None:
        _HANDLER = logging.StreamHandler()
        _HANDLER.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        package_logger.addHandler(_HANDLER)
    else:
        # sys.stderr may have been swapped since the handler was created
        _HANDLER.setStream(sys.stderr)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-specific logger."""
    return logging.getLogger(name)
