from __future__ import annotations

import os
import sys
from typing import Literal, Optional

from loguru import logger

LogLevel = Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR"]

PACKAGE = "patch_designer"
ENV_LOGLEVEL = "PATCH_DESIGNER_LOGLEVEL"
FORMAT = "<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan> - <level>{message}</level>"


class LogController:
    """Owns the stderr sink used by patch_designer.

    Only the sink this controller added is ever replaced; handlers installed by
    a host application are left alone. The package logs nothing until a level
    is set, following loguru's convention for libraries.
    """

    def __init__(self) -> None:
        self._sink_id: Optional[int] = None
        self.level: str = "WARNING"

    def set_default(self) -> None:
        self.set_std_loglevel(os.getenv(ENV_LOGLEVEL, default="WARNING"))

    def set_std_loglevel(self, loglevel: str) -> None:
        loglevel = loglevel.upper()
        if self._sink_id is not None:
            logger.remove(self._sink_id)
        self._sink_id = logger.add(sys.stderr, level=loglevel, format=FORMAT, filter=PACKAGE)
        self.level = loglevel
        logger.enable(PACKAGE)

    def release_default_sink(self) -> None:
        """Drop loguru's preinstalled DEBUG handler. Only the CLI, which owns the process, calls this."""
        try:
            logger.remove(0)
        except ValueError:
            pass


LOG_CONTROLLER = LogController()


def set_loglevel(loglevel: LogLevel) -> None:
    """Set the stderr loglevel for patch_designer.

    Args:
        loglevel ('TRACE','DEBUG','INFO','WARNING','ERROR'): The loglevel
    """
    LOG_CONTROLLER.set_std_loglevel(loglevel)
    logger.trace(f"Setting loglevel to {loglevel}")
