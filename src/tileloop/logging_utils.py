"""Logger setup shared by the whole package."""

import logging

from tileloop.solver.config import config as solver_config

LOGGER_NAME = "tileloop"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return the package logger, or the logger of one of its modules.

    The first call attaches a console handler to the package logger and sets its level from
    the solver configuration, unless a handler has already been configured.  Module loggers
    propagate to the package logger.

    Args:
        name: Module name, e.g. `__name__`.  Names outside the package are nested under it.
    """
    logger = logging.getLogger(LOGGER_NAME)

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] [%(name)s] %(message)s"))
        logger.addHandler(handler)
        logger.setLevel(solver_config.log_level)

    if name is None or name == LOGGER_NAME:
        return logger
    if name.startswith(LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logger.getChild(name)
