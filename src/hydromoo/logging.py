from __future__ import annotations

import logging


def configure_hydromoo_logging(*, level: int = logging.INFO) -> logging.Logger:
    """
    Configure a minimal console logger for hydromoo.

    Notes:
        - Opt-in only; library modules never call logging.basicConfig().
        - The handler is only attached if the "hydromoo" logger has none yet.
    """
    logger = logging.getLogger("hydromoo")
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger


__all__ = ["configure_hydromoo_logging"]
