from __future__ import annotations

import logging

from .config import env_flag


def configure_logging(*, verbose: bool = False) -> None:
    """Configure root logging for the build runner.

    If callers already configured logging handlers, we don't override them.
    """

    if logging.getLogger().handlers:
        return

    level = logging.DEBUG if (verbose or env_flag("OSCR_BUILD_DEBUG")) else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
