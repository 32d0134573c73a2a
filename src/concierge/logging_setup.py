from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def setup_logging(level: str = "INFO") -> None:
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        resolved = logging.INFO

    logging.basicConfig(level=resolved, format=LOG_FORMAT, force=True)

    # discord.http is chatty at DEBUG and logs every request at INFO on some versions.
    logging.getLogger("discord.http").setLevel(max(resolved, logging.WARNING))
    logging.getLogger("concierge").setLevel(resolved)
