from __future__ import annotations

import logging

from dotenv import load_dotenv

from .bot import ConciergeBot
from .config import load_settings
from .logging_setup import setup_logging

log = logging.getLogger("concierge")


def main() -> None:
    load_dotenv()
    try:
        settings = load_settings()
    except RuntimeError as e:
        setup_logging()
        log.error("❌ %s", e)
        raise SystemExit(1) from e
    setup_logging(settings.log_level)

    bot = ConciergeBot(settings)
    # Logging is already configured; keep discord.py from installing its own handler.
    bot.run(settings.token, log_handler=None)


if __name__ == "__main__":
    main()
