from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_CATEGORY_PREFIX = "client-"
DEFAULT_CHANNEL_NAMES = "Markups,General"


def _get_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name, "").strip().lower()
    if not raw:
        return default
    return raw in {"1", "true", "yes", "y", "on"}


def parse_channel_names(raw: str) -> tuple[str, ...]:
    """Split a comma separated channel list, dropping blanks and repeats."""
    names = [part.strip() for part in (raw or "").split(",")]
    return tuple(dict.fromkeys(n for n in names if n))


@dataclass(frozen=True)
class Settings:
    token: str
    # Raw value; validated against the guild every time it is used.
    staff_role_id: str = ""
    category_prefix: str = DEFAULT_CATEGORY_PREFIX
    # May be empty. Provisioning refuses to run in that case.
    channel_names: tuple[str, ...] = parse_channel_names(DEFAULT_CHANNEL_NAMES)
    welcome_enabled: bool = True
    ignore_bots: bool = False
    sync_guild_id: int = 0
    log_level: str = "INFO"


def load_settings() -> Settings:
    token = os.getenv("DISCORD_TOKEN", "").strip()
    if not token:
        raise RuntimeError("DISCORD_TOKEN is required")
    # CHANNEL_NAMES set but blank is kept blank on purpose; only unset falls back.
    raw_channels = os.getenv("CHANNEL_NAMES")
    if raw_channels is None:
        raw_channels = DEFAULT_CHANNEL_NAMES
    return Settings(
        token=token,
        staff_role_id=os.getenv("STAFF_ROLE_ID", "").strip(),
        category_prefix=os.getenv("CATEGORY_PREFIX", DEFAULT_CATEGORY_PREFIX),
        channel_names=parse_channel_names(raw_channels),
        welcome_enabled=_get_bool("WELCOME_ENABLED", True),
        ignore_bots=_get_bool("IGNORE_BOTS", False),
        sync_guild_id=_get_int("SYNC_GUILD_ID", 0),
        log_level=(os.getenv("LOG_LEVEL", "INFO").strip() or "INFO"),
    )
