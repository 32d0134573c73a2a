from __future__ import annotations

from typing import Final

# Snowflakes are 17-20 decimal digits as of today.
SNOWFLAKE_PATTERN: Final[str] = r"^[0-9]{17,20}$"

# Characters of the member id appended to every category name.
IDENTITY_SUFFIX_LENGTH: Final[int] = 4

# Capability sets, named after discord.Permissions flags.
EVERYONE_DENY: Final[frozenset[str]] = frozenset({"view_channel"})

MEMBER_ALLOW: Final[frozenset[str]] = frozenset({
    "view_channel",
    "send_messages",
    "read_message_history",
    "attach_files",
    "embed_links",
})

STAFF_ALLOW: Final[frozenset[str]] = frozenset({
    "view_channel",
    "send_messages",
    "read_message_history",
    "manage_messages",
})

# Audit log reasons
REASON_JOIN: Final[str] = "auto-create portal on join"
REASON_LEAVE: Final[str] = "member left - clean up portal"
REASON_REBUILD: Final[str] = "portal rebuilt by staff"

# Bounds for /portal_reconcile
RECONCILE_DEFAULT: Final[int] = 50
RECONCILE_MAX: Final[int] = 200

ERROR_MESSAGES = {
    "missing_permissions": "You don't have permission to use this command.",
    "bot_missing_permissions": "I lack the permissions needed to manage portals here.",
    "member_not_found": "I couldn't find that member.",
    "unexpected": "Something went wrong running that command.",
}
