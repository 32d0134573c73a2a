from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional

import discord

from .constants import EVERYONE_DENY, MEMBER_ALLOW, SNOWFLAKE_PATTERN, STAFF_ALLOW

if TYPE_CHECKING:
    from .interfaces import GuildDirectory

log = logging.getLogger("concierge.permissions")

_SNOWFLAKE_RE = re.compile(SNOWFLAKE_PATTERN)


@dataclass(frozen=True)
class PortalOverwrite:
    """One principal's allow/deny capability sets on a portal channel."""
    principal: Any
    allow: frozenset[str] = frozenset()
    deny: frozenset[str] = frozenset()

    @property
    def principal_id(self) -> int:
        return self.principal.id

    def to_permission_overwrite(self) -> discord.PermissionOverwrite:
        flags: dict[str, bool] = {name: True for name in self.allow}
        flags.update({name: False for name in self.deny})
        return discord.PermissionOverwrite(**flags)


def is_valid_snowflake(value: Optional[str]) -> bool:
    return isinstance(value, str) and bool(_SNOWFLAKE_RE.match(value))


def resolve_staff_role(directory: GuildDirectory, staff_role_id: Optional[str]) -> Optional[Any]:
    """Return the staff role if the configured id is well formed and exists."""
    staff_id = (staff_role_id or "").strip()
    if not is_valid_snowflake(staff_id):
        return None
    return directory.find_role_by_id(int(staff_id))


def overwrites_for(directory: GuildDirectory, member: Any, staff_role_id: Optional[str]) -> list[PortalOverwrite]:
    """Ordered overwrite list for every channel of a member's portal.

    @everyone is denied view, the member gets chat access, and the staff role
    is appended only when it resolves right now. A bad staff id means the
    portal is private to the member alone.
    """
    overwrites = [
        PortalOverwrite(directory.default_role, deny=EVERYONE_DENY),
        PortalOverwrite(member, allow=MEMBER_ALLOW),
    ]

    staff_role = resolve_staff_role(directory, staff_role_id)
    if staff_role is not None:
        overwrites.append(PortalOverwrite(staff_role, allow=STAFF_ALLOW))
    elif staff_role_id:
        log.debug("Staff role %r not usable in guild %s; omitted", staff_role_id, directory.guild_id)

    return overwrites


def to_discord_overwrites(overwrites: list[PortalOverwrite]) -> dict[Any, discord.PermissionOverwrite]:
    return {ow.principal: ow.to_permission_overwrite() for ow in overwrites}
