from __future__ import annotations

import logging
from typing import Any

from ..config import Settings
from ..constants import REASON_JOIN
from ..errors import PortalConfigError
from ..interfaces import GuildDirectory
from ..naming import category_name_for, channel_name_matches
from ..permissions import overwrites_for

log = logging.getLogger("concierge.provisioner")


class PortalProvisioner:
    """Creates or repairs a member's portal: one category plus its text channels.

    Safe to call repeatedly. Each create or overwrite update is a separate API
    call, so an interrupted run leaves a partial portal that the next call
    completes. API errors are not caught here.
    """

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    async def ensure_portal(self, directory: GuildDirectory, member: Any, *, reason: str = REASON_JOIN) -> Any:
        channel_names = self.settings.channel_names
        if not channel_names:
            raise PortalConfigError("CHANNEL_NAMES is empty")

        name = category_name_for(member, self.settings.category_prefix)
        overwrites = overwrites_for(directory, member, self.settings.staff_role_id)

        category = directory.find_category_by_name(name)
        if category is None:
            category = await directory.create_category(name, overwrites, reason=reason)
        else:
            # Refresh in case the staff role changed since creation.
            await directory.set_overwrites(category, overwrites, reason=reason)
            log.debug("Reusing category %s for member %s", name, member.id)

        existing = directory.find_channels_by_parent(category.id, text_only=True)
        for channel_name in channel_names:
            if any(channel_name_matches(ch.name, channel_name) for ch in existing):
                continue
            channel = await directory.create_text_channel(channel_name, category, overwrites, reason=reason)
            existing.append(channel)

        return category

    def first_text_channel(self, directory: GuildDirectory, category: Any) -> Any:
        children = directory.find_channels_by_parent(category.id, text_only=True)
        return children[0] if children else None
