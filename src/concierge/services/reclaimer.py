from __future__ import annotations

import logging
from typing import Any, List

from ..config import Settings
from ..constants import REASON_LEAVE
from ..interfaces import GuildDirectory
from ..naming import category_suffix_for

log = logging.getLogger("concierge.reclaimer")


def _describe(exc: BaseException) -> str:
    code = getattr(exc, "code", None) or getattr(exc, "status", None)
    return f"{type(exc).__name__} code={code}: {exc}" if code else f"{type(exc).__name__}: {exc}"


class PortalReclaimer:
    """Deletes the portal(s) of a departing member. Never raises."""

    def __init__(self, settings: Settings) -> None:
        self.settings = settings

    def find_member_categories(self, directory: GuildDirectory, member_id: int) -> List[Any]:
        """Prefixed categories whose overwrites name the member.

        Survives username changes. Best effort: nothing ties the overwrite
        entry to the category name transactionally.
        """
        prefix = self.settings.category_prefix
        return directory.find_categories(
            lambda c: c.name.startswith(prefix) and directory.has_overwrite_for(c, member_id)
        )

    def guess_member_categories(self, directory: GuildDirectory, member_id: int) -> List[Any]:
        """Prefixed categories ending in the member's id suffix. Name only."""
        prefix = self.settings.category_prefix
        suffix = category_suffix_for(member_id)
        return directory.find_categories(lambda c: c.name.startswith(prefix) and c.name.endswith(suffix))

    async def delete_portal(self, directory: GuildDirectory, member: Any, *, reason: str = REASON_LEAVE) -> int:
        """Delete every portal category of ``member`` with its children.

        Returns how many categories were deleted.
        """
        try:
            categories = self.find_member_categories(directory, member.id)
            guessed = False
            if not categories:
                categories = self.guess_member_categories(directory, member.id)
                guessed = True
        except Exception as e:
            log.warning("Portal lookup failed for member %s: %s", member.id, _describe(e))
            return 0

        if not categories:
            log.info("No portal found for member %s (%s)", member, member.id)
            return 0

        deleted = 0
        for category in categories:
            if await self._delete_category_tree(directory, category, reason=reason):
                deleted += 1
                log.info(
                    "Deleted %sportal category %s for %s (%s)",
                    "guessed " if guessed else "",
                    category.name,
                    member,
                    member.id,
                )
        return deleted

    async def _delete_category_tree(self, directory: GuildDirectory, category: Any, *, reason: str) -> bool:
        try:
            children = directory.find_channels_by_parent(category.id)
        except Exception as e:
            log.warning("Failed listing children of %s: %s", category.name, _describe(e))
            children = []

        for child in children:
            try:
                await directory.delete_channel(child, reason=reason)
            except Exception as e:
                log.warning("Failed deleting child channel %s: %s", child.name, _describe(e))

        try:
            await directory.delete_channel(category, reason=reason)
        except Exception as e:
            log.warning("Failed deleting category %s: %s", category.name, _describe(e))
            return False
        return True
