from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional, Sequence

import discord

from ..permissions import PortalOverwrite, to_discord_overwrites

log = logging.getLogger("concierge.guild_directory")


class DiscordGuildDirectory:
    """GuildDirectory backed by a live ``discord.Guild``.

    Lookups read discord.py's cache; writes go to the API and are awaited.
    """

    def __init__(self, guild: discord.Guild) -> None:
        self._guild = guild

    @property
    def guild_id(self) -> int:
        return self._guild.id

    @property
    def default_role(self) -> discord.Role:
        return self._guild.default_role

    def find_category_by_name(self, name: str) -> Optional[discord.CategoryChannel]:
        return discord.utils.get(self._guild.categories, name=name)

    def find_categories(self, predicate: Callable[[Any], bool]) -> List[discord.CategoryChannel]:
        return [c for c in self._guild.categories if predicate(c)]

    def find_channels_by_parent(self, parent_id: int, *, text_only: bool = False) -> List[discord.abc.GuildChannel]:
        source = self._guild.text_channels if text_only else self._guild.channels
        children = [c for c in source if c.category_id == parent_id]
        return sorted(children, key=lambda c: (c.position, c.id))

    def find_role_by_id(self, role_id: int) -> Optional[discord.Role]:
        return self._guild.get_role(role_id)

    def has_overwrite_for(self, channel: discord.abc.GuildChannel, principal_id: int) -> bool:
        # Targets of members who already left come back as discord.Object; .id still works.
        return any(target.id == principal_id for target in channel.overwrites)

    async def create_category(
        self, name: str, overwrites: Sequence[PortalOverwrite], *, reason: str
    ) -> discord.CategoryChannel:
        category = await self._guild.create_category(
            name, overwrites=to_discord_overwrites(list(overwrites)), reason=reason
        )
        log.info("Created category %s (%s) in guild %s", category.name, category.id, self._guild.id)
        return category

    async def create_text_channel(
        self,
        name: str,
        category: discord.CategoryChannel,
        overwrites: Sequence[PortalOverwrite],
        *,
        reason: str,
    ) -> discord.TextChannel:
        channel = await self._guild.create_text_channel(
            name,
            category=category,
            overwrites=to_discord_overwrites(list(overwrites)),
            reason=reason,
        )
        log.info("Created channel #%s under %s in guild %s", channel.name, category.name, self._guild.id)
        return channel

    async def set_overwrites(
        self, channel: discord.abc.GuildChannel, overwrites: Sequence[PortalOverwrite], *, reason: str
    ) -> None:
        await channel.edit(overwrites=to_discord_overwrites(list(overwrites)), reason=reason)

    async def delete_channel(self, channel: discord.abc.GuildChannel, *, reason: str) -> None:
        await channel.delete(reason=reason)
