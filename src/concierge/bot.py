from __future__ import annotations

import asyncio
import logging

import discord
from discord.ext import commands

from .config import Settings
from .error_handlers import setup_error_handlers
from .interfaces import GuildDirectory, validate_guild_directory
from .services.guild_directory import DiscordGuildDirectory
from .services.member_locks import MemberLocks
from .services.provisioner import PortalProvisioner
from .services.reclaimer import PortalReclaimer

log = logging.getLogger("concierge.bot")


class _CommandSyncManager:
    def __init__(self, bot: "ConciergeBot") -> None:
        self.bot = bot
        self._lock = asyncio.Lock()

    async def sync_startup(self) -> None:
        if self.bot.settings.sync_guild_id:
            await self.sync_guild(self.bot.settings.sync_guild_id)
        else:
            await self.sync_global()

    async def sync_global(self) -> None:
        async with self._lock:
            await self.bot.tree.sync()
            log.info("Commands synced globally")
            self._log_tree()

    async def sync_guild(self, guild_id: int) -> None:
        async with self._lock:
            guild = discord.Object(id=guild_id)
            self.bot.tree.copy_global_to(guild=guild)
            await self.bot.tree.sync(guild=guild)
            log.info("Commands synced to guild %d", guild_id)
            self._log_tree()

    def _log_tree(self) -> None:
        cmds = self.bot.tree.get_commands()
        log.info("Tree commands loaded: %d", len(cmds))
        for c in cmds:
            log.info(" - /%s", c.name)


class ConciergeBot(commands.Bot):
    def __init__(self, settings: Settings) -> None:
        intents = discord.Intents.default()
        # Join/leave events need the privileged members intent.
        intents.members = True

        log.info("INTENTS: guilds=%s members=%s", intents.guilds, intents.members)

        super().__init__(
            command_prefix=commands.when_mentioned,
            intents=intents,
            allowed_mentions=discord.AllowedMentions(everyone=False, roles=False, users=True),
            help_command=None,
        )

        self.settings = settings
        self.provisioner = PortalProvisioner(settings)
        self.reclaimer = PortalReclaimer(settings)
        self.member_locks = MemberLocks()
        self._sync_mgr = _CommandSyncManager(self)

    def directory_for(self, guild: discord.Guild) -> GuildDirectory:
        return validate_guild_directory(DiscordGuildDirectory(guild))

    async def setup_hook(self) -> None:
        await setup_error_handlers(self)
        await self.load_extension("concierge.cogs.portals")
        log.info("Loaded cogs: %s", ", ".join(self.cogs))

        try:
            await self._sync_mgr.sync_startup()
        except discord.HTTPException:
            # Portals work without slash commands; only the staff tools are affected.
            log.exception("Command sync failed")
