from __future__ import annotations

import logging

import discord
from discord.ext import commands

from .constants import ERROR_MESSAGES
from .errors import ConciergeError

log = logging.getLogger("concierge.error_handlers")


async def _reply(ctx: commands.Context, message: str) -> None:
    try:
        await ctx.reply(message, ephemeral=True)
    except discord.HTTPException:
        log.debug("Could not deliver error reply in %s", ctx.channel)


class ErrorHandler(commands.Cog):
    """Centralized error handling for the staff commands."""

    def __init__(self, bot: commands.Bot) -> None:
        self.bot = bot

    @commands.Cog.listener()
    async def on_command_error(self, ctx: commands.Context, error: commands.CommandError) -> None:
        if isinstance(error, commands.CommandNotFound):
            return

        if isinstance(error, commands.MissingPermissions):
            await _reply(ctx, ERROR_MESSAGES["missing_permissions"])
            return

        if isinstance(error, commands.NoPrivateMessage):
            await _reply(ctx, "Portal commands only work inside a server.")
            return

        if isinstance(error, commands.MemberNotFound):
            await _reply(ctx, ERROR_MESSAGES["member_not_found"])
            return

        if isinstance(error, (commands.MissingRequiredArgument, commands.BadArgument)):
            await _reply(ctx, f"Invalid arguments: {error}")
            return

        original = getattr(error, "original", error)
        if isinstance(original, discord.Forbidden):
            log.warning("Command %s hit Forbidden: %s", ctx.command, original)
            await _reply(ctx, ERROR_MESSAGES["bot_missing_permissions"])
            return

        if isinstance(original, ConciergeError):
            log.error("Command %s failed: %s", ctx.command, original)
            await _reply(ctx, f"❌ {original}")
            return

        log.error("Unexpected error in command %s", ctx.command, exc_info=original)
        await _reply(ctx, ERROR_MESSAGES["unexpected"])


async def setup_error_handlers(bot: commands.Bot) -> None:
    """Setup error handlers for the bot."""
    await bot.add_cog(ErrorHandler(bot))
