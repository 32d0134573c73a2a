from __future__ import annotations

import logging
from typing import Any

import discord
from discord.ext import commands

from ..constants import RECONCILE_DEFAULT, RECONCILE_MAX, REASON_REBUILD
from ..permissions import is_valid_snowflake, resolve_staff_role

log = logging.getLogger("concierge.cogs.portals")


def welcome_text(member: Any, has_staff: bool) -> str:
    staff = " and our staff" if has_staff else ""
    return f"Welcome {member.mention}! This private space is visible to you{staff}."


class PortalsCog(commands.Cog):
    """Builds a private portal for every member who joins and removes it when they leave."""

    def __init__(self, bot: commands.Bot) -> None:
        self.bot = bot  # type: ignore[assignment]

    @property
    def settings(self):
        return self.bot.settings  # type: ignore[attr-defined]

    @commands.Cog.listener()
    async def on_ready(self) -> None:
        user = self.bot.user
        log.info("Logged in as %s (%s)", user, getattr(user, "id", "?"))
        self.run_diagnostics()

    def run_diagnostics(self) -> None:
        if not self.settings.channel_names:
            log.warning("CHANNEL_NAMES is empty; portals cannot be created until it is set")

        staff_id = self.settings.staff_role_id
        if not staff_id:
            log.info("STAFF_ROLE_ID not set; portals will be visible to members only")
            return
        if not is_valid_snowflake(staff_id):
            log.warning("STAFF_ROLE_ID %r is not a valid snowflake; staff will not see portals", staff_id)
            return
        for guild in self.bot.guilds:
            if guild.get_role(int(staff_id)) is None:
                log.warning("Staff role %s does not exist in guild %s (%s)", staff_id, guild.name, guild.id)

    @commands.Cog.listener()
    async def on_member_join(self, member: discord.Member) -> None:
        if member.bot and self.settings.ignore_bots:
            return
        try:
            log.info("%s joined %s", member, member.guild.name)
            await self._provision_and_welcome(member)
        except Exception:
            log.exception("Failed to create portal on join for %s (%s)", member, member.id)

    async def _provision_and_welcome(self, member: discord.Member) -> None:
        directory = self.bot.directory_for(member.guild)  # type: ignore[attr-defined]
        async with self.bot.member_locks.hold(member.guild.id, member.id):  # type: ignore[attr-defined]
            category = await self.bot.provisioner.ensure_portal(directory, member)  # type: ignore[attr-defined]
            first = self.bot.provisioner.first_text_channel(directory, category)  # type: ignore[attr-defined]

        if first is None or not self.settings.welcome_enabled:
            return

        has_staff = resolve_staff_role(directory, self.settings.staff_role_id) is not None
        try:
            await first.send(welcome_text(member, has_staff))
        except discord.HTTPException as e:
            # The portal exists; a lost welcome is not a provisioning failure.
            log.warning("Failed sending welcome in #%s: %s (status=%s)", first.name, e, getattr(e, "status", None))

    @commands.Cog.listener()
    async def on_raw_member_remove(self, payload: discord.RawMemberRemoveEvent) -> None:
        # Raw variant fires for members missing from the cache as well.
        user = payload.user
        try:
            guild = self.bot.get_guild(payload.guild_id)
            if guild is None:
                log.warning("Member %s left unknown guild %s; skipping cleanup", user.id, payload.guild_id)
                return
            log.info("%s left %s - cleaning up portal", user, guild.name)
            directory = self.bot.directory_for(guild)  # type: ignore[attr-defined]
            async with self.bot.member_locks.hold(guild.id, user.id):  # type: ignore[attr-defined]
                await self.bot.reclaimer.delete_portal(directory, user)  # type: ignore[attr-defined]
        except Exception:
            log.exception("Failed to delete portal on leave for %s (%s)", user, user.id)

    # Staff tools for repairing portals after downtime or config changes.

    @commands.hybrid_command(name="portal_rebuild", description="Create or repair a member's private portal.")
    @commands.guild_only()
    @commands.has_permissions(manage_guild=True)
    async def portal_rebuild(self, ctx: commands.Context, member: discord.Member) -> None:
        directory = self.bot.directory_for(ctx.guild)  # type: ignore[attr-defined]
        async with self.bot.member_locks.hold(ctx.guild.id, member.id):  # type: ignore[attr-defined]
            category = await self.bot.provisioner.ensure_portal(  # type: ignore[attr-defined]
                directory, member, reason=REASON_REBUILD
            )
        await ctx.reply(f"✅ Portal for {member.mention} is `{category.name}`.")

    @commands.hybrid_command(name="portal_remove", description="Delete a member's private portal.")
    @commands.guild_only()
    @commands.has_permissions(manage_guild=True)
    async def portal_remove(self, ctx: commands.Context, member: discord.Member) -> None:
        directory = self.bot.directory_for(ctx.guild)  # type: ignore[attr-defined]
        async with self.bot.member_locks.hold(ctx.guild.id, member.id):  # type: ignore[attr-defined]
            deleted = await self.bot.reclaimer.delete_portal(  # type: ignore[attr-defined]
                directory, member, reason=f"portal removed by {ctx.author}"
            )
        await ctx.reply(f"🧹 Deleted **{deleted}** portal categor{'y' if deleted == 1 else 'ies'} for {member.mention}.")

    @commands.hybrid_command(name="portal_reconcile", description="Ensure portals for the last N cached members.")
    @commands.guild_only()
    @commands.has_permissions(manage_guild=True)
    async def portal_reconcile(self, ctx: commands.Context, count: int = RECONCILE_DEFAULT) -> None:
        count = max(1, min(RECONCILE_MAX, int(count)))
        members = [m for m in ctx.guild.members if not (m.bot and self.settings.ignore_bots)][-count:]

        if ctx.interaction is not None:
            await ctx.defer()

        directory = self.bot.directory_for(ctx.guild)  # type: ignore[attr-defined]
        ok = failed = 0
        for member in members:
            try:
                async with self.bot.member_locks.hold(ctx.guild.id, member.id):  # type: ignore[attr-defined]
                    await self.bot.provisioner.ensure_portal(directory, member, reason=REASON_REBUILD)  # type: ignore[attr-defined]
                ok += 1
            except Exception:
                failed += 1
                log.exception("Reconcile failed for %s (%s)", member, member.id)

        await ctx.reply(f"✅ Reconciled **{ok}** portal(s), **{failed}** failed.")


async def setup(bot: commands.Bot) -> None:
    await bot.add_cog(PortalsCog(bot))
