from __future__ import annotations

import asyncio
import itertools
from typing import Any, Callable, Sequence

import discord

from ..permissions import PortalOverwrite
from ..services.member_locks import MemberLocks
from ..services.provisioner import PortalProvisioner
from ..services.reclaimer import PortalReclaimer

_ids = itertools.count(900_000_000_000_000_001)


def next_id() -> int:
    return next(_ids)


class FakeHTTPResponse:
    """Just enough of aiohttp's response for ``discord.HTTPException``."""

    def __init__(self, status: int = 500, reason: str = "Internal Server Error") -> None:
        self.status = status
        self.reason = reason


def http_error(status: int = 500, message: str = "boom") -> discord.HTTPException:
    return discord.HTTPException(FakeHTTPResponse(status), message)  # type: ignore[arg-type]


class FakeUser:
    """Fake Discord User/Member for testing."""

    def __init__(self, id: int | str = 123456789012345678, name: str = "TestUser", bot: bool = False):
        self.id = id
        self.name = name
        self.display_name = name
        self.bot = bot
        self.mention = f"<@{id}>"
        self.guild = None

    def __str__(self):
        return self.name

    def __repr__(self):
        return f"<FakeUser id={self.id} name={self.name}>"


class FakeRole:
    """Fake Discord Role for testing."""

    def __init__(self, id: int | None = None, name: str = "TestRole"):
        self.id = id if id is not None else next_id()
        self.name = name
        self.mention = f"<@&{self.id}>"

    def __repr__(self):
        return f"<FakeRole id={self.id} name={self.name}>"


class FakeChannel:
    """Fake category or text channel. ``overwrites`` keeps insertion order."""

    def __init__(self, name: str, *, kind: str = "text", category_id: int | None = None,
                 overwrites: Sequence[PortalOverwrite] = (), id: int | None = None):
        self.id = id if id is not None else next_id()
        self.name = name
        self.kind = kind
        self.category_id = category_id
        self.overwrites: list[PortalOverwrite] = list(overwrites)
        self.sent: list[str] = []
        self.fail_send: discord.HTTPException | None = None

    async def send(self, content: str) -> None:
        if self.fail_send is not None:
            raise self.fail_send
        self.sent.append(content)

    def __repr__(self):
        return f"<FakeChannel {self.kind} id={self.id} name={self.name}>"


class FakeGuildDirectory:
    """In-memory GuildDirectory.

    Creates yield to the event loop before the new channel appears, like an
    API round trip, so interleaved handlers can observe each other.

    ``calls`` records every write as ``(op, channel_name)``. Put channel ids in
    ``fail_deletes`` to make their deletion raise, or set ``fail_creates`` to
    make every create raise.
    """

    def __init__(self, guild_id: int = 1, roles: Sequence[FakeRole] = ()):
        self.guild_id = guild_id
        self.default_role = FakeRole(id=guild_id, name="@everyone")
        self.roles: dict[int, FakeRole] = {r.id: r for r in roles}
        self.channels: list[FakeChannel] = []
        self.calls: list[tuple[str, str]] = []
        self.fail_deletes: set[int] = set()
        self.fail_creates: discord.HTTPException | None = None

    # reads

    @property
    def categories(self) -> list[FakeChannel]:
        return [c for c in self.channels if c.kind == "category"]

    def find_category_by_name(self, name: str) -> FakeChannel | None:
        return next((c for c in self.categories if c.name == name), None)

    def find_categories(self, predicate: Callable[[Any], bool]) -> list[FakeChannel]:
        return [c for c in self.categories if predicate(c)]

    def find_channels_by_parent(self, parent_id: int, *, text_only: bool = False) -> list[FakeChannel]:
        return [
            c for c in self.channels
            if c.category_id == parent_id and (not text_only or c.kind == "text")
        ]

    def find_role_by_id(self, role_id: int) -> FakeRole | None:
        return self.roles.get(role_id)

    def has_overwrite_for(self, channel: FakeChannel, principal_id: int) -> bool:
        return any(ow.principal_id == principal_id for ow in channel.overwrites)

    # writes

    async def create_category(self, name: str, overwrites: Sequence[PortalOverwrite], *, reason: str) -> FakeChannel:
        if self.fail_creates is not None:
            raise self.fail_creates
        await asyncio.sleep(0)
        category = FakeChannel(name, kind="category", overwrites=overwrites)
        self.channels.append(category)
        self.calls.append(("create_category", name))
        return category

    async def create_text_channel(self, name: str, category: FakeChannel, overwrites: Sequence[PortalOverwrite],
                                  *, reason: str) -> FakeChannel:
        if self.fail_creates is not None:
            raise self.fail_creates
        await asyncio.sleep(0)
        channel = FakeChannel(name, kind="text", category_id=category.id, overwrites=overwrites)
        self.channels.append(channel)
        self.calls.append(("create_text_channel", name))
        return channel

    async def set_overwrites(self, channel: FakeChannel, overwrites: Sequence[PortalOverwrite], *, reason: str) -> None:
        channel.overwrites = list(overwrites)
        self.calls.append(("set_overwrites", channel.name))

    async def delete_channel(self, channel: FakeChannel, *, reason: str) -> None:
        if channel.id in self.fail_deletes:
            raise http_error(403, "Missing Permissions")
        self.channels.remove(channel)
        self.calls.append(("delete", channel.name))

    # helpers for arranging state

    def add_category(self, name: str, overwrites: Sequence[PortalOverwrite] = ()) -> FakeChannel:
        category = FakeChannel(name, kind="category", overwrites=overwrites)
        self.channels.append(category)
        return category

    def add_channel(self, name: str, category: FakeChannel | None = None, *, kind: str = "text") -> FakeChannel:
        channel = FakeChannel(name, kind=kind, category_id=category.id if category else None)
        self.channels.append(channel)
        return channel


class FakeBot:
    """The slice of ConciergeBot the portal cog touches."""

    def __init__(self, settings, directory: FakeGuildDirectory, guild: Any = None):
        self.settings = settings
        self.directory = directory
        self.guild = guild
        self.guilds = [guild] if guild is not None else []
        self.user = FakeUser(id=111111111111111111, name="Concierge", bot=True)
        self.provisioner = PortalProvisioner(settings)
        self.reclaimer = PortalReclaimer(settings)
        self.member_locks = MemberLocks()

    def directory_for(self, guild: Any) -> FakeGuildDirectory:
        return self.directory

    def get_guild(self, guild_id: int) -> Any:
        if self.guild is not None and self.guild.id == guild_id:
            return self.guild
        return None


class FakeGuild:
    """Fake Discord Guild carrying only what the cog reads."""

    def __init__(self, id: int = 1, name: str = "TestGuild", roles: Sequence[FakeRole] = ()):
        self.id = id
        self.name = name
        self._roles = {r.id: r for r in roles}
        self.members: list[FakeUser] = []

    def get_role(self, role_id: int) -> FakeRole | None:
        return self._roles.get(role_id)


class FakeRawMemberRemoveEvent:
    def __init__(self, user: FakeUser, guild_id: int):
        self.user = user
        self.guild_id = guild_id
