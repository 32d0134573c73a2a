from __future__ import annotations

import pytest

from concierge.config import Settings
from concierge.testing.fakes import FakeGuild, FakeGuildDirectory, FakeRole, FakeUser

STAFF_ROLE_ID = 222222222222222222
GUILD_ID = 333333333333333333


@pytest.fixture
def staff_role() -> FakeRole:
    return FakeRole(id=STAFF_ROLE_ID, name="Staff")


@pytest.fixture
def settings() -> Settings:
    return Settings(token="test-token", category_prefix="client-", channel_names=("General", "Files"))


@pytest.fixture
def staff_settings(settings: Settings) -> Settings:
    return Settings(
        token=settings.token,
        staff_role_id=str(STAFF_ROLE_ID),
        category_prefix=settings.category_prefix,
        channel_names=settings.channel_names,
    )


@pytest.fixture
def directory(staff_role: FakeRole) -> FakeGuildDirectory:
    return FakeGuildDirectory(guild_id=GUILD_ID, roles=[staff_role])


@pytest.fixture
def guild(staff_role: FakeRole) -> FakeGuild:
    return FakeGuild(id=GUILD_ID, name="Clients", roles=[staff_role])


@pytest.fixture
def member(guild: FakeGuild) -> FakeUser:
    user = FakeUser(id=481516234200007234, name="Jo.Hn!")
    user.guild = guild
    return user
