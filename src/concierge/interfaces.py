"""
Interface contracts for the portal services.

The provisioner and reclaimer never touch ``discord.Guild`` directly. They go
through a ``GuildDirectory``: reads are answered from the client's local cache,
writes are remote calls. Tests swap in an in-memory implementation.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Any, Callable, List, Optional, Protocol, Sequence, runtime_checkable

from .permissions import PortalOverwrite


@runtime_checkable
class GuildDirectory(Protocol):
    """Read-through view of one guild's channels and roles."""

    @property
    @abstractmethod
    def guild_id(self) -> int:
        ...

    @property
    @abstractmethod
    def default_role(self) -> Any:
        """The @everyone principal."""
        ...

    @abstractmethod
    def find_category_by_name(self, name: str) -> Optional[Any]:
        """First category with exactly this name."""
        ...

    @abstractmethod
    def find_categories(self, predicate: Callable[[Any], bool]) -> List[Any]:
        """Every category for which ``predicate`` holds, in guild order."""
        ...

    @abstractmethod
    def find_channels_by_parent(self, parent_id: int, *, text_only: bool = False) -> List[Any]:
        """Direct children of a category."""
        ...

    @abstractmethod
    def find_role_by_id(self, role_id: int) -> Optional[Any]:
        ...

    @abstractmethod
    def has_overwrite_for(self, channel: Any, principal_id: int) -> bool:
        """Whether the channel carries an overwrite entry for the principal."""
        ...

    @abstractmethod
    async def create_category(self, name: str, overwrites: Sequence[PortalOverwrite], *, reason: str) -> Any:
        ...

    @abstractmethod
    async def create_text_channel(
        self, name: str, category: Any, overwrites: Sequence[PortalOverwrite], *, reason: str
    ) -> Any:
        ...

    @abstractmethod
    async def set_overwrites(self, channel: Any, overwrites: Sequence[PortalOverwrite], *, reason: str) -> None:
        """Replace the channel's overwrites with exactly these."""
        ...

    @abstractmethod
    async def delete_channel(self, channel: Any, *, reason: str) -> None:
        ...


def validate_guild_directory(directory: object) -> GuildDirectory:
    """Validate and return GuildDirectory interface."""
    if not isinstance(directory, GuildDirectory):
        raise AttributeError(f"Object {directory} does not implement GuildDirectory interface")
    return directory
