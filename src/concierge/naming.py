from __future__ import annotations

import re
from typing import Protocol

from .constants import IDENTITY_SUFFIX_LENGTH

_UNSAFE_RE = re.compile(r"[^a-zA-Z0-9\-_]")
_WHITESPACE_RE = re.compile(r"\s+")


class NamedMember(Protocol):
    id: int
    name: str


def sanitize_name(name: str) -> str:
    """Drop everything outside ``[a-zA-Z0-9-_]`` and lowercase.

    Examples:
    - "Jo.Hn!" -> "john"
    - "Some_One-2" -> "some_one-2"
    - "🙂" -> ""
    """
    return _UNSAFE_RE.sub("", name or "").lower()


def identity_suffix(member_id: int | str) -> str:
    return str(member_id)[-IDENTITY_SUFFIX_LENGTH:]


def category_name_for(member: NamedMember, prefix: str) -> str:
    """Deterministic category name for a member's portal.

    The trailing id fragment keeps members whose names sanitize to the same
    string (often the empty string) apart.
    """
    return f"{prefix}{sanitize_name(member.name)}-{identity_suffix(member.id)}"


def category_suffix_for(member_id: int | str) -> str:
    return f"-{identity_suffix(member_id)}"


def channel_slug(name: str) -> str:
    """The form Discord stores a text channel name in."""
    return _WHITESPACE_RE.sub("-", (name or "").strip()).lower()


def channel_name_matches(existing: str, configured: str) -> bool:
    return existing == configured or existing == channel_slug(configured)
