from __future__ import annotations


class ConciergeError(Exception):
    """Base class for errors raised by the portal bot."""


class PortalConfigError(ConciergeError):
    """The bot is configured in a way that makes provisioning impossible."""
