"""Private per-member portals for Discord communities."""

__version__ = "1.0.0"
