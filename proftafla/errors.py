"""
Error taxonomy.

An unknown department is not an error: lookups return None for it.
"""

from __future__ import annotations


class ProftaflaError(Exception):
    """Base class for all errors raised by this package."""


class UpstreamUnavailable(ProftaflaError):
    """The timetable endpoint could not be reached or returned something unreadable."""


class CacheUnavailable(ProftaflaError):
    """The cache store could not be reached."""
