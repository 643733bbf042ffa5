"""candleview exception hierarchy.

All package-specific exceptions inherit from :class:`CandleViewError`.
Ordinary out-of-range input (pan past the edge, pointer outside the chart,
empty dataset) is never an error; these types are reserved for caller
contract violations.
"""

from __future__ import annotations


class CandleViewError(Exception):
    """Base exception for all candleview errors."""


# -- Configuration ----------------------------------------------------------


class ConfigError(CandleViewError):
    """Invalid configuration that cannot be repaired with defaults.

    Raised for an unknown log level passed on the command line.
    """


# -- Layout -----------------------------------------------------------------


class LayoutError(CandleViewError, ValueError):
    """Chart geometry leaves a negative content area (padding exceeds size)."""
