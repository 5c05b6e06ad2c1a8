"""Enums for handler loading options.

Kept in their own module to avoid circular imports between settings and loader.
"""

from enum import StrEnum


class ImportMode(StrEnum):
    """How handler modules are scheduled during a load."""

    CONCURRENT = "concurrent"
    SEQUENTIAL = "sequential"


class ExportType(StrEnum):
    """Which export(s) of a handler module are treated as handler candidates."""

    DEFAULT = "default"
    NAMED = "named"
    ALL = "all"  # every named export, same as NAMED with "*"
