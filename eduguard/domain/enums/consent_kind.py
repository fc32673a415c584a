"""Capabilities a guardian consent grant can cover."""

from enum import Enum


class ConsentKind(str, Enum):
    """Guardian consent capability.

    The consent gate accepts an active grant of any kind; the kind matters to
    features that need a specific capability (e.g. data export).
    """

    GENERAL = "general"
    GRADES_VIEW = "grades_view"
    DATA_EXPORT = "data_export"
    EXTERNAL_LINKS = "external_links"
