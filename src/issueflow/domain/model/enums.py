"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class IssueStatus(StrEnum):
    OPEN = "OPEN"
    CONFIRMED = "CONFIRMED"
    REOPENED = "REOPENED"
    RESOLVED = "RESOLVED"
    CLOSED = "CLOSED"


class Resolution(StrEnum):
    FIXED = "FIXED"
    FALSE_POSITIVE = "FALSE-POSITIVE"
    WONT_FIX = "WONTFIX"
    REMOVED = "REMOVED"


class Severity(StrEnum):
    INFO = "INFO"
    MINOR = "MINOR"
    MAJOR = "MAJOR"
    CRITICAL = "CRITICAL"
    BLOCKER = "BLOCKER"


class BranchType(StrEnum):
    LONG = "long"
    SHORT = "short"


class ComponentType(StrEnum):
    PROJECT = "project"
    DIRECTORY = "directory"
    FILE = "file"


class ComponentStatus(StrEnum):
    """Change status of a component relative to the previous analysis."""

    SAME = "same"
    CHANGED = "changed"
    ADDED = "added"
