"""Common types and enums shared across all models."""

import re
from enum import Enum

YEAR_VALUES = ("1", "2", "3", "4")

REGULATION_PATTERN = re.compile(r"^R\d{2,3}$")


class Role(str, Enum):
    """Account role."""

    student = "student"
    admin = "admin"


class ActivityAction(str, Enum):
    """Kind of logged interaction with a document."""

    view = "view"
    download = "download"


class MatchKind(str, Enum):
    """Tier that produced a resolution result."""

    exact = "exact"
    relaxed = "relaxed"
    subject_only = "subject-only"
    sample = "sample"


class MatchMode(str, Enum):
    """How a single field condition is compared."""

    contains = "contains"  # case-insensitive substring
    equals = "equals"  # exact string equality


class SortOrder(str, Enum):
    """Ordering requested from the catalog."""

    unsorted = "unsorted"
    newest_first = "newest_first"


def normalize_regulation(value: str) -> str:
    """Normalize a regulation code ("r-23", "r 23", "R23") to "R23".

    Raises:
        ValueError: If the value is not "R" followed by 2-3 digits
    """
    compact = re.sub(r"[-\s]", "", value.strip()).upper()
    if not REGULATION_PATTERN.match(compact):
        raise ValueError(f"invalid regulation code: {value!r}")
    return compact


def capitalize_first(value: str) -> str:
    """Upper-case the first character only ("physics" -> "Physics")."""
    return value[:1].upper() + value[1:]
