"""
Enumeration types for cleaning filters.
"""

from enum import Enum, auto


class FilterLevel(Enum):
    """Levels at which filtering can be applied."""

    RUN = auto()  # Whole runs (samples) removed
    PROTEIN = auto()  # Protein groups removed from every run
    OBSERVATION = auto()  # Individual (run, protein group) rows


class MatchMode(Enum):
    """How exclusion values are compared against a column."""

    EXACT = auto()  # Whole-field (or whole-token) equality
    SUBSTRING = auto()  # Pattern contained anywhere in the field
