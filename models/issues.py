"""
Recoverable error conditions reported alongside computed results.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class IssueKind(Enum):
    MISSING_CONFIGURATION = "MissingConfiguration"
    UNKNOWN_PLAYER_REFERENCE = "UnknownPlayerReference"
    INCONSISTENT_HOLE_SEQUENCE = "InconsistentHoleSequence"
    UNRESOLVED_SKIN_TIE = "UnresolvedSkinTie"
    REOPEN_AFTER_FINAL = "ReopenAfterFinal"


@dataclass(frozen=True)
class ResultIssue:
    """A condition the engines tolerated rather than raised."""
    kind: IssueKind
    message: str
    player_id: Optional[str] = None
    hole_number: Optional[int] = None
    target: Optional[str] = None
