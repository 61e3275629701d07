"""
Replay helper for results that freeze once they reach a terminal condition.
"""

import logging
from datetime import datetime
from typing import Callable, List, Optional, Tuple, TypeVar

from models.issues import IssueKind, ResultIssue
from models.score import HoleScore

logger = logging.getLogger(__name__)

T = TypeVar("T")


def derive_with_freeze(history, derive: Callable[["ScoreHistory"], T],
                       is_terminal: Callable[[T], bool],
                       reopen_times: List[datetime]) -> Tuple[T, Optional[datetime]]:
    """Derive a result that freezes at the first instant it becomes terminal.

    The history is replayed instant by instant. Once the derived result is
    terminal, later facts are ignored until an explicit reopen at a later
    instant unfreezes it. Returns the result and the instant it froze at
    (None if it is not frozen).
    """
    frozen_at: Optional[datetime] = None
    frozen_state: Optional[T] = None

    for instant in history.timestamps():
        if frozen_at is not None:
            if not any(frozen_at < r <= instant for r in reopen_times):
                continue
            logger.debug(f"Unfreezing at {instant} after reopen")
            frozen_at = None
        state = derive(history.as_of(instant))
        if is_terminal(state):
            frozen_at = instant
            frozen_state = state

    if frozen_at is not None:
        return frozen_state, frozen_at
    return derive(history), None


def late_corrections(history, frozen_at: Optional[datetime],
                     touches: Callable[[HoleScore], bool], target: str) -> List[ResultIssue]:
    """ReopenAfterFinal issues for corrections recorded after a result froze."""
    if frozen_at is None:
        return []
    return [_ignored(score, target) for score in history.corrections()
            if score.timestamp > frozen_at and touches(score)]


def late_facts(history, frozen_at: Optional[datetime],
               touches: Callable[[HoleScore], bool], target: str) -> List[ResultIssue]:
    """ReopenAfterFinal issues for every fact recorded after a result froze.

    Unlike `late_corrections`, a first post for a hole counts too.
    """
    if frozen_at is None:
        return []
    late = [s for s in history.facts if s.timestamp > frozen_at and touches(s)]
    return [_ignored(score, target) for score in sorted(late, key=lambda s: s.timestamp)]


def _ignored(score: HoleScore, target: str) -> ResultIssue:
    return ResultIssue(
        IssueKind.REOPEN_AFTER_FINAL,
        f"Score for '{score.player_id}' on hole {score.hole_number} ignored: {target} is final",
        player_id=score.player_id, hole_number=score.hole_number, target=target,
    )
