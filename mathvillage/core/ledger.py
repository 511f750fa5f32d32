"""Resting/unlock rules for practice play and best scores for tests.

Practice successes on one variant eventually put it to rest; successes on
the other variants wake it up again. Test attempts are graded separately and
never affect whether a variant is resting.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List

from mathvillage.core.mastery import DIAMOND_SCORE, MasteryTier, clamp_score, rate
from mathvillage.core.state import GameVariant, ProgressState, Score

logger = logging.getLogger(__name__)

LOCK_THRESHOLD = 5
UNLOCK_THRESHOLD = 3


def is_resting(state: ProgressState, variant: GameVariant) -> bool:
    return bool(state.locked.get(variant, False))


def can_start(state: ProgressState, variant: GameVariant, is_test: bool = False) -> bool:
    """Tests are always allowed; practice only while the variant is active."""
    return is_test or not is_resting(state, variant)


def on_practice_success(state: ProgressState, variant: GameVariant) -> ProgressState:
    if is_resting(state, variant):
        logger.warning("Practice success reported for resting variant %s; ignoring", variant.value)
        return state

    counts: Dict[GameVariant, int] = dict(state.practice_success_count)
    locked: Dict[GameVariant, bool] = dict(state.locked)
    progress: Dict[GameVariant, int] = dict(state.unlock_progress)

    counts[variant] = counts.get(variant, 0) + 1
    if counts[variant] >= LOCK_THRESHOLD:
        locked[variant] = True
        logger.info("%s is now resting after %d successes", variant.value, counts[variant])

    for other in GameVariant:
        if other is variant or not state.locked.get(other, False):
            continue
        progress[other] = progress.get(other, 0) + 1
        if progress[other] >= UNLOCK_THRESHOLD:
            locked[other] = False
            counts[other] = 0
            progress[other] = 0
            logger.info("%s is active again", other.value)

    return state.with_changes(
        practice_success_count=counts,
        locked=locked,
        unlock_progress=progress,
    )


def on_practice_failure(state: ProgressState, variant: GameVariant) -> ProgressState:
    # Failures never move any counter.
    return state


def on_test_result(state: ProgressState, variant: GameVariant, score: Score) -> ProgressState:
    score = clamp_score(score)
    best = state.best_test_score.get(variant)
    if best is not None and score <= best:
        return state
    scores = dict(state.best_test_score)
    scores[variant] = score
    return state.with_changes(best_test_score=scores)


def all_mastered(state: ProgressState, required_count: int) -> bool:
    scores = state.best_test_score
    if len(scores) < required_count:
        return False
    return all(score >= DIAMOND_SCORE for score in scores.values())


@dataclass(frozen=True)
class MasteryReportRow:
    variant: GameVariant
    best_score: Score
    attempted: bool
    tier: MasteryTier


@dataclass(frozen=True)
class MasteryReport:
    rows: List[MasteryReportRow]
    diamond_sword: bool


def mastery_report(state: ProgressState) -> MasteryReport:
    """Per-variant best score and tier, plus the all-mastered award."""
    rows = []
    for variant in GameVariant:
        attempted = variant in state.best_test_score
        best = state.best_test_score.get(variant, 0)
        rows.append(MasteryReportRow(variant=variant, best_score=best, attempted=attempted, tier=rate(best)))
    return MasteryReport(rows=rows, diamond_sword=all_mastered(state, len(GameVariant)))

