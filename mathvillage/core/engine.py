"""Folds a finished attempt into the player's progress."""

from __future__ import annotations

import logging

from mathvillage.core import ledger
from mathvillage.core.errors import VariantResting
from mathvillage.core.rewards import apply_reward, compute_reward
from mathvillage.core.state import GameResult, GameVariant, ProgressState

logger = logging.getLogger(__name__)

# Practice sessions report a flat 100 when the child finishes them.
PRACTICE_PASS_SCORE = 100


def start_attempt(state: ProgressState, variant: GameVariant, is_test: bool = False) -> None:
    """Reject practice on a resting variant before any session starts."""
    if not ledger.can_start(state, variant, is_test):
        raise VariantResting(variant)


def apply_result(state: ProgressState, result: GameResult) -> ProgressState:
    new_state = apply_reward(state, compute_reward(result.score))
    if result.is_test:
        new_state = ledger.on_test_result(new_state, result.variant, result.score)
    elif result.score >= PRACTICE_PASS_SCORE:
        new_state = ledger.on_practice_success(new_state, result.variant)
    else:
        new_state = ledger.on_practice_failure(new_state, result.variant)
    logger.debug(
        "%s %s scored %s: currency=%d xp=%d level=%d",
        "Test" if result.is_test else "Practice",
        result.variant.value,
        result.score,
        new_state.currency,
        new_state.xp,
        new_state.level,
    )
    return new_state
