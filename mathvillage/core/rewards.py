from __future__ import annotations

import math
from dataclasses import dataclass

from mathvillage.core.mastery import clamp_score
from mathvillage.core.state import ProgressState, Score

XP_PER_CURRENCY = 5
XP_PER_LEVEL = 100


@dataclass(frozen=True)
class Reward:
    """Currency and XP earned by one attempt."""

    currency_delta: int
    xp_delta: int


def compute_reward(score: Score) -> Reward:
    """One emerald per full ten points, five XP per emerald."""
    currency = int(math.floor(clamp_score(score) / 10))
    return Reward(currency_delta=currency, xp_delta=currency * XP_PER_CURRENCY)


def level_for_xp(xp: int) -> int:
    return xp // XP_PER_LEVEL + 1


def apply_reward(state: ProgressState, reward: Reward) -> ProgressState:
    return state.with_changes(
        currency=state.currency + reward.currency_delta,
        xp=state.xp + reward.xp_delta,
    )
