"""Mastery tiers for graded test scores."""

from __future__ import annotations

import logging
from enum import Enum

from mathvillage.core.state import Score

logger = logging.getLogger(__name__)

MIN_SCORE = 0
MAX_SCORE = 100

DIAMOND_SCORE = 90
IRON_SCORE = 75


class MasteryTier(str, Enum):
    DIAMOND = "Diamond"
    IRON = "Iron"
    WOOD = "Wood"

    @property
    def rank(self) -> int:
        """0 for Wood, 2 for Diamond."""
        return {MasteryTier.WOOD: 0, MasteryTier.IRON: 1, MasteryTier.DIAMOND: 2}[self]


def clamp_score(score: Score) -> Score:
    """Clamp a score into 0..100. Out-of-range input is logged, not raised."""
    if score < MIN_SCORE or score > MAX_SCORE:
        logger.warning("Score %s is outside %d..%d; clamping", score, MIN_SCORE, MAX_SCORE)
        return min(MAX_SCORE, max(MIN_SCORE, score))
    return score


def rate(score: Score) -> MasteryTier:
    score = clamp_score(score)
    if score >= DIAMOND_SCORE:
        return MasteryTier.DIAMOND
    if score >= IRON_SCORE:
        return MasteryTier.IRON
    return MasteryTier.WOOD
