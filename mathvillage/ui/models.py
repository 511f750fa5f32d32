"""Data models used by the UI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from mathvillage.core.ledger import LOCK_THRESHOLD, UNLOCK_THRESHOLD, is_resting
from mathvillage.core.state import GameVariant, ProgressState

VARIANT_TITLES = {
    GameVariant.MAKE_TEN: "Make Ten",
    GameVariant.NUMBER_HOP: "Number Hop",
    GameVariant.DOUBLES: "Doubles",
    GameVariant.COUNT_UP: "Count Up",
}


@dataclass
class VariantCard:
    """Hub card for one game: whether it is resting and how close it is to waking."""

    variant: GameVariant
    title: str
    resting: bool
    practice_count: int
    unlock_progress: int

    @property
    def plays_until_rest(self) -> int:
        return 0 if self.resting else max(0, LOCK_THRESHOLD - self.practice_count)

    @property
    def plays_until_awake(self) -> int:
        return max(0, UNLOCK_THRESHOLD - self.unlock_progress) if self.resting else 0


def hub_cards(state: ProgressState) -> List[VariantCard]:
    return [
        VariantCard(
            variant=variant,
            title=VARIANT_TITLES[variant],
            resting=is_resting(state, variant),
            practice_count=state.practice_success_count.get(variant, 0),
            unlock_progress=state.unlock_progress.get(variant, 0),
        )
        for variant in GameVariant
    ]
