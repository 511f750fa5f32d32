from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Mapping, Tuple, Union

logger = logging.getLogger(__name__)

Score = Union[int, float]

BASE_COSMETIC = "base-char"


class GameVariant(str, Enum):
    """The practice activities. Declaration order is the enumeration order."""

    MAKE_TEN = "MAKE_TEN"
    NUMBER_HOP = "NUMBER_HOP"
    DOUBLES = "DOUBLES"
    COUNT_UP = "COUNT_UP"


class PlayMode(str, Enum):
    TIMED = "TIMED"
    FREE = "FREE"
    STREAK = "STREAK"


@dataclass(frozen=True)
class GameResult:
    """A completed attempt, as reported by a game session."""

    variant: GameVariant
    score: Score
    elapsed_time: float = 0.0
    is_test: bool = False


def _zero_counts() -> Dict[GameVariant, int]:
    return {variant: 0 for variant in GameVariant}


def _no_locks() -> Dict[GameVariant, bool]:
    return {variant: False for variant in GameVariant}


@dataclass(frozen=True)
class ProgressState:
    """Snapshot of everything the player has earned.

    Instances are never mutated; every transition builds a new one with
    :func:`dataclasses.replace`. ``level`` is derived from ``xp``.
    """

    currency: int = 0
    xp: int = 0
    best_test_score: Dict[GameVariant, Score] = field(default_factory=dict)
    practice_success_count: Dict[GameVariant, int] = field(default_factory=_zero_counts)
    locked: Dict[GameVariant, bool] = field(default_factory=_no_locks)
    unlock_progress: Dict[GameVariant, int] = field(default_factory=_zero_counts)
    owned_cosmetics: Tuple[str, ...] = (BASE_COSMETIC,)
    equipped_cosmetic: str = BASE_COSMETIC

    @property
    def level(self) -> int:
        # Imported lazily; rewards imports this module.
        from mathvillage.core.rewards import level_for_xp

        return level_for_xp(self.xp)

    def with_changes(self, **changes: Any) -> "ProgressState":
        # Snapshots never share their per-variant maps.
        for name in _MAP_FIELDS:
            changes.setdefault(name, dict(getattr(self, name)))
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "currency": self.currency,
            "xp": self.xp,
            "level": self.level,
            "best_test_score": {v.value: s for v, s in self.best_test_score.items()},
            "practice_success_count": {v.value: n for v, n in self.practice_success_count.items()},
            "locked": {v.value: flag for v, flag in self.locked.items()},
            "unlock_progress": {v.value: n for v, n in self.unlock_progress.items()},
            "owned_cosmetics": list(self.owned_cosmetics),
            "equipped_cosmetic": self.equipped_cosmetic,
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "ProgressState":
        """Rebuild a snapshot written by :meth:`to_dict`.

        Raises ``ValueError``/``TypeError`` when a field has the wrong shape;
        the store turns those into a fallback to :func:`initial_state`.
        """
        if not isinstance(payload, Mapping):
            raise TypeError(f"expected a mapping, got {type(payload).__name__}")

        counts = _zero_counts()
        counts.update(_variant_map(payload.get("practice_success_count", {}), _count))
        locks = _no_locks()
        locks.update(_variant_map(payload.get("locked", {}), bool))
        progress = _zero_counts()
        progress.update(_variant_map(payload.get("unlock_progress", {}), _count))

        # Imported lazily; ledger imports this module.
        from mathvillage.core.ledger import LOCK_THRESHOLD

        for variant, is_locked in locks.items():
            if is_locked and counts[variant] < LOCK_THRESHOLD:
                logger.warning("%s is marked resting with only %d successes; waking it", variant.value, counts[variant])
                locks[variant] = False
            # Unlock progress is only meaningful while resting.
            if not locks[variant]:
                progress[variant] = 0

        owned = tuple(str(item) for item in payload.get("owned_cosmetics", [BASE_COSMETIC]))
        if BASE_COSMETIC not in owned:
            owned = (BASE_COSMETIC,) + owned
        equipped = str(payload.get("equipped_cosmetic", BASE_COSMETIC))
        if equipped not in owned:
            logger.warning("Equipped cosmetic %r is not owned; using %r", equipped, BASE_COSMETIC)
            equipped = BASE_COSMETIC

        return cls(
            currency=_count(payload.get("currency", 0)),
            xp=_count(payload.get("xp", 0)),
            best_test_score=_variant_map(payload.get("best_test_score", {}), _test_score),
            practice_success_count=counts,
            locked=locks,
            unlock_progress=progress,
            owned_cosmetics=owned,
            equipped_cosmetic=equipped,
        )


_MAP_FIELDS = ("best_test_score", "practice_success_count", "locked", "unlock_progress")


def initial_state() -> ProgressState:
    """The fixed first-launch snapshot."""
    return ProgressState()


def _count(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise ValueError(f"expected a number, got {value!r}")
    return max(0, int(value))


def _test_score(value: Any) -> Score:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise ValueError(f"expected a score, got {value!r}")
    return min(100, max(0, value))


def _variant_map(raw: Any, convert) -> Dict[GameVariant, Any]:
    if not isinstance(raw, Mapping):
        raise ValueError(f"expected a per-variant mapping, got {raw!r}")
    result: Dict[GameVariant, Any] = {}
    for key, value in raw.items():
        try:
            variant = GameVariant(key)
        except ValueError:
            logger.warning("Dropping unknown game variant %r from stored progress", key)
            continue
        result[variant] = convert(value)
    return result
