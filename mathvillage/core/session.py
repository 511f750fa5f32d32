from __future__ import annotations

import time
from typing import Optional

from mathvillage.core.settings import Settings
from mathvillage.core.state import GameResult, GameVariant, PlayMode

TEST_QUESTION_COUNT = 10
STREAK_TARGET = 20
STREAK_HEARTS = 3


class GameSession:
    """Tracks one attempt at a game: answers, hearts and the clock.

    Questions come from the caller; the session only counts outcomes.

      * **Test** – ten questions, each answer moves on. Score is the share
        answered correctly, 0..100. Running out of time ends the test early
        with whatever was answered.
      * **Streak practice** – twenty correct answers in a row of three
        hearts. Losing every heart abandons the attempt with no result.
      * **Timed / free practice** – finishes when the caller says so and
        always scores 100.
    """

    def __init__(
        self,
        variant: GameVariant,
        mode: PlayMode = PlayMode.TIMED,
        is_test: bool = False,
        settings: Optional[Settings] = None,
    ) -> None:
        self._variant = variant
        self._mode = mode
        self._is_test = is_test
        self._settings = settings or Settings()
        self._start_time = time.time()
        self._answered = 0
        self._correct = 0
        self._hearts = STREAK_HEARTS if mode is PlayMode.STREAK and not is_test else None
        self._finished = False

    @property
    def variant(self) -> GameVariant:
        return self._variant

    @property
    def is_test(self) -> bool:
        return self._is_test

    @property
    def correct(self) -> int:
        """Number of correct answers so far."""
        return self._correct

    @property
    def answered(self) -> int:
        return self._answered

    @property
    def hearts(self) -> Optional[int]:
        """Hearts left in streak practice; ``None`` in other modes."""
        return self._hearts

    @property
    def time_limit(self) -> Optional[int]:
        """Seconds allowed, or ``None`` when the session is untimed."""
        if self._is_test:
            return self._settings.test_timer
        if self._mode is PlayMode.TIMED:
            return self._settings.session_timer * 60
        return None

    def elapsed(self) -> float:
        return time.time() - self._start_time

    def is_abandoned(self) -> bool:
        return self._hearts is not None and self._hearts <= 0

    def is_complete(self) -> bool:
        if self._finished:
            return True
        if self._is_test:
            return self._answered >= TEST_QUESTION_COUNT
        if self._mode is PlayMode.STREAK:
            return self._correct >= STREAK_TARGET
        return False

    def answer(self, correct: bool) -> None:
        """Record the outcome of the current question."""
        if self.is_complete() or self.is_abandoned():
            return
        self._answered += 1
        if correct:
            self._correct += 1
        elif self._hearts is not None:
            self._hearts -= 1

    def finish(self) -> None:
        """End the session now (time ran out, or the child pressed done).

        A streak only ends by reaching its target; stopping early yields no result.
        """
        if self._mode is PlayMode.STREAK and not self._is_test:
            return
        if not self.is_abandoned():
            self._finished = True

    def result(self) -> Optional[GameResult]:
        """The attempt's result, or ``None`` while unfinished or abandoned."""
        if self.is_abandoned() or not self.is_complete():
            return None
        if self._is_test:
            elapsed = self.elapsed()
            if self.time_limit is not None:
                elapsed = min(elapsed, float(self.time_limit))
            return GameResult(
                variant=self._variant,
                score=self._correct * 100 / TEST_QUESTION_COUNT,
                elapsed_time=elapsed,
                is_test=True,
            )
        return GameResult(variant=self._variant, score=100, elapsed_time=0.0, is_test=False)
