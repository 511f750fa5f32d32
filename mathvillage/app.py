"""Application entry point and setup for Math Village."""

from __future__ import annotations

import logging
from typing import Any, Optional

from mathvillage.core import engine
from mathvillage.core.ledger import mastery_report
from mathvillage.core.progress import ProgressStore
from mathvillage.core.session import GameSession
from mathvillage.core.settings import Settings, update
from mathvillage.core.shop import ShopCatalog, buy_or_equip
from mathvillage.core.state import GameResult, GameVariant, PlayMode, ProgressState, initial_state
from mathvillage.ui.models import hub_cards

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    """Configure application-wide logging with a standard format."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


class Village:
    """Owns the live progress snapshot and settings and saves after every change."""

    def __init__(self, store: ProgressStore, catalog: Optional[ShopCatalog] = None) -> None:
        self._store = store
        self._catalog = catalog or ShopCatalog()
        self._state = store.load_progress()
        self._settings = store.load_settings()

    @property
    def state(self) -> ProgressState:
        return self._state

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def catalog(self) -> ShopCatalog:
        return self._catalog

    def start(self, variant: GameVariant, mode: PlayMode = PlayMode.TIMED, is_test: bool = False) -> GameSession:
        engine.start_attempt(self._state, variant, is_test)
        return GameSession(variant, mode=mode, is_test=is_test, settings=self._settings)

    def complete(self, result: GameResult) -> ProgressState:
        self._state = engine.apply_result(self._state, result)
        self._store.save_progress(self._state)
        return self._state

    def buy(self, item_key: str) -> ProgressState:
        self._state = buy_or_equip(self._state, self._catalog.get(item_key))
        self._store.save_progress(self._state)
        return self._state

    def update_settings(self, **changes: Any) -> Settings:
        self._settings = update(self._settings, **changes)
        self._store.save_settings(self._settings)
        return self._settings

    def reset(self) -> None:
        self._store.reset()
        self._state = initial_state()
        self._settings = Settings()
        logger.info("Progress erased")


def run() -> None:
    """Load saved progress and log a hub summary."""
    configure_logging()
    village = Village(ProgressStore())
    state = village.state
    logger.info("Level %d, %d XP, %d emeralds", state.level, state.xp, state.currency)
    for card in hub_cards(state):
        if card.resting:
            logger.info("%s is resting (%d more games elsewhere)", card.title, card.plays_until_awake)
        else:
            logger.info("%s: %d plays until rest", card.title, card.plays_until_rest)
    report = mastery_report(state)
    for row in report.rows:
        logger.info("%s test: %s (%s%%)", row.variant.value, row.tier.value, row.best_score)
    if report.diamond_sword:
        logger.info("Diamond sword earned")


if __name__ == "__main__":
    run()
