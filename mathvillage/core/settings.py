"""Parent-adjustable game settings."""

from __future__ import annotations

from dataclasses import asdict, dataclass, replace
from typing import Any, Dict, Mapping

NUMBER_RANGES = (10, 20)
OPERATIONS = ("plus", "minus", "mixed")
TEST_TIMERS = (30, 60, 90)
ONE_HANDED_MODES = ("off", "left", "right")


@dataclass(frozen=True)
class Settings:
    number_range: int = 10
    operations: str = "plus"
    session_timer: int = 5  # minutes
    test_timer: int = 60  # seconds
    sound_on: bool = True
    one_handed_mode: str = "off"
    assist_mode: bool = False

    def __post_init__(self) -> None:
        if self.number_range not in NUMBER_RANGES:
            raise ValueError(f"number_range must be one of {NUMBER_RANGES}, got {self.number_range!r}")
        if self.operations not in OPERATIONS:
            raise ValueError(f"operations must be one of {OPERATIONS}, got {self.operations!r}")
        if isinstance(self.session_timer, bool) or not isinstance(self.session_timer, int) or self.session_timer <= 0:
            raise ValueError(f"session_timer must be a positive number of minutes, got {self.session_timer!r}")
        if self.test_timer not in TEST_TIMERS:
            raise ValueError(f"test_timer must be one of {TEST_TIMERS}, got {self.test_timer!r}")
        if not isinstance(self.sound_on, bool):
            raise ValueError(f"sound_on must be a bool, got {self.sound_on!r}")
        if self.one_handed_mode not in ONE_HANDED_MODES:
            raise ValueError(f"one_handed_mode must be one of {ONE_HANDED_MODES}, got {self.one_handed_mode!r}")
        if not isinstance(self.assist_mode, bool):
            raise ValueError(f"assist_mode must be a bool, got {self.assist_mode!r}")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "Settings":
        """Build settings from stored values; missing keys take defaults."""
        if not isinstance(payload, Mapping):
            raise ValueError(f"expected a mapping, got {type(payload).__name__}")
        defaults = cls()
        return cls(
            number_range=payload.get("number_range", defaults.number_range),
            operations=payload.get("operations", defaults.operations),
            session_timer=payload.get("session_timer", defaults.session_timer),
            test_timer=payload.get("test_timer", defaults.test_timer),
            sound_on=payload.get("sound_on", defaults.sound_on),
            one_handed_mode=payload.get("one_handed_mode", defaults.one_handed_mode),
            assist_mode=payload.get("assist_mode", defaults.assist_mode),
        )


def update(settings: Settings, **changes: Any) -> Settings:
    """Return a validated copy of ``settings`` with ``changes`` applied."""
    return replace(settings, **changes)
