"""Tests for mathvillage.core.progress – progress persistence."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from mathvillage.core.engine import apply_result
from mathvillage.core.progress import PROGRESS_KEY, SETTINGS_KEY, ProgressStore, default_home
from mathvillage.core.settings import Settings
from mathvillage.core.state import GameResult, GameVariant, initial_state


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def store(tmp_path: Path) -> ProgressStore:
    """ProgressStore backed by a temp dir so tests don't touch ~/.mathvillage."""
    return ProgressStore(tmp_path / "village")


# ---------------------------------------------------------------------------
# Location
# ---------------------------------------------------------------------------

class TestLocation:
    def test_env_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("MATHVILLAGE_HOME", str(tmp_path / "elsewhere"))
        assert default_home() == tmp_path / "elsewhere"
        s = ProgressStore()
        assert s.base_dir == tmp_path / "elsewhere"
        assert s.base_dir.is_dir()

    def test_default_under_home(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.delenv("MATHVILLAGE_HOME", raising=False)
        assert default_home() == Path.home() / ".mathvillage"

    def test_keys_are_separate_files(self, store: ProgressStore):
        assert store.path_for(PROGRESS_KEY) != store.path_for(SETTINGS_KEY)


# ---------------------------------------------------------------------------
# Fresh state
# ---------------------------------------------------------------------------

class TestProgressStoreFresh:
    def test_no_file_returns_initial(self, store: ProgressStore):
        assert store.load_progress() == initial_state()

    def test_no_file_returns_default_settings(self, store: ProgressStore):
        assert store.load_settings() == Settings()

    def test_get_missing_key(self, store: ProgressStore):
        assert store.get("nothing") is None


# ---------------------------------------------------------------------------
# Save / load
# ---------------------------------------------------------------------------

class TestRoundTrip:
    def test_progress_round_trip(self, store: ProgressStore):
        state = initial_state()
        for _ in range(5):
            state = apply_result(state, GameResult(GameVariant.MAKE_TEN, 100))
        state = apply_result(state, GameResult(GameVariant.DOUBLES, 70, elapsed_time=33.0, is_test=True))
        store.save_progress(state)
        assert store.load_progress() == state

    def test_settings_round_trip(self, store: ProgressStore):
        settings = Settings(number_range=20, operations="mixed", test_timer=30, assist_mode=True)
        store.save_settings(settings)
        assert store.load_settings() == settings

    def test_progress_written_as_json(self, store: ProgressStore):
        store.save_progress(initial_state().with_changes(currency=12))
        data = json.loads(store.path_for(PROGRESS_KEY).read_text(encoding="utf-8"))
        assert data["currency"] == 12
        assert data["locked"]["MAKE_TEN"] is False

    def test_keys_independent(self, store: ProgressStore):
        store.save_settings(Settings(number_range=20))
        store.path_for(PROGRESS_KEY).write_text("garbage", encoding="utf-8")
        assert store.load_progress() == initial_state()
        assert store.load_settings().number_range == 20


class TestReset:
    def test_reset_all(self, store: ProgressStore):
        store.save_progress(initial_state().with_changes(currency=99, xp=300))
        store.save_settings(Settings(sound_on=False))
        store.reset()
        assert store.load_progress() == initial_state()
        assert store.load_settings() == Settings()


# ---------------------------------------------------------------------------
# Loading edge cases
# ---------------------------------------------------------------------------

class TestLoadEdgeCases:
    def test_corrupt_json(self, store: ProgressStore):
        store.path_for(PROGRESS_KEY).write_text("NOT VALID JSON", encoding="utf-8")
        assert store.load_progress() == initial_state()

    def test_progress_not_dict(self, store: ProgressStore):
        store.set(PROGRESS_KEY, "bad")
        assert store.load_progress() == initial_state()

    def test_progress_bad_field(self, store: ProgressStore):
        store.set(PROGRESS_KEY, {"xp": "many"})
        assert store.load_progress() == initial_state()

    def test_variant_map_not_dict(self, store: ProgressStore):
        store.set(PROGRESS_KEY, {"locked": ["MAKE_TEN"]})
        assert store.load_progress() == initial_state()

    def test_settings_bad_value(self, store: ProgressStore):
        store.set(SETTINGS_KEY, {"number_range": 50})
        assert store.load_settings() == Settings()

    def test_invalid_utf8(self, store: ProgressStore):
        store.path_for(PROGRESS_KEY).write_bytes(b"\xff\xfe{garbage")
        assert store.load_progress() == initial_state()

    def test_invalid_utf8_settings(self, store: ProgressStore):
        store.path_for(SETTINGS_KEY).write_bytes(b"\xff\xfe{garbage")
        assert store.load_settings() == Settings()

    @pytest.mark.parametrize("literal", ["Infinity", "-Infinity", "NaN"])
    def test_non_finite_counter(self, store: ProgressStore, literal):
        store.path_for(PROGRESS_KEY).write_text('{"xp": ' + literal + '}', encoding="utf-8")
        assert store.load_progress() == initial_state()

    def test_non_finite_test_score(self, store: ProgressStore):
        store.path_for(PROGRESS_KEY).write_text('{"best_test_score": {"DOUBLES": Infinity}}', encoding="utf-8")
        assert store.load_progress() == initial_state()

    def test_settings_missing_fields(self, store: ProgressStore):
        store.set(SETTINGS_KEY, {"sound_on": False})
        loaded = store.load_settings()
        assert loaded.sound_on is False
        assert loaded.number_range == 10

    def test_logs_warning_on_corruption(self, store: ProgressStore, caplog: pytest.LogCaptureFixture):
        store.path_for(PROGRESS_KEY).write_text("{", encoding="utf-8")
        with caplog.at_level("WARNING"):
            store.load_progress()
        assert "Could not load progress" in caplog.text

    def test_save_failure_is_logged(self, store: ProgressStore, caplog: pytest.LogCaptureFixture):
        # A directory where the file should be makes the write fail.
        store.path_for(PROGRESS_KEY).mkdir()
        with caplog.at_level("WARNING"):
            store.save_progress(initial_state())
        assert "Could not save progress" in caplog.text
