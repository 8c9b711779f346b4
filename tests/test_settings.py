"""Tests for settings persistence and the legacy-duration migration."""

from __future__ import annotations

import json

from focusflow.settings import Settings, load_settings, save_settings


class TestSettings:
    def test_defaults(self):
        s = Settings()
        assert s.last_duration_seconds == 1500
        assert s.window_x is None
        assert s.window_y is None

    def test_round_trip(self, settings_path):
        save_settings(Settings(last_duration_seconds=725, window_x=10, window_y=20))
        loaded = load_settings()
        assert loaded.last_duration_seconds == 725
        assert loaded.window_x == 10
        assert loaded.window_y == 20

    def test_missing_file_gives_defaults(self, settings_path):
        assert not settings_path.exists()
        assert load_settings() == Settings()

    def test_corrupt_file_gives_defaults(self, settings_path, caplog):
        settings_path.write_text("{not json", encoding="utf-8")
        assert load_settings() == Settings()
        assert "Unable to load settings" in caplog.text

    def test_unknown_keys_ignored(self, settings_path):
        settings_path.write_text(
            json.dumps({"last_duration_seconds": 900, "theme": "neon"}),
            encoding="utf-8",
        )
        assert load_settings().last_duration_seconds == 900

    def test_duration_clamped_on_load(self, settings_path):
        settings_path.write_text(
            json.dumps({"last_duration_seconds": 5}), encoding="utf-8",
        )
        assert load_settings().last_duration_seconds == 30

        settings_path.write_text(
            json.dumps({"last_duration_seconds": 99_999}), encoding="utf-8",
        )
        assert load_settings().last_duration_seconds == 5400


class TestLegacyMigration:
    def test_minutes_become_seconds(self, settings_path):
        settings_path.write_text(
            json.dumps({"last_duration_minutes": 40}), encoding="utf-8",
        )
        assert load_settings().last_duration_seconds == 2400

    def test_legacy_field_discarded_after_migration(self, settings_path):
        settings_path.write_text(
            json.dumps({"last_duration_minutes": 40}), encoding="utf-8",
        )
        load_settings()
        data = json.loads(settings_path.read_text(encoding="utf-8"))
        assert "last_duration_minutes" not in data
        assert data["last_duration_seconds"] == 2400

    def test_migrated_minutes_are_clamped(self, settings_path):
        settings_path.write_text(
            json.dumps({"last_duration_minutes": 500}), encoding="utf-8",
        )
        assert load_settings().last_duration_seconds == 5400

    def test_seconds_field_wins_over_legacy(self, settings_path):
        settings_path.write_text(
            json.dumps({"last_duration_minutes": 40, "last_duration_seconds": 600}),
            encoding="utf-8",
        )
        assert load_settings().last_duration_seconds == 600

    def test_garbage_legacy_value_falls_back(self, settings_path):
        settings_path.write_text(
            json.dumps({"last_duration_minutes": "lots"}), encoding="utf-8",
        )
        assert load_settings().last_duration_seconds == 1500
