"""Tests for contrastlens.config module."""

from pathlib import Path

import pytest

from contrastlens.config import Preferences, PreferencesError, load_preferences
from contrastlens.models import RGB


def write_config(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "contrastlens.yaml"
    path.write_text(text, encoding="utf-8")
    return path


class TestPreferences:
    def test_defaults(self):
        prefs = Preferences()
        assert prefs.default_level == "AA"
        assert prefs.default_text_size == "normal"
        assert prefs.tie_break == "foreground"
        assert prefs.canvas_rgb == RGB(255, 255, 255)

    @pytest.mark.parametrize(
        "kwargs, message",
        [
            ({"default_level": "A"}, "default_level"),
            ({"default_text_size": "huge"}, "default_text_size"),
            ({"tie_break": "both"}, "tie_break"),
            ({"canvas_color": "paper"}, "canvas_color"),
        ],
    )
    def test_invalid_values(self, kwargs, message: str):
        with pytest.raises(PreferencesError, match=message):
            Preferences(**kwargs)

    def test_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            Preferences(default_level="B")  # type: ignore[arg-type]

    def test_from_mapping_rejects_unknown_keys(self):
        with pytest.raises(PreferencesError, match="Unknown preference keys: colour"):
            Preferences.from_mapping({"colour": "red"})

    def test_canvas_is_parsed_once_on_construction(self):
        prefs = Preferences(canvas_color="navy")
        assert prefs.canvas_rgb == RGB(0, 0, 128)
        assert prefs == Preferences(canvas_color="navy")
        assert "_canvas" not in repr(prefs)

    def test_canvas_cache_is_not_a_preference_key(self):
        with pytest.raises(PreferencesError, match="Unknown preference keys: _canvas"):
            Preferences.from_mapping({"_canvas": RGB(0, 0, 0)})


class TestLoadPreferences:
    def test_none_gives_defaults(self):
        assert load_preferences(None) == Preferences()

    def test_missing_file_gives_defaults(self, tmp_path: Path):
        assert load_preferences(tmp_path / "absent.yaml") == Preferences()

    def test_empty_file_gives_defaults(self, tmp_path: Path):
        assert load_preferences(write_config(tmp_path, "")) == Preferences()

    def test_loads_values(self, tmp_path: Path):
        path = write_config(
            tmp_path,
            "default_level: AAA\n"
            "default_text_size: large\n"
            "tie_break: background\n"
            "canvas_color: 'rgb(18, 18, 18)'\n",
        )
        prefs = load_preferences(str(path))
        assert prefs.default_level == "AAA"
        assert prefs.default_text_size == "large"
        assert prefs.tie_break == "background"
        assert prefs.canvas_rgb == RGB(18, 18, 18)

    def test_partial_file_keeps_other_defaults(self, tmp_path: Path):
        prefs = load_preferences(write_config(tmp_path, "default_level: AAA\n"))
        assert prefs.default_level == "AAA"
        assert prefs.tie_break == "foreground"

    def test_not_a_mapping(self, tmp_path: Path):
        with pytest.raises(PreferencesError, match="must be a mapping"):
            load_preferences(write_config(tmp_path, "- AA\n- AAA\n"))

    def test_invalid_yaml(self, tmp_path: Path):
        with pytest.raises(PreferencesError, match="Cannot read preferences"):
            load_preferences(write_config(tmp_path, "default_level: [AA\n"))

    def test_invalid_value_in_file(self, tmp_path: Path):
        with pytest.raises(PreferencesError, match="default_level"):
            load_preferences(write_config(tmp_path, "default_level: A\n"))
