import asyncio
import json
from pathlib import Path

import pytest

from darkroom.options_menu import options_menu
from darkroom.settings import Settings, load_settings, save_settings


@pytest.mark.parametrize(
    ("data", "field", "expected"),
    [
        ({"text_speed": "9"}, "text_speed", 3.0),
        ({"text_speed": -1}, "text_speed", 0.0),
        ({"text_speed": "fast"}, "text_speed", 1.0),
        ({"legacy_shop": "yes"}, "legacy_shop", True),
        ({"color_text": "off"}, "color_text", False),
        ({"reduce_animations": 1}, "reduce_animations", True),
    ],
)
def test_from_dict_coerces_and_clamps(data: dict, field: str, expected) -> None:
    assert getattr(Settings.from_dict(data), field) == expected


def test_from_dict_non_mapping_gives_defaults() -> None:
    assert Settings.from_dict(None) == Settings()
    assert Settings.from_dict(["nope"]) == Settings()


def test_load_settings_missing_or_corrupt_falls_back(tmp_path: Path) -> None:
    assert load_settings(tmp_path / "absent.json") == Settings()
    corrupt = tmp_path / "settings.json"
    corrupt.write_text("{not json", encoding="utf-8")
    assert load_settings(corrupt) == Settings()


def test_save_settings_round_trip(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "settings.json"
    saved = save_settings(Settings(text_speed=5, legacy_shop=True), path)
    assert saved.text_speed == 3.0
    assert json.loads(path.read_text(encoding="utf-8"))["legacy_shop"] is True
    assert load_settings(path) == saved


def _run_menu(responses, settings_path: Path, settings: Settings = None):
    responses = list(responses)
    lines = []
    result = asyncio.run(
        options_menu(
            settings or Settings(),
            input_func=lambda prompt: responses.pop(0),
            print_func=lines.append,
            settings_path=settings_path,
        )
    )
    return result, lines


def test_options_menu_without_changes(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    (settings, changed), lines = _run_menu(["esc"], path)
    assert changed is False
    assert settings == Settings()
    assert "[Settings] No changes made." in lines
    assert not path.exists()


def test_options_menu_adjusts_text_speed_and_saves(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    (settings, changed), lines = _run_menu(["a", "a", "esc"], path)
    assert changed is True
    assert settings.text_speed == 0.5
    assert load_settings(path).text_speed == 0.5
    assert "[Settings] Saved to settings.json." in lines


def test_options_menu_prompts_for_text_speed(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    (settings, _), lines = _run_menu(["", "abc", "", "0", "esc"], path)
    assert "Invalid number." in lines
    assert settings.text_speed == 0.0


def test_options_menu_reset_restores_default(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    start = Settings(color_text=False)
    (settings, changed), _ = _run_menu(["s", "s", "s", "r", "esc"], path, start)
    assert changed is True
    assert settings.color_text is True
