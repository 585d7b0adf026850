"""Interactive options menu for the terminal game."""

from __future__ import annotations

import inspect
from pathlib import Path
from typing import Awaitable, Callable, Optional, Tuple

from .settings import MAX_TEXT_SPEED, SETTINGS_PATH, Settings, save_settings

MenuCallback = Callable[[Settings], None | Awaitable[None]]
InputFunc = Callable[[str], str | Awaitable[str]]
PrintFunc = Callable[[str], None]


_ENTRY_SPEC = (
    ("text_speed", "Text Speed", "text_speed"),
    ("reduce_animations", "Reduce Animations", "toggle"),
    ("high_contrast", "High Contrast", "toggle"),
    ("color_text", "Colored Text", "toggle"),
    ("legacy_shop", "Legacy Shop Prices", "toggle"),
)


async def options_menu(
    current_settings: Settings,
    *,
    apply_callback: Optional[MenuCallback] = None,
    input_func: InputFunc = input,
    print_func: PrintFunc = print,
    settings_path: Path | str = SETTINGS_PATH,
) -> Tuple[Settings, bool]:
    """Run the options UI loop and return ``(settings, changed)``."""

    working = current_settings.copy()
    selection = 0
    changed = False

    while True:
        print_func("")
        print_func("=== Options ===")
        for idx, (field, label, entry_type) in enumerate(_ENTRY_SPEC):
            prefix = ">" if idx == selection else " "
            value = _format_value(getattr(working, field), entry_type)
            print_func(f"{prefix} {label}: {value}")
        print_func("Use W/S to move, A/D to adjust, Enter to edit, R to reset, Esc to go back.")

        raw = await _resolve_input(input_func, "Options> ")
        command = (raw or "").strip().lower()
        if command == "":
            command = "enter"

        if command in {"esc", "escape", "\x1b", "q", "back"}:
            break
        if command in {"w", "up", "k"}:
            selection = (selection - 1) % len(_ENTRY_SPEC)
            continue
        if command in {"s", "down", "j"}:
            selection = (selection + 1) % len(_ENTRY_SPEC)
            continue

        field, _, entry_type = _ENTRY_SPEC[selection]
        if command in {"a", "left", "h", "-"}:
            if _adjust_entry(working, field, entry_type, -1):
                changed = True
                await _apply_callback(apply_callback, working)
            continue
        if command in {"d", "right", "l", "+"}:
            if _adjust_entry(working, field, entry_type, 1):
                changed = True
                await _apply_callback(apply_callback, working)
            continue
        if command == "enter":
            if await _activate_entry(working, field, entry_type, input_func, print_func):
                changed = True
                await _apply_callback(apply_callback, working)
            continue
        if command in {"r", "reset"}:
            if _reset_entry(working, field):
                changed = True
                await _apply_callback(apply_callback, working)
            continue

        print_func("Unrecognised input. Try W/S, A/D, Enter, R, or Esc.")

    if changed:
        saved = save_settings(working, settings_path)
        print_func(f"[Settings] Saved to {Path(settings_path).name}.")
        return saved, True

    print_func("[Settings] No changes made.")
    return current_settings, False


async def _apply_callback(callback: Optional[MenuCallback], settings: Settings) -> None:
    if callback is None:
        return
    result = callback(settings.copy())
    if inspect.isawaitable(result):
        await result


async def _resolve_input(input_func: InputFunc, prompt: str) -> str | None:
    result = input_func(prompt)
    if inspect.isawaitable(result):
        return await result
    return result


def _format_value(value, entry_type: str) -> str:
    if entry_type == "toggle":
        return "On" if bool(value) else "Off"
    if entry_type == "text_speed":
        speed = float(value)
        return "Instant" if speed <= 0 else f"{speed:.2f}x"
    return str(value)


def _adjust_entry(settings: Settings, field: str, entry_type: str, direction: int) -> bool:
    previous = getattr(settings, field)
    if entry_type == "text_speed":
        setattr(settings, field, previous + 0.25 * direction)
    elif entry_type == "toggle":
        setattr(settings, field, not bool(previous))
    else:
        return False
    settings.clamp()
    return getattr(settings, field) != previous


async def _activate_entry(
    settings: Settings,
    field: str,
    entry_type: str,
    input_func: InputFunc,
    print_func: PrintFunc,
) -> bool:
    before = getattr(settings, field)
    if entry_type == "toggle":
        setattr(settings, field, not bool(before))
        return getattr(settings, field) != before
    if entry_type != "text_speed":
        return False

    raw = await _resolve_input(
        input_func, f"Enter text speed (0-{MAX_TEXT_SPEED:g}, 0 = instant, blank to cancel): "
    )
    stripped = (raw or "").strip()
    if not stripped:
        return False
    try:
        value = float(stripped)
    except ValueError:
        print_func("Invalid number.")
        return False
    setattr(settings, field, value)
    settings.clamp()
    return getattr(settings, field) != before


def _reset_entry(settings: Settings, field: str) -> bool:
    default_value = getattr(Settings(), field)
    before = getattr(settings, field)
    setattr(settings, field, default_value)
    settings.clamp()
    return getattr(settings, field) != before
