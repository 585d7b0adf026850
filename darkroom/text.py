"""Narrative text, inline formatting and pacing helpers."""

from __future__ import annotations

import random
import re

from .settings import Settings

BASE_TEXT_DELAY = 0.02
ANSI_RESET = "\033[0m"

INLINE_COLOR_MAP = {
    "item": "\033[32m",
    "items": "\033[32m",
    "shop": "\033[33m",
    "success": "\033[36m",
    "danger": "\033[31m",
}
INLINE_FORMAT_PATTERN = re.compile(r"\{([a-zA-Z_]+):([^}]+)\}")

ROOM1_MESSAGES = (
    "You enter Room 1. It's dark and musty. A mysterious sound echoes. "
    "You need to find a {item:key} to unlock the door.",
    "You step into Room 1. The air is heavy, and you can feel a presence. "
    "Find the {item:key} to proceed.",
    "Room 1 welcomes you with darkness. Your only way out is to uncover the "
    "{item:key} hidden within.",
)

ROOM3_MESSAGES = (
    "You enter Room 3. A {danger:giant spider} blocks your way! You can't proceed "
    "this way. Go back to another room.",
    "A {danger:massive spider} guards Room 3. Retreat to another room to escape its web.",
    "Room 3 presents a challenge - a {danger:giant spider}. Your only option is to "
    "turn back and explore another path.",
)


def room1_message(rng: random.Random) -> str:
    return rng.choice(ROOM1_MESSAGES)


def room3_message(rng: random.Random) -> str:
    return rng.choice(ROOM3_MESSAGES)


def print_formatted(text: str, *, color: bool = True) -> str:
    """Expand ``{kind:value}`` markup into ANSI colors, or strip it."""

    if not text or "{" not in text:
        return text

    if not color:
        return INLINE_FORMAT_PATTERN.sub(lambda match: match.group(2), text)

    def replace(match: re.Match[str]) -> str:
        kind = match.group(1).strip().lower()
        value = match.group(2)
        ansi = INLINE_COLOR_MAP.get(kind)
        if not ansi:
            return value
        return f"{ansi}{value}{ANSI_RESET}"

    return INLINE_FORMAT_PATTERN.sub(replace, text)


def compute_text_delay(settings: Settings) -> float:
    try:
        speed = float(getattr(settings, "text_speed", 1.0))
    except (TypeError, ValueError):
        speed = 1.0
    if getattr(settings, "reduce_animations", False):
        return 0.0
    if speed <= 0:
        return 0.0
    return BASE_TEXT_DELAY / max(speed, 0.1)


def format_heading(text: str, settings: Settings) -> str:
    return text.upper() if getattr(settings, "high_contrast", False) else text
