"""Flat-file save/load for the dark room adventure.

The save file is plain text: a ``Key Code: <code>`` header followed by one
item name per line.
"""

from __future__ import annotations

import logging
import os
import random
from pathlib import Path
from typing import Iterable, List, Optional

from .inventory import ITEM_BY_NAME, Item

logger = logging.getLogger(__name__)

SAVE_FILENAME = "save_game.txt"
KEY_CODE_PREFIX = "Key Code: "
KEY_CODE_DIGITS = 6
KEY_CODE_SPACE = 10 ** KEY_CODE_DIGITS


class SaveError(Exception):
    """Raised when the save file cannot be written or read."""


def generate_key_code(rng: random.Random) -> str:
    return f"{rng.randrange(KEY_CODE_SPACE):0{KEY_CODE_DIGITS}d}"


def save_game(
    inventory: Iterable[Item],
    key_code: str,
    path: Path | str = SAVE_FILENAME,
) -> Path:
    path = Path(path)
    lines = [f"{KEY_CODE_PREFIX}{key_code}"]
    lines.extend(item.value for item in inventory)
    tmp_path = path.with_name(path.name + ".tmp")
    try:
        with open(tmp_path, "w", encoding="utf-8") as handle:
            for line in lines:
                handle.write(line + "\n")
        os.replace(str(tmp_path), str(path))
    except OSError as exc:
        try:
            tmp_path.unlink()
        except OSError:
            pass
        raise SaveError(f"Could not write {path}: {exc.strerror or exc}") from exc
    logger.debug("Saved %d item(s) to %s with key code %s", len(lines) - 1, path, key_code)
    return path


def _read_lines(path: Path) -> List[str]:
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise SaveError(f"Save file {path} not found.") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise SaveError(f"Could not read {path}: {exc}") from exc
    return content.split("\n")


def load_game(path: Path | str = SAVE_FILENAME) -> List[Item]:
    path = Path(path)
    lines = _read_lines(path)
    inventory: List[Item] = []
    if len(lines) < 2:
        logger.debug("Save file %s has no item lines", path)
        return inventory
    for raw in lines[1:]:
        item = ITEM_BY_NAME.get(raw.strip())
        if item is not None:
            inventory.append(item)
    logger.debug("Loaded %d item(s) from %s", len(inventory), path)
    return inventory


def read_key_code(path: Path | str = SAVE_FILENAME) -> Optional[str]:
    header = _read_lines(Path(path))[0].strip()
    if not header.startswith(KEY_CODE_PREFIX.strip()):
        return None
    code = header[len(KEY_CODE_PREFIX.strip()):].strip()
    return code or None
