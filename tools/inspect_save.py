#!/usr/bin/env python3
"""Print a summary of a dark room adventure save file."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

REPO_ROOT = Path(__file__).resolve().parents[1]

if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from darkroom.inventory import Item, count_items, has_key
from darkroom.save_manager import SAVE_FILENAME, SaveError, load_game, read_key_code


def parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Inspect a dark room adventure save file.")
    parser.add_argument(
        "save_path",
        nargs="?",
        default=SAVE_FILENAME,
        help="Path to the save file.",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str]) -> None:
    args = parse_args(argv[1:])
    save_path = Path(args.save_path)
    try:
        key_code = read_key_code(save_path)
        inventory = load_game(save_path)
    except SaveError as exc:
        print(f"Failed to inspect save: {exc}")
        sys.exit(1)

    counts = count_items(inventory)
    print(f"Save file: {save_path}")
    print(f"Key code: {key_code or 'missing'}")
    print(f"Keys: {counts[Item.KEY]}")
    print(f"Coins: {counts[Item.COIN]}")
    if has_key(inventory):
        print("Room 1 can be unlocked with this save.")


if __name__ == "__main__":
    main(sys.argv)
