"""Inventory items and helpers for the dark room adventure."""

from __future__ import annotations

from collections import Counter
from enum import Enum
from typing import Dict, Iterable, List, Optional


class Item(Enum):
    """Kinds of things the player can carry.

    The value doubles as the line written to the save file.
    """

    KEY = "Key"
    COIN = "Coin"


ITEM_BY_NAME: Dict[str, Item] = {item.value: item for item in Item}


def has_key(inventory: Iterable[Item]) -> bool:
    return any(item is Item.KEY for item in inventory)


def coin_count(inventory: Iterable[Item]) -> int:
    return sum(1 for item in inventory if item is Item.COIN)


def count_items(inventory: Iterable[Item]) -> Dict[Item, int]:
    counts = Counter(inventory)
    return {item: counts.get(item, 0) for item in Item}


def remove_coins(inventory: List[Item], count: Optional[int] = None) -> int:
    """Remove ``count`` coins in place (every coin when ``None``).

    Coins are taken from the end of the list. Returns how many were removed.
    """

    if count is not None and count < 0:
        raise ValueError("Cannot remove a negative number of coins")
    removed = 0
    for index in range(len(inventory) - 1, -1, -1):
        if count is not None and removed >= count:
            break
        if inventory[index] is Item.COIN:
            del inventory[index]
            removed += 1
    return removed


def format_inventory(inventory: Iterable[Item], *, empty: str = "empty") -> str:
    counts = count_items(inventory)
    parts = [f"{amount} {item.value}" for item, amount in counts.items() if amount]
    return ", ".join(parts) if parts else empty
