"""The item shop reached through the Purchase state."""

from __future__ import annotations

import logging
from typing import List, Optional

from .inventory import Item, coin_count, remove_coins
from .states import GameSession, GameState, random_room
from .text import format_heading

logger = logging.getLogger(__name__)

COIN_PRICE = 2
KEY_PRICE = 5


def buy_coin(inventory: List[Item], *, legacy: bool = False) -> None:
    """Trade coins for a coin.

    ``legacy`` keeps the old arithmetic where the whole stash is swapped
    for a single coin.
    """

    if legacy:
        remove_coins(inventory)
    else:
        remove_coins(inventory, COIN_PRICE)
    inventory.append(Item.COIN)


async def show_shop_header(session: GameSession) -> None:
    coins = coin_count(session.inventory)
    await session.say(format_heading("Welcome to the {shop:item shop}!", session.settings))
    if coins > 0:
        await session.say(f"You have {coins} coins.")
    else:
        await session.say("Player has 0 coins.")
    if coins >= KEY_PRICE:
        await session.say(
            f"You can purchase a {{item:key}} to win the game (K - {KEY_PRICE} coins)."
        )
    await session.say(
        f"Choose an item to purchase (1. Coin - {COIN_PRICE} coins, 2. Back):"
    )


async def handle_purchase(session: GameSession) -> Optional[GameState]:
    await show_shop_header(session)
    while True:
        choice = await session.ask("> ")
        coins = coin_count(session.inventory)
        if choice == "1":
            if coins >= COIN_PRICE:
                buy_coin(session.inventory, legacy=session.settings.legacy_shop)
                logger.debug(
                    "Bought a coin (legacy=%s); coins %d -> %d",
                    session.settings.legacy_shop,
                    coins,
                    coin_count(session.inventory),
                )
                await session.say("You purchased a {item:coin}! The shopkeeper nods.")
            else:
                await session.say(
                    "Not enough coins to purchase the coin. The shopkeeper frowns."
                )
            continue
        if choice.upper() == "K":
            if coins >= KEY_PRICE:
                await session.say(
                    "{success:You purchased a key and won the game!} "
                    "The universe bends to your will."
                )
                return GameState.WIN
            await session.say(
                "Not enough coins to purchase the key. The shopkeeper shakes his head."
            )
            continue
        if choice == "2":
            return random_room(session.rng)
        await session.say("Invalid choice! The shopkeeper looks confused.")
