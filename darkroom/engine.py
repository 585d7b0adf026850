#!/usr/bin/env python3
"""
Dark Room Adventure: a tiny state-machine text game.
- Three doors, three rooms, a key, some coins and a shop.
- Every handler returns the next state; the driver loops until a run ends.
- Save/Load to a flat text file.
Usage: python3 -m darkroom.engine [--new-game] [--save-file PATH]
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import random
import sys
from pathlib import Path
from typing import Awaitable, Callable, Dict, Optional, Sequence

from .inventory import ITEM_BY_NAME, Item, coin_count, format_inventory, has_key
from .options_menu import options_menu
from .save_manager import SAVE_FILENAME, SaveError, generate_key_code, load_game, save_game
from .settings import SETTINGS_PATH, load_settings
from .shop import handle_purchase
from .states import (
    GameSession,
    GameState,
    InputFunc,
    PrintFunc,
    parse_state,
    random_room,
    read_input,
)
from .text import room1_message, room3_message

logger = logging.getLogger(__name__)

Handler = Callable[[GameSession], Awaitable[Optional[GameState]]]

DOOR_CHOICES = {"1", "2", "3"}


def emit_print(*args, **kwargs) -> None:
    print(*args, **kwargs)


async def open_options(session: GameSession) -> None:
    def apply(new_settings):
        session.settings = new_settings

    updated, changed = await options_menu(
        session.settings,
        apply_callback=apply,
        input_func=session.input_func,
        print_func=session.print_func,
        settings_path=session.settings_path,
    )
    if changed:
        session.settings = updated


async def run_debug_command(session: GameSession, raw: str) -> Optional[GameState]:
    parts = raw.split()
    command = parts[0].lower()
    if command == "/give":
        if len(parts) < 2:
            await session.say("Usage: /give <key|coin> [amount]", allow_delay=False)
            return None
        item = ITEM_BY_NAME.get(parts[1].strip().title())
        if item is None:
            await session.say(f"[!] Unknown item '{parts[1]}'.", allow_delay=False)
            return None
        amount = 1
        if len(parts) >= 3:
            try:
                amount = int(parts[2])
            except ValueError:
                await session.say("Amount must be an integer.", allow_delay=False)
                return None
        amount = max(amount, 0)
        session.inventory.extend([item] * amount)
        await session.say(f"[#] Debug: granted {amount} {item.value}.", allow_delay=False)
        return None
    if command == "/goto":
        if len(parts) < 2:
            await session.say("Usage: /goto <state>", allow_delay=False)
            return None
        target = parse_state(parts[1])
        if target is None:
            await session.say(f"[!] Unknown state '{parts[1]}'.", allow_delay=False)
            return None
        await session.say(f"[#] Debug: moving to {target.value}.", allow_delay=False)
        return target
    await session.say("Unknown debug command.", allow_delay=False)
    return None


async def handle_start(session: GameSession) -> Optional[GameState]:
    while True:
        await session.say("Welcome to the Text Adventure Game!")
        await session.say(
            "You find yourself in a dark room. There are three doors in front of you."
        )
        await session.say(f"You have {coin_count(session.inventory)} coins.")
        await session.say("Choose a door to enter (1, 2, 3):")
        await session.say(
            "(Or type 'shop', 'save', 'inventory' or 'options'.)", allow_delay=False
        )

        raw = await session.ask("> ")
        choice = raw.lower()
        if session.debug and raw.startswith("/"):
            target = await run_debug_command(session, raw)
            if target is not None:
                return target
            continue
        if choice in DOOR_CHOICES:
            return random_room(session.rng)
        if choice == "shop":
            return GameState.PURCHASE
        if choice == "save":
            return GameState.SAVE
        if choice in {"i", "inventory"}:
            await session.say(f"Inventory: {format_inventory(session.inventory)}")
            continue
        if choice in {"o", "options"}:
            await open_options(session)
            continue
        await session.say("{danger:Invalid choice!} You stumble in the darkness.")
        return GameState.GAME_OVER


async def handle_room1(session: GameSession) -> Optional[GameState]:
    await session.say(room1_message(session.rng))
    if has_key(session.inventory):
        await session.say("You use the {item:key} to unlock the door. The door creaks open.")
        return GameState.WIN
    await session.say("You search the room, trying to find the key.")
    return random_room(session.rng)


async def handle_room2(session: GameSession) -> Optional[GameState]:
    await session.say(
        "Room 2 reveals itself to you. A mysterious table is adorned with a "
        "{item:key} and a {item:coin}."
    )
    choice = (await session.ask("What will you do? (Type 'pick up' or 'leave'): ")).lower()
    if choice == "pick up":
        session.inventory.extend([Item.KEY, Item.COIN])
        await session.say("You picked up the key and the coin. The room shivers.")
        return random_room(session.rng)
    if choice == "leave":
        await session.say(
            "You decide to leave the key and the coin on the table. The room remains still."
        )
        return random_room(session.rng)
    await session.say("{danger:Invalid choice!} The room reacts strangely.")
    return GameState.GAME_OVER


async def handle_room3(session: GameSession) -> Optional[GameState]:
    await session.say(room3_message(session.rng))
    return random_room(session.rng)


async def handle_win(session: GameSession) -> Optional[GameState]:
    await session.say("{success:Congratulations!} You unlocked the door and won the game.")
    return None


async def handle_game_over(session: GameSession) -> Optional[GameState]:
    await session.say(
        "{danger:Game Over!} You made a wrong choice. The darkness consumes you."
    )
    return None


async def handle_save(session: GameSession) -> Optional[GameState]:
    await session.say("Do you want to save the game? (yes/no):")
    while True:
        choice = (await session.ask("> ")).lower()
        if choice == "yes":
            key_code = generate_key_code(session.rng)
            try:
                save_game(session.inventory, key_code, session.save_path)
            except SaveError as exc:
                await session.say(f"[!] Failed to save the game: {exc}", allow_delay=False)
                continue
            await session.say(
                f"[Saved] Game saved with key code: {key_code}. The universe remembers."
            )
            return GameState.START
        if choice == "no":
            await session.say("Thanks for playing! The adventure ends here.")
            return None
        await session.say("Invalid choice! The universe is indifferent.")


HANDLERS: Dict[GameState, Handler] = {
    GameState.START: handle_start,
    GameState.ROOM1: handle_room1,
    GameState.ROOM2: handle_room2,
    GameState.ROOM3: handle_room3,
    GameState.WIN: handle_win,
    GameState.GAME_OVER: handle_game_over,
    GameState.PURCHASE: handle_purchase,
    GameState.SAVE: handle_save,
}


async def run_game(
    session: GameSession, start: GameState = GameState.START
) -> GameState:
    """Drive handlers until one of them ends the run; return the last state."""

    state = start
    while True:
        target = await HANDLERS[state](session)
        session.record_transition(state, target)
        logger.debug(
            "Transition %s -> %s (inventory: %s)",
            state.value,
            target.value if target else "end",
            format_inventory(session.inventory),
        )
        if target is None:
            return state
        state = target


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Play the dark room text adventure.")
    parser.add_argument(
        "--save-file",
        default=SAVE_FILENAME,
        help=f"Save file to load at startup and write on save (default: {SAVE_FILENAME}).",
    )
    parser.add_argument(
        "--new-game",
        action="store_true",
        help="Start with an empty inventory instead of loading the save file.",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for the random source.")
    parser.add_argument(
        "--legacy-shop",
        action="store_true",
        help="Buying a coin swaps the whole stash for one coin.",
    )
    parser.add_argument(
        "--settings", default=str(SETTINGS_PATH), help="Path to the settings file."
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug commands and logs.")
    return parser


def configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="[%(levelname)s] %(message)s",
    )


async def main(
    argv: Optional[Sequence[str]] = None,
    *,
    input_func: InputFunc = read_input,
    print_func: PrintFunc = emit_print,
) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.debug)

    settings = load_settings(args.settings)
    if args.legacy_shop:
        settings.legacy_shop = True

    save_path = Path(args.save_file)
    if args.new_game:
        inventory = []
    else:
        try:
            inventory = load_game(save_path)
        except SaveError as exc:
            print_func(f"[!] Error loading game: {exc}")
            print_func("Use --new-game to start without a save file.")
            return 1

    session = GameSession(
        inventory=inventory,
        rng=random.Random(args.seed),
        settings=settings,
        save_path=save_path,
        settings_path=Path(args.settings),
        input_func=input_func,
        print_func=print_func,
        debug=args.debug,
    )
    final_state = await run_game(session)
    logger.debug("Run finished in state %s", final_state.value)
    return 0


def run() -> None:
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        emit_print("\n[Interrupted] Bye.")


if __name__ == "__main__":
    run()
