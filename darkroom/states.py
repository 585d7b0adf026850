"""Game states and the per-run session object."""

from __future__ import annotations

import asyncio
import inspect
import random
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Awaitable, Callable, List, Optional, Tuple

from .inventory import Item
from .settings import SETTINGS_PATH, Settings
from .text import compute_text_delay, print_formatted

InputFunc = Callable[[str], str | Awaitable[str]]
PrintFunc = Callable[..., None]


class GameState(Enum):
    START = "start"
    ROOM1 = "room1"
    ROOM2 = "room2"
    ROOM3 = "room3"
    WIN = "win"
    GAME_OVER = "game_over"
    PURCHASE = "purchase"
    SAVE = "save"


ROOM_STATES: Tuple[GameState, ...] = (GameState.ROOM1, GameState.ROOM2, GameState.ROOM3)
TERMINAL_STATES = frozenset({GameState.WIN, GameState.GAME_OVER})


def random_room(rng: random.Random) -> GameState:
    return rng.choice(ROOM_STATES)


def parse_state(name: str) -> Optional[GameState]:
    cleaned = (name or "").strip().lower().replace("-", "_")
    for state in GameState:
        if cleaned in {state.value, state.name.lower()}:
            return state
    return None


async def read_input(prompt: str = "") -> str:
    return await asyncio.to_thread(input, prompt)


@dataclass
class GameSession:
    """Everything a state handler needs for one run of the game."""

    inventory: List[Item] = field(default_factory=list)
    rng: Any = field(default_factory=random.Random)
    settings: Settings = field(default_factory=Settings)
    save_path: Path = Path("save_game.txt")
    settings_path: Path = SETTINGS_PATH
    input_func: InputFunc = read_input
    print_func: PrintFunc = print
    debug: bool = False
    history: List[Tuple[GameState, Optional[GameState]]] = field(default_factory=list)

    async def ask(self, prompt: str = "") -> str:
        result = self.input_func(prompt)
        if inspect.isawaitable(result):
            result = await result
        return (result or "").strip()

    async def say(self, text: str = "", *, allow_delay: bool = True) -> None:
        formatted = print_formatted(text, color=self.settings.color_text)
        delay = compute_text_delay(self.settings) if allow_delay else 0.0
        if delay <= 0 or not formatted:
            self.print_func(formatted)
            return
        for char in formatted:
            self.print_func(char, end="", flush=True)
            await asyncio.sleep(delay)
        self.print_func("")

    def record_transition(self, origin: GameState, target: Optional[GameState]) -> None:
        self.history.append((origin, target))
