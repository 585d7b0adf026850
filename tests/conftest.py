from pathlib import Path
from typing import Iterable, List, Optional

import pytest

from darkroom.inventory import Item
from darkroom.settings import Settings
from darkroom.states import GameSession


class ScriptedRandom:
    """Replays preset picks for ``choice`` and a fixed ``randrange`` value."""

    def __init__(self, picks: Iterable = (), randrange_value: int = 0) -> None:
        self.picks = list(picks)
        self.randrange_value = randrange_value

    def choice(self, seq):
        if self.picks and self.picks[0] in seq:
            return self.picks.pop(0)
        return seq[0]

    def randrange(self, stop: int) -> int:
        return self.randrange_value


class ScriptedInput:
    def __init__(self, responses: Iterable[str]) -> None:
        self.responses = list(responses)
        self.prompts: List[str] = []

    def __call__(self, prompt: str = "") -> str:
        self.prompts.append(prompt)
        if not self.responses:
            raise AssertionError(f"Unexpected prompt: {prompt!r}")
        return self.responses.pop(0)


class Transcript:
    def __init__(self) -> None:
        self.lines: List[str] = []

    def __call__(self, *args, **kwargs) -> None:
        self.lines.append(" ".join(str(arg) for arg in args))

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


@pytest.fixture
def quiet_settings() -> Settings:
    return Settings(reduce_animations=True, color_text=False)


@pytest.fixture
def make_session(tmp_path: Path, quiet_settings: Settings):
    def factory(
        responses: Iterable[str] = (),
        *,
        inventory: Optional[List[Item]] = None,
        picks: Iterable = (),
        randrange_value: int = 0,
        rng=None,
        input_func=None,
        legacy_shop: bool = False,
        debug: bool = False,
        save_path: Optional[Path] = None,
    ) -> GameSession:
        settings = quiet_settings.copy()
        settings.legacy_shop = legacy_shop
        return GameSession(
            inventory=list(inventory or []),
            rng=rng if rng is not None else ScriptedRandom(picks, randrange_value),
            settings=settings,
            save_path=save_path or tmp_path / "save_game.txt",
            settings_path=tmp_path / "settings.json",
            input_func=input_func or ScriptedInput(responses),
            print_func=Transcript(),
            debug=debug,
        )

    return factory
