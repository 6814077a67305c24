"""Shared fixtures: a clock that never sleeps and a game that runs inline."""

import random

import pytest

from scramble.buttons import ButtonManager, Viewport
from scramble.config import AppConfig
from scramble.game import GameManager
from scramble.messenger import Messenger
from scramble.validator import Validator


class FakeClock:
    """Records every pause and returns at once.

    on_sleep, when set, is called with the pause index before returning,
    which lets a test act in the middle of a round.
    """

    def __init__(self):
        self.sleeps: list[float] = []
        self.on_sleep = None

    def sleep(self, seconds, token) -> bool:
        if token.cancelled:
            return False
        self.sleeps.append(seconds)
        if self.on_sleep:
            self.on_sleep(len(self.sleeps) - 1)
        return not token.cancelled


def run_inline(target):
    target()


@pytest.fixture
def config():
    return AppConfig()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def viewport():
    return Viewport(width=768, height=384)


@pytest.fixture
def make_game(config, clock, viewport):
    def _make(runner=run_inline, seed=7, **kwargs):
        messenger = Messenger()
        return GameManager(
            messenger=messenger,
            validator=Validator(messenger, config.game, config.messages),
            button_manager=ButtonManager(config.style, random.Random(seed)),
            clock=clock,
            viewport=viewport,
            config=config,
            runner=runner,
            **kwargs,
        )

    return _make
