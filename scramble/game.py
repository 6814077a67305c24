"""Game controller — display, scramble, then recall the original order."""

from __future__ import annotations

import threading
from collections.abc import Callable
from enum import Enum

from scramble.buttons import ButtonManager, GameButton, Rect, Viewport
from scramble.clock import Clock, RoundToken
from scramble.config import AppConfig
from scramble.messenger import Messenger
from scramble.validator import Validator


class Phase(Enum):
    IDLE = "idle"
    SETUP = "setup"
    DISPLAYING = "displaying"
    SCRAMBLING = "scrambling"
    RECALL = "recall"
    WON = "won"
    LOST = "lost"


def _spawn_thread(target: Callable[[], None]) -> None:
    threading.Thread(target=target, daemon=True).start()


class GameManager:
    """Runs rounds of the memory game.

    A round shows n numbered buttons for n seconds, hides the numbers,
    moves every button to a random spot n times with a fixed pause after
    each move, then waits for the player to click the buttons in their
    original order. The first wrong click loses the round.

    All collaborators are injected. ``runner`` decides where the timed part
    of a round executes (a daemon thread by default, inline in tests) and
    ``on_change`` is called after every visible change.
    """

    def __init__(
        self,
        messenger: Messenger,
        validator: Validator,
        button_manager: ButtonManager,
        clock: Clock,
        viewport: Viewport,
        config: AppConfig,
        runner: Callable[[Callable[[], None]], None] | None = None,
        on_change: Callable[[GameManager], None] | None = None,
        verbose: bool = False,
    ):
        self.messenger = messenger
        self.validator = validator
        self.button_manager = button_manager
        self.clock = clock
        self.viewport = viewport
        self.config = config
        self.runner = runner or _spawn_thread
        self.on_change = on_change
        self.verbose = verbose

        self.lock = threading.RLock()
        self.phase = Phase.IDLE
        self.original_order: list[int] = []
        self.clicked_order: list[int] = []
        self.click_enabled = False
        self.token: RoundToken | None = None

    @property
    def buttons(self) -> list[GameButton]:
        return self.button_manager.buttons

    def _set_phase(self, phase: Phase) -> None:
        self.phase = phase
        if self.verbose:
            print(f"Phase: {phase.value}")

    def _changed(self) -> None:
        if self.on_change:
            self.on_change(self)

    def _active(self, token: RoundToken) -> bool:
        return token is self.token and not token.cancelled

    # ── round setup ──────────────────────────────────────────────────

    def reset(self) -> None:
        """Drop the current round: cancel its pauses and clear all state."""
        with self.lock:
            if self.token:
                self.token.cancel()
                self.token = None
            self.button_manager.clear_buttons()
            self.messenger.clear()
            self.original_order = []
            self.clicked_order = []
            self.click_enabled = False
            self._set_phase(Phase.IDLE)

    def init_game(self, raw) -> RoundToken | None:
        """Start a new round from the player's input.

        Any round in progress is cleared first. Returns the new round's
        token, or None when the input was rejected.
        """
        with self.lock:
            if self.phase is not Phase.IDLE:
                self.reset()

            result = self.validator.check(raw)
            if not result.ok:
                if self.verbose:
                    print(f"Rejected input {raw!r}: {result.reason.name}")
                self._changed()
                return None

            count = result.value
            self._set_phase(Phase.SETUP)
            buttons = self.button_manager.make_buttons(count, self.viewport)
            self.original_order = [button.id for button in buttons]
            self.clicked_order = []
            self.messenger.show(self.config.messages.START)
            token = self.token = RoundToken()
            if self.verbose:
                colors = ", ".join(button.color for button in buttons)
                print(f"Round started: {count} buttons ({colors})")
            self._changed()

        self.runner(lambda: self.play_round(count, token))
        return token

    # ── timed phases ─────────────────────────────────────────────────

    def play_round(self, count: int, token: RoundToken) -> None:
        """Display, scramble and open recall. Stops quietly once token is cancelled."""
        with self.lock:
            if not self._active(token):
                return
            self._set_phase(Phase.DISPLAYING)

        # Longer display for bigger rounds
        if not self.clock.sleep(count, token):
            return

        with self.lock:
            if not self._active(token):
                return
            for button in self.buttons:
                button.hide_number()
            self._set_phase(Phase.SCRAMBLING)
            self._changed()

        if not self.scramble_buttons(count, token):
            return

        with self.lock:
            if not self._active(token):
                return
            self.memory_test()

    def scramble_buttons(self, times: int, token: RoundToken) -> bool:
        """Move every button to a random spot, then pause; repeat times times."""
        for i in range(times):
            with self.lock:
                if not self._active(token):
                    return False
                for button in self.buttons:
                    button.set_location(*self.button_manager.random_location(self.viewport))
                if self.verbose:
                    print(f"Scramble {i + 1}/{times}")
                self._changed()

            if not self.clock.sleep(self.config.game.scramble_pause, token):
                return False
        return True

    def memory_test(self) -> None:
        """Open the recall phase: the next expected click is the first id."""
        with self.lock:
            self.clicked_order = []
            self.click_enabled = True
            self._set_phase(Phase.RECALL)
            self.messenger.show(self.config.messages.GAME_STARTED)
            self._changed()

    # ── recall ───────────────────────────────────────────────────────

    def check_click(self, button_id: int) -> Phase | None:
        """Judge a click. Returns the phase after it, None if it was ignored."""
        with self.lock:
            if self.phase is not Phase.RECALL or not self.click_enabled:
                return None
            button = self.button_manager.get(button_id)
            if button is None:
                return None

            expected = self.original_order[len(self.clicked_order)]
            if button.id == expected:
                button.show_number()
                self.clicked_order.append(button.id)
                if self.verbose:
                    print(f"Correct: button {button.id + 1}")
                if len(self.clicked_order) == len(self.original_order):
                    self.click_enabled = False
                    self._set_phase(Phase.WON)
                    self.messenger.show(self.config.messages.WIN)
            else:
                if self.verbose:
                    print(f"Wrong: button {button.id + 1}, expected {expected + 1}")
                self.click_enabled = False
                self._set_phase(Phase.LOST)
                for other in self.buttons:
                    other.show_number()
                self.messenger.show(self.config.messages.LOSE)

            self._changed()
            return self.phase

    def click_at(self, x: float, y: float) -> Phase | None:
        with self.lock:
            button = self.button_manager.button_at(x, y)
            if button is None:
                return None
            return self.check_click(button.id)

    def click_in(self, rect: Rect) -> Phase | None:
        """Click whichever button covers most of rect (a Stream Deck key)."""
        with self.lock:
            button = self.button_manager.button_in(rect)
            if button is None:
                return None
            return self.check_click(button.id)
