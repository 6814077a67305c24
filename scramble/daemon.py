"""Memory Scramble — Stream Deck memory game.

The key grid is one play area. Numbered buttons appear, their numbers
vanish, they get scrambled, and the player presses them back in order.
The button count is typed at the terminal prompt; every entry starts a
new round.

Usage:
    memory-scramble --config config.yaml --count 5
"""

import argparse
import sys
from pathlib import Path

from StreamDeck.DeviceManager import DeviceManager
from StreamDeck.ImageHelpers import PILHelper

from scramble.buttons import ButtonManager, Rect, Viewport
from scramble.clock import Clock
from scramble.config import AppConfig, load_config
from scramble.game import GameManager
from scramble.messenger import Messenger
from scramble.renderer import render_board, slice_keys
from scramble.validator import Validator


def find_deck():
    """Find first visual Stream Deck device."""
    decks = DeviceManager().enumerate()
    for deck in decks:
        if deck.is_visual():
            return deck
    return None


class DeckSurface:
    """Treats the key grid of a deck as a single image."""

    def __init__(self, deck):
        self.deck = deck
        self.rows, self.cols = deck.key_layout()
        self.key_size: tuple[int, int] = tuple(deck.key_image_format()["size"])

    @property
    def viewport(self) -> Viewport:
        kw, kh = self.key_size
        return Viewport(width=self.cols * kw, height=self.rows * kh)

    def key_rect(self, key: int) -> Rect:
        row, col = divmod(key, self.cols)
        kw, kh = self.key_size
        return (col * kw, row * kh, (col + 1) * kw, (row + 1) * kh)

    def draw(self, board) -> None:
        tiles = slice_keys(board, self.rows, self.cols, self.key_size)
        for key, tile in enumerate(tiles):
            native = PILHelper.to_native_key_format(self.deck, tile)
            with self.deck:
                self.deck.set_key_image(key, native)


class MemoryScramble:
    """Main application class — wires the game to the deck."""

    def __init__(self, config: AppConfig, deck, clock: Clock | None = None, verbose: bool = False):
        self.config = config
        self.deck = deck
        self.verbose = verbose
        self.surface = DeckSurface(deck)

        self.messenger = Messenger(on_change=self._on_message)
        self.game = GameManager(
            messenger=self.messenger,
            validator=Validator(self.messenger, config.game, config.messages),
            button_manager=ButtonManager(config.style),
            clock=clock or Clock(),
            viewport=self.surface.viewport,
            config=config,
            on_change=self._on_game_change,
            verbose=verbose,
        )

    def start(self):
        """Initialize deck and show the empty board."""
        self.deck.open()
        self.deck.reset()
        self.deck.set_brightness(self.config.deck.brightness)
        self.render()
        self.deck.set_key_callback(self._on_key_change)

        if self.verbose:
            vp = self.surface.viewport
            print(f"Play area {vp.width}x{vp.height} ({self.surface.cols}x{self.surface.rows} keys)")

    def stop(self):
        """Shutdown cleanly."""
        self.game.reset()
        self.deck.reset()
        self.deck.close()

    def render(self):
        board = render_board(self.surface.viewport, self.game.buttons, self.messenger.text)
        self.surface.draw(board)

    def _on_message(self, message: str):
        if message:
            print(message)

    def _on_game_change(self, _game: GameManager):
        self.render()

    def _on_key_change(self, deck, key: int, pressed: bool):
        """Handle physical button press."""
        if not pressed:
            return
        if self.verbose:
            print(f"Key {key} pressed")
        self.game.click_in(self.surface.key_rect(key))


def prompt_loop(app: MemoryScramble, first: str | None = None):
    """Read button counts from the terminal; each line starts a round."""
    low, high = app.config.game.min_count, app.config.game.max_count
    if first is not None:
        app.game.init_game(first)
    while True:
        raw = input(f"How many buttons ({low}-{high}, q to quit)? ")
        if raw.strip().lower() in ("q", "quit", "exit"):
            return
        app.game.init_game(raw)


def main():
    parser = argparse.ArgumentParser(description="Memory Scramble on a Stream Deck")
    parser.add_argument("--config", help="Config file path (YAML)")
    parser.add_argument("--count", help="Start the first round with this many buttons")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    args = parser.parse_args()

    if args.config:
        config_path = Path(args.config)
        if not config_path.exists():
            print(f"Config not found: {config_path}")
            sys.exit(1)
        config = load_config(config_path)
    else:
        config = AppConfig()

    deck = find_deck()
    if deck is None:
        print("No Stream Deck found. Is it plugged in?")
        sys.exit(1)

    app = MemoryScramble(config=config, deck=deck, verbose=args.verbose)
    print(f"Connected: {deck.deck_type()} ({deck.key_count()} keys)")
    app.start()

    try:
        prompt_loop(app, first=args.count)
    except (KeyboardInterrupt, EOFError):
        print("\nShutting down...")
    finally:
        app.stop()
        print("Done.")


if __name__ == "__main__":
    main()
