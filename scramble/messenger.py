"""Single-line status message shown to the player."""

from collections.abc import Callable


class Messenger:
    def __init__(self, on_change: Callable[[str], None] | None = None):
        self.text = ""
        self.on_change = on_change

    def show(self, message: str) -> None:
        """Replace the displayed message."""
        self.text = message
        if self.on_change:
            self.on_change(message)

    def clear(self) -> None:
        self.show("")
