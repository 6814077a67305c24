"""Timed pauses that a newer round can cut short."""

import threading


class RoundToken:
    """Cancellation token owned by one round.

    Cancelling wakes any pause waiting on the token, so a replaced round
    stops at its next step instead of racing the new one.
    """

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def wait(self, seconds: float) -> bool:
        """Block up to seconds. True if cancelled meanwhile."""
        return self._event.wait(seconds)


class Clock:
    def sleep(self, seconds: float, token: RoundToken) -> bool:
        """Pause for seconds. False if the round was cancelled instead."""
        if token.cancelled:
            return False
        return not token.wait(seconds)
