"""Validation of the requested button count."""

import math
import re
from dataclasses import dataclass
from enum import Enum

from scramble.config import GameConfig, Messages
from scramble.messenger import Messenger

_LEADING_INT = re.compile(r"[+-]?[0-9]+")


class Reason(Enum):
    WRONG_TYPE = "WRONG_INPUT_TYPE"
    OUT_OF_RANGE = "NOT_IN_RANGE"


@dataclass
class ValidationResult:
    ok: bool
    value: int | None = None
    reason: Reason | None = None


def parse_count(raw) -> int | None:
    """Parse the leading integer of raw input.

    "5", " 5 ", "5abc" and "4.9" all give an int; "abc", "" and None give None.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        if not math.isfinite(raw):
            return None
        return int(raw)
    match = _LEADING_INT.match(str(raw).strip())
    if not match:
        return None
    return int(match.group())


class Validator:
    """Checks the count against the configured range and reports failures."""

    def __init__(self, messenger: Messenger, game: GameConfig, messages: Messages):
        self.messenger = messenger
        self.game = game
        self.messages = messages

    def check(self, raw) -> ValidationResult:
        value = parse_count(raw)
        if value is None:
            return self._reject(Reason.WRONG_TYPE)
        if value < self.game.min_count or value > self.game.max_count:
            return self._reject(Reason.OUT_OF_RANGE)
        return ValidationResult(ok=True, value=value)

    def _reject(self, reason: Reason) -> ValidationResult:
        self.messenger.show(getattr(self.messages, reason.value))
        return ValidationResult(ok=False, reason=reason)
