"""Config loader — YAML to dataclasses."""

from dataclasses import dataclass, field, fields
from pathlib import Path

import yaml


@dataclass
class StyleConfig:
    button_colors: list[str] = field(
        default_factory=lambda: ["red", "blue", "green", "yellow", "orange", "lime", "pink"]
    )
    button_width: int = 160
    button_height: int = 80
    margin: int = 5  # gap between buttons in the initial row layout
    edge_margin: int = 10  # keeps scrambled buttons off the viewport edge


@dataclass
class GameConfig:
    min_count: int = 3
    max_count: int = 7
    scramble_pause: float = 2.0


@dataclass
class DeckConfig:
    brightness: int = 60


@dataclass
class Messages:
    WIN: str = "Excellent Memory!"
    LOSE: str = "Wrong Order!"
    START: str = "Scrambling buttons ...."
    WRONG_INPUT_TYPE: str = "Please ensure you enter a number from 3 to 7!"
    NOT_IN_RANGE: str = "Number is not in range, please enter a number from 3 to 7!"
    GAME_STARTED: str = "Guess the correct order of the buttons"


@dataclass
class AppConfig:
    style: StyleConfig = field(default_factory=StyleConfig)
    game: GameConfig = field(default_factory=GameConfig)
    deck: DeckConfig = field(default_factory=DeckConfig)
    messages: Messages = field(default_factory=Messages)

    def validate(self) -> None:
        """Reject configurations the game cannot honor."""
        colors = self.style.button_colors
        if len(set(colors)) != len(colors):
            raise ValueError(f"Button colors must be distinct: {colors}")
        if self.game.min_count < 1:
            raise ValueError(f"min_count must be positive, got {self.game.min_count}")
        if self.game.min_count > self.game.max_count:
            raise ValueError(
                f"min_count {self.game.min_count} exceeds max_count {self.game.max_count}"
            )
        # Every button in a round needs its own color
        if len(colors) < self.game.max_count:
            raise ValueError(
                f"Palette has {len(colors)} colors, need at least {self.game.max_count}"
            )
        if self.style.button_width <= 0 or self.style.button_height <= 0:
            raise ValueError("Button dimensions must be positive")
        if self.style.margin < 0 or self.style.edge_margin < 0:
            raise ValueError("Margins must not be negative")
        if self.game.scramble_pause < 0:
            raise ValueError(f"scramble_pause must not be negative, got {self.game.scramble_pause}")


def _section(cls, raw: dict | None):
    data = raw or {}
    if not isinstance(data, dict):
        raise ValueError(f"{cls.__name__} section must be a mapping, got {type(data).__name__}")
    known = {f.name for f in fields(cls)}
    unknown = set(data) - known
    if unknown:
        raise ValueError(f"Unknown {cls.__name__} keys: {sorted(unknown)}")
    return cls(**data)


def load_config(path: Path) -> AppConfig:
    """Load config from YAML file."""
    with open(path) as f:
        raw = yaml.safe_load(f) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"Config must be a mapping, got {type(raw).__name__}")

    config = AppConfig(
        style=_section(StyleConfig, raw.get("style")),
        game=_section(GameConfig, raw.get("game")),
        deck=_section(DeckConfig, raw.get("deck")),
        messages=_section(Messages, raw.get("messages")),
    )
    config.validate()
    return config
