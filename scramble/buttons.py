"""Game buttons and the manager that owns them."""

import math
import random
from dataclasses import dataclass

from scramble.config import StyleConfig

Rect = tuple[int, int, int, int]  # x0, y0, x1, y1 (exclusive)


@dataclass
class Viewport:
    width: int
    height: int


@dataclass
class GameButton:
    """One colored button. Its id doubles as its place in the correct order."""

    id: int
    color: str
    width: int
    height: int
    x: float = 0
    y: float = 0
    number_visible: bool = True

    @property
    def label(self) -> str:
        # ids start at 0, the numbers shown start at 1
        return str(self.id + 1) if self.number_visible else ""

    def show_number(self) -> None:
        self.number_visible = True

    def hide_number(self) -> None:
        self.number_visible = False

    def set_location(self, x: float, y: float) -> None:
        self.x = x
        self.y = y

    def contains(self, x: float, y: float) -> bool:
        return self.x <= x < self.x + self.width and self.y <= y < self.y + self.height

    def overlap(self, rect: Rect) -> float:
        """Area shared with rect."""
        x0, y0, x1, y1 = rect
        w = min(x1, self.x + self.width) - max(x0, self.x)
        h = min(y1, self.y + self.height) - max(y0, self.y)
        if w <= 0 or h <= 0:
            return 0
        return w * h


class ButtonManager:
    def __init__(self, style: StyleConfig, rng: random.Random | None = None):
        self.style = style
        self.rng = rng or random.Random()
        self.buttons: list[GameButton] = []
        self.button_size = (style.button_width, style.button_height)

    def make_buttons(self, count: int, viewport: Viewport) -> list[GameButton]:
        """Create count buttons with distinct colors, ids 0..count-1, numbers shown.

        Buttons keep the configured size when the whole set fits on the
        viewport, otherwise they shrink (keeping their aspect ratio) until it does.
        """
        available = list(self.style.button_colors)  # copy, the palette stays intact
        if count > len(available):
            raise ValueError(f"Cannot color {count} buttons with {len(available)} colors")

        cols, (width, height) = self.fit_grid(count, viewport)
        self.button_size = (width, height)
        for i in range(count):
            color = available.pop(self.rng.randrange(len(available)))
            button = GameButton(id=i, color=color, width=width, height=height)
            button.show_number()
            self.buttons.append(button)

        self._layout_grid(cols)
        return self.buttons

    def fit_grid(self, count: int, viewport: Viewport) -> tuple[int, tuple[int, int]]:
        """Columns and button size that fit count buttons on the viewport.

        Picks the largest scale; among equal scales, the most columns.
        """
        gap = self.style.margin
        w, h = self.style.button_width, self.style.button_height
        best_cols, best_scale = 1, -1.0
        for cols in range(1, count + 1):
            rows = math.ceil(count / cols)
            cell_w = viewport.width / cols - 2 * gap
            cell_h = viewport.height / rows - 2 * gap
            scale = min(1.0, cell_w / w, cell_h / h)
            if scale >= best_scale:
                best_cols, best_scale = cols, scale

        size = (int(w * best_scale), int(h * best_scale))
        if size[0] < 1 or size[1] < 1:
            raise ValueError(
                f"Viewport {viewport.width}x{viewport.height} too small for {count} buttons"
            )
        return best_cols, size

    def _layout_grid(self, cols: int) -> None:
        """Lay buttons out left to right, cols per row."""
        gap = self.style.margin
        for button in self.buttons:
            row, col = divmod(button.id, cols)
            button.set_location(
                gap + col * (button.width + 2 * gap),
                gap + row * (button.height + 2 * gap),
            )

    def clear_buttons(self) -> None:
        self.buttons = []

    def random_location(self, viewport: Viewport) -> tuple[float, float]:
        """Random top-left corner keeping a button fully inside the viewport."""
        margin = self.style.edge_margin
        width, height = self.button_size
        max_x = max(margin, viewport.width - width - margin)
        max_y = max(margin, viewport.height - height - margin)
        x = margin + self.rng.random() * (max_x - margin)
        y = margin + self.rng.random() * (max_y - margin)
        return x, y

    def get(self, button_id: int) -> GameButton | None:
        if 0 <= button_id < len(self.buttons):
            return self.buttons[button_id]
        return None

    def button_at(self, x: float, y: float) -> GameButton | None:
        """Topmost button under a point. Later buttons are drawn on top."""
        for button in reversed(self.buttons):
            if button.contains(x, y):
                return button
        return None

    def button_in(self, rect: Rect) -> GameButton | None:
        """Button covering the largest part of rect, topmost on ties."""
        best, best_area = None, 0
        for button in reversed(self.buttons):
            area = button.overlap(rect)
            if area > best_area:
                best, best_area = button, area
        return best
