"""PIL-based board renderer for the Stream Deck key grid."""

from PIL import Image, ImageDraw, ImageFont

from scramble.buttons import GameButton, Viewport

FONT_PATH = "/System/Library/Fonts/Helvetica.ttc"
BOARD_COLOR = "#111827"
MESSAGE_COLOR = "#9ca3af"


def _font(size: int) -> ImageFont.FreeTypeFont:
    try:
        return ImageFont.truetype(FONT_PATH, size)
    except OSError:
        return ImageFont.load_default()


def render_button(
    size: tuple[int, int] = (160, 80),
    label: str | None = None,
    bg_color: str = "red",
) -> Image.Image:
    """Render one game button: flat color, number centered when shown."""
    img = Image.new("RGB", size, bg_color)
    draw = ImageDraw.Draw(img)
    draw.rectangle([0, 0, size[0] - 1, size[1] - 1], outline="white", width=2)

    if label:
        font = _font(max(12, size[1] // 2))
        draw.text(
            (size[0] // 2, size[1] // 2),
            label, font=font, fill="black", anchor="mm",
        )

    return img


def render_board(
    viewport: Viewport,
    buttons: list[GameButton],
    message: str = "",
    bg_color: str = BOARD_COLOR,
) -> Image.Image:
    """Render the whole play area. Buttons later in the list are drawn on top,
    the message over all of them.
    """
    board = Image.new("RGB", (viewport.width, viewport.height), bg_color)

    for button in buttons:
        img = render_button(
            size=(button.width, button.height),
            label=button.label,
            bg_color=button.color,
        )
        board.paste(img, (int(button.x), int(button.y)))

    if message:
        draw = ImageDraw.Draw(board)
        draw.text(
            (viewport.width // 2, viewport.height - 6),
            message, font=_font(16), fill=MESSAGE_COLOR, anchor="ms",
        )

    return board


def slice_keys(
    board: Image.Image,
    rows: int,
    cols: int,
    key_size: tuple[int, int],
) -> list[Image.Image]:
    """Cut the board into key images, row-major like Stream Deck key indices."""
    kw, kh = key_size
    tiles = []
    for row in range(rows):
        for col in range(cols):
            box = (col * kw, row * kh, (col + 1) * kw, (row + 1) * kh)
            tiles.append(board.crop(box))
    return tiles
