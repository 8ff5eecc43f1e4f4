"""Draw a month cell list as a PIL image or plain text (developer preview)."""

from collections.abc import Sequence

from PIL import Image, ImageDraw, ImageFont

from calendar_logic import DAY_ABBR
from month_cells import COLUMNS, Cell

BAR_COLOR = "#0078D4"
MUTED_FG = "#AAAAAA"
HEADER_FG = "#333333"
WEEKEND_FG = "#CC0000"
BAR_HEIGHT = 4


def _load_font(size: int) -> ImageFont.ImageFont:
    try:
        return ImageFont.truetype("DejaVuSans.ttf", size)
    except OSError:
        return ImageFont.load_default()


def _draw_centered(draw: ImageDraw.ImageDraw, box, text: str, font, fill) -> None:
    # Centre the visible pixels, compensating for font metric offsets
    bbox = draw.textbbox((0, 0), text, font=font)
    x = box[0] + (box[2] - box[0] - (bbox[2] - bbox[0])) / 2 - bbox[0]
    y = box[1] + (box[3] - box[1] - (bbox[3] - bbox[1])) / 2 - bbox[1]
    draw.text((x, y), text, fill=fill, font=font)


def render_month(
    cells: Sequence[Cell],
    width: int = 420,
    day_names: Sequence[str] = DAY_ABBR,
) -> Image.Image:
    """Return an RGB image of a month view ``width`` pixels wide.

    Columns share the width equally. Event bars are drawn first, spanning
    ``col_span`` columns; a string renderer is used as the bar colour and a
    callable renderer is called as ``renderer(draw, box, cell)``.
    """
    cell_w = width // COLUMNS
    cell_h = max(cell_w * 3 // 4, 16)
    rows = 1 + max((c.row for c in cells if not c.is_event), default=-1)
    img = Image.new("RGB", (width, cell_h * (rows + 1)), "white")
    draw = ImageDraw.Draw(img)
    font = _load_font(max(cell_h // 3, 8))

    for col, name in enumerate(day_names):
        fg = WEEKEND_FG if col >= 5 else HEADER_FG
        _draw_centered(draw, (col * cell_w, 0, (col + 1) * cell_w, cell_h), name, font, fg)

    lanes: dict[int, int] = {}
    for cell in cells:
        if not cell.is_event:
            continue
        lane = lanes.get(cell.row, 0)
        lanes[cell.row] = lane + 1
        top = cell_h * (cell.row + 2) - (lane + 1) * (BAR_HEIGHT + 1)
        box = (
            cell.col * cell_w + 1,
            top,
            (cell.col + (cell.col_span or 1)) * cell_w - 2,
            top + BAR_HEIGHT,
        )
        if callable(cell.renderer):
            cell.renderer(draw, box, cell)
        else:
            color = cell.renderer if isinstance(cell.renderer, str) else BAR_COLOR
            draw.rectangle(box, fill=color)

    for cell in cells:
        if cell.is_event:
            continue
        box = (cell.col * cell_w, cell_h * (cell.row + 1),
               (cell.col + 1) * cell_w, cell_h * (cell.row + 2))
        fg = HEADER_FG if cell.is_current_month else MUTED_FG
        _draw_centered(draw, box, cell.value, font, fg)
        if cell.with_event:
            cx = (box[0] + box[2]) // 2
            draw.ellipse((cx - 2, box[1] + 2, cx + 2, box[1] + 6), fill=BAR_COLOR)

    return img


def month_text(cells: Sequence[Cell], day_names: Sequence[str] = DAY_ABBR) -> str:
    """Return the day grid as text; ``*`` marks days touched by an event."""
    lines = [" ".join(f"{name[:3]:>4}" for name in day_names)]
    row: list[str] = []
    for cell in cells:
        if cell.is_event:
            continue
        if not cell.is_current_month:
            text = "."
        else:
            text = cell.value + ("*" if cell.with_event else "")
        row.append(f"{text:>4}")
        if len(row) == COLUMNS:
            lines.append(" ".join(row))
            row = []
    return "\n".join(lines)
