"""Preview rendering and the command line entry point."""

from datetime import date

from PIL import Image

from events import DateEvent, RangeEvent
from main import main
from month_cells import compute_month_cells
from preview import BAR_COLOR, month_text, render_month


def test_render_month_size():
    cells = compute_month_cells(8, 2019, [])
    img = render_month(cells, width=420)
    assert isinstance(img, Image.Image)
    # header plus six week rows of 60x45 pixels
    assert img.size == (420, 45 * 7)


def test_render_month_draws_bars():
    cells = compute_month_cells(8, 2019, [RangeEvent(date(2019, 9, 2), date(2019, 9, 8))])
    img = render_month(cells, width=420)
    # bottom lane of the second week row, in the middle of the span
    bar_y = 45 * 3 - 5 + 2
    assert img.getpixel((210, bar_y)) == (0, 120, 212)
    assert BAR_COLOR == "#0078D4"


def test_render_month_uses_renderer():
    calls = []

    def renderer(draw, box, cell):
        calls.append((box, cell.value))

    cells = compute_month_cells(8, 2019, [DateEvent(date(2019, 9, 3), renderer=renderer)])
    render_month(cells, width=420)
    assert calls == [((61, 45 * 3 - 5, 118, 45 * 3 - 1), "3")]


def test_render_month_string_renderer_is_a_colour():
    cells = compute_month_cells(8, 2019, [DateEvent(date(2019, 9, 3), renderer="#FF0000")])
    img = render_month(cells, width=420)
    assert img.getpixel((90, 45 * 3 - 3)) == (255, 0, 0)


def test_month_text():
    cells = compute_month_cells(8, 2019, [DateEvent(date(2019, 9, 3))])
    lines = month_text(cells).splitlines()
    assert lines[0].split() == ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
    assert lines[1].split() == [".", ".", ".", ".", ".", ".", "1"]
    assert lines[2].split() == ["2", "3*", "4", "5", "6", "7", "8"]
    assert len(lines) == 7


def test_main_writes_three_previews(tmp_path, capsys):
    settings = tmp_path / "settings.json"
    settings.write_text('{"events": [{"date": "2019-09-03"}]}', encoding="utf-8")
    out = tmp_path / "out"

    assert main(["--date", "2019-09", "--settings", str(settings), "--out", str(out)]) == 0

    names = sorted(p.name for p in out.iterdir())
    assert names == ["month-2019-08.png", "month-2019-09.png", "month-2019-10.png"]
    assert "3*" in capsys.readouterr().out


def test_main_reports_invalid_range(tmp_path):
    settings = tmp_path / "settings.json"
    settings.write_text('{"events": [{"start": "2019-09-10", "end": "2019-09-01"}]}', encoding="utf-8")
    assert main(["--date", "2019-09", "--settings", str(settings), "--out", str(tmp_path)]) == 1
