"""Settings file loading, saving and event records."""

import json
from datetime import date

from calendar_logic import DAY_ABBR
from events import DateEvent, RangeEvent
from settings import event_to_json, initial_date, load_events, load_settings, save_settings


def test_missing_file_gives_defaults(tmp_path):
    settings = load_settings(str(tmp_path / "missing.json"))
    assert settings == {
        "day_names": DAY_ABBR,
        "initial_date": None,
        "month_view_width": 420,
        "events": [],
    }


def test_corrupt_file_gives_defaults(tmp_path, caplog):
    path = tmp_path / "settings.json"
    path.write_text("{not json", encoding="utf-8")
    settings = load_settings(str(path))
    assert settings["month_view_width"] == 420
    assert "unreadable settings" in caplog.text


def test_mistyped_values_fall_back(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({
        "day_names": ["a", "b"],
        "month_view_width": True,
        "initial_date": 5,
        "events": "nope",
    }), encoding="utf-8")
    settings = load_settings(str(path))
    assert settings["day_names"] == DAY_ABBR
    assert settings["month_view_width"] == 420
    assert settings["initial_date"] is None
    assert settings["events"] == []


def test_round_trip(tmp_path):
    path = str(tmp_path / "settings.json")
    events = [
        DateEvent(date(2019, 9, 3), is_recurrent=True, renderer="#FF0000"),
        RangeEvent(date(2019, 9, 2), date(2019, 9, 8)),
    ]
    settings = load_settings(path)
    settings["day_names"] = ["mon", "tue", "wed", "thu", "fri", "sat", "sun"]
    settings["initial_date"] = "2019-09-01"
    settings["month_view_width"] = 700
    settings["events"] = [event_to_json(e) for e in events]
    save_settings(settings, path)

    loaded = load_settings(path)
    assert loaded == settings
    assert load_events(loaded) == events
    assert initial_date(loaded) == date(2019, 9, 1)


def test_load_events_skips_malformed_records():
    settings = {"events": [{"date": None}, {"start": "2019-09-01"}, {"date": "2019-09-05"}]}
    assert load_events(settings) == [DateEvent(date(2019, 9, 5))]


def test_initial_date_falls_back_to_today():
    assert initial_date({"initial_date": None}) == date.today()
    assert initial_date({"initial_date": "someday"}) == date.today()


def test_event_to_json_shapes():
    assert event_to_json(DateEvent(date(2019, 9, 3))) == {"date": "2019-09-03"}
    assert event_to_json(RangeEvent(date(2019, 9, 2), date(2019, 9, 8), is_recurrent=True)) == {
        "start": "2019-09-02", "end": "2019-09-08", "isRecurrent": True,
    }


def test_non_utf8_file_gives_defaults(tmp_path, caplog):
    path = tmp_path / "settings.json"
    path.write_bytes(b'{"day_names": "\xff\xfe"}')
    settings = load_settings(str(path))
    assert settings["day_names"] == DAY_ABBR
    assert settings["events"] == []
    assert "unreadable settings" in caplog.text


def test_string_recurrence_flag_is_not_recurring():
    settings = {"events": [{"date": "2019-09-03", "isRecurrent": "false"}]}
    assert load_events(settings) == [DateEvent(date(2019, 9, 3))]
