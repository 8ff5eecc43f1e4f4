"""JSON-based settings persistence for the month grid widget."""

import json
import logging
import os
from datetime import date

from calendar_logic import DAY_ABBR
from events import DateEvent, as_event

logger = logging.getLogger(__name__)

_SETTINGS_PATH = os.path.join(os.path.expanduser("~"), ".month-grid-settings.json")

_DEFAULTS = {
    "day_names": list(DAY_ABBR),
    "initial_date": None,
    "month_view_width": 420,
    "events": [],
}


def load_settings(path: str | None = None) -> dict:
    """Load settings from disk, returning defaults for missing keys."""
    settings = dict(_DEFAULTS)
    settings["day_names"] = list(DAY_ABBR)
    settings["events"] = []
    try:
        with open(path or _SETTINGS_PATH, "r", encoding="utf-8") as f:
            stored = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        logger.warning("Ignoring unreadable settings file: %s", exc)
        return settings
    except (FileNotFoundError, OSError):
        return settings
    if not isinstance(stored, dict):
        return settings

    names = stored.get("day_names")
    if isinstance(names, list) and len(names) == 7 and all(isinstance(n, str) for n in names):
        settings["day_names"] = names
    if isinstance(stored.get("initial_date"), str):
        settings["initial_date"] = stored["initial_date"]
    width = stored.get("month_view_width")
    if isinstance(width, int) and not isinstance(width, bool) and width > 0:
        settings["month_view_width"] = width
    if isinstance(stored.get("events"), list):
        settings["events"] = [e for e in stored["events"] if isinstance(e, dict)]
    return settings


def save_settings(settings: dict, path: str | None = None) -> None:
    """Persist settings to disk."""
    with open(path or _SETTINGS_PATH, "w", encoding="utf-8") as f:
        json.dump(settings, f, indent=2)


def initial_date(settings: dict) -> date:
    """Return the configured start date, or today when unset or invalid."""
    value = settings.get("initial_date")
    if value:
        try:
            return date.fromisoformat(value)
        except ValueError:
            logger.warning("Ignoring invalid initial_date %r", value)
    return date.today()


def load_events(settings: dict) -> list:
    """Return the configured events, skipping records without usable dates."""
    events = []
    for raw in settings.get("events", []):
        event = as_event(raw)
        if event is None:
            logger.debug("Skipping configured event %r", raw)
            continue
        events.append(event)
    return events


def event_to_json(event) -> dict:
    """Serialize an event to the mapping stored in the settings file."""
    if isinstance(event, DateEvent):
        data = {"date": event.date.isoformat()}
    else:
        data = {"start": event.start.isoformat(), "end": event.end.isoformat()}
    if event.is_recurrent:
        data["isRecurrent"] = True
    if isinstance(event.renderer, str):
        data["renderer"] = event.renderer
    return data
