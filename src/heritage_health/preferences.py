"""User preference flags. Stored alongside the tree; the tree services never read them."""

from dataclasses import asdict, dataclass, fields

from heritage_health.database import FamilyStore
from heritage_health.errors import ValidationError

LANGUAGES = ["English", "Spanish", "French", "Chinese", "Arabic"]


@dataclass
class Preferences:
    notifications_enabled: bool = True
    dark_mode_enabled: bool = False
    health_data_sharing: bool = False
    language: str = "English"
    reminder_notifications: bool = True
    health_update_notifications: bool = True
    family_update_notifications: bool = True


def _to_text(value) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    return str(value)


def load_preferences(store: FamilyStore) -> Preferences:
    """Stored values over the defaults; unknown keys are ignored."""
    stored = store.get_preferences()
    prefs = Preferences()
    for f in fields(Preferences):
        if f.name not in stored:
            continue
        raw = stored[f.name]
        setattr(prefs, f.name, raw == "1" if f.type in (bool, "bool") else raw)
    return prefs


def save_preferences(store: FamilyStore, prefs: Preferences):
    if prefs.language not in LANGUAGES:
        raise ValidationError(
            "invalid_field", f"Unsupported language {prefs.language!r} (expected one of: {', '.join(LANGUAGES)})"
        )
    store.set_preferences({key: _to_text(value) for key, value in asdict(prefs).items()})
