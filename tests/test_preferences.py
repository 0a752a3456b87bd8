import pytest

from heritage_health.errors import ValidationError
from heritage_health.preferences import Preferences, load_preferences, save_preferences


def test_defaults_when_nothing_stored(store):
    assert load_preferences(store) == Preferences()


def test_round_trip(store):
    prefs = Preferences(language="Spanish", dark_mode_enabled=True, notifications_enabled=False)
    save_preferences(store, prefs)
    assert load_preferences(store) == prefs


def test_unknown_language_rejected(store):
    with pytest.raises(ValidationError):
        save_preferences(store, Preferences(language="Klingon"))
    assert store.get_preferences() == {}
