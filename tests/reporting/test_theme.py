import pytest

from src.reporting.theme import PALETTES, STATUS_COLORS, ThemeSettings, palette_for


def test_explicit_preference_wins_over_system():
    settings = ThemeSettings(preference="dark", system="light")
    assert settings.resolved == "dark"


def test_system_preference_follows_platform():
    settings = ThemeSettings(preference="system", system="light")
    settings.update_system_theme("dark")
    assert settings.resolved == "dark"


def test_invalid_values_rejected():
    with pytest.raises(ValueError):
        ThemeSettings(preference="sepia")
    with pytest.raises(ValueError):
        ThemeSettings().update_system_theme("system")


def test_subscribers_notified_only_on_resolved_change():
    settings = ThemeSettings(preference="light", system="light")
    seen = []
    settings.subscribe(seen.append)

    settings.update_system_theme("dark")  # preference is explicit, nothing changes
    settings.set_preference("system")     # now follows system -> dark
    settings.set_preference("dark")       # still dark
    settings.set_preference("light")

    assert seen == ["dark", "light"]


def test_unsubscribe_stops_notifications():
    settings = ThemeSettings(preference="light")
    seen = []
    unsubscribe = settings.subscribe(seen.append)
    unsubscribe()
    unsubscribe()  # second call is a no-op
    settings.set_preference("dark")
    assert seen == []


@pytest.mark.parametrize(
    "preference, hint, expected",
    [
        ("dark", None, "dark"),
        ("system", "dark", "dark"),
        ("system", '"dark"', "dark"),
        ("system", "purple", "light"),
        (None, "dark", "light"),
        ("bogus", None, "light"),
    ],
)
def test_from_request(preference, hint, expected):
    assert ThemeSettings.from_request(preference, hint).resolved == expected


def test_from_request_uses_configured_default():
    assert ThemeSettings.from_request(None, "dark", default="system").resolved == "dark"


def test_status_colours_shared_by_both_palettes():
    assert set(STATUS_COLORS) == {"Critical", "At Risk", "Established", "Leading"}
    assert palette_for("light")["page"] is None
    assert palette_for("dark")["page"] == PALETTES["dark"]["page"]
