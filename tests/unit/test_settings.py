import pytest

from gawire.core.errors import ConfigError
from gawire.core.settings import CollectorSettings, settings_from_dict, settings_from_env


def test_settings_defaults() -> None:
    settings = settings_from_dict({"ga_measurement_id": "G-1"})
    assert settings == CollectorSettings(measurement_id="G-1")
    assert settings.endpoint == "https://www.google-analytics.com/g/collect"
    assert settings.include_search_in_location is True
    assert settings.hash_every_visitor_id is False
    assert settings.debug_mode is False
    assert settings.conversion_events == ()
    assert settings.identify_event_name == "identify"


@pytest.mark.parametrize("raw", [{}, {"ga_measurement_id": ""}, {"ga_measurement_id": "   "}])
def test_missing_measurement_id(raw: dict[str, str]) -> None:
    with pytest.raises(ConfigError) as exc_info:
        settings_from_dict(raw)
    assert exc_info.value.key == "ga_measurement_id"
    assert "Measurement ID" in str(exc_info.value)


def test_settings_options() -> None:
    settings = settings_from_dict(
        {
            "ga_measurement_id": "G-1",
            "ga_document_location": "url",
            "ga_client_id_mode": "always",
            "ga_debug_mode": "1",
            "ga_conversion_events": "purchase, ,sign_up",
            "ga_identify_event_name": "login",
        }
    )
    assert settings.include_search_in_location is False
    assert settings.hash_every_visitor_id is True
    assert settings.debug_mode is True
    assert settings.conversion_events == ("purchase", "sign_up")
    assert settings.identify_event_name == "login"


def test_invalid_mode_is_config_error() -> None:
    with pytest.raises(ConfigError, match="ga_client_id_mode"):
        settings_from_dict({"ga_measurement_id": "G-1", "ga_client_id_mode": "sometimes"})


def test_settings_instance_passes_through() -> None:
    settings = CollectorSettings(measurement_id="G-1")
    assert settings_from_dict(settings) is settings


def test_settings_from_env() -> None:
    env = {
        "GAWIRE_GA_MEASUREMENT_ID": "G-ENV",
        "GAWIRE_GA_DEBUG_MODE": "true",
        "UNRELATED": "x",
    }
    assert settings_from_env(env) == {"ga_measurement_id": "G-ENV", "ga_debug_mode": "true"}
    assert settings_from_dict(settings_from_env(env)).debug_mode is True
