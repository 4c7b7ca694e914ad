"""Collector settings resolved from the host's flat settings dictionary."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from gawire.core.errors import ConfigError
from gawire.defaults.config import (
    CLIENT_ID_MODES,
    DEFAULT_COLLECTOR_CONFIG,
    DOCUMENT_LOCATION_MODES,
    SETTING_CLIENT_ID_MODE,
    SETTING_CONVERSION_EVENTS,
    SETTING_DEBUG_MODE,
    SETTING_DOCUMENT_LOCATION,
    SETTING_ENDPOINT,
    SETTING_IDENTIFY_EVENT_NAME,
    SETTING_MEASUREMENT_ID,
)

ENV_PREFIX = "GAWIRE_"
_TRUE_VALUES = {"1", "true", "True", "TRUE", "yes", "on"}


@dataclass(frozen=True)
class CollectorSettings:
    measurement_id: str
    endpoint: str = DEFAULT_COLLECTOR_CONFIG["endpoint"]
    document_location_mode: str = DEFAULT_COLLECTOR_CONFIG["document_location_mode"]
    client_id_mode: str = DEFAULT_COLLECTOR_CONFIG["client_id_mode"]
    debug_mode: bool = DEFAULT_COLLECTOR_CONFIG["debug_mode"]
    conversion_events: tuple[str, ...] = DEFAULT_COLLECTOR_CONFIG["conversion_events"]
    identify_event_name: str = DEFAULT_COLLECTOR_CONFIG["identify_event_name"]

    @property
    def include_search_in_location(self) -> bool:
        return self.document_location_mode == "url_with_search"

    @property
    def hash_every_visitor_id(self) -> bool:
        return self.client_id_mode == "always"


def _choice(settings: Mapping[str, str], key: str, allowed: tuple[str, ...], default: str) -> str:
    value = (settings.get(key) or "").strip()
    if not value:
        return default
    if value not in allowed:
        raise ConfigError(f"invalid {key}: {value!r} (expected one of {', '.join(allowed)})", key=key)
    return value


def _split_names(raw: str | None) -> tuple[str, ...]:
    if not raw:
        return ()
    return tuple(name.strip() for name in raw.split(",") if name.strip())


def settings_from_dict(settings: Mapping[str, str] | CollectorSettings) -> CollectorSettings:
    """Resolve the host settings dictionary.

    Only ``ga_measurement_id`` is required. A missing or blank measurement id
    raises :class:`ConfigError`.
    """
    if isinstance(settings, CollectorSettings):
        return settings

    measurement_id = (settings.get(SETTING_MEASUREMENT_ID) or "").strip()
    if not measurement_id:
        raise ConfigError("Missing GA Measurement ID", key=SETTING_MEASUREMENT_ID)

    return CollectorSettings(
        measurement_id=measurement_id,
        endpoint=(settings.get(SETTING_ENDPOINT) or "").strip() or DEFAULT_COLLECTOR_CONFIG["endpoint"],
        document_location_mode=_choice(
            settings,
            SETTING_DOCUMENT_LOCATION,
            DOCUMENT_LOCATION_MODES,
            DEFAULT_COLLECTOR_CONFIG["document_location_mode"],
        ),
        client_id_mode=_choice(
            settings,
            SETTING_CLIENT_ID_MODE,
            CLIENT_ID_MODES,
            DEFAULT_COLLECTOR_CONFIG["client_id_mode"],
        ),
        debug_mode=(settings.get(SETTING_DEBUG_MODE) or "").strip() in _TRUE_VALUES,
        conversion_events=_split_names(settings.get(SETTING_CONVERSION_EVENTS)),
        identify_event_name=(settings.get(SETTING_IDENTIFY_EVENT_NAME) or "").strip()
        or DEFAULT_COLLECTOR_CONFIG["identify_event_name"],
    )


def settings_from_env(environ: Mapping[str, str] | None = None) -> dict[str, str]:
    """Collect ``GAWIRE_GA_*`` variables into a host-style settings dictionary."""
    env = os.environ if environ is None else environ
    keys = (
        SETTING_MEASUREMENT_ID,
        SETTING_ENDPOINT,
        SETTING_DOCUMENT_LOCATION,
        SETTING_CLIENT_ID_MODE,
        SETTING_DEBUG_MODE,
        SETTING_CONVERSION_EVENTS,
        SETTING_IDENTIFY_EVENT_NAME,
    )
    out: dict[str, str] = {}
    for key in keys:
        value = env.get(ENV_PREFIX + key.upper())
        if value is not None:
            out[key] = value
    return out
