"""Default protocol constants and settings keys."""

PROTOCOL_VERSION = "2"
COLLECT_ENDPOINT = "https://www.google-analytics.com/g/collect"

HIT_COUNTER = "1"
EXTERNAL_EVENT = "1"
DEFAULT_LANGUAGE = "en"
PAGE_VIEW_EVENT = "page_view"

# An event carries at most 200 items; the collector drops the rest.
MAX_ITEMS = 200
NONCE_MAX = 2147483647

SETTING_MEASUREMENT_ID = "ga_measurement_id"
SETTING_DOCUMENT_LOCATION = "ga_document_location"
SETTING_CLIENT_ID_MODE = "ga_client_id_mode"
SETTING_DEBUG_MODE = "ga_debug_mode"
SETTING_CONVERSION_EVENTS = "ga_conversion_events"
SETTING_IDENTIFY_EVENT_NAME = "ga_identify_event_name"
SETTING_ENDPOINT = "ga_endpoint"

DOCUMENT_LOCATION_MODES = ("url_with_search", "url")
CLIENT_ID_MODES = ("uuid_only", "always")

DEFAULT_COLLECTOR_CONFIG = {
    "endpoint": COLLECT_ENDPOINT,
    "document_location_mode": "url_with_search",
    "client_id_mode": "uuid_only",
    "debug_mode": False,
    "conversion_events": (),
    "identify_event_name": "identify",
}
