"""GA4 collector hit builder for vendor-neutral analytics events."""

__version__ = "0.1.0"

__all__ = [
    "GaCollector",
    "RequestDescriptor",
    "page",
    "track",
    "identify",
    "user",
    "Event",
    "EventType",
    "Consent",
    "GaWireError",
    "ConfigError",
    "ValidationError",
    "EncodingError",
]


def __getattr__(name: str) -> object:
    """Lazy exports so importing the event model does not pull in httpx."""
    if name in {"GaCollector", "RequestDescriptor", "page", "track", "identify", "user"}:
        from .client import collector

        return getattr(collector, name)

    if name in {"Event", "EventType", "Consent"}:
        from .core.events import Consent, Event, EventType

        return {"Event": Event, "EventType": EventType, "Consent": Consent}[name]

    if name in {"GaWireError", "ConfigError", "ValidationError", "EncodingError"}:
        from .core import errors

        return getattr(errors, name)

    raise AttributeError(f"module 'gawire' has no attribute {name!r}")
