"""Vendor-neutral analytics event model handed over by the host."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union

from gawire.core.errors import ValidationError

Properties = list[tuple[str, str]]


class EventType(str, Enum):
    PAGE = "page"
    TRACK = "track"
    USER = "user"


class Consent(str, Enum):
    PENDING = "pending"
    GRANTED = "granted"
    DENIED = "denied"


@dataclass
class PageData:
    name: str = ""
    category: str = ""
    keywords: list[str] = field(default_factory=list)
    title: str = ""
    url: str = ""
    path: str = ""
    search: str = ""
    referrer: str = ""
    properties: Properties = field(default_factory=list)


@dataclass
class TrackData:
    name: str = ""
    properties: Properties = field(default_factory=list)
    products: list[Properties] = field(default_factory=list)


@dataclass
class UserData:
    user_id: str = ""
    anonymous_id: str = ""
    visitor_id: str = ""
    properties: Properties = field(default_factory=list)


@dataclass
class Client:
    ip: str = ""
    locale: str = ""
    timezone: str = ""
    user_agent: str = ""
    user_agent_architecture: str = ""
    user_agent_bitness: str = ""
    user_agent_full_version_list: str = ""
    user_agent_version_list: str = ""
    user_agent_mobile: str = ""
    user_agent_model: str = ""
    os_name: str = ""
    os_version: str = ""
    screen_width: int = 0
    screen_height: int = 0
    screen_density: float = 0.0
    continent: str = ""
    country_code: str = ""
    country_name: str = ""
    region: str = ""
    city: str = ""


@dataclass
class Session:
    session_id: str = ""
    previous_session_id: str = ""
    session_count: int = 0
    session_start: bool = False
    first_seen: int = 0
    last_seen: int = 0


@dataclass
class Campaign:
    name: str = ""
    source: str = ""
    medium: str = ""
    term: str = ""
    content: str = ""
    creative_format: str = ""
    marketing_tactic: str = ""


@dataclass
class Context:
    page: PageData = field(default_factory=PageData)
    user: UserData = field(default_factory=UserData)
    client: Client = field(default_factory=Client)
    campaign: Campaign = field(default_factory=Campaign)
    session: Session = field(default_factory=Session)


EventData = Union[PageData, TrackData, UserData]


@dataclass
class Event:
    uuid: str
    event_type: EventType
    data: EventData
    context: Context = field(default_factory=Context)
    timestamp: int = 0
    consent: Optional[Consent] = None


def _pairs(raw: Any) -> Properties:
    if not raw:
        return []
    items: Iterable[Any] = raw.items() if isinstance(raw, Mapping) else raw
    return [(str(key), str(value)) for key, value in items]


_TRUE_STRINGS = frozenset({"true", "1", "yes"})
_FALSE_STRINGS = frozenset({"false", "0", "no"})


def _to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    raise ValueError(f"not a boolean: {value!r}")


def _to_int(value: Any) -> int:
    if isinstance(value, bool) or isinstance(value, float) and not value.is_integer():
        raise ValueError(f"not an integer: {value!r}")
    return int(value)


# annotations are strings under ``from __future__ import annotations``
_SCALAR_COERCERS = {
    "int": _to_int,
    "float": float,
    "bool": _to_bool,
    "str": str,
}


def _coerce(cls: type, name: str, value: Any) -> Any:
    coercer = _SCALAR_COERCERS.get(cls.__dataclass_fields__[name].type)
    if coercer is None:
        return value
    try:
        return coercer(value)
    except (TypeError, ValueError, OverflowError) as exc:
        raise ValidationError(f"invalid {cls.__name__.lower()}.{name}: {value!r}") from exc


def _build(cls: type, raw: Mapping[str, Any] | None, **overrides: Any) -> Any:
    raw = dict(raw or {})
    known = {name for name in cls.__dataclass_fields__}
    kwargs = {
        key: _coerce(cls, key, value)
        for key, value in raw.items()
        if key in known and key not in overrides and value is not None
    }
    kwargs.update(overrides)
    return cls(**kwargs)


def _page(raw: Mapping[str, Any] | None) -> PageData:
    raw = raw or {}
    return _build(
        PageData,
        raw,
        keywords=[str(k) for k in raw.get("keywords") or []],
        properties=_pairs(raw.get("properties")),
    )


def _track(raw: Mapping[str, Any] | None) -> TrackData:
    raw = raw or {}
    return _build(
        TrackData,
        raw,
        properties=_pairs(raw.get("properties")),
        products=[_pairs(product) for product in raw.get("products") or []],
    )


def _user(raw: Mapping[str, Any] | None) -> UserData:
    raw = raw or {}
    return _build(UserData, raw, properties=_pairs(raw.get("properties")))


_DATA_BUILDERS = {
    EventType.PAGE: _page,
    EventType.TRACK: _track,
    EventType.USER: _user,
}


def event_from_dict(payload: Mapping[str, Any]) -> Event:
    """Build an :class:`Event` from a JSON-shaped mapping.

    Properties may be given either as a mapping or as a list of ``[key, value]``
    pairs; list order is preserved.
    """
    try:
        event_type = EventType(str(payload.get("event_type", "")).lower())
    except ValueError as exc:
        raise ValidationError(f"unknown event_type: {payload.get('event_type')!r}") from exc

    if "data" not in payload:
        raise ValidationError("event is missing data")

    raw_context = payload.get("context") or {}
    context = Context(
        page=_page(raw_context.get("page")),
        user=_user(raw_context.get("user")),
        client=_build(Client, raw_context.get("client")),
        campaign=_build(Campaign, raw_context.get("campaign")),
        session=_build(Session, raw_context.get("session")),
    )

    consent = payload.get("consent")
    if consent:
        try:
            consent = Consent(str(consent).lower())
        except ValueError as exc:
            raise ValidationError(f"unknown consent: {consent!r}") from exc

    return Event(
        uuid=str(payload.get("uuid", "")),
        event_type=event_type,
        data=_DATA_BUILDERS[event_type](payload.get("data")),
        context=context,
        timestamp=_coerce(Event, "timestamp", payload.get("timestamp") or 0),
        consent=consent or None,
    )
