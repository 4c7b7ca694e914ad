from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from gawire.core.events import (
    Campaign,
    Client,
    Consent,
    Context,
    Event,
    EventType,
    PageData,
    Session,
    TrackData,
    UserData,
)


class FixedRng:
    def __init__(self, value: int) -> None:
        self.value = value
        self.calls: list[tuple[int, int]] = []

    def randint(self, a: int, b: int) -> int:
        self.calls.append((a, b))
        return self.value


def _page_data() -> PageData:
    return PageData(
        name="page name",
        category="category",
        keywords=["value1", "value2"],
        title="page title",
        url="https://example.com/full-url",
        path="/full-path",
        search="?test=1",
        referrer="https://example.com/another-page",
        properties=[("prop1", "value1"), ("prop2", "10"), ("currency", "USD")],
    )


def _user_data(visitor_id: str) -> UserData:
    return UserData(
        user_id="123",
        anonymous_id="456",
        visitor_id=visitor_id,
        properties=[("prop1", "value1"), ("prop2", "10")],
    )


def _context(visitor_id: str, locale: str, session_start: bool) -> Context:
    return Context(
        page=_page_data(),
        user=_user_data(visitor_id),
        client=Client(
            city="Paris",
            ip="192.168.0.1",
            locale=locale,
            timezone="CET",
            user_agent="Chrome",
            user_agent_architecture="arm",
            user_agent_bitness="64",
            user_agent_full_version_list="abc",
            user_agent_version_list="abc",
            user_agent_mobile="0",
            user_agent_model="",
            os_name="MacOS",
            os_version="14.1",
            screen_width=1024,
            screen_height=768,
            screen_density=2.0,
            continent="Europe",
            country_code="FR",
            country_name="France",
            region="West Europe",
        ),
        campaign=Campaign(name="spring", source="newsletter", medium="email", term="shoes", content="banner"),
        session=Session(
            session_id="sess-1",
            previous_session_id="sess-0",
            session_count=2,
            session_start=session_start,
            first_seen=123,
            last_seen=123,
        ),
    )


def _track_data(name: str) -> TrackData:
    return TrackData(
        name=name,
        products=[
            [("sku", "SKU_12345"), ("name", "Stan and Friends Tee"), ("price", "10.1"), ("quantity", "3")],
            [("sku", "SKU_67890"), ("brand", "Google"), ("custom property", "whatever")],
        ],
        properties=[("prop1", "value1"), ("prop2", "10"), ("currency", "USD")],
    )


@pytest.fixture
def rng() -> FixedRng:
    return FixedRng(456193680)


@pytest.fixture
def settings() -> dict[str, str]:
    return {"ga_measurement_id": "G-TEST123"}


@pytest.fixture
def make_event() -> Callable[..., Event]:
    def _make(
        kind: str = "page",
        *,
        consent: Consent | None = None,
        visitor_id: str = "abc",
        locale: str = "fr",
        session_start: bool = True,
        track_name: str = "add_to_cart",
        **overrides: Any,
    ) -> Event:
        data: PageData | TrackData | UserData
        if kind == "page":
            data = _page_data()
            event_type = EventType.PAGE
        elif kind == "track":
            data = _track_data(track_name)
            event_type = EventType.TRACK
        else:
            data = _user_data(visitor_id)
            event_type = EventType.USER
        event = Event(
            uuid="4b5ad0f2-7a3c-4d1e-9a61-0a2b3c4d5e6f",
            event_type=event_type,
            data=data,
            context=_context(visitor_id, locale, session_start),
            timestamp=123,
            consent=consent,
        )
        for key, value in overrides.items():
            setattr(event, key, value)
        return event

    return _make
