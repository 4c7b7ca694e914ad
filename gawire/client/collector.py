"""Entry points turning host events into collector requests."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field

import httpx

from gawire.core.events import Event
from gawire.core.settings import CollectorSettings, settings_from_dict
from gawire.protocol.payload import Payload, PayloadBuilder
from gawire.protocol.querystring import encode_payload
from gawire.utils.ids import RandomSource

logger = logging.getLogger(__name__)

Settings = Mapping[str, str] | CollectorSettings


@dataclass
class RequestDescriptor:
    """Outbound hit. All data travels in the URL; the body is always empty."""

    method: str
    url: str
    headers: list[tuple[str, str]] = field(default_factory=list)
    body: str = ""
    forward_client_headers: bool = True

    def to_httpx_request(self) -> httpx.Request:
        return httpx.Request(self.method, self.url, headers=self.headers, content=self.body.encode("utf-8"))


def build_request(payload: Payload, endpoint: str) -> RequestDescriptor:
    query = encode_payload(payload)
    return RequestDescriptor(
        method="POST",
        url=f"{endpoint}?{query}",
        headers=[("content-length", "0")],
    )


class GaCollector:
    """Builds collector hits for one measurement id."""

    def __init__(self, settings: Settings, *, rng: RandomSource | None = None) -> None:
        self.settings = settings_from_dict(settings)
        self.builder = PayloadBuilder(self.settings, rng=rng)

    def _request(self, payload: Payload) -> RequestDescriptor:
        request = build_request(payload, self.settings.endpoint)
        logger.debug(
            "built %s hit (%d bytes)",
            payload.event_name,
            len(request.url),
            extra={"event_name": payload.event_name, "measurement_id": self.settings.measurement_id},
        )
        return request

    def page(self, event: Event) -> RequestDescriptor:
        return self._request(self.builder.build_page(event))

    def track(self, event: Event) -> RequestDescriptor:
        return self._request(self.builder.build_track(event))

    def identify(self, event: Event) -> RequestDescriptor:
        return self._request(self.builder.build_identify(event))

    user = identify


def page(event: Event, settings: Settings, *, rng: RandomSource | None = None) -> RequestDescriptor:
    return GaCollector(settings, rng=rng).page(event)


def track(event: Event, settings: Settings, *, rng: RandomSource | None = None) -> RequestDescriptor:
    return GaCollector(settings, rng=rng).track(event)


def identify(event: Event, settings: Settings, *, rng: RandomSource | None = None) -> RequestDescriptor:
    return GaCollector(settings, rng=rng).identify(event)


user = identify
