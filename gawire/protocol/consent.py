"""Consent mode encoding.

The upstream tag composes six consent signals; the collector only ever sees
one of two fixed tuples here, fully granted or restricted to analytics.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from gawire.core.events import Consent


@dataclass(frozen=True)
class ConsentFields:
    status: str
    detail: str
    non_personalized_ads: str
    service_consent: str
    region_consent: str
    cookie_deprecation_label: str


GRANTED_CONSENT = ConsentFields(
    status="G111",
    detail="13t3t3t2t5l1",
    non_personalized_ads="0",
    service_consent="syphamo",
    region_consent="1",
    cookie_deprecation_label="noapi",
)

RESTRICTED_CONSENT = ConsentFields(
    status="G101",
    detail="13p3t3p2p5l1",
    non_personalized_ads="1",
    service_consent="-",
    region_consent="1",
    cookie_deprecation_label="denied",
)


def encode_consent(consent: Optional[Consent]) -> ConsentFields:
    if consent == Consent.GRANTED:
        return GRANTED_CONSENT
    return RESTRICTED_CONSENT
