"""Collector hit payload and the builder that fills it from an event.

Field meanings follow the reverse engineered GA4 ``/g/collect`` parameters.
Wire names live in :mod:`gawire.protocol.querystring`, not here.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Optional

from gawire.core.errors import ValidationError
from gawire.core.events import Event, PageData, TrackData, UserData
from gawire.core.settings import CollectorSettings
from gawire.defaults.config import (
    DEFAULT_LANGUAGE,
    EXTERNAL_EVENT,
    HIT_COUNTER,
    PAGE_VIEW_EVENT,
    PROTOCOL_VERSION,
)
from gawire.protocol.consent import encode_consent
from gawire.protocol.properties import classify_properties, normalize_key
from gawire.utils.ids import RandomSource, derive_client_id, random_nonce

logger = logging.getLogger(__name__)


@dataclass
class Product:
    """One line item of an ecommerce event."""

    sku: Optional[str] = None
    name: Optional[str] = None
    affiliation: Optional[str] = None
    coupon: Optional[str] = None
    discount: Optional[str] = None
    index: Optional[str] = None
    brand: Optional[str] = None
    category: Optional[str] = None
    category2: Optional[str] = None
    category3: Optional[str] = None
    category4: Optional[str] = None
    category5: Optional[str] = None
    list_id: Optional[str] = None
    list_name: Optional[str] = None
    variant: Optional[str] = None
    location_id: Optional[str] = None
    price: Optional[str] = None
    quantity: Optional[str] = None
    # unknown keys, e.g. in_stock=true, kept in declaration order
    custom_parameters: list[tuple[str, str]] = field(default_factory=list)


PRODUCT_FIELDS = frozenset(name for name in Product.__dataclass_fields__ if name != "custom_parameters")


@dataclass
class Payload:
    protocol_version: Optional[str] = None
    tracking_id: Optional[str] = None
    gtm_hash_info: Optional[str] = None
    random_page_load_hash: Optional[str] = None

    screen_resolution: Optional[str] = None
    user_language: Optional[str] = None
    document_hostname: Optional[str] = None
    client_id: Optional[str] = None
    hit_counter: Optional[str] = None
    richsstsse: Optional[str] = None

    # client hints
    user_agent_architecture: Optional[str] = None
    user_agent_bitness: Optional[str] = None
    user_agent_full_version_list: Optional[str] = None
    user_agent_mobile: Optional[str] = None
    user_agent_model: Optional[str] = None
    user_agent_platform: Optional[str] = None
    user_agent_platform_version: Optional[str] = None
    user_agent_wow64: Optional[str] = None

    document_location: Optional[str] = None
    document_title: Optional[str] = None
    document_referrer: Optional[str] = None
    usage_hash: Optional[str] = None
    event_usage: Optional[str] = None
    event_debug_id: Optional[str] = None
    is_debug: Optional[str] = None
    ignore_referrer: Optional[str] = None
    traffic_type: Optional[str] = None
    is_google_linker_valid: Optional[str] = None

    # campaign values override whatever the collector reads from the URL
    campaign_medium: Optional[str] = None
    campaign_source: Optional[str] = None
    campaign_name: Optional[str] = None
    campaign_content: Optional[str] = None
    campaign_term: Optional[str] = None
    campaign_creative_format: Optional[str] = None
    campaign_marketing_tactic: Optional[str] = None
    gclid_deduper: Optional[str] = None

    event_name: Optional[str] = None
    engagement_time: Optional[str] = None
    event_parameter_string: dict[str, str] = field(default_factory=dict)
    event_parameter_number: dict[str, float] = field(default_factory=dict)
    is_conversion: Optional[str] = None
    external_event: Optional[str] = None

    user_id: Optional[str] = None
    firebase_id: Optional[str] = None
    session_id: Optional[str] = None
    session_count: Optional[str] = None
    session_engagement: Optional[str] = None
    user_property_string: dict[str, str] = field(default_factory=dict)
    user_property_number: dict[str, float] = field(default_factory=dict)
    first_visit: Optional[str] = None
    session_start: Optional[str] = None
    first_party_linker_cookie: Optional[str] = None
    new_session_id: Optional[str] = None
    google_developer_id: Optional[str] = None
    user_country: Optional[str] = None

    # consent mode v1 / v2
    google_consent_status: Optional[str] = None
    google_consent_update: Optional[str] = None
    google_consent_update_type: Optional[str] = None
    google_consent_detail: Optional[str] = None
    non_personalized_ads: Optional[str] = None
    dma_cps: Optional[str] = None
    dma: Optional[str] = None
    privacy_sandbox_cdl: Optional[str] = None

    tag_exp: Optional[str] = None
    are: Optional[str] = None
    pae: Optional[str] = None
    frm: Optional[str] = None
    ec_mode: Optional[str] = None
    tfd: Optional[str] = None

    currency_code: Optional[str] = None
    ip_override: Optional[str] = None

    products: list[Product] = field(default_factory=list)


def _opt(value: str) -> Optional[str]:
    return value if value else None


def build_products(products: Iterable[Iterable[tuple[str, str]]]) -> list[Product]:
    """Map line-item key/value bags onto :class:`Product` records."""
    out: list[Product] = []
    for bag in products:
        product = Product()
        for raw_key, value in bag:
            key = normalize_key(raw_key)
            if key in PRODUCT_FIELDS:
                setattr(product, key, value)
            else:
                product.custom_parameters.append((key, value))
        out.append(product)
    return out


class PayloadBuilder:
    """Builds one :class:`Payload` per event for a given collector setup."""

    def __init__(self, settings: CollectorSettings, rng: RandomSource | None = None) -> None:
        self.settings = settings
        self.rng = rng

    def _document_location(self, url: str, search: str) -> str:
        if self.settings.include_search_in_location and search:
            return f"{url}{search}"
        return url

    def _base(self, event: Event, event_name: str) -> Payload:
        ctx = event.context
        client = ctx.client
        session = ctx.session
        consent = encode_consent(event.consent)

        ga = Payload(
            protocol_version=PROTOCOL_VERSION,
            tracking_id=self.settings.measurement_id,
            event_name=event_name,
            random_page_load_hash=random_nonce(self.rng),
            external_event=EXTERNAL_EVENT,
            hit_counter=HIT_COUNTER,
            client_id=_opt(
                derive_client_id(
                    ctx.user.visitor_id,
                    session.first_seen,
                    hash_always=self.settings.hash_every_visitor_id,
                )
            ),
            google_consent_status=consent.status,
            google_consent_detail=consent.detail,
            non_personalized_ads=consent.non_personalized_ads,
            dma_cps=consent.service_consent,
            dma=consent.region_consent,
            privacy_sandbox_cdl=consent.cookie_deprecation_label,
        )
        ga.event_parameter_string["event_id"] = event.uuid
        if self.settings.debug_mode:
            ga.is_debug = "1"
        if event_name in self.settings.conversion_events:
            ga.is_conversion = "1"

        page = ctx.page
        ga.document_title = _opt(page.title)
        if page.url:
            ga.document_location = self._document_location(page.url, page.search)
        ga.document_referrer = _opt(page.referrer)

        ga.user_language = client.locale or DEFAULT_LANGUAGE
        ga.user_agent_full_version_list = _opt(client.user_agent_full_version_list)
        ga.user_agent_mobile = _opt(client.user_agent_mobile)
        ga.user_agent_platform = _opt(client.os_name)
        ga.user_agent_platform_version = _opt(client.os_version)
        ga.user_agent_architecture = _opt(client.user_agent_architecture)
        ga.user_agent_bitness = _opt(client.user_agent_bitness)
        ga.user_agent_model = _opt(client.user_agent_model)
        if client.screen_width > 0 and client.screen_height > 0:
            ga.screen_resolution = f"{client.screen_width}x{client.screen_height}"
        ga.user_country = _opt(client.country_code)
        ga.ip_override = _opt(client.ip)

        campaign = ctx.campaign
        ga.campaign_medium = _opt(campaign.medium)
        ga.campaign_source = _opt(campaign.source)
        ga.campaign_name = _opt(campaign.name)
        ga.campaign_content = _opt(campaign.content)
        ga.campaign_term = _opt(campaign.term)
        ga.campaign_creative_format = _opt(campaign.creative_format)
        ga.campaign_marketing_tactic = _opt(campaign.marketing_tactic)

        self._apply_user(ga, ctx.user)

        ga.session_id = _opt(session.session_id)
        ga.session_count = str(session.session_count)
        if session.first_seen == session.last_seen:
            ga.first_visit = "1"
            ga.new_session_id = "1"
        # a new session is not engaged yet
        if session.session_start:
            ga.session_start = "1"
            ga.session_engagement = "0"
        else:
            ga.session_engagement = "1"
        return ga

    def _apply_user(self, ga: Payload, user: UserData) -> None:
        strings: dict[str, str] = {}
        if user.anonymous_id:
            ga.user_id = user.anonymous_id
        if user.user_id:
            ga.user_id = user.user_id
            if user.anonymous_id:
                strings["anonymous_id"] = user.anonymous_id

        classified = classify_properties(user.properties)
        for key in classified.numbers:
            strings.pop(key, None)
        strings.update(classified.strings)
        ga.user_property_string = strings
        ga.user_property_number = classified.numbers

    def _apply_event_properties(self, ga: Payload, properties: list[tuple[str, str]]) -> None:
        classified = classify_properties(properties, divert_currency=True)
        for key in classified.numbers:
            ga.event_parameter_string.pop(key, None)
        ga.event_parameter_string.update(classified.strings)
        ga.event_parameter_number.update(classified.numbers)
        if classified.currency is not None:
            ga.currency_code = _opt(classified.currency)

    def build_page(self, event: Event) -> Payload:
        data = event.data
        if not isinstance(data, PageData):
            raise ValidationError("Missing page data")
        # fall back to the context page when the event carries no url
        location = data if data.url else event.context.page
        if not location.url:
            raise ValidationError("Page url is not set")

        ga = self._base(event, PAGE_VIEW_EVENT)
        ga.document_location = self._document_location(location.url, location.search)
        ga.document_title = _opt(data.title)
        ga.document_referrer = _opt(data.referrer)

        params = ga.event_parameter_string
        if data.name:
            params["page_name"] = data.name
        if data.category:
            params["page_category"] = data.category
        if data.keywords:
            params["page_keywords"] = ",".join(data.keywords)
        if data.search:
            params["page_search"] = data.search
        self._apply_event_properties(ga, data.properties)

        logger.debug(
            "built page hit with %d event parameters",
            len(ga.event_parameter_string) + len(ga.event_parameter_number),
        )
        return ga

    def build_track(self, event: Event) -> Payload:
        data = event.data
        if not isinstance(data, TrackData):
            raise ValidationError("Missing track data")
        if not data.name:
            raise ValidationError("Track is not set")

        ga = self._base(event, data.name)
        self._apply_event_properties(ga, data.properties)
        ga.products = build_products(data.products)

        logger.debug("built track hit %r with %d products", data.name, len(ga.products))
        return ga

    def build_identify(self, event: Event) -> Payload:
        data = event.data
        if not isinstance(data, UserData):
            raise ValidationError("Missing user data")
        if not data.user_id and not data.anonymous_id:
            raise ValidationError("user_id or anonymous_id must be set")

        ga = self._base(event, self.settings.identify_event_name)
        # the event's own user data wins over the session-scoped context user
        self._apply_user(ga, data)
        if data.visitor_id:
            ga.client_id = derive_client_id(
                data.visitor_id,
                event.context.session.first_seen,
                hash_always=self.settings.hash_every_visitor_id,
            )

        logger.debug(
            "built identify hit with %d user properties",
            len(ga.user_property_string) + len(ga.user_property_number),
        )
        return ga
