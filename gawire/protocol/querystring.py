"""Query string encoding for collector hits.

Scalar fields are looked up in :data:`PAYLOAD_FIELDS` and emitted in table
order. Property maps are first written in bracket form (``ep[key]=value``)
and then rewritten to the dotted form the collector expects (``ep.key``).
"""

from __future__ import annotations

import math
from decimal import Decimal
from typing import Any
from urllib.parse import quote

from gawire.core.errors import EncodingError
from gawire.protocol.items import encode_items
from gawire.protocol.payload import Payload

# attribute name -> wire key, in wire order
PAYLOAD_FIELDS: tuple[tuple[str, str], ...] = (
    ("protocol_version", "v"),
    ("tracking_id", "tid"),
    ("gtm_hash_info", "gtm"),
    ("random_page_load_hash", "_p"),
    ("screen_resolution", "sr"),
    ("user_language", "ul"),
    ("document_hostname", "dh"),
    ("client_id", "cid"),
    ("hit_counter", "_s"),
    ("richsstsse", "richsstsse"),
    ("user_agent_architecture", "uaa"),
    ("user_agent_bitness", "uab"),
    ("user_agent_full_version_list", "uafvl"),
    ("user_agent_mobile", "uamb"),
    ("user_agent_model", "uam"),
    ("user_agent_platform", "uap"),
    ("user_agent_platform_version", "uapv"),
    ("user_agent_wow64", "uaw"),
    ("document_location", "dl"),
    ("document_title", "dt"),
    ("document_referrer", "dr"),
    ("usage_hash", "_z"),
    ("event_usage", "_eu"),
    ("event_debug_id", "edid"),
    ("is_debug", "_dbg"),
    ("ignore_referrer", "ir"),
    ("traffic_type", "tt"),
    ("is_google_linker_valid", "_glv"),
    ("campaign_medium", "cm"),
    ("campaign_source", "cs"),
    ("campaign_name", "cn"),
    ("campaign_content", "cc"),
    ("campaign_term", "ck"),
    ("campaign_creative_format", "ccf"),
    ("campaign_marketing_tactic", "cmt"),
    ("gclid_deduper", "_rnd"),
    ("event_name", "en"),
    ("engagement_time", "_et"),
    ("event_parameter_string", "ep"),
    ("event_parameter_number", "epn"),
    ("is_conversion", "_c"),
    ("external_event", "_ee"),
    ("user_id", "uid"),
    ("firebase_id", "_fid"),
    ("session_id", "sid"),
    ("session_count", "sct"),
    ("session_engagement", "seg"),
    ("user_property_string", "up"),
    ("user_property_number", "upn"),
    ("first_visit", "_fv"),
    ("session_start", "_ss"),
    ("first_party_linker_cookie", "_fplc"),
    ("new_session_id", "_nsi"),
    ("google_developer_id", "_gdid"),
    ("user_country", "_uc"),
    ("google_consent_status", "gcs"),
    ("google_consent_update", "gcu"),
    ("google_consent_update_type", "gcut"),
    ("google_consent_detail", "gcd"),
    ("non_personalized_ads", "npa"),
    ("dma_cps", "dma_cps"),
    ("dma", "dma"),
    ("privacy_sandbox_cdl", "pscdl"),
    ("tag_exp", "tag_exp"),
    ("are", "are"),
    ("pae", "pae"),
    ("frm", "frm"),
    ("ec_mode", "ec_mode"),
    ("tfd", "tfd"),
    ("currency_code", "cu"),
    ("ip_override", "_uip"),
)

# longer prefixes first so "epn[" is never read as "ep" + "n["
NESTED_PREFIXES = ("epn", "upn", "ep", "up")


def _encode(value: str) -> str:
    return quote(value, safe="")


def format_number(value: float) -> str:
    """Render a float as a plain decimal, ``10.0`` as ``10`` and ``1e-7`` as ``0.0000001``."""
    if not math.isfinite(value):
        raise EncodingError(f"non-representable numeric value: {value!r}")
    text = format(Decimal(repr(float(value))), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, float):
        return format_number(value)
    return str(value)


def serialize_payload(payload: Payload) -> str:
    """Encode every populated field; property maps use bracket keys."""
    pairs: list[str] = []
    for attr, key in PAYLOAD_FIELDS:
        value = getattr(payload, attr)
        if value is None:
            continue
        if isinstance(value, dict):
            for sub_key, sub_value in value.items():
                text = _format_value(sub_value)
                if sub_key and text:
                    pairs.append(f"{key}[{_encode(sub_key)}]={_encode(text)}")
            continue
        text = _format_value(value)
        if text:
            pairs.append(f"{key}={_encode(text)}")
    return "&".join(pairs)


def _nested_prefix_at(text: str, pos: int) -> str | None:
    for prefix in NESTED_PREFIXES:
        if text.startswith(prefix, pos) and text.startswith("[", pos + len(prefix)):
            return prefix
    return None


def rewrite_nested_keys(query: str) -> str:
    """Rewrite ``ep[k]``, ``epn[k]``, ``up[k]`` and ``upn[k]`` to dotted keys."""
    out: list[str] = []
    pos = 0
    length = len(query)
    while pos < length:
        prefix = _nested_prefix_at(query, pos)
        if prefix is None:
            out.append(query[pos])
            pos += 1
            continue
        out.append(prefix)
        out.append(".")
        start = pos + len(prefix) + 1
        end = query.find("]", start)
        if end == -1:
            out.append(query[start:])
            break
        out.append(query[start:end])
        pos = end + 1
    return "".join(out)


def encode_payload(payload: Payload) -> str:
    query = rewrite_nested_keys(serialize_payload(payload))
    items = encode_items(payload.products)
    if items and not query:
        return items[1:]
    return query + items
