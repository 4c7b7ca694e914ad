"""Positional ``~``-delimited encoding of ecommerce items.

Each item becomes one ``pr<n>`` parameter, e.g.::

    pr1=idSKU_1~nmTshirt~brAcme~caApparel~pr19.99~k0in_stock~v0yes
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from urllib.parse import quote

from gawire.defaults.config import MAX_ITEMS
from gawire.protocol.payload import Product

logger = logging.getLogger(__name__)

ITEM_SEGMENTS: tuple[tuple[str, str], ...] = (
    ("sku", "id"),
    ("name", "nm"),
    ("brand", "br"),
    ("category", "ca"),
    ("price", "pr"),
    ("affiliation", "af"),
    ("coupon", "cp"),
    ("discount", "ds"),
    ("index", "lp"),
    ("category2", "c2"),
    ("category3", "c3"),
    ("category4", "c4"),
    ("category5", "c5"),
    ("list_id", "li"),
    ("list_name", "ln"),
    ("variant", "va"),
    ("location_id", "lo"),
    ("quantity", "qt"),
)


def encode_product(product: Product) -> str:
    parts: list[str] = []
    for attr, prefix in ITEM_SEGMENTS:
        value = getattr(product, attr)
        if value:
            parts.append(f"{prefix}{value}")
    for position, (key, value) in enumerate(product.custom_parameters):
        parts.append(f"k{position}{key}")
        parts.append(f"v{position}{value}")
    return "~".join(parts)


def encode_item_params(products: Sequence[Product]) -> list[tuple[str, str]]:
    """Return ``(pr<n>, percent-encoded value)`` pairs for at most 200 items.

    Items without any populated field are skipped.
    """
    encoded = [value for value in (encode_product(product) for product in products) if value]
    if len(encoded) > MAX_ITEMS:
        logger.warning("dropping %d items above the %d item limit", len(encoded) - MAX_ITEMS, MAX_ITEMS)
    return [
        (f"pr{position}", quote(value, safe=""))
        for position, value in enumerate(encoded[:MAX_ITEMS], start=1)
    ]


def encode_items(products: Sequence[Product]) -> str:
    return "".join(f"&{key}={value}" for key, value in encode_item_params(products))
