"""Split free-form event properties into string and numeric parameters."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Optional

CURRENCY_KEY = "currency"

# Same grammar as a strict float parser: no surrounding whitespace, no "_".
_NUMBER_RE = re.compile(
    r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf|infinity|nan)",
    re.IGNORECASE,
)


@dataclass
class ClassifiedProperties:
    strings: dict[str, str] = field(default_factory=dict)
    numbers: dict[str, float] = field(default_factory=dict)
    currency: Optional[str] = None


def normalize_key(key: str) -> str:
    return key.replace(" ", "_")


def parse_number(value: str) -> Optional[float]:
    if not _NUMBER_RE.fullmatch(value):
        return None
    return float(value)


def classify_properties(
    pairs: Iterable[tuple[str, str]],
    *,
    divert_currency: bool = False,
) -> ClassifiedProperties:
    """Partition ``pairs`` into numeric and string maps.

    Keys are normalized (spaces become underscores) and the last value wins on
    duplicate keys. With ``divert_currency`` a ``currency`` key is kept out of
    both maps and returned as :attr:`ClassifiedProperties.currency`.
    """
    out = ClassifiedProperties()
    for raw_key, value in pairs:
        key = normalize_key(raw_key)
        if divert_currency and key == CURRENCY_KEY:
            out.currency = value
            continue

        number = parse_number(value)
        if number is not None:
            out.strings.pop(key, None)
            out.numbers[key] = number
        else:
            out.numbers.pop(key, None)
            out.strings[key] = value
    return out
