"""Client id and nonce helpers.

The collector expects a ``_ga``-cookie shaped client id (``<9 digits>.<first
seen>``) and a per-page-load random number. Both are derived here without any
I/O so that the payload builder stays a pure function of its inputs.
"""

from __future__ import annotations

import hashlib
import random
import uuid
from typing import Protocol

from gawire.defaults.config import NONCE_MAX

NINE_DIGIT_MODULUS = 10**9


class RandomSource(Protocol):
    def randint(self, a: int, b: int) -> int: ...


_default_rng: RandomSource = random.SystemRandom()


def hash_to_nine_digits(identifier: str) -> str:
    """Reduce the MD5 digest of ``identifier`` to a 9 digit decimal string.

    Short results are left-padded with ``1`` rather than ``0`` so that the
    value never starts with a zero.
    """
    digest = hashlib.md5(identifier.encode("utf-8")).hexdigest()
    reduced = str(int(digest, 16) % NINE_DIGIT_MODULUS)
    return reduced.rjust(9, "1")


def is_uuid_v4(value: str) -> bool:
    """True for a version 4 UUID in hyphenated or 32-hex simple form."""
    try:
        parsed = uuid.UUID(value)
    except (ValueError, TypeError, AttributeError):
        return False
    # uuid.UUID() strips braces, urn prefixes and stray hyphens
    if value.lower() not in (str(parsed), parsed.hex):
        return False
    return parsed.version == 4


def derive_client_id(visitor_id: str, first_seen: int | str, *, hash_always: bool = False) -> str:
    """Build the collector client id for a visitor.

    UUIDv4 visitor ids become ``<hash_to_nine_digits(id)>.<first_seen>``; any
    other id is passed through unchanged unless ``hash_always`` is set.
    """
    if hash_always or is_uuid_v4(visitor_id):
        return f"{hash_to_nine_digits(visitor_id)}.{first_seen}"
    return visitor_id


def random_nonce(rng: RandomSource | None = None) -> str:
    source = rng if rng is not None else _default_rng
    return str(source.randint(0, NONCE_MAX))
