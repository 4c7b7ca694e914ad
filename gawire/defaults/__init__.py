"""Default constants and configuration values for gawire."""

from .config import COLLECT_ENDPOINT, DEFAULT_COLLECTOR_CONFIG, MAX_ITEMS, PROTOCOL_VERSION

__all__ = ["COLLECT_ENDPOINT", "DEFAULT_COLLECTOR_CONFIG", "MAX_ITEMS", "PROTOCOL_VERSION"]
