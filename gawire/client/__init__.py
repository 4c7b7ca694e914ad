"""Host-facing entry points."""

from .collector import GaCollector, RequestDescriptor, identify, page, track, user

__all__ = ["GaCollector", "RequestDescriptor", "identify", "page", "track", "user"]
