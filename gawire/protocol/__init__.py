"""Payload construction and wire encoding."""
