"""Lossless conversion between text and raw bytes."""

from __future__ import annotations


def string_to_bytes(s: str) -> bytes:
    """Encode text as UTF-8, restoring any bytes that decoding escaped."""
    return s.encode("utf-8", "surrogateescape")


def bytes_to_string(b: bytes | bytearray | memoryview) -> str:
    """Decode UTF-8 bytes to text, escaping invalid bytes so they round-trip."""
    return bytes(b).decode("utf-8", "surrogateescape")