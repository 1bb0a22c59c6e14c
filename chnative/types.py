"""Timezone-less date values and a textual UUID type."""

from __future__ import annotations

import datetime as _dt

_HEX_DIGITS = frozenset(b"0123456789abcdefABCDEF")
_DASH_POSITIONS = (8, 13, 18, 23)
_HEX_OFFSETS = (0, 2, 4, 6, 9, 11, 14, 16, 19, 21, 24, 26, 28, 30, 32, 34)


class InvalidUUIDFormatError(ValueError):
    """Raised when text is not in the canonical UUID layout."""

    def __init__(self, message: str = "invalid UUID format") -> None:
        super().__init__(message)


def uuid_to_bytes(text: str | bytes) -> bytes:
    """Convert canonical UUID text to its 16 raw bytes."""
    raw = text.encode("utf-8") if isinstance(text, str) else bytes(text)
    if len(raw) < 36:
        raise InvalidUUIDFormatError()
    if any(raw[pos] != ord("-") for pos in _DASH_POSITIONS):
        raise InvalidUUIDFormatError()
    pairs = [raw[offset:offset + 2] for offset in _HEX_OFFSETS]
    if any(byte not in _HEX_DIGITS for pair in pairs for byte in pair):
        raise InvalidUUIDFormatError()
    return bytes(int(pair, 16) for pair in pairs)


def bytes_to_uuid(data: bytes | str) -> str:
    """Convert 16 raw bytes to canonical lower-case UUID text."""
    if isinstance(data, str):
        raw = data.encode("utf-8")
    elif isinstance(data, (bytes, bytearray, memoryview)):
        raw = bytes(data)
    else:
        raw = b""
    if len(raw) != 16:
        raise ValueError(f"invalid UUID length: {len(raw)}")
    digits = raw.hex()
    return "-".join(
        (digits[0:8], digits[8:12], digits[12:16], digits[16:20], digits[20:32])
    )


class UUID(str):
    """UUID held as text and sent to the server as 16 raw bytes."""

    def to_bytes(self) -> bytes:
        """Return the 16 raw bytes of this UUID."""
        return uuid_to_bytes(str(self))

    @classmethod
    def from_bytes(cls, data: bytes | str) -> UUID:
        """Build a UUID from 16 raw bytes as read from the server."""
        return cls(bytes_to_uuid(data))


def date_value(value: _dt.date) -> _dt.datetime:
    """Keep only the calendar date, placed at midnight UTC."""
    return _dt.datetime(value.year, value.month, value.day, tzinfo=_dt.timezone.utc)


def datetime_value(value: _dt.date) -> _dt.datetime:
    """Keep the wall-clock fields to the second, relabelled as UTC."""
    if isinstance(value, _dt.datetime):
        hour, minute, second = value.hour, value.minute, value.second
    else:
        hour = minute = second = 0
    return _dt.datetime(
        value.year, value.month, value.day, hour, minute, second,
        tzinfo=_dt.timezone.utc,
    )