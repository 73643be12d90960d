"""Field conversions shared by the document models.

Documents come back from the store as plain JSON-compatible dicts. These helpers
turn them into Python values without ever raising: data that cannot be parsed
is kept in a form the ledger tools recognise as malformed (``Decimal("NaN")``
for amounts, the raw value for dates).
"""

import time
from dataclasses import dataclass
from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any

from dateutil.parser import isoparse


@dataclass(frozen=True)
class ServerTimestamp:
    """A timestamp assigned by the store, wrapped the way the store returns it.

    Attributes:
        seconds: Whole seconds since the Unix epoch (UTC).
        nanoseconds: Sub-second part in nanoseconds.
    """

    seconds: int
    nanoseconds: int = 0

    @classmethod
    def now(cls) -> "ServerTimestamp":
        ns = time.time_ns()
        return cls(seconds=ns // 1_000_000_000, nanoseconds=ns % 1_000_000_000)

    @classmethod
    def from_datetime(cls, value: datetime) -> "ServerTimestamp":
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        seconds = int(value.timestamp())
        return cls(seconds=seconds, nanoseconds=value.microsecond * 1000)

    def to_datetime(self) -> datetime:
        """Return the timestamp as an aware UTC datetime."""
        return datetime.fromtimestamp(
            self.seconds + self.nanoseconds / 1_000_000_000, tz=timezone.utc
        )

    def to_dict(self) -> dict:
        return {"seconds": self.seconds, "nanoseconds": self.nanoseconds}


def parse_decimal(value: Any, default: Decimal = Decimal("NaN")) -> Decimal:
    """Convert a stored number to Decimal.

    Args:
        value: Number, numeric string or Decimal.
        default: Returned when the value is missing or not numeric.

    Returns:
        The parsed Decimal, or ``default``.
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return default


def encode_decimal(value: Any) -> Any:
    """Store Decimals as strings so no precision is lost in JSON."""
    if isinstance(value, Decimal):
        return str(value)
    return value


def encode_timestamp(value: Any) -> Any:
    """Encode a date-like value for a JSON document."""
    if isinstance(value, ServerTimestamp):
        return value.to_dict()
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return value


def decode_timestamp(value: Any) -> Any:
    """Decode a date-like value read from a JSON document.

    Wrapped server timestamps become ``ServerTimestamp``, ISO strings become
    ``date`` or ``datetime``. Anything unparsable is returned unchanged.
    """
    if isinstance(value, dict) and "seconds" in value:
        try:
            return ServerTimestamp(
                seconds=int(value["seconds"]),
                nanoseconds=int(value.get("nanoseconds", 0)),
            )
        except (TypeError, ValueError):
            return value
    if isinstance(value, str):
        text = value.strip()
        try:
            if len(text) == 10:
                return date.fromisoformat(text)
            return isoparse(text)
        except ValueError:
            return value
    return value
