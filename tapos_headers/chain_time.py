"""
Chain timestamps.

The node reports ``head_block_time`` as ISO-8601 without a zone designator.
It is UTC, but ``datetime.fromisoformat`` would hand back a naive value that
is easy to mix up with local time. Everything here works on aware UTC
datetimes and makes the conversion at one place.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

EXPIRATION_FORMAT = "%Y-%m-%dT%H:%M:%S"


def parse_chain_time(value: str) -> datetime:
    """Parse a chain timestamp as an aware UTC datetime.

    Args:
        value: ISO-8601 string, e.g. "2024-01-01T00:00:00.000". A trailing
            "Z" or "+00:00" is accepted.

    Returns:
        Aware datetime in UTC.

    Raises:
        ValueError: If the string is not ISO-8601 or carries a non-UTC offset.
    """
    if not isinstance(value, str) or not value:
        raise ValueError(f"chain time must be a non-empty string, got: {value!r}")

    text = value[:-1] + "+00:00" if value.endswith(("Z", "z")) else value
    parsed = datetime.fromisoformat(text)

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)

    if parsed.utcoffset() != timedelta(0):
        raise ValueError(f"chain time must be UTC, got offset in: {value!r}")
    return parsed.astimezone(UTC)


def format_expiration(moment: datetime) -> str:
    """Format an aware datetime as whole-second UTC ISO-8601.

    The result has no fractional part and no zone designator, e.g.
    "2024-01-01T00:01:00".

    Raises:
        ValueError: If ``moment`` is naive.
    """
    if moment.tzinfo is None:
        raise ValueError("expiration must be timezone-aware")
    return moment.astimezone(UTC).strftime(EXPIRATION_FORMAT)


def expiration_after(chain_time: datetime, seconds: int) -> str:
    """Return the formatted expiration ``seconds`` after ``chain_time``.

    Raises:
        ValueError: If the expiration falls outside the datetime range.
    """
    try:
        expires = chain_time + timedelta(seconds=seconds)
    except OverflowError as exc:
        raise ValueError(
            f"expiration out of range: {chain_time.isoformat()} + {seconds}s"
        ) from exc
    return format_expiration(expires)
