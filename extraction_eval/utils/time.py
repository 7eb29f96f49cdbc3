"""
UTC timestamp helpers for Extraction Eval.

All timestamps are timezone-aware UTC. Evaluation records, judge responses
and log lines share the same 'Z'-suffixed ISO 8601 format.

Examples:
    >>> from extraction_eval.utils.time import utc_timestamp, run_id_from_timestamp
    >>> utc_timestamp()
    '2025-11-02T08:30:45Z'
    >>> run_id_from_timestamp()
    '2025-11-02T08-30-45Z'
"""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(UTC)


def utc_timestamp() -> str:
    """
    Return the current time as an ISO 8601 string with 'Z' suffix.

    Format: YYYY-MM-DDTHH:MM:SSZ
    """
    return utc_now().strftime("%Y-%m-%dT%H:%M:%SZ")


def run_id_from_timestamp(dt: datetime | None = None) -> str:
    """
    Build a run identifier from a UTC timestamp.

    Colons are replaced with hyphens so the identifier can be used in file
    names and still sorts chronologically.

    Args:
        dt: Timezone-aware datetime, converted to UTC. Defaults to utc_now().

    Returns:
        str: Slug like '2025-11-02T08-30-45Z'

    Raises:
        ValueError: If dt is naive
    """
    if dt is None:
        dt = utc_now()

    if dt.tzinfo is None:
        raise ValueError(
            "Datetime must be timezone-aware (use timezone.utc). "
            "Got naive datetime."
        )

    return dt.astimezone(UTC).strftime("%Y-%m-%dT%H-%M-%SZ")
