"""Date helpers producing instants the wallet can localize."""

import re
from datetime import datetime, timedelta
from typing import Optional

MIDDAY_UTC = "T12:00:00Z"
INSTANT_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

_FULL_DATE_RE = re.compile(r"^((19|20)\d\d(-\d\d){2})$")
_APPLE_INSTANT_RE = re.compile(
    r"^([0-9]{4})-(1[0-2]|0[1-9])-(3[01]|0[1-9]|[12][0-9])"
    r"T(2[0-4]|1[0-9]|0[0-9]):[0-6][0-9]:[0-6][0-9]Z$"
)


def format_date_string(date_string: str) -> str:
    """Bring a claims date into ``YYYY-MM-DDTHH:MM:SSZ`` form where possible.

    Anything ten characters or longer is cut to its first ten characters and
    pinned to midday UTC, without checking that those characters form a real
    calendar date. Shorter strings only get the suffix when they match
    ``YYYY-MM-DD``. Partial dates (``YYYY-MM``, ``YYYY``) and the empty string
    are returned unchanged, as "dob" may legitimately take those forms.
    """
    if len(date_string) >= 10:
        return date_string[:10] + MIDDAY_UTC

    cut = date_string[:10]
    if _FULL_DATE_RE.match(cut):
        return cut + MIDDAY_UTC
    return date_string


def is_apple_parsable(date_string: Optional[str]) -> bool:
    return bool(date_string) and _APPLE_INSTANT_RE.match(date_string) is not None


def add_days(instant: str, days: int) -> Optional[str]:
    """Shift a ``YYYY-MM-DDTHH:MM:SSZ`` instant by whole days.

    Returns None when the instant cannot be parsed.
    """
    if not is_apple_parsable(instant):
        return None
    try:
        parsed = datetime.strptime(instant, INSTANT_FORMAT)
    except ValueError:
        # matches the pattern but is no calendar date, e.g. 2021-02-30
        return None
    return (parsed + timedelta(days=days)).strftime(INSTANT_FORMAT)
