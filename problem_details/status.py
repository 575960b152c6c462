"""HTTP status codes as used by the Problem `status` member."""

import http
from typing import Optional

MIN_STATUS = 100
MAX_STATUS = 599

# Registered codes with no http.HTTPStatus member.
_EXTRA_PHRASES = {
    509: 'Bandwidth Limit Exceeded',
}


def is_valid(status: int) -> bool:
    """Check whether a value can be used as a Problem status.

    Any integer from 100 to 599 (inclusive) is accepted, whether or not it is
    a registered status code. Booleans are rejected even though they are ints.
    """
    if isinstance(status, bool) or not isinstance(status, int):
        return False
    return MIN_STATUS <= status <= MAX_STATUS


def reason_phrase(status: int) -> Optional[str]:
    """Get the standard reason phrase for a status code.

    Args:
        status: The HTTP status code.

    Returns:
        The reason phrase (e.g. "Not Found" for 404), or None if the code
        is not a registered status.
    """
    try:
        return http.HTTPStatus(status).phrase
    except ValueError:
        return _EXTRA_PHRASES.get(status)
