"""Interpret GitHub rate limit signals in HTTP responses.

The events listing endpoint reports the number of remaining calls in the
X-RateLimit-Remaining header on every response, and the last allowed call still returns 200.
Other endpoints return 403 once the limit has been hit, with the reset time in the
X-RateLimit-Reset header as a Unix timestamp.
"""

import datetime
import enum
import logging
from dataclasses import dataclass
from typing import Optional

import requests

from commitfeed import netreq


REMAINING_HEADER = 'X-RateLimit-Remaining'
RESET_HEADER = 'X-RateLimit-Reset'


@enum.unique
class Status(enum.Enum):
    OK = enum.auto()
    RATE_LIMITED = enum.auto()          # rate limited, reset time known
    RATE_LIMITED_UNKNOWN = enum.auto()  # rate limited, reset time unknown
    HTTP_ERROR = enum.auto()


@dataclass
class Classification:
    status: Status
    reason: str = ''                                  # HTTP status text
    reset_time: Optional[datetime.datetime] = None    # local time the limit resets


def status_text(resp: requests.Response) -> str:
    """Return the HTTP status in the form "404 Not Found"."""
    return f'{resp.status_code} {resp.reason or ""}'.strip()


def parse_int_header(resp: requests.Response, name: str) -> Optional[int]:
    """Return an integer header value, or None if missing or not an integer."""
    value = resp.headers.get(name)
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        logging.debug('Ignoring non-integer %s header: %s', name, value)
        return None


def reset_time(resp: requests.Response) -> Optional[datetime.datetime]:
    """Return the rate limit reset time as a local datetime, if available."""
    reset = parse_int_header(resp, RESET_HEADER)
    if reset is None:
        return None
    try:
        return datetime.datetime.fromtimestamp(reset)
    except (OverflowError, OSError, ValueError):
        logging.debug('Ignoring out of range %s header: %d', RESET_HEADER, reset)
        return None


def classify_forbidden(resp: requests.Response) -> Classification:
    when = reset_time(resp)
    if when:
        return Classification(Status.RATE_LIMITED, status_text(resp), when)
    return Classification(Status.RATE_LIMITED_UNKNOWN, status_text(resp))


def classify_events_response(resp: requests.Response) -> Classification:
    """Classify a response from the user events listing endpoint.

    A 200 response is still treated as rate limited when no calls remain.
    """
    if resp.status_code == 403:
        return classify_forbidden(resp)
    if resp.status_code != 200:
        return Classification(Status.HTTP_ERROR, status_text(resp))
    remaining = parse_int_header(resp, REMAINING_HEADER)
    if remaining is not None and remaining <= 0:
        return Classification(Status.RATE_LIMITED_UNKNOWN, status_text(resp))
    return Classification(Status.OK, status_text(resp))


def classify_pulls_response(resp: requests.Response) -> Classification:
    """Classify a response from the commit pull requests endpoint."""
    if resp.status_code == 403:
        return classify_forbidden(resp)
    if resp.status_code != 200:
        return Classification(Status.HTTP_ERROR, status_text(resp))
    return Classification(Status.OK, status_text(resp))


def check(classification: Classification, what: str):
    """Raise the exception matching a classification that is not OK.

    what describes the failed request for the error message.
    """
    if classification.status is Status.OK:
        return
    if classification.status is Status.HTTP_ERROR:
        raise netreq.FetchError(f'failed to fetch {what}: {classification.reason}',
                                classification.reason)
    raise netreq.RateLimitError(classification.reset_time, classification.reason)
