"""Network API functions
"""

import datetime
from typing import Optional

import requests
from requests import adapters

import commitfeed


RequestException = requests.exceptions.RequestException

# The User-Agent: header to use
USER_AGENT = f'commitfeed/{commitfeed.__version__}'

# Default request timeout in seconds
DEFAULT_TIMEOUT = 10


class FetchError(Exception):
    """A request completed but its response could not be used"""

    def __init__(self, message: str, status: str = ''):
        super().__init__(message)
        self.status = status


class RateLimitError(FetchError):
    """The remote rate limiter rejected or would reject the request"""

    def __init__(self, reset_time: Optional[datetime.datetime] = None, status: str = ''):
        if reset_time:
            message = f'rate limit exceeded, resets at {reset_time:%Y-%m-%d %H:%M:%S}'
        else:
            message = 'rate limit exceeded'
        super().__init__(message, status)
        self.reset_time = reset_time


class DecodeError(FetchError):
    """The response body did not have the expected structure"""


class Session(requests.Session):
    """Set up a requests session with a standard configuration

    Requests are attempted only once, and every request gets a bounded timeout unless the
    caller supplies one.
    """

    def __init__(self, timeout: float = DEFAULT_TIMEOUT):
        super().__init__()
        self.timeout = timeout
        self.headers['User-Agent'] = USER_AGENT
        adapter = adapters.HTTPAdapter(max_retries=0)
        self.mount('https://', adapter)
        self.mount('http://', adapter)

    def request(self, method, url, *args, **kwargs):
        kwargs.setdefault('timeout', self.timeout)
        return super().request(method, url, *args, **kwargs)
