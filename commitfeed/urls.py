"""Common URL manipulation functions."""

import urllib.parse


# Path suffix of the REST API on GitHub Enterprise Server
ENTERPRISE_API_PATH = '/api/v3'


def url_host(url: str) -> str:
    """Return the host component of the URL."""
    _, netloc, _, _, _ = urllib.parse.urlsplit(url)
    assert isinstance(netloc, str)  # pytype is confused about this
    return netloc.casefold()


def web_url(api_endpoint: str) -> str:
    """Return the base URL of the web pages corresponding to an API endpoint.

    https://api.github.com maps to https://github.com and https://ghe.example.com/api/v3 maps to
    https://ghe.example.com. Any other URL is assumed to be usable as-is.
    """
    scheme, netloc, path, _, _ = urllib.parse.urlsplit(api_endpoint)
    path = path.rstrip('/')
    if url_host(api_endpoint).startswith('api.') and not path:
        return urllib.parse.urlunsplit((scheme, netloc[4:], '', '', ''))
    if path.endswith(ENTERPRISE_API_PATH):
        path = path[:-len(ENTERPRISE_API_PATH)]
        return urllib.parse.urlunsplit((scheme, netloc, path, '', ''))
    return api_endpoint.rstrip('/')


def commit_url(web: str, repository: str, sha: str) -> str:
    """Return the URL of the web page showing a commit."""
    return f'{web.rstrip("/")}/{repository}/commit/{sha}'
