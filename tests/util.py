"""Utility functions used in multiple tests."""

import json
from typing import Any, Optional

import requests

from commitfeed import commitdef


def make_response(status: int = 200, body: Any = None, headers: Optional[dict[str, str]] = None,
                  reason: str = 'OK', raw: Optional[bytes] = None) -> requests.Response:
    """Return a complete requests.Response as if it had been received."""
    resp = requests.Response()
    resp.status_code = status
    resp.reason = reason
    resp.headers.update(headers or {})
    resp.encoding = 'utf-8'
    resp._content = raw if raw is not None else json.dumps(body).encode('utf-8')
    resp._content_consumed = True
    return resp


def push_event(created_at: str, repository: str, *shas: str) -> dict[str, Any]:
    """Return an events API push event containing commits with the given hashes."""
    return {
        'type': commitdef.PUSH_EVENT,
        'created_at': created_at,
        'repo': {'name': repository},
        'payload': {'commits': [
            {'sha': sha, 'author': {'name': 'Author'}, 'message': f'Commit {sha}'}
            for sha in shas]},
    }
