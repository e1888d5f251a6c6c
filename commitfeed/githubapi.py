"""Retrieve push activity and pull request associations from the GitHub REST API

The token is sent with every request. A classic or fine-grained personal access token with
read access to public repositories is sufficient; without one the rate limit is very low.
"""

import logging
from typing import Any, Optional

import requests

from commitfeed import commitdef
from commitfeed import netreq
from commitfeed import ratelimit


# See https://docs.github.com/en/rest/activity/events
API_URL = 'https://api.github.com'
EVENTS_URL = '{api}/users/{username}/events'
COMMIT_PULLS_URL = '{api}/repos/{repository}/commits/{sha}/pulls'

# Preview media type that exposes the commit to pull request association
PULLS_DATA_TYPE = 'application/vnd.github.groot-preview+json'


class GithubApi:
    def __init__(self, token: str, endpoint: str = API_URL,
                 http: Optional[requests.Session] = None,
                 pulls_data_type: str = PULLS_DATA_TYPE):
        self.token = token
        self.endpoint = endpoint.rstrip('/')
        self.pulls_data_type = pulls_data_type
        self.http = http if http is not None else netreq.Session()

    def _standard_headers(self) -> dict[str, str]:
        headers = {'User-Agent': netreq.USER_AGENT}
        if self.token:
            headers['Authorization'] = 'token ' + self.token
        else:
            logging.debug('No token available; request will be anonymous')
        return headers

    def _decode_json(self, resp: requests.Response, expected: type) -> Any:
        j = resp.json()
        if not isinstance(j, expected):
            raise netreq.DecodeError(f'Unexpected return type {type(j)} from API',
                                     ratelimit.status_text(resp))
        return j

    def get_push_events(self, username: str, page: int) -> list[commitdef.PushEvent]:
        """Returns the push events on one page of a user's activity feed

        An empty list means that there are no more push events to be found. Raises an exception
        in case of network error, rate limiting or an undecodable response.
        """
        url = EVENTS_URL.format(api=self.endpoint, username=username)
        logging.debug('Retrieving page %d of %s', page, url)
        with self.http.get(url, headers=self._standard_headers(),
                           params={'page': page}) as resp:
            ratelimit.check(ratelimit.classify_events_response(resp), 'commits')
            events = self._decode_json(resp, list)

        pushes = []
        for obj in events:
            try:
                event = commitdef.decode_event(obj)
            except (KeyError, TypeError, ValueError, AttributeError) as e:
                raise netreq.DecodeError(f'Invalid event on page {page}: {e}') from e
            if isinstance(event, commitdef.PushEvent):
                pushes.append(event)
        logging.debug('%d of %d events on page %d are pushes', len(pushes), len(events), page)
        return pushes

    def get_commit_pull_url(self, sha: str, repository: str) -> str:
        """Returns the URL of the first pull request associated with a commit

        An empty string is returned if the commit is not part of any pull request.
        """
        url = COMMIT_PULLS_URL.format(api=self.endpoint, repository=repository, sha=sha)
        headers = self._standard_headers()
        headers['Accept'] = self.pulls_data_type
        logging.debug('Retrieving %s', url)
        with self.http.get(url, headers=headers) as resp:
            ratelimit.check(ratelimit.classify_pulls_response(resp), 'pull requests')
            pulls = self._decode_json(resp, list)

        if not pulls:
            return ''
        try:
            return pulls[0]['html_url']
        except (KeyError, TypeError) as e:
            raise netreq.DecodeError(f'Invalid pull request for commit {sha}: {e}') from e
