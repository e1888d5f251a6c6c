"""Commit and activity event structures."""

import datetime
import re
from dataclasses import dataclass, field
from typing import Any, Union


# Event type tag of the only events that are consumed
PUSH_EVENT = 'PushEvent'

# Matches a time stamp with a fractional seconds part
TIME_FRACTION_RE = re.compile(r'^.{19}\.')


def convert_time(timestamp: str) -> datetime.datetime:
    """Converts a GitHub time into a time zone aware datetime object.

    Accepted formats look like:
        2023-07-24T22:03:10Z
        2023-08-15T13:03:32.000Z
        2023-07-24T15:16:01-07:00
    A time without an explicit zone raises ValueError.
    """
    if TIME_FRACTION_RE.search(timestamp):
        return datetime.datetime.strptime(timestamp, '%Y-%m-%dT%H:%M:%S.%f%z')
    return datetime.datetime.strptime(timestamp, '%Y-%m-%dT%H:%M:%S%z')


@dataclass
class CommitRecord:
    """A single commit pushed by the user."""

    sha: str                # commit hash
    repository: str         # owner/name
    author: str = ''        # author display name
    date: str = ''          # RFC 3339 time of the push event
    message: str = ''       # full commit message
    pr_url: str = ''        # associated pull request URL, if looked up and found

    @property
    def time(self) -> datetime.datetime:
        return convert_time(self.date)


@dataclass
class PushEvent:
    """An activity feed entry for one push to a repository."""

    created_at: str
    repository: str
    commits: list[dict[str, Any]] = field(default_factory=list)

    def to_records(self) -> list[CommitRecord]:
        """Create one CommitRecord per commit in the push.

        The event time is used as the commit time, not the commit's own author date.
        """
        return [CommitRecord(sha=c['sha'],
                             repository=self.repository,
                             author=(c.get('author') or {}).get('name', ''),
                             date=self.created_at,
                             message=c.get('message', ''))
                for c in self.commits]


@dataclass
class OtherEvent:
    """Any activity feed entry that is not a push; only the type is kept."""

    type: str  # noqa: A003


Event = Union[PushEvent, OtherEvent]


def optional_str(obj: dict[str, Any], name: str) -> str:
    """Return a string member that may be missing or null as a string."""
    value = obj.get(name)
    if value is None:
        return ''
    if not isinstance(value, str):
        raise TypeError(f'Unexpected {name} type {type(value)}')
    return value


def decode_commit(commit: dict[str, Any], repository: str) -> dict[str, Any]:
    """Return a push event commit with only the used members, all strings.

    Raises TypeError or ValueError if the commit has the wrong structure or no hash.
    """
    if not isinstance(commit, dict):
        raise TypeError(f'Unexpected commit type {type(commit)}')
    sha = optional_str(commit, 'sha')
    if not sha:
        raise ValueError(f'Commit in {repository} has no SHA')
    author = commit.get('author') or {}
    if not isinstance(author, dict):
        raise TypeError(f'Unexpected author type {type(author)}')
    return {'sha': sha,
            'author': {'name': optional_str(author, 'name')},
            'message': optional_str(commit, 'message')}


def decode_event(obj: dict[str, Any]) -> Event:
    """Convert a decoded JSON event into the matching event structure.

    Raises KeyError, TypeError or ValueError if a push event is missing required fields.
    """
    etype = obj['type']
    if etype != PUSH_EVENT:
        return OtherEvent(etype)

    repository = obj['repo']['name']
    if not repository or not isinstance(repository, str):
        raise ValueError('Push event has no repository name')
    commits = (obj.get('payload') or {}).get('commits') or []
    if not isinstance(commits, list):
        raise TypeError(f'Unexpected commits type {type(commits)}')
    return PushEvent(created_at=obj.get('created_at', ''), repository=repository,
                     commits=[decode_commit(c, repository) for c in commits])
