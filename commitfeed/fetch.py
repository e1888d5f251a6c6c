"""Fetch a user's recent push commits, optionally finding their pull requests."""

import calendar
import datetime
import logging
from typing import Optional

from commitfeed import commitdef
from commitfeed import githubapi
from commitfeed import netreq


# Values for the pr_enrich_scope config variable
ENRICH_ALL = 'all'   # look up every accumulated commit after each page
ENRICH_NEW = 'new'   # look up only the commits added by the latest page
ENRICH_SCOPES = (ENRICH_ALL, ENRICH_NEW)


class ConfigError(ValueError):
    """An invalid fetch parameter"""


def validate_months(months: int) -> int:
    """Return months if it is a usable positive number of months, else raise ConfigError."""
    if not isinstance(months, int) or isinstance(months, bool) or months <= 0:
        raise ConfigError(f'date range must be a positive integer, not {months!r}')
    return months


def months_ago(now: datetime.datetime, months: int) -> datetime.datetime:
    """Return the same time the given number of calendar months before now.

    A day of month that does not exist in the target month is clamped to its last day.
    """
    total = now.year * 12 + now.month - 1 - months
    year, month = divmod(total, 12)
    month += 1
    day = min(now.day, calendar.monthrange(year, month)[1])
    return now.replace(year=year, month=month, day=day)


def sort_commits(commits: list[commitdef.CommitRecord], sort_order: str):
    """Sort commits in place by time.

    Only 'asc' sorts oldest first; any other value sorts newest first.
    """
    commits.sort(key=lambda c: c.time, reverse=sort_order != 'asc')


def find_pull_requests(api: githubapi.GithubApi, commits: list[commitdef.CommitRecord]):
    """Store the associated pull request URL in each commit.

    A failed lookup is logged and leaves that commit unchanged.
    """
    for commit in commits:
        try:
            commit.pr_url = api.get_commit_pull_url(commit.sha, commit.repository)
        except (netreq.FetchError, netreq.RequestException) as e:
            logging.warning('Error finding PR for commit %s: %s', commit.sha[:8], e)


def fetch_commits(api: githubapi.GithubApi, username: str, sort_order: str = 'desc',
                  months: int = 1, map_to_pr: bool = False, enrich_scope: str = ENRICH_ALL,
                  now: Optional[datetime.datetime] = None) -> list[commitdef.CommitRecord]:
    """Returns the user's push commits newer than the given number of months

    Pages of the activity feed are retrieved until one contains no push events. Any error
    retrieving a page is raised unchanged and no commits are returned.
    """
    validate_months(months)
    if enrich_scope not in ENRICH_SCOPES:
        raise ConfigError(f'Unknown PR enrichment scope {enrich_scope!r}')
    if not now:
        now = datetime.datetime.now(datetime.timezone.utc)
    start = months_ago(now, months)
    logging.info('Fetching commits by %s since %s', username, start.isoformat())

    all_commits = []
    page = 1
    while True:
        events = api.get_push_events(username, page)
        if not events:
            break

        page_commits = []
        for event in events:
            try:
                created = commitdef.convert_time(event.created_at)
            except (TypeError, ValueError) as e:
                logging.warning('Error parsing commit date %r: %s', event.created_at, e)
                continue
            if created > start:
                page_commits.extend(event.to_records())
        all_commits.extend(page_commits)

        if map_to_pr:
            find_pull_requests(api, all_commits if enrich_scope == ENRICH_ALL else page_commits)
        page += 1

    sort_commits(all_commits, sort_order)
    logging.info('Total commits processed: %d', len(all_commits))
    return all_commits
