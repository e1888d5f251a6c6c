"""Write commit lists in the supported output formats."""

import csv
import dataclasses
import json
import logging
from typing import TextIO

from commitfeed import commitdef
from commitfeed import config
from commitfeed import urls


OUTPUT_TYPES = ['console', 'csv', 'json']

CONSOLE_HEADER = ['SHA', 'Date', 'Author', 'Message', 'URL', 'PR']
CSV_HEADER = ['SHA', 'Date', 'Author', 'Message', 'link']


def local_time(timestamp: str) -> str:
    """Convert a GitHub time to a string in the local time zone."""
    try:
        t = commitdef.convert_time(timestamp)
    except ValueError:
        return 'Invalid Date'
    return t.astimezone().strftime('%Y-%m-%d %H:%M:%S')


def truncate(message: str, width: int) -> str:
    """Return the first line of a message, shortened to fit within width."""
    line = message.split('\n', 1)[0]
    if len(line) > width:
        line = line[:width - 3] + '...'
    return line


def output_console(commits: list[commitdef.CommitRecord], web: str, out: TextIO):
    width = config.get('console_message_width')
    header = '\t'.join(CONSOLE_HEADER)
    print(header, file=out)
    print('-' * len(header), file=out)
    for commit in commits:
        print('\t'.join((commit.sha, local_time(commit.date), commit.author,
                         truncate(commit.message, width),
                         urls.commit_url(web, commit.repository, commit.sha),
                         commit.pr_url)),
              file=out)


def output_csv(commits: list[commitdef.CommitRecord], web: str, out: TextIO):
    logging.info('Writing to CSV...')
    writer = csv.writer(out)
    writer.writerow(CSV_HEADER)
    for commit in commits:
        writer.writerow([commit.sha, local_time(commit.date), commit.author, commit.message,
                         urls.commit_url(web, commit.repository, commit.sha)])


def output_json(commits: list[commitdef.CommitRecord], web: str, out: TextIO):
    """Write the commits as a JSON array.

    web is unused since the records are written unchanged.
    """
    logging.info('Writing to JSON...')
    json.dump([dataclasses.asdict(c) for c in commits], out, indent=2)
    out.write('\n')


OUTPUTTERS = {
    'console': output_console,
    'csv': output_csv,
    'json': output_json,
}


def output(output_type: str, commits: list[commitdef.CommitRecord], web: str, out: TextIO):
    """Write the commits in the given format."""
    OUTPUTTERS[output_type](commits, web, out)
