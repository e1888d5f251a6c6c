"""Show the commits a GitHub user has pushed recently
"""

import argparse
import contextlib
import logging
import sys

from commitfeed import argparsing
from commitfeed import config
from commitfeed import fetch
from commitfeed import githubapi
from commitfeed import log
from commitfeed import netreq
from commitfeed import render
from commitfeed import urls


def parse_args(args=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description='Fetch the commits pushed by a GitHub user')
    argparsing.arguments_logging(parser)
    argparsing.arguments_config(parser)
    argparsing.arguments_github(parser)
    parser.add_argument(
        '-u', '--username',
        required=True,
        help='GitHub username')
    parser.add_argument(
        '-d', '--months-back', '--date-range',
        type=argparsing.positive_int,
        help='Number of months of activity to fetch (defaults to config months_back)')
    parser.add_argument(
        '-s', '--sort-order',
        help='Sort order of commits (asc, or desc for anything else)')
    parser.add_argument(
        '-p', '--map-pr',
        action='store_true',
        help='Look up the pull request that introduced each commit')
    parser.add_argument(
        '-x', '--output-type',
        choices=render.OUTPUT_TYPES,
        help='Output format')
    parser.add_argument(
        '-f', '--output-file',
        help='Output file name for csv and json output (- for stdout)')
    parsed = parser.parse_args(args=args)
    argparsing.config_defaults(parsed, ['api_endpoint', 'months_back', 'sort_order', 'output_type'])
    if parsed.output_type not in render.OUTPUT_TYPES:
        parser.error(f'invalid output_type {parsed.output_type!r} in configuration')
    try:
        fetch.validate_months(parsed.months_back)
    except fetch.ConfigError as e:
        parser.error(str(e))
    if not parsed.github_token and not parsed.authfile:
        parser.error('a token must be given with --github-token, --authfile or $GITHUB_TOKEN')
    return parsed


def output_file_name(args: argparse.Namespace) -> str:
    """Return the file name to write, or '-' for stdout."""
    if args.output_type == 'console':
        return '-'
    if args.output_file:
        return args.output_file
    return config.expand(f'{args.output_type}_output_file')


def web_endpoint(api_endpoint: str) -> str:
    configured = config.expand('web_endpoint')
    return configured if configured else urls.web_url(api_endpoint)


def write_commits(args: argparse.Namespace, commits: list):
    fn = output_file_name(args)
    web = web_endpoint(args.api_endpoint)
    with (contextlib.nullcontext(sys.stdout) if fn == '-'
          else open(fn, 'w', newline='', encoding='utf-8')) as out:
        if fn != '-':
            logging.info('Writing %d commits to %s', len(commits), fn)
        render.output(args.output_type, commits, web, out)


def main():
    args = parse_args()
    log.setup(args)

    api = githubapi.GithubApi(argparsing.read_token(args), args.api_endpoint,
                              netreq.Session(timeout=config.get('request_timeout')),
                              config.get('pr_media_type'))
    try:
        commits = fetch.fetch_commits(api, args.username, args.sort_order, args.months_back,
                                      args.map_pr, config.get('pr_enrich_scope'))
    except fetch.ConfigError as e:
        logging.error('Invalid configuration: %s', e)
        sys.exit(2)
    except (netreq.FetchError, netreq.RequestException) as e:
        logging.error('Error fetching commits: %s', e)
        sys.exit(1)

    write_commits(args, commits)


if __name__ == '__main__':
    main()
