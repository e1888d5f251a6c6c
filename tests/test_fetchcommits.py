"""Test fetchcommits."""

import io
import json
import os
import unittest
from unittest import mock

import requests

from .context import commitfeed  # noqa: F401
from .util import make_response, push_event


class TestFetchCommitsCli(unittest.TestCase):
    """Test the fetchcommits command-line program."""

    def setUp(self):
        super().setUp()
        # Replace XDG_CONFIG_HOME to prevent the user's commitfeedrc file from being loaded
        self.env_patcher = mock.patch.dict(os.environ, {'XDG_CONFIG_HOME': '/dev/null'})
        self.env_patcher.start()
        self.addCleanup(self.env_patcher.stop)
        # Import the code to test only after XDG_CONFIG_HOME has been replaced
        global fetchcommits
        from commitfeed.cli import fetchcommits

    def test_parse_args_defaults(self):
        args = fetchcommits.parse_args(['-u', 'someone', '-t', 'secret'])
        self.assertEqual(args.username, 'someone')
        self.assertEqual(args.github_token, 'secret')
        self.assertEqual(args.months_back, 1)
        self.assertEqual(args.sort_order, 'desc')
        self.assertEqual(args.output_type, 'console')
        self.assertEqual(args.api_endpoint, 'https://api.github.com')
        self.assertFalse(args.map_pr)

    def test_parse_args_config_overrides(self):
        with mock.patch.dict(fetchcommits.config.overrides, clear=True):
            self.addCleanup(fetchcommits.config.expand.cache_clear)
            self.addCleanup(fetchcommits.config.get.cache_clear)
            args = fetchcommits.parse_args([
                '--set', 'months_back=6',
                '--set', "api_endpoint='https://ghe.example.com/api/v3'",
                '--set', "output_type='json'",
                '-u', 'someone', '-t', 'secret'])
            self.assertEqual(args.months_back, 6)
            self.assertEqual(args.api_endpoint, 'https://ghe.example.com/api/v3')
            self.assertEqual(args.output_type, 'json')

            # Explicit options still win over the configuration
            args = fetchcommits.parse_args(['--set', 'months_back=6', '-d', '2',
                                            '-u', 'someone', '-t', 'secret'])
            self.assertEqual(args.months_back, 2)

    def test_parse_args_invalid_config_months(self):
        with mock.patch.dict(fetchcommits.config.overrides, clear=True):
            self.addCleanup(fetchcommits.config.get.cache_clear)
            with mock.patch('sys.stderr', new_callable=io.StringIO):
                with self.assertRaises(SystemExit) as cm:
                    fetchcommits.parse_args(['--set', 'months_back=0',
                                             '-u', 'someone', '-t', 'secret'])
            self.assertEqual(cm.exception.code, 2)

    def test_parse_args_invalid_months(self):
        for months in ['0', '-2', 'three']:
            with self.subTest(months=months):
                with mock.patch('sys.stderr', new_callable=io.StringIO):
                    with self.assertRaises(SystemExit) as cm:
                        fetchcommits.parse_args(['-u', 'someone', '-t', 'secret',
                                                 '--months-back', months])
                self.assertEqual(cm.exception.code, 2)

    def test_parse_args_no_token(self):
        with mock.patch.dict(os.environ, {'GITHUB_TOKEN': ''}):
            with mock.patch('sys.stderr', new_callable=io.StringIO):
                with self.assertRaises(SystemExit):
                    fetchcommits.parse_args(['-u', 'someone', '--github-token', ''])

    def test_output_file_name(self):
        for argv, expected in [
                (['-x', 'console', '-f', 'ignored.txt'], '-'),
                (['-x', 'csv'], 'output.csv'),
                (['-x', 'json'], 'output.json'),
                (['-x', 'json', '-f', 'commits.json'], 'commits.json'),
                (['-x', 'csv', '-f', '-'], '-'),
        ]:
            with self.subTest(argv=argv):
                args = fetchcommits.parse_args(['-u', 'someone', '-t', 'secret'] + argv)
                self.assertEqual(fetchcommits.output_file_name(args), expected)

    def run_main(self, argv: list[str], responses: list) -> str:
        session = mock.Mock()
        session.get.side_effect = responses
        with mock.patch('sys.argv', ['commitfeed-fetch'] + argv), \
             mock.patch.object(fetchcommits.netreq, 'Session', return_value=session), \
             mock.patch.object(fetchcommits.log, 'setup'), \
             mock.patch('sys.stdout', new_callable=io.StringIO) as stdout:
            fetchcommits.main()
        return stdout.getvalue()

    def test_main_json(self):
        output = self.run_main(
            ['-u', 'someone', '-t', 'secret', '-d', '1200', '-x', 'json', '-f', '-'],
            [make_response(200, [push_event('2024-03-10T08:00:00Z', 'owner/one', 'aaa111')]),
             make_response(200, [])])
        commits = json.loads(output)
        self.assertEqual([c['sha'] for c in commits], ['aaa111'])
        self.assertEqual(commits[0]['pr_url'], '')

    def test_main_rate_limited(self):
        with self.assertLogs(level='ERROR') as logs:
            with self.assertRaises(SystemExit) as cm:
                self.run_main(['-u', 'someone', '-t', 'secret'],
                              [make_response(200, [], {'X-RateLimit-Remaining': '0'})])
        self.assertEqual(cm.exception.code, 1)
        self.assertIn('rate limit exceeded', logs.output[0])

    def test_main_transport_error(self):
        with self.assertLogs(level='ERROR'):
            with self.assertRaises(SystemExit) as cm:
                self.run_main(['-u', 'someone', '-t', 'secret'],
                              [requests.exceptions.ConnectTimeout('timed out')])
        self.assertEqual(cm.exception.code, 1)
