"""Test argparsing."""

import argparse
import os
import tempfile
import unittest
from unittest import mock

from .context import commitfeed  # noqa: F401

from commitfeed import argparsing  # noqa: I100
from commitfeed import config


class TestArgparsing(unittest.TestCase):
    """Test argparsing."""

    def test_positive_int(self):
        self.assertEqual(argparsing.positive_int('1'), 1)
        self.assertEqual(argparsing.positive_int('24'), 24)
        for value in ['0', '-1', '1.5', '']:
            with self.subTest(value=value):
                with self.assertRaises(argparse.ArgumentTypeError):
                    argparsing.positive_int(value)

    def test_read_token(self):
        with tempfile.NamedTemporaryFile('w', delete=False) as tmp:
            tmp.write('filetoken\n')
        self.addCleanup(os.unlink, tmp.name)
        self.assertEqual(
            argparsing.read_token(argparse.Namespace(authfile=tmp.name, github_token='argtoken')),
            'filetoken')
        self.assertEqual(
            argparsing.read_token(argparse.Namespace(authfile=None, github_token='argtoken')),
            'argtoken')

    def test_debug_implies_verbose(self):
        parser = argparse.ArgumentParser()
        argparsing.arguments_logging(parser)
        args = parser.parse_args(['--debug'])
        self.assertTrue(args.debug)
        self.assertTrue(args.verbose)
        args = parser.parse_args([])
        self.assertFalse(args.debug)
        self.assertFalse(args.verbose)

    def test_override_config(self):
        parser = argparse.ArgumentParser()
        argparsing.arguments_config(parser)
        with mock.patch.dict(config.overrides, clear=True):
            parser.parse_args(['--set', 'months_back=6', '--set', "pr_enrich_scope='new'"])
            self.assertEqual(config.get('months_back'), 6)
            self.assertEqual(config.get('pr_enrich_scope'), 'new')
        config.get.cache_clear()
