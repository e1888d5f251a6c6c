"""Retrieve a user's recent push commits from a GitHub-style activity feed."""

__version__ = '0.1.0'
