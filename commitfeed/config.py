"""Methods for retrieving the program configuration."""

import contextlib
import functools
import importlib.machinery
import importlib.util
import logging
import os
import sys
from types import ModuleType
from typing import Any

from commitfeed import configdef


# Cache configuration module here
config_module = None

CONFIG_FILE = 'commitfeedrc'

# Config variables that override all others
overrides = {}


def config_dir() -> str:
    """Return the directory holding commitfeedrc."""
    if 'XDG_CONFIG_HOME' in os.environ:
        return os.environ['XDG_CONFIG_HOME']
    if 'HOME' in os.environ:
        return os.path.join(os.environ['HOME'], '.config')
    return '.'


def environ() -> dict[str, Any]:
    """Return all names available to config lookups and {VAR} expansion.

    Later sources win: process environment, configdef defaults, commitfeedrc, then --set
    overrides.
    """
    env = {**os.environ, **configdef.__dict__, **config().__dict__, **overrides}
    if 'XDG_CONFIG_HOME' not in env:
        env['XDG_CONFIG_HOME'] = config_dir()
    return env


def expandstr(var: str) -> str:
    """Expand a string with environment variables."""
    return var.format(**environ())


@functools.lru_cache(maxsize=None)
def expand(var: str) -> str:
    """Get a config variable and expand it with environment variables."""
    return expandstr(get(var))


@functools.lru_cache(maxsize=None)
def get(var: str) -> Any:
    """Get a raw config variable."""
    return environ()[var]


@contextlib.contextmanager
def override_var(obj, name: str, value: Any):
    """Change an object variable within a with context.

    The original value of the attribute is restored on context exit.
    """
    saved_value = getattr(obj, name)
    setattr(obj, name, value)
    try:
        yield saved_value
    finally:
        setattr(obj, name, saved_value)


def config() -> ModuleType:
    """Load commitfeedrc once and return it as a module, or an empty module if absent."""
    global config_module
    if config_module:
        return config_module

    configfn = os.path.join(config_dir(), CONFIG_FILE)
    if (os.access(configfn, os.R_OK)
        and (spec := importlib.util.spec_from_loader(
             'commitfeedrc',
             importlib.machinery.SourceFileLoader(
                 'commitfeedrc', configfn)))):
        config_module = importlib.util.module_from_spec(spec)

        # Don't write the imported config file bytecode file to eliminate caching problems
        with override_var(sys, 'dont_write_bytecode', True):
            spec.loader.exec_module(config_module)
    else:
        logging.info('Configuration file %s not found', configfn)
        config_module = ModuleType('empty')

    return config_module  # noqa: R504


def add_override(name: str, value: Any):
    """Add a config variable that overrides all others."""
    overrides[name] = value
    # Values may already have been cached
    get.cache_clear()
    expand.cache_clear()
