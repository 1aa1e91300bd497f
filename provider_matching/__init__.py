"""Core package for the provider matching and ranking engine."""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _version

try:
    __version__ = _version("provider-matching")
except PackageNotFoundError:
    __version__ = "0.0.0"
