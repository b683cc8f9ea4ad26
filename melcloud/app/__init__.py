"""Application layer: configuration loading."""

from . import config

__all__ = ["config"]
