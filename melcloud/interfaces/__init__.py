"""Interface layer for melcloud.

Packages under ``melcloud.interfaces`` expose boundary adapters such as CLI
commands.
"""

from . import cli

__all__ = ["cli"]
