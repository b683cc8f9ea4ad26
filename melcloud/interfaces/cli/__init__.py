"""CLI interface for melcloud.

Use ``python -m melcloud.interfaces.cli`` or the ``melcloud`` console script.
"""

from .__main__ import cli, login_cmd
from .devices import devices

__all__ = ["cli", "devices", "login_cmd"]
