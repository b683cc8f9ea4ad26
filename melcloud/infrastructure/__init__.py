"""Infrastructure layer for melcloud.

Holds the HTTP adapter for the MELCloud API and the logging facade.
"""

from . import http, observability

__all__ = ["http", "observability"]
