"""Test utilities for warble applications.

Provides an async test client that drives the ASGI app directly::

    from warble.testing import TestClient
"""

from warble.testing.client import TestClient

__all__ = ["TestClient"]
