"""Test utilities for linkbox applications::

    from linkbox.testing import TestClient
"""

from linkbox.testing.client import TestClient

__all__ = ["TestClient"]
