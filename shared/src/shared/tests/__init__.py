"""
Shared testing utilities for Facteur components.

All tests inherit from LaborantTest.
"""

from shared.tests.test_base import LaborantTest

__all__ = ["LaborantTest"]
