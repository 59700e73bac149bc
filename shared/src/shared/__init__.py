"""
Shared utilities for Facteur components.
"""
