"""
Dependency injection for Facteur.
"""

from facteur.di.container import Container

__all__ = ["Container"]
