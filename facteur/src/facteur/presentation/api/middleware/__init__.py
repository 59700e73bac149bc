"""
API middleware for Facteur.
"""

from facteur.presentation.api.middleware.error_handler import (
    STATUS_CODE_MAP,
    facteur_exception_handler,
)

__all__ = ["STATUS_CODE_MAP", "facteur_exception_handler"]
