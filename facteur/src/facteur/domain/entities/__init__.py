"""
Domain entities for Facteur.
"""

from facteur.domain.entities.connection import Connection, generate_connection_id
from facteur.domain.entities.message import Message
from facteur.domain.entities.user import User

__all__ = ["Connection", "Message", "User", "generate_connection_id"]
