"""
Main Emoji registry with centralized access to all emoji categories.

Usage:
    >>> from shared.reporter.emojis import Emoji
    >>> Emoji.SYSTEM.STARTUP
    '🚀'
    >>> Emoji.NETWORK.CONNECTED
    '🔗'
"""

from typing import Dict, Type

from shared.reporter.emojis.base_emojis import ComponentEmoji
from shared.reporter.emojis.errors_emojis import ErrorEmoji
from shared.reporter.emojis.messaging_emojis import MessageEmoji
from shared.reporter.emojis.network_emojis import NetworkEmoji
from shared.reporter.emojis.system_emojis import SystemEmoji


class Emoji:
    """
    Central emoji registry with semantic categories.

    Categories:
        SYSTEM: System operations and lifecycle
        NETWORK: Connections and data flow
        MESSAGE: Messages and relationships
        ERROR: Error levels and warnings
    """

    SYSTEM = SystemEmoji
    NETWORK = NetworkEmoji
    MESSAGE = MessageEmoji
    ERROR = ErrorEmoji

    # Common shortcuts
    SUCCESS = "✅"
    FAILURE = "❌"

    @classmethod
    def get_all_categories(cls) -> Dict[str, Type[ComponentEmoji]]:
        """Get all registered emoji categories."""
        return {
            name: attr
            for name, attr in vars(cls).items()
            if (
                not name.startswith("_")
                and isinstance(attr, type)
                and issubclass(attr, ComponentEmoji)
            )
        }
