"""
Network and live-connection emoji definitions.

Usage:
    >>> from shared.reporter.emojis import Emoji
    >>> print(f"{Emoji.NETWORK.CONNECTED} WebSocket connected")
    🔗 WebSocket connected
"""

from shared.reporter.emojis.base_emojis import ComponentEmoji


class NetworkEmoji(ComponentEmoji):
    """Connection lifecycle and data flow."""

    # ============================================================
    # Connection States
    # ============================================================

    CONNECTED = "🔗"  # Connection established
    DISCONNECT = "🔌"  # Connection closed
    REJECTED = "⛔"  # Handshake refused
    TIMEOUT = "⏱️"  # Receive timeout

    # ============================================================
    # Data Flow
    # ============================================================

    SEND = "📤"  # Data sent
    RECEIVE = "📥"  # Data received
    BROADCAST = "📡"  # Fan-out to several connections
