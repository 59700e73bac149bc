"""
Direct-messaging and relationship emoji definitions.
"""

from shared.reporter.emojis.base_emojis import ComponentEmoji


class MessageEmoji(ComponentEmoji):
    """Messages, friend requests and contacts."""

    # ============================================================
    # Messages
    # ============================================================

    NEW = "✉️"  # Message persisted
    DELIVERED = "📬"  # Pushed to a live connection
    STORED = "📪"  # Recipient offline, kept in storage
    MEDIA = "🖼️"  # Message carries media

    # ============================================================
    # Relationships
    # ============================================================

    FRIEND_REQUEST = "🤝"  # Request created
    ACCEPTED = "🫂"  # Request accepted
    DECLINED = "🙅"  # Request declined
