"""
System-level operations and lifecycle emoji definitions.
"""

from shared.reporter.emojis.base_emojis import ComponentEmoji


class SystemEmoji(ComponentEmoji):
    """System-level operations and lifecycle events."""

    STARTUP = "🚀"  # Component initialization
    SHUTDOWN = "🛑"  # Component shutdown
    READY = "✅"  # Component ready
    CONFIG = "⚙️"  # Configuration operation
    HEARTBEAT = "❤️"  # Heartbeat pulse
    CLEANUP = "🧹"  # Resource cleanup
    DATABASE = "🗄️"  # Storage operation
