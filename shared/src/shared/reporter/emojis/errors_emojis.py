"""
Error and warning emoji definitions.
"""

from shared.reporter.emojis.base_emojis import ComponentEmoji


class ErrorEmoji(ComponentEmoji):
    """Error severities."""

    WARNING = "⚠️"  # Recoverable problem
    ERROR = "❌"  # Operation failed
    CRITICAL = "🔴"  # Service-level failure
    AUTH = "🔒"  # Authentication failure
    LIMIT = "🚦"  # Limit or rate limit hit
