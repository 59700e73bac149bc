"""
Facteur - real-time direct-messaging core.

Binds authenticated users to their live WebSocket connections, persists
messages and contacts, and pushes events to whoever is online.
"""

__version__ = "0.1.0"
