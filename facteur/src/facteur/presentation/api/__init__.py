"""
HTTP and WebSocket API for Facteur.
"""
