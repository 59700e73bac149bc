"""
Domain layer for Facteur.
"""
