"""
Application layer for Facteur.
"""
