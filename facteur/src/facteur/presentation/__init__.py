"""
Presentation layer for Facteur.
"""
