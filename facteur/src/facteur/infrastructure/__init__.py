"""
Infrastructure layer for Facteur.
"""
