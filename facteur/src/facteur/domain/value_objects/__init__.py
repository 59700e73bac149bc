"""
Domain value objects for Facteur.
"""

from facteur.domain.value_objects.media_reference import MediaReference
from facteur.domain.value_objects.relationship_state import RelationshipState

__all__ = ["MediaReference", "RelationshipState"]
