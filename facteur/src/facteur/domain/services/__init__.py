"""
Domain services for Facteur.
"""

from facteur.domain.services.i_event_router import DeliveryReport, IEventRouter
from facteur.domain.services.message_clock import MessageClock

__all__ = ["DeliveryReport", "IEventRouter", "MessageClock"]
