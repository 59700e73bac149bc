"""
Inbound event validation.
"""

from facteur.application.use_cases.event_validation.parse_inbound_event import (
    ParseInboundEventUseCase,
    ParseResult,
)

__all__ = ["ParseInboundEventUseCase", "ParseResult"]
