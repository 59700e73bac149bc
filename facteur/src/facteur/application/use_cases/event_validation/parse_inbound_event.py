"""
Inbound event parsing use case.

Turns a raw WebSocket frame into a typed inbound event:
- Size limit
- JSON structure
- Known event type
- Field validation
"""

import json
from dataclasses import dataclass, field
from typing import List, Optional

from pydantic import ValidationError

from facteur.domain.events import INBOUND_EVENT_TYPES, inbound_event_adapter


@dataclass
class ParseResult:
    """Result of parsing one frame."""

    valid: bool
    errors: List[str] = field(default_factory=list)
    event: Optional[object] = None
    event_type: Optional[str] = None
    size_bytes: int = 0


class ParseInboundEventUseCase:
    """Validates and parses raw inbound frames."""

    def __init__(self, max_message_size: int = 65_536):
        """
        Initialize parser.

        Args:
            max_message_size: Maximum frame size in bytes
        """
        self.max_message_size = max_message_size

    def parse(self, raw_message: str) -> ParseResult:
        """
        Parse an inbound frame.

        Args:
            raw_message: Raw text frame from the WebSocket

        Returns:
            ParseResult with the typed event or validation errors
        """
        size_bytes = len(raw_message.encode("utf-8"))
        if size_bytes > self.max_message_size:
            return ParseResult(
                valid=False,
                errors=[
                    f"Message too large: {size_bytes} bytes "
                    f"(max: {self.max_message_size})"
                ],
                size_bytes=size_bytes,
            )

        try:
            data = json.loads(raw_message)
        except json.JSONDecodeError as e:
            return ParseResult(
                valid=False, errors=[f"Invalid JSON: {str(e)}"], size_bytes=size_bytes
            )

        if not isinstance(data, dict):
            return ParseResult(
                valid=False,
                errors=["Message must be a JSON object"],
                size_bytes=size_bytes,
            )

        event_type = data.get("type")
        if not isinstance(event_type, str) or not event_type:
            return ParseResult(
                valid=False,
                errors=["Missing event type"],
                size_bytes=size_bytes,
            )

        if event_type not in INBOUND_EVENT_TYPES:
            return ParseResult(
                valid=False,
                errors=[f"Unknown event type: {event_type}"],
                event_type=event_type,
                size_bytes=size_bytes,
            )

        try:
            event = inbound_event_adapter.validate_python(data)
        except ValidationError as e:
            return ParseResult(
                valid=False,
                errors=self._format_errors(e),
                event_type=event_type,
                size_bytes=size_bytes,
            )

        return ParseResult(
            valid=True, event=event, event_type=event_type, size_bytes=size_bytes
        )

    @staticmethod
    def _format_errors(error: ValidationError) -> List[str]:
        messages = []
        for detail in error.errors():
            # First loc item is the union tag
            loc = [str(part) for part in detail["loc"][1:]]
            where = ".".join(loc) if loc else "event"
            messages.append(f"{where}: {detail['msg']}")
        return messages
