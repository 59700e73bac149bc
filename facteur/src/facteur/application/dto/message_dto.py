"""
DTOs for message endpoints.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class SendMessageRequest(BaseModel):
    """
    Request body of POST /messages.

    Attributes:
        receiver_id: Recipient user id
        content: Text body (may be empty when media is attached)
        media_url: Location of already uploaded media
        media_type: MIME type or category of the media
        thumbnail_url: Optional preview location
    """

    model_config = ConfigDict(populate_by_name=True)

    receiver_id: str = Field(..., alias="receiverId", min_length=1)
    content: Optional[str] = Field(None, description="Message text")
    media_url: Optional[str] = Field(None, alias="mediaUrl")
    media_type: Optional[str] = Field(None, alias="mediaType")
    thumbnail_url: Optional[str] = Field(None, alias="thumbnailUrl")

    @field_validator("receiver_id", mode="before")
    @classmethod
    def receiver_as_string(cls, v: Any) -> Any:
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v


class PaginationInfo(BaseModel):
    """Pagination block shared by list endpoints."""

    model_config = ConfigDict(populate_by_name=True)

    current_page: int = Field(..., alias="currentPage")
    total_pages: int = Field(..., alias="totalPages")
    total_items: int = Field(..., alias="totalItems")
    has_next_page: bool = Field(..., alias="hasNextPage")
    has_prev_page: bool = Field(..., alias="hasPrevPage")

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "PaginationInfo":
        total_pages = (total + limit - 1) // limit if limit > 0 else 0
        return cls(
            current_page=page,
            total_pages=total_pages,
            total_items=total,
            has_next_page=page < total_pages,
            has_prev_page=page > 1,
        )


class ConversationPage(BaseModel):
    """One page of a conversation, oldest message first."""

    messages: List[Dict[str, Any]]
    pagination: PaginationInfo

    def to_response(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)
