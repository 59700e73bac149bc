"""
DTOs for friend-request and contact endpoints.
"""

from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _IdBody(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    @field_validator("*", mode="before")
    @classmethod
    def ids_as_strings(cls, v: Any) -> Any:
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v


class FriendRequestBody(_IdBody):
    """Request body of POST /friends/request."""

    receiver_id: str = Field(..., alias="receiverId", min_length=1)


class RequestDecisionBody(_IdBody):
    """Request body of POST /friends/accept and /friends/decline."""

    request_id: str = Field(..., alias="requestId", min_length=1)


class ContactsPagination(BaseModel):
    """Pagination block of GET /contacts."""

    model_config = ConfigDict(populate_by_name=True)

    current_page: int = Field(..., alias="currentPage")
    total_pages: int = Field(..., alias="totalPages")
    total_contacts: int = Field(..., alias="totalContacts")
    has_next_page: bool = Field(..., alias="hasNextPage")
    has_prev_page: bool = Field(..., alias="hasPrevPage")


class ContactsPage(BaseModel):
    """One page of a user's contacts."""

    contacts: List[Dict[str, Any]]
    pagination: ContactsPagination

    @classmethod
    def build(
        cls, contacts: List[Dict[str, Any]], page: int, limit: int, total: int
    ) -> "ContactsPage":
        total_pages = (total + limit - 1) // limit if limit > 0 else 0
        return cls(
            contacts=contacts,
            pagination=ContactsPagination(
                current_page=page,
                total_pages=total_pages,
                total_contacts=total,
                has_next_page=page < total_pages,
                has_prev_page=page > 1,
            ),
        )

    def to_response(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)
