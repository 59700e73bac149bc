"""
Contacts API routes.
"""

from fastapi import APIRouter, Depends, Query

from facteur.di import Container
from facteur.presentation.api.dependencies import get_container, get_current_user_id

router = APIRouter(prefix="/contacts", tags=["contacts"])


@router.get("")
async def list_contacts(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    user_id: str = Depends(get_current_user_id),
    container: Container = Depends(get_container),
):
    """Confirmed contacts of the caller, paginated, with live presence."""
    contacts = await container.get_relationship_use_case().list_contacts(
        user_id, page=page, limit=limit
    )

    response = contacts.to_response()
    for contact in response["contacts"]:
        contact["isOnline"] = container.presence.is_online(contact["id"])
    return response


@router.get("/{contact_id}")
async def get_contact(
    contact_id: str,
    user_id: str = Depends(get_current_user_id),
    container: Container = Depends(get_container),
):
    """
    One user as seen by the caller.

    Unknown users answer 404 through the UNKNOWN_USER mapping.
    """
    contact, state = await container.get_relationship_use_case().get_contact(
        user_id, contact_id
    )

    return {
        **contact.to_dict(),
        "isOnline": container.presence.is_online(contact.id),
        "relationship": state.value,
    }
