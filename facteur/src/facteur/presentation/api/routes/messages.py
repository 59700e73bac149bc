"""
Message API routes.

- POST /messages - Send a message (text or already uploaded media)
- GET /messages/{other_user_id} - Conversation with another user
"""

from fastapi import APIRouter, Depends, Query, status

from facteur.application.dto import SendMessageRequest
from facteur.application.use_cases import media_from_fields
from facteur.di import Container
from facteur.presentation.api.dependencies import get_container, get_current_user_id

router = APIRouter(prefix="/messages", tags=["messages"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def send_message(
    request: SendMessageRequest,
    user_id: str = Depends(get_current_user_id),
    container: Container = Depends(get_container),
):
    """
    Persist a message and push it to the receiver's live connections.

    Returns:
        {"success": true, "message": {...}}
    """
    media = media_from_fields(request.media_url, request.media_type, request.thumbnail_url)
    message = await container.get_send_message_use_case().execute(
        sender_id=user_id,
        receiver_id=request.receiver_id,
        content=request.content,
        media=media,
    )
    container.increment_stat("total_messages_sent")
    return {"success": True, "message": message.to_dict()}


@router.get("/{other_user_id}")
async def get_conversation(
    other_user_id: str,
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1),
    user_id: str = Depends(get_current_user_id),
    container: Container = Depends(get_container),
):
    """Messages exchanged with another user, oldest first."""
    conversation = await container.get_conversation_use_case().execute(
        user_id, other_user_id, page=page, limit=limit
    )
    return conversation.to_response()
