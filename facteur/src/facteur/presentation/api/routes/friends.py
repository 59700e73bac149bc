"""
Friend request API routes.

- POST /friends/request - Send a friend request
- POST /friends/accept - Accept a received request
- POST /friends/decline - Decline a received request
- GET /friends/requests - Pending requests received
"""

from fastapi import APIRouter, Depends

from facteur.application.dto import FriendRequestBody, RequestDecisionBody
from facteur.di import Container
from facteur.presentation.api.dependencies import get_container, get_current_user_id

router = APIRouter(prefix="/friends", tags=["friends"])


@router.post("/request")
async def send_friend_request(
    body: FriendRequestBody,
    user_id: str = Depends(get_current_user_id),
    container: Container = Depends(get_container),
):
    await container.get_relationship_use_case().request_friend(user_id, body.receiver_id)
    return {"message": "Friend request sent!", "receiverId": body.receiver_id}


@router.post("/accept")
async def accept_friend_request(
    body: RequestDecisionBody,
    user_id: str = Depends(get_current_user_id),
    container: Container = Depends(get_container),
):
    """Accept the request sent by requestId; both users become contacts."""
    requester = await container.get_relationship_use_case().accept_friend(
        user_id, body.request_id
    )
    return {"message": "Friend request accepted", "contact": requester.to_dict()}


@router.post("/decline")
async def decline_friend_request(
    body: RequestDecisionBody,
    user_id: str = Depends(get_current_user_id),
    container: Container = Depends(get_container),
):
    await container.get_relationship_use_case().decline_friend(user_id, body.request_id)
    return {"message": "Friend request declined", "requestId": body.request_id}


@router.get("/requests")
async def list_friend_requests(
    user_id: str = Depends(get_current_user_id),
    container: Container = Depends(get_container),
):
    senders = await container.get_relationship_use_case().list_friend_requests(user_id)
    return {"friendRequests": [sender.to_dict() for sender in senders]}
