from fastapi import APIRouter, Depends, HTTPException
import logging
from rsvpbot.models.chat import ChatMessage, MemberJoined, TurnResponse, MembersResponse
from rsvpbot.services.session_service import get_session_service, SessionService
from rsvpbot.services.state_store import PersistenceError

logger=logging.getLogger(__name__)
router=APIRouter(prefix="/conversations", tags=["conversations"])

@router.post("/{conversation_id}/messages", response_model=TurnResponse)
async def on_message(conversation_id: str, message: ChatMessage, service: SessionService=Depends(get_session_service)):
    try:
        res=await service.on_message(conversation_id, message.text)
    except PersistenceError as e:
        logger.error(f"{conversation_id}: {e}")
        raise HTTPException(503, "Conversation state unavailable, retry the message")
    except Exception:
        logger.exception(f"{conversation_id}: turn failed")
        raise HTTPException(500, "Conversation error")
    return TurnResponse(conversation_id=conversation_id, messages=res.messages, flow_state=res.flow_state,
                        profile=res.profile, is_complete=res.is_complete, rejected=res.rejected, summary=res.summary)

@router.post("/{conversation_id}/members", response_model=MembersResponse)
async def on_member_joined(conversation_id: str, member: MemberJoined, service: SessionService=Depends(get_session_service)):
    messages=await service.on_member_joined(conversation_id, member.member_id)
    return MembersResponse(conversation_id=conversation_id, messages=messages)

@router.delete("/{conversation_id}")
async def reset_conversation(conversation_id: str, service: SessionService=Depends(get_session_service)):
    try:
        await service.reset(conversation_id)
    except PersistenceError as e:
        logger.error(f"{conversation_id}: {e}")
        raise HTTPException(503, "Conversation state unavailable")
    return {"conversation_id": conversation_id, "reset": True}
