from pydantic import BaseModel, Field
from typing import Optional, Dict, Any, List
from rsvpbot.models.flow import FlowState, Profile, OutboundMessage

class ChatMessage(BaseModel):
    text: str

class MemberJoined(BaseModel):
    member_id: str

class TurnResponse(BaseModel):
    conversation_id: str
    messages: List[OutboundMessage]
    flow_state: FlowState
    profile: Profile
    is_complete: bool=False
    rejected: bool=False
    summary: Optional[Dict[str, Any]]=None

class MembersResponse(BaseModel):
    conversation_id: str
    messages: List[OutboundMessage]=Field(default_factory=list)
