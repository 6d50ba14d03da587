from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Dict, Any, List, Tuple, Union
from enum import Enum

class Action(Enum):
    NONE="NONE"; RSVP="RSVP"; CANCEL="Cancel RSVP"; FRIEND="Invite a friend"

class RsvpQuestion(Enum):
    NONE="NONE"; NAME="NAME"; AGE="AGE"; SCHOOL="SCHOOL"

class FriendQuestion(Enum):
    NONE="NONE"; NAME="NAME"; EMAIL="EMAIL"

class CancelQuestion(Enum):
    NONE="NONE"; NAME="NAME"

Question=Union[RsvpQuestion, FriendQuestion, CancelQuestion]

# action -> (FlowState attribute, question enum)
POSITIONS={
    Action.RSVP: ("last_question_asked", RsvpQuestion),
    Action.FRIEND: ("last_question_friend", FriendQuestion),
    Action.CANCEL: ("last_question_cancel", CancelQuestion),
}

class FlowState(BaseModel):
    active_action: Action=Action.NONE
    last_question_asked: RsvpQuestion=RsvpQuestion.NONE
    last_question_friend: FriendQuestion=FriendQuestion.NONE
    last_question_cancel: CancelQuestion=CancelQuestion.NONE

    def position(self, action: Action)->Question:
        return getattr(self, POSITIONS[action][0])

    def with_position(self, action: Action, question: Question)->"FlowState":
        return self.model_copy(update={POSITIONS[action][0]: question})

    def reset(self, action: Action)->"FlowState":
        """Terminal transition: the action's counter goes back to NONE and no action stays active."""
        attr, enum=POSITIONS[action]
        return self.model_copy(update={attr: enum.NONE, "active_action": Action.NONE})

class Profile(BaseModel):
    model_config=ConfigDict(extra="allow")
    name: Optional[str]=None
    age: Optional[int]=None
    school: Optional[str]=None
    friend_name: Optional[str]=None
    email: Optional[str]=None
    cancel_name: Optional[str]=None

    def collected(self)->Dict[str, Any]:
        return self.model_dump(exclude_none=True)

class Attachment(BaseModel):
    name: str
    content_type: str
    content_url: str

class Choice(BaseModel):
    label: str
    value: str

class Menu(BaseModel):
    prompt: str
    choices: List[Choice]

class OutboundMessage(BaseModel):
    text: str=""
    attachments: List[Attachment]=Field(default_factory=list)
    menu: Optional[Menu]=None

class ValidatorKind(Enum):
    TEXT="text"; AGE="age"; EMAIL="email"

class Rejection(BaseModel):
    model_config=ConfigDict(frozen=True)
    value: str
    message: str

class QuestionDefinition(BaseModel):
    model_config=ConfigDict(frozen=True)
    state: Question
    prompt: str
    validator: ValidatorKind
    field: str
    acknowledgements: Tuple[OutboundMessage, ...]=()
    next_state: Question
    rejection: Optional[Rejection]=None

class StepResult(BaseModel):
    flow_state: FlowState
    profile: Profile
    messages: List[OutboundMessage]=Field(default_factory=list)
    is_complete: bool=False
    rejected: bool=False
    summary: Optional[Dict[str, Any]]=None
