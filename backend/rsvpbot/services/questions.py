from typing import Dict, List, Optional
from rsvpbot.models.flow import (Action, RsvpQuestion, FriendQuestion, CancelQuestion, QuestionDefinition,
                                 ValidatorKind, Rejection, OutboundMessage, Attachment, Choice, Menu, Question)

DOCS_URL="https://docs.microsoft.com/en-us/azure/bot-service/bot-service-debug-emulator?view=azure-bot-service-4.0"
REJECTION_URL="https://grad.berkeley.edu/admissions/apply/"
ARCHITECTURE_IMAGE=Attachment(
    name="architecture-resize.png", content_type="image/png",
    content_url="https://docs.microsoft.com/en-us/bot-framework/media/how-it-works/architecture-resize.png",
)
CONFLICT_MESSAGE="You need to finish the current action before doing another one!"

def action_menu()->OutboundMessage:
    choices=[Choice(label=f"{i}. {a.value}", value=a.value) for i, a in enumerate((Action.RSVP, Action.CANCEL, Action.FRIEND), 1)]
    return OutboundMessage(menu=Menu(prompt="What do you want to do ?", choices=choices))

def _text(t: str, **kw)->OutboundMessage: return OutboundMessage(text=t, **kw)

def build_registry(blocked_school: str="Stanford", organizer_email: str="v-dalhay@microsoft.com",
                   strict_friend_email: bool=False)->Dict[Action, List[QuestionDefinition]]:
    """Ordered question sequences per action; each sequence runs none -> first ... last -> none."""
    rsvp=[
        QuestionDefinition(
            state=RsvpQuestion.NAME, validator=ValidatorKind.TEXT, field="name",
            prompt="In order to RSVP you need to give out some information. What is your name?",
            acknowledgements=(_text("Welcome among us {name}."),), next_state=RsvpQuestion.AGE),
        QuestionDefinition(
            state=RsvpQuestion.AGE, validator=ValidatorKind.AGE, field="age", prompt="How old are you?",
            acknowledgements=(_text("I have your age as {age}."),), next_state=RsvpQuestion.SCHOOL),
        QuestionDefinition(
            state=RsvpQuestion.SCHOOL, validator=ValidatorKind.TEXT, field="school",
            prompt="What university are you from?",
            acknowledgements=(
                _text("Amazing, so many people coming from {school}."),
                _text(f"You can already take a look at the documentation here: {DOCS_URL}", attachments=[ARCHITECTURE_IMAGE]),
                _text("Thanks for completing the RSVP {name}."),
            ),
            next_state=RsvpQuestion.NONE,
            rejection=Rejection(value=blocked_school, message=(
                f"I'm sorry, students from {blocked_school} are not accepted. Nobody's perfect but it is still "
                f"time to apply to Berkeley next year following this link: {REJECTION_URL}"))),
    ]
    friend=[
        QuestionDefinition(
            state=FriendQuestion.NAME, validator=ValidatorKind.TEXT, field="friend_name",
            prompt="What is the name of your friend?", next_state=FriendQuestion.EMAIL),
        # plain text unless strict_friend_email is on; the original bot never checked the address format
        QuestionDefinition(
            state=FriendQuestion.EMAIL, field="email", prompt="Great! What is your email address?",
            validator=ValidatorKind.EMAIL if strict_friend_email else ValidatorKind.TEXT,
            acknowledgements=(
                _text("Great, we'll have a lot of fun!"),
                _text(f"An email to {organizer_email} has been sent. You'll receive a response by email within 24 hours."),
            ),
            next_state=FriendQuestion.NONE),
    ]
    cancel=[
        QuestionDefinition(
            state=CancelQuestion.NAME, validator=ValidatorKind.TEXT, field="cancel_name",
            prompt="What is your name to cancel your participation?",
            acknowledgements=(_text("Ok, let's cancel!"),), next_state=CancelQuestion.NONE),
    ]
    return {Action.RSVP: rsvp, Action.FRIEND: friend, Action.CANCEL: cancel}

def find_question(sequence: List[QuestionDefinition], state: Question)->Optional[QuestionDefinition]:
    return next((q for q in sequence if q.state==state), None)
