from typing import Optional, Dict, Any, List, Tuple, Callable
import logging
from rsvpbot.models.flow import (Action, FlowState, Profile, OutboundMessage, QuestionDefinition, StepResult,
                                 ValidatorKind)
from rsvpbot.services.questions import build_registry, find_question, action_menu, CONFLICT_MESSAGE
from rsvpbot.utils.validation import ValidationUtils

logger=logging.getLogger(__name__)

class ActionDispatcher:
    """Routes a raw message: start an action, reject it while another is active, or pass it through."""
    def __init__(self):
        self.labels: Dict[str, Action]={a.value: a for a in (Action.RSVP, Action.CANCEL, Action.FRIEND)}

    def dispatch(self, state: FlowState, text: str)->Tuple[FlowState, Optional[OutboundMessage]]:
        selected=self.labels.get(text)
        if selected is None: return state, None
        if state.active_action!=Action.NONE:
            logger.info(f"Rejected {selected.value!r}: {state.active_action.value!r} still active")
            return state, OutboundMessage(text=CONFLICT_MESSAGE)
        logger.info(f"Action selected: {selected.value}")
        return state.model_copy(update={"active_action": selected}), None

class FlowController:
    def __init__(self, recognize: Callable[[str, str], List[str]], registry: Dict[Action, List[QuestionDefinition]]=None,
                 culture: str='en-us', min_age: int=18, max_age: int=120):
        self.registry=registry or build_registry()
        self.recognize=recognize
        self.culture=culture
        self.min_age=min_age
        self.max_age=max_age

    def _validate(self, q: QuestionDefinition, text: str)->Dict[str, Any]:
        if q.validator==ValidatorKind.AGE:
            return ValidationUtils.validate_age(text, self.recognize, self.culture, self.min_age, self.max_age)
        if q.validator==ValidatorKind.EMAIL:
            return ValidationUtils.validate_email(text)
        return ValidationUtils.validate_text(text)

    def step(self, state: FlowState, profile: Profile, text: str)->StepResult:
        action=state.active_action
        if action==Action.NONE: return StepResult(flow_state=state, profile=profile)
        seq=self.registry[action]; pos=state.position(action)

        q=find_question(seq, pos)
        if q is None:
            # NONE, or a position this sequence does not know: ask the first question, no validation
            if pos!=type(pos).NONE: logger.error(f"Unknown position {pos} for {action.value}, restarting sequence")
            first=seq[0]
            return StepResult(flow_state=state.with_position(action, first.state), profile=profile,
                              messages=[OutboundMessage(text=first.prompt)])

        v=self._validate(q, text)
        if not v['is_valid']:
            return StepResult(flow_state=state, profile=profile, messages=[OutboundMessage(text=v['message'])])

        profile=profile.model_copy(update={q.field: v['value']})
        logger.info(f"{action.value}: {q.field} OK {v['value']!r}")

        if q.rejection and v['value']==q.rejection.value:
            return self._finish(state, action, profile, [OutboundMessage(text=q.rejection.message)], rejected=True)

        fields=profile.model_dump()
        messages=[m.model_copy(update={"text": m.text.format(**fields)}) for m in q.acknowledgements]
        nxt=find_question(seq, q.next_state)
        if nxt is None: return self._finish(state, action, profile, messages)
        messages.append(OutboundMessage(text=nxt.prompt))
        return StepResult(flow_state=state.with_position(action, nxt.state), profile=profile, messages=messages)

    def _finish(self, state: FlowState, action: Action, profile: Profile, messages: List[OutboundMessage],
                rejected: bool=False)->StepResult:
        summary={"action": action.value, **profile.collected()}
        logger.info(f"{action.value} complete (rejected={rejected}): {summary}")
        return StepResult(flow_state=state.reset(action), profile=Profile(), messages=messages+[action_menu()],
                          is_complete=True, rejected=rejected, summary=summary)
