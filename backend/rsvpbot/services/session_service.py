from typing import Dict, List, Optional
import asyncio, logging
from contextlib import asynccontextmanager
from rsvpbot.config import Settings, settings as default_settings
from rsvpbot.models.flow import OutboundMessage, StepResult
from rsvpbot.services.flow_service import ActionDispatcher, FlowController
from rsvpbot.services.questions import build_registry, action_menu
from rsvpbot.services.recognizer import NumberRecognizer
from rsvpbot.services.state_store import InMemoryStateStore, SqliteStateStore

logger=logging.getLogger(__name__)

class SessionService:
    """
    One inbound message per call: load state, dispatch, advance the active flow, save.

    State is loaded fresh for every turn and only handed back after the save
    succeeded, so a failed save (PersistenceError) leaves nothing applied and
    the caller can redeliver the same message.
    """
    def __init__(self, store, controller: FlowController, dispatcher: ActionDispatcher=None,
                 welcome_message: str="Welcome!", bot_id: Optional[str]=None):
        self.store=store
        self.controller=controller
        self.dispatcher=dispatcher or ActionDispatcher()
        self.welcome_message=welcome_message
        self.bot_id=bot_id
        # cid -> [lock, turns holding or waiting for it]; dropped when the count reaches zero
        self._locks: Dict[str, list]={}

    @asynccontextmanager
    async def _turn(self, cid: str):
        entry=self._locks.setdefault(cid, [asyncio.Lock(), 0])
        entry[1]+=1
        try:
            async with entry[0]: yield
        finally:
            entry[1]-=1
            if not entry[1]: self._locks.pop(cid, None)

    async def on_message(self, cid: str, text: str)->StepResult:
        async with self._turn(cid):
            state, profile=await self.store.load(cid)
            logger.info(f"{cid}: text={text!r} action={state.active_action.value} "
                        f"rsvp={state.last_question_asked.value} friend={state.last_question_friend.value}")
            state, conflict=self.dispatcher.dispatch(state, text)
            if conflict:
                return StepResult(flow_state=state, profile=profile, messages=[conflict])
            res=self.controller.step(state, profile, text)
            await self.store.save(cid, res.flow_state, res.profile)
            return res

    async def on_member_joined(self, cid: str, member_id: str)->List[OutboundMessage]:
        if self.bot_id and member_id==self.bot_id: return []
        logger.info(f"{cid}: member joined {member_id}")
        return [OutboundMessage(text=self.welcome_message), action_menu()]

    async def reset(self, cid: str)->None:
        async with self._turn(cid):
            await self.store.delete(cid)
        logger.info(f"{cid}: conversation state reset")

def build_session_service(cfg: Settings=default_settings, store=None, recognize=None)->SessionService:
    if store is None:
        store=SqliteStateStore(cfg.db_path) if cfg.store_backend=="sqlite" else InMemoryStateStore()
    if recognize is None:
        recognize=NumberRecognizer(cfg.culture)
    registry=build_registry(cfg.blocked_school, cfg.organizer_email, cfg.strict_friend_email)
    controller=FlowController(recognize, registry, cfg.culture, cfg.min_age, cfg.max_age)
    logger.info(f"SessionService initialized with {type(store).__name__}, culture {cfg.culture}")
    return SessionService(store, controller, welcome_message=cfg.welcome_message, bot_id=cfg.bot_id)

session_service: Optional[SessionService]=None
async def get_session_service()->SessionService:
    global session_service
    if session_service is None: session_service=build_session_service()
    return session_service
