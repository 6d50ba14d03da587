from typing import Dict, Optional, Tuple
import os, time, sqlite3, asyncio, logging
from rsvpbot.models.flow import FlowState, Profile

logger=logging.getLogger(__name__)

SQLITE_TIMEOUT_SECONDS=5

class PersistenceError(RuntimeError):
    """Conversation state could not be loaded or saved; the turn is not durable."""

def _dump(state: FlowState, profile: Profile)->Tuple[str, str]:
    return state.model_dump_json(), profile.model_dump_json()

def _parse(state_json: str, profile_json: str)->Tuple[FlowState, Profile]:
    return FlowState.model_validate_json(state_json), Profile.model_validate_json(profile_json)

class InMemoryStateStore:
    def __init__(self):
        self.rows: Dict[str, Tuple[str, str]]={}

    async def load(self, cid: str)->Tuple[FlowState, Profile]:
        row=self.rows.get(cid)
        return _parse(*row) if row else (FlowState(), Profile())

    async def save(self, cid: str, state: FlowState, profile: Profile)->None:
        self.rows[cid]=_dump(state, profile)

    async def delete(self, cid: str)->None:
        self.rows.pop(cid, None)

class SqliteStateStore:
    """
    Flow state and profile of a conversation live in one row, so they are written together or not at all.

    sqlite3 calls block, so each one runs in a worker thread with its own connection.
    """
    def __init__(self, db_path: str, timeout: float=SQLITE_TIMEOUT_SECONDS):
        self.db_path=db_path
        self.timeout=timeout
        self._init_db()

    def _connect(self)->sqlite3.Connection:
        return sqlite3.connect(self.db_path, timeout=self.timeout)

    def _init_db(self):
        try:
            os.makedirs(os.path.dirname(self.db_path) or ".", exist_ok=True)
            with self._connect() as conn:
                conn.execute("""
                    CREATE TABLE IF NOT EXISTS conversations (
                        conversation_id TEXT PRIMARY KEY,
                        flow_state      TEXT NOT NULL,
                        profile         TEXT NOT NULL,
                        updated_at      REAL
                    )
                """)
        except (sqlite3.Error, OSError) as e:
            raise PersistenceError(f"Cannot initialise {self.db_path}: {e}") from e
        logger.info(f"SQLite state store ready at {self.db_path}")

    def _load_sync(self, cid: str)->Optional[Tuple[str, str]]:
        conn=self._connect()
        try:
            return conn.execute("SELECT flow_state, profile FROM conversations WHERE conversation_id=?", (cid,)).fetchone()
        finally:
            conn.close()

    def _save_sync(self, cid: str, state_json: str, profile_json: str):
        conn=self._connect()
        try:
            with conn:
                conn.execute(
                    """INSERT INTO conversations (conversation_id, flow_state, profile, updated_at)
                       VALUES (?, ?, ?, ?)
                       ON CONFLICT(conversation_id)
                       DO UPDATE SET flow_state=excluded.flow_state, profile=excluded.profile,
                                     updated_at=excluded.updated_at""",
                    (cid, state_json, profile_json, time.time()),
                )
        finally:
            conn.close()

    def _delete_sync(self, cid: str):
        conn=self._connect()
        try:
            with conn: conn.execute("DELETE FROM conversations WHERE conversation_id=?", (cid,))
        finally:
            conn.close()

    async def load(self, cid: str)->Tuple[FlowState, Profile]:
        try:
            row=await asyncio.to_thread(self._load_sync, cid)
        except sqlite3.Error as e:
            raise PersistenceError(f"Load failed for {cid}: {e}") from e
        return _parse(*row) if row else (FlowState(), Profile())

    async def save(self, cid: str, state: FlowState, profile: Profile)->None:
        try:
            await asyncio.to_thread(self._save_sync, cid, *_dump(state, profile))
        except sqlite3.Error as e:
            raise PersistenceError(f"Save failed for {cid}: {e}") from e

    async def delete(self, cid: str)->None:
        try:
            await asyncio.to_thread(self._delete_sync, cid)
        except sqlite3.Error as e:
            raise PersistenceError(f"Delete failed for {cid}: {e}") from e
