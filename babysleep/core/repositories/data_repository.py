# babysleep/core/repositories/data_repository.py
import logging
import os
import threading
import uuid
from datetime import datetime, timezone
from typing import List, Optional

import pandas as pd

from babysleep.core.exceptions import (
    ActiveSessionExistsError, ChildNotFoundError, SessionAlreadyEndedError, SessionNotFoundError,
)
from babysleep.core.models.data_models import ChildProfile, SleepSession
from babysleep.utils.time_utils import as_utc

logger = logging.getLogger(__name__)

CHILD_COLUMNS = ['id', 'name', 'birth_date', 'created_at']
SESSION_COLUMNS = [
    'id', 'child_id', 'start_time', 'end_time', 'sleep_type',
    'location', 'wake_reason', 'notes', 'created_at'
]
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class SessionRepository:
    """CSV-backed store for children and their sleep sessions"""

    def __init__(self, data_dir='data'):
        self.data_dir = data_dir
        self.children_file = os.path.join(data_dir, 'children.csv')
        self.sessions_file = os.path.join(data_dir, 'sleep_sessions.csv')
        # Serializes the check-then-insert in start_sleep within this process
        self._lock = threading.Lock()
        os.makedirs(data_dir, exist_ok=True)

    # ------------------------------------------------------------------
    # CSV helpers

    def _read_table(self, path, columns):
        if not os.path.exists(path):
            return pd.DataFrame(columns=columns)

        # Only empty cells are missing; text like 'NA' or 'None' is kept as written
        df = pd.read_csv(path, dtype=str, keep_default_na=False, na_values=[''])
        for col in columns:
            if col not in df.columns:
                df[col] = None
        # Missing cells come back as NaN; the models expect None
        return df[columns].astype(object).where(df[columns].notna(), None)

    def _write_table(self, df, path):
        df.to_csv(path, index=False)

    @staticmethod
    def _session_to_row(session):
        row = session.model_dump(mode='json')
        return {col: row.get(col) for col in SESSION_COLUMNS}

    # ------------------------------------------------------------------
    # Children

    def get_children(self) -> List[ChildProfile]:
        df = self._read_table(self.children_file, CHILD_COLUMNS)
        return [ChildProfile.model_validate(row) for row in df.to_dict(orient='records')]

    def add_child(self, name, birth_date, now: Optional[datetime] = None) -> ChildProfile:
        """Create a child profile"""
        child = ChildProfile(
            id=str(uuid.uuid4()),
            name=name,
            birth_date=birth_date,
            created_at=as_utc(now or datetime.now().astimezone())
        )

        with self._lock:
            rows = [c.model_dump(mode='json') for c in self.get_children()] + [child.model_dump(mode='json')]
            self._write_table(pd.DataFrame(rows, columns=CHILD_COLUMNS), self.children_file)

        logger.info(f"Added child {child.id} ({child.name})")
        return child

    def get_child(self, child_id) -> ChildProfile:
        for child in self.get_children():
            if child.id == str(child_id):
                return child
        raise ChildNotFoundError(child_id)

    def get_latest_child(self) -> ChildProfile:
        """Most recently created child, the default profile for a single-child household"""
        children = self.get_children()
        if not children:
            raise ChildNotFoundError()
        return max(children, key=lambda c: c.created_at or EPOCH)

    # ------------------------------------------------------------------
    # Sessions

    def _load_sessions(self) -> List[SleepSession]:
        df = self._read_table(self.sessions_file, SESSION_COLUMNS)
        return [SleepSession.model_validate(row) for row in df.to_dict(orient='records')]

    def _save_sessions(self, sessions):
        rows = [self._session_to_row(s) for s in sessions]
        self._write_table(pd.DataFrame(rows, columns=SESSION_COLUMNS), self.sessions_file)

    def get_sessions(self, child_id, since: Optional[datetime] = None,
                     until: Optional[datetime] = None) -> List[SleepSession]:
        """
        Sessions for a child, newest first.

        Args:
            child_id: Child to load sessions for
            since: Keep sessions starting at or after this instant
            until: Keep sessions starting before this instant
        """
        sessions = [s for s in self._load_sessions() if s.child_id == str(child_id)]

        if since is not None:
            sessions = [s for s in sessions if s.start_time >= as_utc(since)]
        if until is not None:
            sessions = [s for s in sessions if s.start_time < as_utc(until)]

        return sorted(sessions, key=lambda s: s.start_time, reverse=True)

    def get_active_session(self, child_id) -> Optional[SleepSession]:
        return next((s for s in self.get_sessions(child_id) if s.is_open), None)

    def start_sleep(self, child_id, now: datetime, sleep_type=None, location=None) -> SleepSession:
        """Open a new session; a child can only have one open session at a time"""
        child = self.get_child(child_id)
        now = as_utc(now)

        with self._lock:
            sessions = self._load_sessions()
            active = next((s for s in sessions if s.child_id == child.id and s.is_open), None)
            if active is not None:
                raise ActiveSessionExistsError(child.id, active.id)

            session = SleepSession(
                id=str(uuid.uuid4()),
                child_id=child.id,
                start_time=now,
                sleep_type=sleep_type,
                location=location,
                created_at=now
            )
            self._save_sessions(sessions + [session])

        logger.info(f"Started sleep session {session.id} for child {child.id}")
        return session

    def end_sleep(self, session_id, now: datetime, wake_reason=None, notes=None) -> SleepSession:
        """Close an open session at `now`"""
        now = as_utc(now)

        with self._lock:
            sessions = self._load_sessions()
            index = next((i for i, s in enumerate(sessions) if s.id == str(session_id)), None)
            if index is None:
                raise SessionNotFoundError(session_id)

            session = sessions[index]
            if not session.is_open:
                raise SessionAlreadyEndedError(session_id)

            updates = {'end_time': now}
            if wake_reason is not None:
                updates['wake_reason'] = wake_reason
            if notes is not None:
                updates['notes'] = notes
            ended = session.model_copy(update=updates)
            sessions[index] = ended
            self._save_sessions(sessions)

        logger.info(f"Ended sleep session {ended.id} after {(ended.end_time - ended.start_time)}")
        return ended
