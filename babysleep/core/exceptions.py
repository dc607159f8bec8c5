# babysleep/core/exceptions.py


class SleepTrackerError(Exception):
    """Base class for errors raised by the session store and service layer"""


class ChildNotFoundError(SleepTrackerError):
    def __init__(self, child_id=None):
        self.child_id = child_id
        message = f"Child {child_id} not found" if child_id else "No child profile found"
        super().__init__(message)


class SessionNotFoundError(SleepTrackerError):
    def __init__(self, session_id):
        self.session_id = session_id
        super().__init__(f"Session {session_id} not found")


class ActiveSessionExistsError(SleepTrackerError):
    def __init__(self, child_id, session_id):
        self.child_id = child_id
        self.session_id = session_id
        super().__init__(f"There is already an active sleep session ({session_id}) for child {child_id}")


class SessionAlreadyEndedError(SleepTrackerError):
    def __init__(self, session_id):
        self.session_id = session_id
        super().__init__(f"Session {session_id} has already ended")
