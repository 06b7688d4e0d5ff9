from .conf import gate_settings


class SessionUnlockStore:
    """
    Tracks which protected pages a session has unlocked.

    Ids live in the Django session as a list under ``SESSION_KEY``; the
    session object itself identifies the visitor.
    """

    def _key(self):
        return gate_settings().session_key

    def unlocked(self, session) -> set:
        return {int(pid) for pid in session.get(self._key(), [])}

    def is_unlocked(self, session, pid: int) -> bool:
        return int(pid) in self.unlocked(session)

    def unlock(self, session, pid: int) -> None:
        pids = self.unlocked(session)
        pids.add(int(pid))
        session[self._key()] = sorted(pids)

    def lock(self, session, pid=None) -> None:
        if pid is None:
            session.pop(self._key(), None)
            return
        pids = self.unlocked(session)
        pids.discard(int(pid))
        session[self._key()] = sorted(pids)
