"""Use-case for revoking session tokens."""

from __future__ import annotations

from files_manager.application.services.access_gate import AccessGate
from files_manager.domain.users.repositories import SessionStore


class LogoutUserUseCase:
    def __init__(self, *, gate: AccessGate, sessions: SessionStore) -> None:
        self._gate = gate
        self._sessions = sessions

    def execute(self, token: str | None) -> int:
        user_id = self._gate.authenticate(token)
        self._sessions.destroy(token or "")
        return user_id
