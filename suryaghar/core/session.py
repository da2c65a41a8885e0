"""
Per-request session context.

Holds the identity of whoever is calling. Created for each request by the
``get_session_context`` dependency, started with the caller's token and
closed when the request finishes.
"""
from enum import Enum
from typing import Callable, List, Optional

from loguru import logger

from suryaghar.services.auth import AuthEvent, AuthProvider, Identity, Session


class SessionState(str, Enum):
    ANONYMOUS = "anonymous"
    AUTHENTICATED = "authenticated"


SessionListener = Callable[["SessionContext"], None]


class SessionContext:
    """
    Explicit holder of the current identity.

    - ``start(token)`` resolves the token and subscribes to the provider's
      auth-state notifications exactly once.
    - ``close()`` unsubscribes.
    - ``user`` is readable synchronously at any time.
    """

    def __init__(self, provider: AuthProvider):
        self.provider = provider
        self._session: Optional[Session] = None
        self._unsubscribe: Optional[Callable[[], None]] = None
        self._listeners: List[SessionListener] = []

    # ---------- lifecycle ----------

    async def start(self, token: Optional[str] = None) -> "SessionContext":
        if self._unsubscribe is None:
            self._unsubscribe = self.provider.on_auth_state_change(self._on_auth_event)
        if token:
            self._set(await self.provider.get_session(token))
        return self

    def close(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self._listeners.clear()

    @property
    def started(self) -> bool:
        return self._unsubscribe is not None

    # ---------- accessors ----------

    @property
    def state(self) -> SessionState:
        return SessionState.AUTHENTICATED if self._session else SessionState.ANONYMOUS

    @property
    def is_authenticated(self) -> bool:
        return self._session is not None

    @property
    def user(self) -> Optional[Identity]:
        return self._session.user if self._session else None

    @property
    def token(self) -> Optional[str]:
        return self._session.access_token if self._session else None

    @property
    def session(self) -> Optional[Session]:
        return self._session

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener) if listener in self._listeners else None

    # ---------- transitions ----------

    async def login(self, email: str, password: str) -> Session:
        session = await self.provider.sign_in_with_password(email, password)
        self._set(session)
        return session

    async def logout(self) -> None:
        token = self.token
        if token:
            await self.provider.sign_out(token)
        self._set(None)

    def _set(self, session: Optional[Session]) -> None:
        changed = (self.token != (session.access_token if session else None)
                   or (session is not None and self.user != session.user))
        self._session = session
        if changed:
            for listener in list(self._listeners):
                listener(self)

    def _on_auth_event(self, event: AuthEvent, session: Optional[Session]) -> None:
        if session is None:
            return
        if event == AuthEvent.SIGNED_OUT and session.access_token == self.token:
            logger.debug(f"Session ended for {session.user.email}")
            self._set(None)
        elif event == AuthEvent.USER_UPDATED and session.access_token == self.token:
            self._set(session)
