"""
Auth provider.

Password sign-in, one-time code registration, opaque session tokens and
auth-state notifications. ``DatabaseAuthProvider`` keeps identities in
``admin_users`` and tokens in ``auth_sessions``; ``NullAuthProvider``
refuses every sign-in when the backend is not configured.
"""
import secrets
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Callable, Iterable, List, Optional

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from werkzeug.security import check_password_hash, generate_password_hash

from suryaghar.core.exceptions import (
    BackendNotConfiguredException,
    BadRequestException,
    ConflictException,
    ForbiddenException,
    UnauthorizedException,
)
from suryaghar.crud import crud_for
from suryaghar.models.admin import AdminUser, AuthSession
from suryaghar.models.base import utcnow


class AuthEvent(str, Enum):
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"
    USER_UPDATED = "USER_UPDATED"


@dataclass
class Identity:
    id: str
    email: str
    username: Optional[str] = None
    avatar_url: Optional[str] = None

    @classmethod
    def from_user(cls, user: AdminUser) -> "Identity":
        return cls(
            id=user.id,
            email=user.email,
            username=user.username or user.email.split("@")[0],
            avatar_url=user.avatar_url,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "email": self.email,
            "username": self.username,
            "avatar_url": self.avatar_url,
        }


@dataclass
class Session:
    access_token: str
    user: Identity
    expires_at: datetime

    def to_dict(self) -> dict:
        return {
            "access_token": self.access_token,
            "token_type": "bearer",
            "expires_at": self.expires_at.isoformat(),
            "user": self.user.to_dict(),
        }


AuthListener = Callable[[AuthEvent, Optional[Session]], None]


def generate_otp() -> str:
    return f"{secrets.randbelow(10_000):04d}"


def _aware(value: datetime) -> datetime:
    # SQLite hands datetimes back naive
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


class AuthProvider(ABC):
    """Auth operations consumed by the session context and the auth routes."""

    def __init__(self):
        self._listeners: List[AuthListener] = []

    def on_auth_state_change(self, listener: AuthListener) -> Callable[[], None]:
        """Register ``listener``; the returned callable unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self, event: AuthEvent, session: Optional[Session]) -> None:
        for listener in list(self._listeners):
            listener(event, session)

    @abstractmethod
    async def sign_in_with_password(self, email: str, password: str) -> Session:
        ...

    @abstractmethod
    async def send_otp(self, email: str) -> None:
        """Create the identity if needed and issue a one-time code."""

    @abstractmethod
    async def verify_otp(self, email: str, code: str) -> Session:
        ...

    @abstractmethod
    async def sign_out(self, token: str) -> None:
        ...

    @abstractmethod
    async def get_session(self, token: Optional[str]) -> Optional[Session]:
        ...

    @abstractmethod
    async def update_user(
        self,
        token: str,
        *,
        password: Optional[str] = None,
        username: Optional[str] = None,
        avatar_url: Optional[str] = None,
    ) -> Identity:
        ...


class NullAuthProvider(AuthProvider):
    async def sign_in_with_password(self, email: str, password: str) -> Session:
        raise BackendNotConfiguredException("Authentication is not configured")

    async def send_otp(self, email: str) -> None:
        raise BackendNotConfiguredException("Authentication is not configured")

    async def verify_otp(self, email: str, code: str) -> Session:
        raise BackendNotConfiguredException("Authentication is not configured")

    async def sign_out(self, token: str) -> None:
        return None

    async def get_session(self, token: Optional[str]) -> Optional[Session]:
        return None

    async def update_user(self, token, *, password=None, username=None, avatar_url=None):
        raise BackendNotConfiguredException("Authentication is not configured")


class DatabaseAuthProvider(AuthProvider):

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        *,
        session_ttl_hours: int = 24,
        otp_ttl_minutes: int = 10,
        otp_max_attempts: int = 5,
        allowed_emails: Iterable[str] = (),
    ):
        super().__init__()
        self.session_factory = session_factory
        self.session_ttl = timedelta(hours=session_ttl_hours)
        self.otp_ttl = timedelta(minutes=otp_ttl_minutes)
        self.otp_max_attempts = otp_max_attempts
        self.allowed_emails = {e.lower() for e in allowed_emails}
        self.users = crud_for(AdminUser)
        self.sessions = crud_for(AuthSession)

    def _check_allowed(self, email: str) -> None:
        if self.allowed_emails and email.lower() not in self.allowed_emails:
            raise ForbiddenException("This email is not authorised for admin access")

    async def _get_user_by_email(self, db: AsyncSession, email: str) -> Optional[AdminUser]:
        users = await self.users.get_multi(db, AdminUser.email == email.lower(), limit=1)
        return users[0] if users else None

    async def _open_session(self, db: AsyncSession, user: AdminUser) -> Session:
        now = utcnow()
        row = await self.sessions.create(db, obj_in={
            "token": secrets.token_urlsafe(32),
            "user_id": user.id,
            "created_at": now,
            "expires_at": now + self.session_ttl,
        })
        await self.users.update(db, db_obj=user, obj_in={"last_login_at": now})
        session = Session(row.token, Identity.from_user(user), _aware(row.expires_at))
        return session

    async def sign_in_with_password(self, email: str, password: str) -> Session:
        self._check_allowed(email)
        async with self.session_factory() as db:
            user = await self._get_user_by_email(db, email)
            if not user or not user.password_hash or not check_password_hash(user.password_hash, password):
                logger.warning(f"Failed sign-in for {email}")
                raise UnauthorizedException("Invalid email or password")
            session = await self._open_session(db, user)
            await db.commit()

        logger.info(f"Admin signed in: {email}")
        self._emit(AuthEvent.SIGNED_IN, session)
        return session

    async def send_otp(self, email: str) -> None:
        self._check_allowed(email)
        code = generate_otp()
        async with self.session_factory() as db:
            user = await self._get_user_by_email(db, email)
            if user is not None and user.password_hash:
                logger.warning(f"Code requested for registered admin {email}")
                raise ConflictException("An admin with this email is already registered. Please sign in")
            values = {
                "otp_hash": generate_password_hash(code),
                "otp_expires_at": utcnow() + self.otp_ttl,
                "otp_attempts": 0,
            }
            if user is None:
                await self.users.create(db, obj_in={"email": email.lower(), **values})
            else:
                await self.users.update(db, db_obj=user, obj_in=values)
            await db.commit()

        # No mail transport: the code goes to the operator log
        logger.info(f"One-time code for {email}: {code}")

    async def verify_otp(self, email: str, code: str) -> Session:
        async with self.session_factory() as db:
            user = await self._get_user_by_email(db, email)
            if not user or not user.otp_hash or not user.otp_expires_at:
                raise BadRequestException("Invalid or expired code")
            if _aware(user.otp_expires_at) < utcnow():
                raise BadRequestException("Invalid or expired code")
            if not check_password_hash(user.otp_hash, code):
                attempts = user.otp_attempts + 1
                values = {"otp_attempts": attempts}
                if attempts >= self.otp_max_attempts:
                    values.update(otp_hash=None, otp_expires_at=None)
                    logger.warning(f"One-time code for {email} discarded after {attempts} wrong attempts")
                await self.users.update(db, db_obj=user, obj_in=values)
                await db.commit()
                raise BadRequestException("Invalid or expired code")

            await self.users.update(
                db, db_obj=user, obj_in={"otp_hash": None, "otp_expires_at": None, "otp_attempts": 0}
            )
            session = await self._open_session(db, user)
            await db.commit()

        self._emit(AuthEvent.SIGNED_IN, session)
        return session

    async def sign_out(self, token: str) -> None:
        ended = await self.get_session(token)
        async with self.session_factory() as db:
            await self.sessions.delete(db, id=token)
            await db.commit()
        if ended is not None:
            logger.info(f"Admin signed out: {ended.user.email}")
            self._emit(AuthEvent.SIGNED_OUT, ended)

    async def get_session(self, token: Optional[str]) -> Optional[Session]:
        if not token:
            return None
        async with self.session_factory() as db:
            row = await self.sessions.get(db, token)
            if row is None:
                return None
            if _aware(row.expires_at) < utcnow():
                await self.sessions.delete(db, id=token)
                await db.commit()
                return None
            user = await self.users.get(db, row.user_id)
            if user is None:
                return None
            return Session(row.token, Identity.from_user(user), _aware(row.expires_at))

    async def update_user(
        self,
        token: str,
        *,
        password: Optional[str] = None,
        username: Optional[str] = None,
        avatar_url: Optional[str] = None,
    ) -> Identity:
        current = await self.get_session(token)
        if current is None:
            raise UnauthorizedException()

        values = {}
        if password is not None:
            values["password_hash"] = generate_password_hash(password)
        if username is not None:
            values["username"] = username
        if avatar_url is not None:
            values["avatar_url"] = avatar_url

        async with self.session_factory() as db:
            user = await self.users.get(db, current.user.id)
            if user is None:
                raise UnauthorizedException()
            if values:
                user = await self.users.update(db, db_obj=user, obj_in=values)
            await db.commit()
            identity = Identity.from_user(user)

        self._emit(AuthEvent.USER_UPDATED, Session(token, identity, current.expires_at))
        return identity
