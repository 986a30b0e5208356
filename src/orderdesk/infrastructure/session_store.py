"""File-backed login session for the command line.

The file holds a signed JWT naming who logged in and until when.  The
user's role is never stored here; callers re-read the user from the
database.  A token whose signature does not verify is treated the same
as an expired one.
"""

from __future__ import annotations

import logging
import os
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from pathlib import Path

from jose import ExpiredSignatureError, JWTError, jwt

logger = logging.getLogger(__name__)

TOKEN_TYPE = "session"


@dataclass(frozen=True)
class LoginSession:
    user_id: int
    expires_at: datetime

    def is_expired(self, now: datetime | None = None) -> bool:
        return (now or datetime.now(timezone.utc)) >= self.expires_at


def _write_private(path: Path, text: str) -> None:
    """Write ``text`` to ``path`` readable and writable by the owner only."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    with os.fdopen(fd, "w") as fh:
        fh.write(text)
    os.chmod(path, 0o600)


def load_or_create_secret(path: Path) -> str:
    """Return the signing key stored at ``path``, generating it on first use."""
    if path.exists():
        secret = path.read_text().strip()
        if secret:
            return secret
    secret = secrets.token_urlsafe(32)
    _write_private(path, secret)
    logger.info(f"Generated session signing key at {path}")
    return secret


class SessionStore:

    def __init__(
        self,
        path: Path,
        secret_key: str,
        ttl_hours: int = 3,
        algorithm: str = "HS256",
    ) -> None:
        self._path = path
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._ttl = timedelta(hours=ttl_hours)

    def save(self, user_id: int) -> LoginSession:
        now = datetime.now(timezone.utc).replace(microsecond=0)
        session = LoginSession(user_id=user_id, expires_at=now + self._ttl)
        token = jwt.encode(
            {
                "sub": str(user_id),
                "exp": session.expires_at,
                "iat": now,
                "type": TOKEN_TYPE,
            },
            self._secret_key,
            algorithm=self._algorithm,
        )
        _write_private(self._path, token)
        logger.debug(f"Session for user #{user_id} saved to {self._path}")
        return session

    def load(self) -> LoginSession | None:
        """Return the current session, or None if missing, invalid or expired."""
        if not self._path.exists():
            return None
        token = self._path.read_text().strip()
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
        except ExpiredSignatureError:
            logger.info("Session has expired")
            return None
        except JWTError as exc:
            logger.warning(f"Ignoring invalid session file {self._path}: {exc}")
            return None
        if payload.get("type") != TOKEN_TYPE:
            logger.warning(f"Ignoring session file {self._path}: wrong token type")
            return None
        try:
            session = LoginSession(
                user_id=int(payload["sub"]),
                expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            )
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning(f"Ignoring unreadable session file {self._path}: {exc}")
            return None
        if session.is_expired():
            logger.info(f"Session for user #{session.user_id} has expired")
            return None
        return session

    def clear(self) -> bool:
        """Delete the session file.  Returns False if there was none."""
        if not self._path.exists():
            return False
        self._path.unlink()
        return True
