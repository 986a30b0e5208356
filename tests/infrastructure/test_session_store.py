"""Tests for the file-backed login session."""

import base64
import json
import stat
from datetime import datetime, timedelta, timezone

from jose import jwt

from orderdesk.infrastructure.session_store import (
    LoginSession,
    SessionStore,
    load_or_create_secret,
)

KEY = "test-signing-key"


def _store(tmp_path, **kwargs) -> SessionStore:
    return SessionStore(tmp_path / "session.token", KEY, **kwargs)


def _with_payload(token: str, **claims) -> str:
    """Swap the token's claims while keeping its original signature."""
    header, payload, signature = token.split(".")
    data = json.loads(base64.urlsafe_b64decode(payload + "=" * (-len(payload) % 4)))
    data.update(claims)
    forged = base64.urlsafe_b64encode(json.dumps(data).encode()).rstrip(b"=").decode()
    return ".".join([header, forged, signature])


def test_save_and_load(tmp_path):
    store = _store(tmp_path, ttl_hours=3)
    saved = store.save(7)

    loaded = store.load()

    assert loaded == saved
    assert loaded.user_id == 7
    remaining = loaded.expires_at - datetime.now(timezone.utc)
    assert timedelta(hours=2, minutes=58) < remaining <= timedelta(hours=3)


def test_file_holds_no_role(tmp_path):
    store = _store(tmp_path)
    store.save(7)
    claims = jwt.get_unverified_claims((tmp_path / "session.token").read_text())
    assert claims["sub"] == "7"
    assert claims["type"] == "session"
    assert "role" not in claims


def test_file_is_private(tmp_path):
    _store(tmp_path).save(7)
    mode = stat.S_IMODE((tmp_path / "session.token").stat().st_mode)
    assert mode == 0o600


def test_missing_file(tmp_path):
    assert SessionStore(tmp_path / "nope.token", KEY).load() is None


def test_edited_user_id_is_rejected(tmp_path):
    path = tmp_path / "session.token"
    _store(tmp_path).save(7)
    path.write_text(_with_payload(path.read_text(), sub="1"))
    assert _store(tmp_path).load() is None


def test_token_signed_with_other_key_is_rejected(tmp_path):
    SessionStore(tmp_path / "session.token", "someone-else").save(1)
    assert _store(tmp_path).load() is None


def test_expired_session_is_ignored(tmp_path):
    path = tmp_path / "session.token"
    past = datetime.now(timezone.utc) - timedelta(minutes=1)
    path.write_text(jwt.encode({"sub": "7", "exp": past, "type": "session"}, KEY, algorithm="HS256"))
    assert _store(tmp_path).load() is None


def test_other_token_type_is_ignored(tmp_path):
    path = tmp_path / "session.token"
    future = datetime.now(timezone.utc) + timedelta(hours=1)
    path.write_text(jwt.encode({"sub": "7", "exp": future, "type": "access"}, KEY, algorithm="HS256"))
    assert _store(tmp_path).load() is None


def test_corrupt_file_is_ignored(tmp_path):
    path = tmp_path / "session.token"
    path.write_text("{not a token")
    assert _store(tmp_path).load() is None


def test_clear(tmp_path):
    store = _store(tmp_path)
    store.save(7)
    assert store.clear() is True
    assert store.clear() is False
    assert store.load() is None


def test_is_expired_boundary():
    now = datetime(2024, 1, 1, tzinfo=timezone.utc)
    session = LoginSession(user_id=1, expires_at=now)
    assert session.is_expired(now)
    assert not session.is_expired(now - timedelta(seconds=1))


class TestSecretKeyFile:

    def test_generated_once_and_reused(self, tmp_path):
        path = tmp_path / "data" / "secret.key"
        first = load_or_create_secret(path)
        assert len(first) >= 32
        assert load_or_create_secret(path) == first
        assert stat.S_IMODE(path.stat().st_mode) == 0o600

    def test_existing_key_is_kept(self, tmp_path):
        path = tmp_path / "secret.key"
        path.write_text("configured\n")
        assert load_or_create_secret(path) == "configured"
