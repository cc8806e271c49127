"""Tests for the on-disk session store."""

import stat
from pathlib import Path

from edclub.client.session import SessionStore, SessionTokens


def _tokens() -> SessionTokens:
    return SessionTokens(
        access_token="a", refresh_token="r", expires_at=1_900_000_000, user_id="u-1", email="s@school.edu"
    )


def test_missing_file_means_no_session(tmp_path: Path):
    assert SessionStore(tmp_path / "nope.json").load() is None


def test_save_then_load(tmp_path: Path):
    store = SessionStore(tmp_path / "nested" / "session.json")
    store.save(_tokens())
    assert store.load() == _tokens()


def test_file_is_owner_only(tmp_path: Path):
    store = SessionStore(tmp_path / "session.json")
    store.save(_tokens())
    assert stat.S_IMODE(store.path.stat().st_mode) == 0o600


def test_written_as_camel_case(tmp_path: Path):
    store = SessionStore(tmp_path / "session.json")
    store.save(_tokens())
    text = store.path.read_text()
    assert '"accessToken"' in text
    assert '"expiresAt"' in text


def test_malformed_json_is_no_session(tmp_path: Path):
    path = tmp_path / "session.json"
    path.write_text("{oops")
    assert SessionStore(path).load() is None


def test_undecodable_bytes_are_no_session(tmp_path: Path):
    path = tmp_path / "session.json"
    path.write_bytes(b"\xff\xfe{garbage")
    assert SessionStore(path).load() is None


def test_wrong_types_are_no_session(tmp_path: Path):
    path = tmp_path / "session.json"
    path.write_text('{"accessToken": 1, "refreshToken": null, "expiresAt": "soon"}')
    assert SessionStore(path).load() is None


def test_clear_removes_file(tmp_path: Path):
    store = SessionStore(tmp_path / "session.json")
    store.save(_tokens())
    store.clear()
    assert not store.path.exists()
    store.clear()  # no error when already gone
