from artist_roster_api.app.core.config import Settings
from artist_roster_api.app.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)

SETTINGS = Settings(secret_key="unit-secret", database_url="unused.db")


def test_token_carries_subject_and_two_hour_default_lifetime():
    token = create_access_token({"sub": "admin", "admin_id": 1}, SETTINGS)
    payload = decode_access_token(token, SETTINGS)
    assert payload["sub"] == "admin"
    assert payload["admin_id"] == 1
    assert payload["exp"] - payload["iat"] == 120 * 60


def test_expired_token_is_rejected():
    token = create_access_token({"sub": "admin"}, SETTINGS, expires_delta=-5)
    assert decode_access_token(token, SETTINGS) is None


def test_token_signed_with_other_secret_is_rejected():
    other = Settings(secret_key="someone-else", database_url="unused.db")
    token = create_access_token({"sub": "admin"}, other)
    assert decode_access_token(token, SETTINGS) is None


def test_tampered_payload_is_rejected():
    header, _, signature = create_access_token({"sub": "admin"}, SETTINGS).split(".")
    forged_payload = create_access_token({"sub": "root"}, SETTINGS).split(".")[1]
    assert decode_access_token(f"{header}.{forged_payload}.{signature}", SETTINGS) is None


def test_garbage_tokens_are_rejected():
    for token in ("", "abc", "a.b.c", "....", "!!.??.%%"):
        assert decode_access_token(token, SETTINGS) is None


def test_password_hash_round_trip():
    hashed = hash_password("hunter2")
    assert hashed != "hunter2"
    assert verify_password("hunter2", hashed)
    assert not verify_password("hunter3", hashed)


def test_same_password_gets_different_salts():
    assert hash_password("hunter2") != hash_password("hunter2")


def test_malformed_stored_hash_never_verifies():
    assert not verify_password("x", "not-a-hash")
    assert not verify_password("x", "zz$zz")
