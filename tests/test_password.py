"""Tests for password hashing."""

from bankit.utils.password import hash_password, password_matches


def test_hash_roundtrip():
    stored = hash_password("correct horse")
    assert stored.startswith("scrypt$")
    assert password_matches("correct horse", stored)
    assert not password_matches("wrong horse", stored)


def test_hashes_are_salted():
    assert hash_password("same") != hash_password("same")


def test_malformed_hash_never_matches():
    assert not password_matches("pw", "")
    assert not password_matches("pw", "plain-text")
    assert not password_matches("pw", "bcrypt$1$2$3$00$00")
    assert not password_matches("pw", "scrypt$x$8$1$zz$00")
