"""Unit tests for password hashing."""

from notekeep.security.password import dummy_verify, hash_password, verify_password


class TestPasswordHashing:
    """Salted hashing and verification."""

    def test_hash_is_not_the_password(self):
        hashed = hash_password("pw123")
        assert hashed != "pw123"
        assert verify_password("pw123", hashed)

    def test_wrong_password_fails(self):
        hashed = hash_password("pw123")
        assert not verify_password("pw124", hashed)

    def test_same_password_gets_different_salts(self):
        assert hash_password("pw123") != hash_password("pw123")

    def test_long_passwords_are_not_truncated(self):
        base = "x" * 80
        hashed = hash_password(base + "a")
        assert verify_password(base + "a", hashed)
        assert not verify_password(base + "b", hashed)

    def test_dummy_verify_is_always_false(self):
        assert dummy_verify("anything") is False
