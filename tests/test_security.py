import pytest

from cookhouse.core.security import PasswordHasher


@pytest.fixture
def hasher():
    return PasswordHasher(rounds=4)


@pytest.mark.parametrize("password", ["secret", "pässwörd", "a" * 60, "with spaces and $ymbols!"])
def test_verify_accepts_own_hash(hasher, password):
    assert hasher.verify_password(password, hasher.hash_password(password))


def test_verify_rejects_other_password(hasher):
    hashed = hasher.hash_password("secret")
    assert not hasher.verify_password("Secret", hashed)
    assert not hasher.verify_password("secret ", hashed)


def test_hash_is_salted(hasher):
    assert hasher.hash_password("secret") != hasher.hash_password("secret")


def test_hash_embeds_work_factor(hasher):
    assert hasher.hash_password("secret").startswith("$2b$04$")


def test_hash_never_contains_plaintext(hasher):
    assert "secret" not in hasher.hash_password("secret")


def test_malformed_stored_hash_is_a_mismatch(hasher):
    assert hasher.verify_password("secret", "not-a-bcrypt-hash") is False


def test_dummy_verify_runs(hasher):
    hasher.dummy_verify()
