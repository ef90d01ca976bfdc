from backend.app.core.config import Settings
from backend.app.security.hashing import PasswordHasher


def test_hash_is_salted_and_verifies(hasher):
    first = hasher.hash("secret1")
    second = hasher.hash("secret1")

    assert first != "secret1"
    assert first != second
    assert hasher.verify("secret1", first)
    assert not hasher.verify("secret2", first)


def test_dummy_verify_never_succeeds(hasher):
    assert hasher.dummy_verify() is False


def test_configured_scheme_and_rounds_are_used():
    settings = Settings(
        PASSWORD_HASH_SCHEME="sha256_crypt",
        PASSWORD_HASH_ROUNDS=6000,
        _env_file=None,
    )
    hashed = PasswordHasher(settings).hash("secret1")

    assert hashed.startswith("$5$rounds=6000$")


def test_default_cost_is_fixed():
    hasher = PasswordHasher(Settings(_env_file=None))
    hashed = hasher.hash("secret1")

    assert hashed.startswith("$pbkdf2-sha256$600000$")
    assert hasher.verify("secret1", hashed)
