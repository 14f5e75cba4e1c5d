"""Password Hashing: bcrypt hashes that verify, salt, and never equal the plaintext."""

from gallery.core.passwords import dummy_verify, hash_password, verify_password


def test_hash_verifies_and_is_not_plaintext():
    hashed = hash_password("admin123")
    assert hashed != "admin123"
    assert verify_password("admin123", hashed)
    assert not verify_password("admin124", hashed)


def test_hashes_are_salted():
    assert hash_password("same") != hash_password("same")


def test_cost_factor_has_a_floor_of_ten():
    assert hash_password("pw", rounds=4).startswith("$2b$10$")
    assert hash_password("pw", rounds=11).startswith("$2b$11$")


def test_malformed_hash_is_a_mismatch():
    assert verify_password("pw", "not-a-bcrypt-hash") is False


def test_dummy_verify_does_not_raise():
    dummy_verify()
