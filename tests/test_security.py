from account_service.core.security import PasswordHasher


def test_hash_is_not_plaintext():
    hasher = PasswordHasher(rounds=4)
    hashed = hasher.hash("hunter2")
    assert hashed != "hunter2"
    assert hashed.startswith("$2b$04$")


def test_hash_is_salted():
    hasher = PasswordHasher(rounds=4)
    assert hasher.hash("same") != hasher.hash("same")


def test_verify():
    hasher = PasswordHasher(rounds=4)
    hashed = hasher.hash("correct horse")
    assert hasher.verify("correct horse", hashed)
    assert not hasher.verify("wrong horse", hashed)


def test_verify_rejects_empty_and_garbage():
    hasher = PasswordHasher(rounds=4)
    assert not hasher.verify("", hasher.hash("x"))
    assert not hasher.verify("x", "")
    assert not hasher.verify("x", "not-a-bcrypt-hash")
