import base64
import time

import pytest
from cryptography.fernet import Fernet

from cryptoprimer.core import symmetric
from cryptoprimer.core.errors import DecryptionError, InvalidKeyError


def test_encrypt_then_decrypt():
    key = symmetric.generate_key()
    token = symmetric.encrypt("attack at dawn", key)
    assert token != "attack at dawn"
    assert symmetric.decrypt(token, key) == "attack at dawn"


def test_tokens_are_interoperable_with_fernet():
    key = Fernet.generate_key()
    token = Fernet(key).encrypt(b"hello")
    assert symmetric.decrypt(token.decode(), key.decode()) == "hello"


def test_wrong_key_is_rejected():
    token = symmetric.encrypt("secret", symmetric.generate_key())
    with pytest.raises(DecryptionError):
        symmetric.decrypt(token, symmetric.generate_key())


def test_tampered_token_is_rejected():
    key = symmetric.generate_key()
    raw = bytearray(base64.urlsafe_b64decode(symmetric.encrypt("secret", key)))
    raw[-1] ^= 0x01
    with pytest.raises(DecryptionError):
        symmetric.decrypt(base64.urlsafe_b64encode(bytes(raw)).decode(), key)


def test_expired_token_is_rejected():
    key = symmetric.generate_key()
    token = Fernet(key).encrypt_at_time(b"old news", int(time.time()) - 120)
    with pytest.raises(DecryptionError):
        symmetric.decrypt(token, key, ttl=60)
    assert symmetric.decrypt(token, key) == "old news"


def test_malformed_key():
    with pytest.raises(InvalidKeyError):
        symmetric.encrypt("x", "not-a-key")


def test_derive_key_is_deterministic_for_salt():
    key, salt = symmetric.derive_key("correct horse", iterations=100000)
    again, _ = symmetric.derive_key("correct horse", salt, iterations=100000)
    other, _ = symmetric.derive_key("battery staple", salt, iterations=100000)

    assert len(salt) == symmetric.SALT_SIZE
    assert key == again
    assert key != other
    assert symmetric.decrypt(symmetric.encrypt("ok", key), again) == "ok"


def test_rotate_moves_token_to_new_key():
    old_key = symmetric.generate_key()
    new_key = symmetric.generate_key()
    token = symmetric.encrypt("rotate me", old_key)

    rotated = symmetric.rotate(token, new_key, [old_key])

    assert symmetric.decrypt(rotated, new_key) == "rotate me"
    with pytest.raises(DecryptionError):
        symmetric.decrypt(rotated, old_key)


def test_rotate_without_matching_key():
    token = symmetric.encrypt("lost", symmetric.generate_key())
    with pytest.raises(DecryptionError):
        symmetric.rotate(token, symmetric.generate_key(), [symmetric.generate_key()])


class TestSymmetricEndpoints:
    def test_generate_key(self, client):
        response = client.post("/symmetric/keys")
        assert response.status_code == 201
        Fernet(response.json()["key"])

    def test_encrypt_decrypt_round_trip(self, client):
        key = client.post("/symmetric/keys").json()["key"]

        encrypted = client.post("/symmetric/encrypt", json={"key": key, "plaintext": "hi"})
        assert encrypted.status_code == 200

        decrypted = client.post(
            "/symmetric/decrypt", json={"key": key, "token": encrypted.json()["token"]}
        )
        assert decrypted.status_code == 200
        assert decrypted.json() == {"plaintext": "hi"}

    def test_bad_token_is_400(self, client):
        key = symmetric.generate_key()
        response = client.post("/symmetric/decrypt", json={"key": key, "token": "garbage"})
        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid or expired token"

    def test_bad_key_is_400(self, client):
        response = client.post("/symmetric/encrypt", json={"key": "short", "plaintext": "hi"})
        assert response.status_code == 400
        assert "Fernet key" in response.json()["detail"]

    def test_missing_field_is_400(self, client):
        response = client.post("/symmetric/encrypt", json={"plaintext": "hi"})
        assert response.status_code == 400
        assert "body.key" in response.json()["detail"]

    def test_non_positive_ttl_is_400(self, client):
        response = client.post(
            "/symmetric/decrypt",
            json={"key": symmetric.generate_key(), "token": "x", "ttl": 0},
        )
        assert response.status_code == 400
        assert "body.ttl" in response.json()["detail"]

    def test_derive_key_with_salt(self, client):
        salt = base64.b64encode(b"0123456789abcdef").decode()
        body = {"password": "pw", "salt": salt, "iterations": 100000}

        first = client.post("/symmetric/derive_key", json=body)
        second = client.post("/symmetric/derive_key", json=body)

        assert first.status_code == 200
        assert first.json() == second.json()
        assert first.json()["salt"] == salt

    def test_derive_key_bad_salt(self, client):
        response = client.post(
            "/symmetric/derive_key", json={"password": "pw", "salt": "%%%"}
        )
        assert response.status_code == 400
        assert "salt" in response.json()["detail"]

    def test_rotate(self, client):
        old_key = symmetric.generate_key()
        new_key = symmetric.generate_key()
        token = symmetric.encrypt("payload", old_key)

        response = client.post(
            "/symmetric/rotate",
            json={"token": token, "new_key": new_key, "old_keys": [old_key]},
        )

        assert response.status_code == 200
        assert symmetric.decrypt(response.json()["token"], new_key) == "payload"

    @pytest.mark.parametrize("iterations", [99999, 10_000_001, 2**64])
    def test_derive_key_iterations_out_of_range_is_400(self, client, iterations):
        response = client.post(
            "/symmetric/derive_key", json={"password": "pw", "iterations": iterations}
        )
        assert response.status_code == 400
        assert "body.iterations" in response.json()["detail"]

    def test_expired_token_is_400(self, client):
        key = symmetric.generate_key()
        token = Fernet(key).encrypt_at_time(b"stale", int(time.time()) - 120).decode()

        response = client.post(
            "/symmetric/decrypt", json={"key": key, "token": token, "ttl": 60}
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid or expired token"

    def test_rotate_without_matching_key_is_400(self, client):
        token = symmetric.encrypt("lost", symmetric.generate_key())
        response = client.post(
            "/symmetric/rotate",
            json={
                "token": token,
                "new_key": symmetric.generate_key(),
                "old_keys": [symmetric.generate_key()],
            },
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Token does not decrypt under any supplied key"

    def test_rotate_with_malformed_key_is_400(self, client):
        old_key = symmetric.generate_key()
        token = symmetric.encrypt("payload", old_key)
        response = client.post(
            "/symmetric/rotate",
            json={"token": token, "new_key": "not-a-key", "old_keys": [old_key]},
        )
        assert response.status_code == 400
        assert "Fernet key" in response.json()["detail"]
