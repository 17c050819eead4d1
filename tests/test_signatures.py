import base64

from cryptoprimer.core import asymmetric, signing
from helpers import private_pem, public_pem


def test_sign_and_verify(private_key):
    signature = signing.sign(private_key, b"I owe you 10 EUR")
    assert signing.verify(private_key.public_key(), signature, b"I owe you 10 EUR")


def test_pss_signatures_are_randomised(private_key):
    assert signing.sign(private_key, b"m") != signing.sign(private_key, b"m")


def test_modified_message_is_rejected(private_key):
    signature = signing.sign(private_key, b"I owe you 10 EUR")
    assert not signing.verify(private_key.public_key(), signature, b"I owe you 1000 EUR")


def test_other_key_is_rejected(private_key, other_private_key):
    signature = signing.sign(private_key, b"message")
    assert not signing.verify(other_private_key.public_key(), signature, b"message")


class TestSignatureEndpoints:
    def test_sign_then_verify(self, client, private_key):
        signed = client.post(
            "/signatures/sign",
            json={"private_key": private_pem(private_key), "message": "hello"},
        )
        assert signed.status_code == 200
        signature = signed.json()["signature"]

        verified = client.post(
            "/signatures/verify",
            json={"public_key": public_pem(private_key), "message": "hello", "signature": signature},
        )
        assert verified.status_code == 200
        assert verified.json() == {"valid": True}

    def test_verify_reports_mismatch(self, client, private_key):
        signature = base64.b64encode(signing.sign(private_key, b"hello")).decode()
        response = client.post(
            "/signatures/verify",
            json={"public_key": public_pem(private_key), "message": "goodbye", "signature": signature},
        )
        assert response.status_code == 200
        assert response.json() == {"valid": False}

    def test_verify_rejects_undecodable_signature(self, client, private_key):
        response = client.post(
            "/signatures/verify",
            json={"public_key": public_pem(private_key), "message": "m", "signature": "@@"},
        )
        assert response.status_code == 400

    def test_sign_with_bad_key(self, client):
        response = client.post(
            "/signatures/sign", json={"private_key": "garbage", "message": "m"}
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Could not load PEM private key"

    def test_unknown_field_is_400(self, client, private_key):
        response = client.post(
            "/signatures/sign",
            json={"private_key": private_pem(private_key), "message": "m", "hash": "md5"},
        )
        assert response.status_code == 400
        assert "body.hash" in response.json()["detail"]

    def test_sign_with_password_protected_key(self, client, private_key):
        encrypted_pem = asymmetric.private_key_to_pem(private_key, password="s3cret")

        response = client.post(
            "/signatures/sign",
            json={"private_key": encrypted_pem, "message": "hello", "password": "s3cret"},
        )
        assert response.status_code == 200
        signature = base64.b64decode(response.json()["signature"])
        assert signing.verify(private_key.public_key(), signature, b"hello")

        wrong = client.post(
            "/signatures/sign",
            json={"private_key": encrypted_pem, "message": "hello", "password": "nope"},
        )
        assert wrong.status_code == 400
        assert wrong.json()["detail"] == "Could not load PEM private key"
