#!/usr/bin/env python3
"""
Walk through every interface of a running cryptoprimer server.

Start the server with `cryptoprimer`, then run this script. Each step
prints what was sent and what came back.
"""

import argparse
import base64
import json

import requests
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa

BASE_URL = "http://127.0.0.1:8000"
TEST_USERNAME = "walkthrough_user"


def show(title, response):
    print(f"\n=== {title} ===")
    print(f"Status: {response.status_code}")
    if response.content:
        print(json.dumps(response.json(), indent=2)[:600])
    return response


def sign_payload(payload_dict, private_key, username):
    """Sign a payload for authentication."""
    payload_json = json.dumps(payload_dict, separators=(",", ":"))
    signature_bytes = private_key.sign(
        payload_json.encode(),
        padding.PSS(mgf=padding.MGF1(hashes.SHA256()), salt_length=padding.PSS.MAX_LENGTH),
        hashes.SHA256(),
    )
    return {
        "payload": payload_json,
        "signature": base64.b64encode(signature_bytes).decode(),
        "username": username,
    }


def symmetric_walkthrough(base_url):
    key = show("Generate Fernet key", requests.post(f"{base_url}/symmetric/keys")).json()["key"]

    token = show(
        "Encrypt",
        requests.post(f"{base_url}/symmetric/encrypt", json={"key": key, "plaintext": "attack at dawn"}),
    ).json()["token"]

    show(
        "Decrypt",
        requests.post(f"{base_url}/symmetric/decrypt", json={"key": key, "token": token}),
    )
    show(
        "Decrypt with the wrong key (expect 400)",
        requests.post(
            f"{base_url}/symmetric/decrypt",
            json={"key": requests.post(f"{base_url}/symmetric/keys").json()["key"], "token": token},
        ),
    )


def rsa_walkthrough(base_url):
    pair = show("Generate RSA key pair", requests.post(f"{base_url}/rsa/keys", json={})).json()

    ciphertext = show(
        "RSA-OAEP encrypt",
        requests.post(
            f"{base_url}/rsa/encrypt",
            json={"public_key": pair["public_key"], "plaintext": "for your eyes only"},
        ),
    ).json()["ciphertext"]

    show(
        "RSA-OAEP decrypt",
        requests.post(
            f"{base_url}/rsa/decrypt",
            json={"private_key": pair["private_key"], "ciphertext": ciphertext},
        ),
    )

    signature = show(
        "RSA-PSS sign",
        requests.post(
            f"{base_url}/signatures/sign",
            json={"private_key": pair["private_key"], "message": "I agree"},
        ),
    ).json()["signature"]

    for message in ("I agree", "I disagree"):
        show(
            f"RSA-PSS verify {message!r}",
            requests.post(
                f"{base_url}/signatures/verify",
                json={"public_key": pair["public_key"], "message": message, "signature": signature},
            ),
        )


def notes_walkthrough(base_url, username):
    private_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    public_key_pem = private_key.public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode()

    register_payload = {"username": username, "public_key": public_key_pem}
    show(
        "Register author (201, or 403 if already taken)",
        requests.post(f"{base_url}/auth/register", json=sign_payload(register_payload, private_key, username)),
    )

    note = show(
        "Create note",
        requests.post(
            f"{base_url}/notes",
            json=sign_payload({"username": username, "title": "Hello", "body": "first"}, private_key, username),
        ),
    ).json()
    if "id" not in note:
        return

    note_id = note["id"]
    show("Read note", requests.get(f"{base_url}/notes/{note_id}"))
    show(
        "Update note",
        requests.put(
            f"{base_url}/notes/{note_id}",
            json=sign_payload(
                {"username": username, "note_id": note_id, "title": "Hello", "body": "second"}, private_key, username
            ),
        ),
    )
    show(
        "Delete note",
        requests.delete(
            f"{base_url}/notes/{note_id}",
            json=sign_payload({"username": username, "note_id": note_id}, private_key, username),
        ),
    )
    show("Read deleted note (expect 404)", requests.get(f"{base_url}/notes/{note_id}"))
    show("Wrong method (expect 405)", requests.patch(f"{base_url}/notes/{note_id}"))


def parse_args():
    parser = argparse.ArgumentParser(description="Exercise every cryptoprimer endpoint")
    parser.add_argument("--url", default=BASE_URL, help=f"Server URL (default: {BASE_URL})")
    parser.add_argument("--username", default=TEST_USERNAME, help="Author name to register")
    return parser.parse_args()


if __name__ == "__main__":
    args = parse_args()
    symmetric_walkthrough(args.url)
    rsa_walkthrough(args.url)
    notes_walkthrough(args.url, args.username)
