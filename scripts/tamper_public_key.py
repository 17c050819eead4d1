#!/usr/bin/env python3
"""
Replace an author's stored public key with a freshly generated one.

Every signed request the real author sends afterwards is rejected with 401,
which shows that notes are bound to the registered key.
"""

import argparse
import sys

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from sqlmodel import Session, create_engine, select

from cryptoprimer.models.schema import Author
from cryptoprimer.shared import Config, load_config

config: Config = load_config()
DATABASE_URL = config.database.path


def parse_args():
    parser = argparse.ArgumentParser(
        description="Simulate RSA public key tampering for an author"
    )
    parser.add_argument("username", type=str, help="Username to modify")
    parser.add_argument(
        "--db",
        type=str,
        default=DATABASE_URL,
        help=f"Database URL (default: {DATABASE_URL})",
    )
    return parser.parse_args()


def simulate_attack(username: str, db_url: str):
    engine = create_engine(db_url)

    with Session(engine) as session:
        statement = select(Author).where(Author.username == username)
        author = session.exec(statement).one_or_none()

        if not author:
            print(f"[!] User '{username}' not found in the database.")
            sys.exit(1)

        # Generate new malicious keypair
        private_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)

        author.public_key = private_key.public_key().public_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )
        session.add(author)
        session.commit()

        print(f"[+] Tampered public key for user '{username}' with a fresh RSA key.")


if __name__ == "__main__":
    args = parse_args()
    simulate_attack(args.username, args.db)
