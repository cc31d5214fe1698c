#!/usr/bin/env python3
"""
CLI for the encrypted `<ENVIRONMENT>-config.yml` files read by
appointme.core.secrets_manager.

Usage:
    python scripts/manage_secrets.py generate-key
    python scripts/manage_secrets.py encrypt <value> [--key <key>]
    python scripts/manage_secrets.py decrypt <value> [--key <key>]
    python scripts/manage_secrets.py encrypt-file <config.yml> [--key <key>]

encrypt-file encrypts every plain value under the file's `secrets:` section in
place; values that are already Fernet tokens for the key are left alone.
"""
import argparse
import os
import sys
from pathlib import Path

import yaml
from cryptography.fernet import Fernet, InvalidToken
from dotenv import load_dotenv

# MASTER_KEY usually lives in .env
load_dotenv(".env")


def _cipher(key: str | None) -> Fernet:
    key = key or os.getenv("MASTER_KEY")
    if not key:
        sys.exit("Error: No MASTER_KEY found in environment or provided with --key.")
    return Fernet(key.encode())


def generate_key() -> None:
    key = Fernet.generate_key().decode()
    print(f"Generated MASTER_KEY: {key}")
    print("\nAdd this to your .env file as:")
    print(f"MASTER_KEY={key}")


def encrypt_value(value: str, key: str | None = None) -> str:
    return _cipher(key).encrypt(value.encode()).decode()


def decrypt_value(value: str, key: str | None = None) -> str:
    try:
        return _cipher(key).decrypt(value.encode()).decode()
    except InvalidToken:
        sys.exit("Decryption failed: the value was not encrypted with this key.")


def encrypt_file(filepath: str, key: str | None = None) -> int:
    path = Path(filepath)
    if not path.exists():
        sys.exit(f"Error: {filepath} does not exist.")

    cipher = _cipher(key)
    config = yaml.safe_load(path.read_text()) or {}
    section = config.get("secrets") or {}

    encrypted = 0
    for name, value in section.items():
        try:
            cipher.decrypt(str(value).encode())
        except InvalidToken:
            section[name] = cipher.encrypt(str(value).encode()).decode()
            encrypted += 1

    config["secrets"] = section
    path.write_text(yaml.safe_dump(config, sort_keys=False))
    return encrypted


def main() -> None:
    parser = argparse.ArgumentParser(description="Manage AppointMe encrypted secrets")
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    subparsers.add_parser("generate-key", help="Generate a new MASTER_KEY")

    encrypt_parser = subparsers.add_parser("encrypt", help="Encrypt a string")
    encrypt_parser.add_argument("value", help="Value to encrypt")
    encrypt_parser.add_argument("--key", help="MASTER_KEY to use (optional if in env)")

    decrypt_parser = subparsers.add_parser("decrypt", help="Decrypt a string")
    decrypt_parser.add_argument("value", help="Value to decrypt")
    decrypt_parser.add_argument("--key", help="MASTER_KEY to use (optional if in env)")

    file_parser = subparsers.add_parser(
        "encrypt-file", help="Encrypt the secrets section of a config file in place"
    )
    file_parser.add_argument("filepath", help="Path to <environment>-config.yml")
    file_parser.add_argument("--key", help="MASTER_KEY to use (optional if in env)")

    args = parser.parse_args()

    if args.command == "generate-key":
        generate_key()
    elif args.command == "encrypt":
        print(f"Encrypted value:\n{encrypt_value(args.value, args.key)}")
    elif args.command == "decrypt":
        print(f"Decrypted value:\n{decrypt_value(args.value, args.key)}")
    elif args.command == "encrypt-file":
        count = encrypt_file(args.filepath, args.key)
        print(f"Encrypted {count} value(s) in {args.filepath}")
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
