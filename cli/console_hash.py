from __future__ import annotations

import getpass
import sys
from typing import Optional

from identity_hash import IdentityHashError, encode_text, hash_v2, hash_v3, parse, verify
from identity_hash.settings import get_settings
from identity_hash.utils.logging_setup import setup_logger
from identity_hash.utils.timer import BlockTimer

logger = setup_logger("console_hash")


def _prompt_password(confirm: bool = False) -> Optional[str]:
    # Not stripped: surrounding whitespace is part of the password.
    password = getpass.getpass("Password: ")
    if not password:
        print("Password is required.")
        return None
    if confirm:
        confirm_password = getpass.getpass("Confirm password: ")
        if password != confirm_password:
            print("Passwords do not match.")
            return None
    return password


def _prompt_encoding() -> str:
    default = get_settings().default_encoding
    encoding = input(f"Encoding [base64/hex] ({default}): ").strip().lower()
    return encoding or default


def hash_flow(version: str) -> None:
    password = _prompt_password(confirm=True)
    if not password:
        return

    encoding = _prompt_encoding()
    hasher = hash_v2 if version == "v2" else hash_v3
    try:
        with BlockTimer(f"hash_{version}", logger=logger) as timer:
            blob = hasher(password)
        print(encode_text(blob, encoding))
    except IdentityHashError as exc:
        print(f"Could not hash password: {exc}")
        return
    print(f"({version.upper()}, {timer.total_time * 1000:.1f} ms)")


def verify_flow() -> None:
    stored = input("Stored hash: ").strip()
    if not stored:
        print("Stored hash is required.")
        return

    encoding = _prompt_encoding()
    try:
        record = parse(stored, encoding)
    except IdentityHashError as exc:
        logger.warning("Rejected stored hash: %s", exc)
        print(f"Invalid stored hash: {exc}")
        return

    details = record.describe()
    print(
        f"Format {details['format'].upper()}, {details['prf']}, "
        f"{details['iterations']} iterations."
    )

    password = _prompt_password(confirm=False)
    if not password:
        return

    if verify(password, stored, encoding):
        print("Password verified.")
    else:
        print("Password does not match.")


def main() -> None:
    try:
        while True:
            print("\nChoose an option:")
            print("1. Hash password (V3)")
            print("2. Hash password (V2, legacy)")
            print("3. Verify password")
            print("4. Exit")
            choice = input("Enter choice: ").strip()

            if choice == "1":
                hash_flow("v3")
            elif choice == "2":
                hash_flow("v2")
            elif choice == "3":
                verify_flow()
            elif choice == "4":
                print("Goodbye.")
                return
            else:
                print("Invalid choice.")
    except (KeyboardInterrupt, EOFError):
        print("\nGoodbye.")
    except Exception:
        logger.exception("Console hash failed")
        sys.exit(1)


if __name__ == "__main__":
    main()
