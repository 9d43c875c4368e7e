import secrets
import time


def new_record_id() -> str:
    """Return ``<epoch millis><8 random hex chars>``.

    The time prefix keeps ids roughly creation-ordered; 32 random bits make
    collisions between concurrent creators in the same millisecond negligible.
    """
    return f"{time.time_ns() // 1_000_000}{secrets.token_hex(4)}"
