import secrets
import time

BASE36_ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"
ORDER_NUMBER_PREFIX = "PM"
SUFFIX_LENGTH = 5


def to_base36(number: int) -> str:
    if number < 0:
        raise ValueError("number must be non-negative")
    if number == 0:
        return "0"
    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(BASE36_ALPHABET[remainder])
    return "".join(reversed(digits))


def generate_order_number(now_ms=None) -> str:
    """
    Build a human-readable order number such as ``PM-LXK3Q2A1-7G2KD``.

    The timestamp part is the epoch in milliseconds, the suffix is random.
    Uniqueness is enforced by the database, callers regenerate on conflict.
    """
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    suffix = "".join(secrets.choice(BASE36_ALPHABET) for _ in range(SUFFIX_LENGTH))
    return f"{ORDER_NUMBER_PREFIX}-{to_base36(now_ms)}-{suffix}"
