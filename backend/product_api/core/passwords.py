"""Password hashing with bcrypt (salted, one-way)."""

import bcrypt

# bcrypt reads at most 72 bytes; newer releases refuse longer input
_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:_MAX_BYTES]


def hash_password(password: str, rounds: int = 10) -> str:
    return bcrypt.hashpw(_encode(password), bcrypt.gensalt(rounds=rounds)).decode("ascii")


def check_password(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(_encode(password), hashed.encode("ascii"))
    except ValueError:
        # malformed stored hash
        return False
