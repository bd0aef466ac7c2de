"""bcrypt password hashing."""

import bcrypt

from realtime_chat.domain.ports.password_hasher import PasswordHasher

BCRYPT_MAX_PASSWORD_BYTES = 72


def _encode(password: str) -> bytes:
    """Encode a password, truncated to the bytes bcrypt actually uses."""
    return password.encode("utf-8")[:BCRYPT_MAX_PASSWORD_BYTES]


class BcryptPasswordHasher(PasswordHasher):
    """Salted bcrypt hashes stored as UTF-8 strings."""

    def __init__(self, rounds: int = 10) -> None:
        self.rounds = rounds

    def hash(self, password: str) -> str:
        hashed = bcrypt.hashpw(_encode(password), bcrypt.gensalt(rounds=self.rounds))
        return hashed.decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        try:
            return bcrypt.checkpw(_encode(password), password_hash.encode("utf-8"))
        except ValueError:
            # Malformed stored hash
            return False
