"""Authentication adapters."""

from realtime_chat.adapters.auth.bcrypt_password_hasher import BcryptPasswordHasher
from realtime_chat.adapters.auth.jwt_session_store import JwtSessionStore

__all__ = ["BcryptPasswordHasher", "JwtSessionStore"]
