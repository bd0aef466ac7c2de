"""Domain error taxonomy."""


class ChatError(Exception):
    """Base class for all errors raised by the chat domain."""


class AuthenticationError(ChatError):
    """Raised when a caller cannot be identified from its session token."""


class UserNotFoundError(ChatError):
    """Raised when a referenced user does not exist."""

    def __init__(self, user_id: str) -> None:
        super().__init__(f"User not found: {user_id}")
        self.user_id = user_id


class ValidationError(ChatError):
    """Raised when caller-supplied input is rejected."""


class MessageValidationError(ValidationError):
    """Raised when a message carries neither text nor an image."""


class SignupValidationError(ValidationError):
    """Raised when signup or profile input is incomplete or malformed."""


class EmailAlreadyExistsError(ValidationError):
    """Raised when signing up with an email that is already registered."""


class InvalidCredentialsError(ChatError):
    """Raised when an email/password pair does not match a stored user."""


class MessagePersistenceError(ChatError):
    """Raised when the durable write of a message fails."""


class ImageUploadError(ChatError):
    """Raised when the object storage collaborator rejects an image."""


class PresenceRegistryCorruptedError(ChatError):
    """Raised when the presence registry detects a broken invariant.

    There is no recovery path: the registry is derived state and the process
    is expected to be restarted.
    """


class InvalidImageError(ValidationError):
    """Raised when an image is not in a format the image store accepts."""
