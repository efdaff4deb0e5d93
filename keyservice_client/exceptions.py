"""
Key Service Client Exceptions
"""

from enum import Enum
from typing import Optional


class KeyServiceErrorKind(str, Enum):
    """Closed set of failure reasons reported by the key service client."""
    BAD_PASSWORD = "bad_password"
    KEY_LOCKED = "key_locked"
    KEY_NOT_FOUND = "key_not_found"
    UNABLE_TO_CREATE_KEY = "unable_to_create_key"
    NO_INTERNET_CONNECTION = "no_internet_connection"
    UNABLE_TO_DECODE = "unable_to_decode"
    UNKNOWN = "unknown"
    CONFIGURATION_INVALID = "configuration_invalid"


class KeyServiceError(Exception):
    """Base exception for key service failures."""
    kind: KeyServiceErrorKind = KeyServiceErrorKind.UNKNOWN
    default_message = "Key service request failed"

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        status_code: Optional[int] = None,
        cause: Optional[BaseException] = None,
    ):
        super().__init__(message or self.default_message)
        self.status_code = status_code
        self.cause = cause

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(kind={self.kind.value!r}, "
            f"status_code={self.status_code!r}, cause={self.cause!r})"
        )


class BadPasswordError(KeyServiceError):
    """The secret or long secret was rejected."""
    kind = KeyServiceErrorKind.BAD_PASSWORD
    default_message = "Secret rejected by key service"


class KeyLockedError(KeyServiceError):
    """The key is locked after too many failed attempts."""
    kind = KeyServiceErrorKind.KEY_LOCKED
    default_message = "Key is locked"


class KeyNotFoundError(KeyServiceError):
    """Key with specified ID does not exist."""
    kind = KeyServiceErrorKind.KEY_NOT_FOUND
    default_message = "Key not found"


class UnableToCreateKeyError(KeyServiceError):
    """The key service failed while creating or loading a key."""
    kind = KeyServiceErrorKind.UNABLE_TO_CREATE_KEY
    default_message = "Key service was unable to create the key"


class NoInternetConnectionError(KeyServiceError):
    """Key service not reachable due to missing connectivity."""
    kind = KeyServiceErrorKind.NO_INTERNET_CONNECTION
    default_message = "No internet connection"


class UnableToDecodeError(KeyServiceError):
    """Successful response whose body is not a key model."""
    kind = KeyServiceErrorKind.UNABLE_TO_DECODE
    default_message = "Unable to decode key service response"


class UnknownKeyServiceError(KeyServiceError):
    """Unclassified transport failure or unmapped status code."""
    kind = KeyServiceErrorKind.UNKNOWN
    default_message = "Unknown key service error"


class ConfigurationInvalidError(KeyServiceError):
    """Key service configuration is missing or invalid."""
    kind = KeyServiceErrorKind.CONFIGURATION_INVALID
    default_message = "Key service configuration is missing or invalid"
