"""
Key Service Client Package

Client for the key service of an identity server realm.
Creates and retrieves encryption keys in exchange for a secret.
"""

from .client import KeyServiceClient
from .config import KeyServiceConfiguration, KeyServiceVersion, Settings, get_settings
from .endpoints import KeyServiceEndpoint, resolve_url
from .exceptions import (
    BadPasswordError,
    ConfigurationInvalidError,
    KeyLockedError,
    KeyNotFoundError,
    KeyServiceError,
    KeyServiceErrorKind,
    NoInternetConnectionError,
    UnableToCreateKeyError,
    UnableToDecodeError,
    UnknownKeyServiceError,
)
from .models import KeyModel, KeyServiceResult

__all__ = [
    "KeyServiceClient",
    "KeyServiceConfiguration",
    "KeyServiceVersion",
    "Settings",
    "get_settings",
    "KeyServiceEndpoint",
    "resolve_url",
    "KeyModel",
    "KeyServiceResult",
    "KeyServiceError",
    "KeyServiceErrorKind",
    "BadPasswordError",
    "ConfigurationInvalidError",
    "KeyLockedError",
    "KeyNotFoundError",
    "NoInternetConnectionError",
    "UnableToCreateKeyError",
    "UnableToDecodeError",
    "UnknownKeyServiceError",
]
