"""
Error Mapping

Classifies transport failures and HTTP status codes into
the key service error taxonomy. Both entry points are pure.
"""

import errno
import socket
from typing import Dict, Optional, Type

from .exceptions import (
    BadPasswordError,
    KeyLockedError,
    KeyNotFoundError,
    KeyServiceError,
    NoInternetConnectionError,
    UnableToCreateKeyError,
    UnknownKeyServiceError,
)

STATUS_ERRORS: Dict[int, Type[KeyServiceError]] = {
    204: KeyLockedError,
    401: BadPasswordError,
    404: KeyNotFoundError,
    500: UnableToCreateKeyError,
}

_NO_CONNECTIVITY_ERRNOS = frozenset({
    errno.ENETUNREACH,
    errno.ENETDOWN,
    errno.EHOSTUNREACH,
})


def _indicates_no_connectivity(error: BaseException) -> bool:
    """Walk the exception chain looking for a connectivity failure."""
    seen = set()
    current: Optional[BaseException] = error
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        if isinstance(current, socket.gaierror):
            return True
        if isinstance(current, OSError) and current.errno in _NO_CONNECTIVITY_ERRNOS:
            return True
        current = current.__cause__ or current.__context__
    return False


def map_transport_error(error: Optional[BaseException]) -> KeyServiceError:
    """
    Map a failure that produced no HTTP response.

    Args:
        error: The transport exception, if any

    Returns:
        NoInternetConnectionError when connectivity is missing,
        otherwise UnknownKeyServiceError wrapping the original error
    """
    if error is None:
        return UnknownKeyServiceError()

    if _indicates_no_connectivity(error):
        return NoInternetConnectionError(cause=error)

    return UnknownKeyServiceError(
        f"Key service transport failure: {error!r}",
        cause=error,
    )


def map_status_error(status_code: int) -> KeyServiceError:
    """Map a non-200 HTTP status code to a key service error."""
    error_cls = STATUS_ERRORS.get(status_code)
    if error_cls is None:
        return UnknownKeyServiceError(
            f"Unexpected key service status: {status_code}",
            status_code=status_code,
        )
    return error_cls(status_code=status_code)
