"""
Key Service Endpoints

Resolves absolute URLs for the key service operations.
"""

from enum import Enum
from urllib.parse import quote, urlsplit, urlunsplit

from .config import KeyServiceConfiguration

SERVICE_PATH = "keyservice"


class KeyServiceEndpoint(str, Enum):
    """Key service endpoint names."""
    CREATE_KEY = "createkey"
    KEY = "key"

    @property
    def url_path(self) -> str:
        return self.value


def join_url(base_url: str, *segments: str) -> str:
    """
    Append path segments to a URL.

    Each segment is percent-encoded. A trailing slash on the base
    path is not duplicated. The query is kept, the fragment dropped.
    """
    parts = urlsplit(base_url)
    path = parts.path.rstrip("/")
    for segment in segments:
        path += "/" + quote(segment, safe="")
    return urlunsplit((parts.scheme, parts.netloc, path, parts.query, ""))


def resolve_url(configuration: KeyServiceConfiguration, endpoint: KeyServiceEndpoint) -> str:
    """Build {realm_base_url}/keyservice/{version}/{endpoint}."""
    return join_url(
        configuration.realm_base_url,
        SERVICE_PATH,
        configuration.version.url_path,
        endpoint.url_path,
    )
