"""
Key Service Request Executor

Performs a single JSON POST exchange with the key service and
turns the outcome into a KeyServiceResult. No retries.
"""

import logging
from typing import Dict, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from .error_mapper import map_status_error, map_transport_error
from .exceptions import UnableToDecodeError
from .models import KeyServiceResult

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

JSON_HEADERS = {"Content-Type": "application/json"}


class KeyServiceRequestExecutor:
    """Sends key service requests over an injected httpx client."""

    def __init__(self, http_client: httpx.AsyncClient):
        self._http_client = http_client

    async def execute(
        self,
        url: str,
        parameters: Dict[str, str],
        model: Type[M],
    ) -> KeyServiceResult[M]:
        """
        POST parameters as JSON and decode the response.

        Args:
            url: Absolute endpoint URL
            parameters: Request body (string to string)
            model: Pydantic model expected on success

        Returns:
            KeyServiceResult with the decoded model or a classified error
        """
        logger.debug("Key service request: POST %s", url)

        try:
            response = await self._http_client.post(
                url,
                json=parameters,
                headers=JSON_HEADERS,
            )
        except httpx.RequestError as e:
            error = map_transport_error(e)
            logger.error("Key service not reachable (%s): %s", url, e)
            return KeyServiceResult.failure(error)

        if response.status_code != 200:
            error = map_status_error(response.status_code)
            logger.warning(
                "Key service request failed: %s -> %d (%s)",
                url, response.status_code, error.kind.value,
            )
            return KeyServiceResult.failure(error)

        try:
            value = model.model_validate_json(response.content)
        except ValidationError as e:
            logger.error(
                "Unable to decode key service response from %s: %d validation errors",
                url, e.error_count(),
            )
            return KeyServiceResult.failure(UnableToDecodeError(cause=e))

        return KeyServiceResult.success(value)
