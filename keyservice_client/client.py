"""
Key Service Client

Client for creating and retrieving encryption keys from the key
service of an identity server realm. Keys are exchanged for a
secret (or the long secret returned when the key was created).

Every operation comes in two forms:
- callback: schedules the request and invokes a completion handler
  with a KeyServiceResult exactly once, on the event loop
- future: an asyncio.Future that resolves with the KeyModel or
  rejects with a KeyServiceError, built on the callback form
"""

import asyncio
import logging
from functools import partial
from typing import Callable, Dict, Optional, Set

import httpx

from .config import KeyServiceConfiguration, Settings, get_settings, verify_configuration
from .endpoints import KeyServiceEndpoint, resolve_url
from .error_mapper import map_transport_error
from .exceptions import ConfigurationInvalidError, UnknownKeyServiceError
from .executor import KeyServiceRequestExecutor
from .models import KeyModel, KeyServiceResult

logger = logging.getLogger(__name__)

Completion = Callable[[KeyServiceResult[KeyModel]], None]


class KeyServiceClient:
    """
    Key service wrapper for an identity server realm.

    The httpx client is owned by this instance unless one is injected,
    in which case the caller is responsible for closing it.
    """

    def __init__(
        self,
        configuration: Optional[KeyServiceConfiguration],
        http_client: Optional[httpx.AsyncClient] = None,
        *,
        timeout: float = 30.0,
        verify_ssl: bool = True,
    ):
        if not verify_configuration(configuration):
            raise ConfigurationInvalidError()

        self._configuration = configuration
        self._owns_http_client = http_client is None
        self._http_client = http_client or httpx.AsyncClient(
            timeout=timeout,
            verify=verify_ssl,
        )
        self._executor = KeyServiceRequestExecutor(self._http_client)
        self._pending: Set[asyncio.Task] = set()

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> "KeyServiceClient":
        """Create a client from environment settings."""
        settings = settings or get_settings()
        return cls(
            KeyServiceConfiguration.from_settings(settings),
            http_client,
            timeout=settings.timeout,
            verify_ssl=settings.verify_ssl,
        )

    @property
    def configuration(self) -> KeyServiceConfiguration:
        """
        The verified configuration.

        Raises:
            ConfigurationInvalidError: If it was cleared or is invalid
        """
        if not verify_configuration(self._configuration):
            raise ConfigurationInvalidError()
        return self._configuration

    def clear_configuration(self) -> None:
        """Drop the configuration, eg on logout. Later calls fail fast."""
        self._configuration = None

    def key_service_url(self, endpoint: KeyServiceEndpoint) -> str:
        """Absolute URL of an endpoint for the current configuration."""
        return resolve_url(self.configuration, endpoint)

    @property
    def pending_requests(self) -> int:
        """Number of requests still in flight."""
        return len(self._pending)

    # Callback form

    def get_key(self, secret: str, key_id: str, completion: Completion) -> asyncio.Task:
        """
        Get an existing encryption key by using a secret.

        Args:
            secret: The secret used when the key was created
            key_id: Identifier of the encryption key
            completion: Invoked once with the result

        Returns:
            The task performing the request
        """
        parameters = {
            "secret": secret,
            "keyid": key_id,
        }
        logger.info("Requesting key %s", key_id)
        return self._dispatch(KeyServiceEndpoint.KEY, parameters, completion)

    def get_key_via_long_secret(
        self,
        long_secret: str,
        key_id: str,
        completion: Completion,
    ) -> asyncio.Task:
        """
        Get an existing encryption key by using a long secret.

        Args:
            long_secret: The long secret returned when the key was created
            key_id: Identifier of the encryption key
            completion: Invoked once with the result
        """
        parameters = {
            "longsecret": long_secret,
            "keyid": key_id,
        }
        logger.info("Requesting key %s via long secret", key_id)
        return self._dispatch(KeyServiceEndpoint.KEY, parameters, completion)

    def create_key(self, secret: str, completion: Completion) -> asyncio.Task:
        """Create a new key protected by a secret."""
        logger.info("Requesting new key")
        return self._dispatch(KeyServiceEndpoint.CREATE_KEY, {"secret": secret}, completion)

    # Future form

    def get_key_future(self, secret: str, key_id: str) -> "asyncio.Future[KeyModel]":
        return self._future(partial(self.get_key, secret, key_id))

    def get_key_via_long_secret_future(
        self,
        long_secret: str,
        key_id: str,
    ) -> "asyncio.Future[KeyModel]":
        return self._future(partial(self.get_key_via_long_secret, long_secret, key_id))

    def create_key_future(self, secret: str) -> "asyncio.Future[KeyModel]":
        return self._future(partial(self.create_key, secret))

    async def shutdown(self) -> None:
        if self._owns_http_client:
            await self._http_client.aclose()

    async def __aenter__(self) -> "KeyServiceClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.shutdown()

    async def _perform(
        self,
        endpoint: KeyServiceEndpoint,
        parameters: Dict[str, str],
    ) -> KeyServiceResult[KeyModel]:
        try:
            url = self.key_service_url(endpoint)
        except ConfigurationInvalidError as e:
            logger.error("Key service configuration is missing or invalid")
            return KeyServiceResult.failure(e)

        result = await self._executor.execute(url, parameters, KeyModel)
        if result.ok:
            logger.info("Received key %s from %s", result.value.key_id, endpoint.url_path)
        return result

    def _dispatch(
        self,
        endpoint: KeyServiceEndpoint,
        parameters: Dict[str, str],
        completion: Completion,
    ) -> asyncio.Task:
        task = asyncio.get_running_loop().create_task(self._perform(endpoint, parameters))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        task.add_done_callback(partial(_deliver, completion))
        return task

    def _future(self, start: Callable[[Completion], asyncio.Task]) -> "asyncio.Future[KeyModel]":
        future = asyncio.get_running_loop().create_future()

        def resolve(result: KeyServiceResult[KeyModel]) -> None:
            # the future may already be cancelled by its consumer
            if future.done():
                return
            if result.ok:
                future.set_result(result.value)
            else:
                future.set_exception(result.error)

        task = start(resolve)
        future.add_done_callback(lambda f: task.cancel() if f.cancelled() else None)
        return future


def _deliver(completion: Completion, task: asyncio.Task) -> None:
    """Hand a finished task's outcome to its completion handler."""
    if task.cancelled():
        logger.warning("Key service request cancelled")
        result = KeyServiceResult.failure(map_transport_error(asyncio.CancelledError()))
    elif task.exception() is not None:
        error = task.exception()
        logger.error("Key service request crashed", exc_info=error)
        result = KeyServiceResult.failure(UnknownKeyServiceError(cause=error))
    else:
        result = task.result()
    completion(result)
