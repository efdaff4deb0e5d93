import asyncio
import base64

import httpx
import pytest

from keyservice_client import KeyServiceClient, KeyServiceConfiguration

REALM_BASE_URL = "https://id.example.com/auth/realms/demo"


class CompletionRecorder:
    """Completion handler that records every result it receives."""

    def __init__(self):
        self.results = []
        self._event = asyncio.Event()

    def __call__(self, result):
        self.results.append(result)
        self._event.set()

    async def wait(self, timeout: float = 1.0):
        await asyncio.wait_for(self._event.wait(), timeout)
        # give a duplicate delivery the chance to show up
        await asyncio.sleep(0)
        return self.results[0]


@pytest.fixture
def configuration():
    return KeyServiceConfiguration.create(REALM_BASE_URL)


@pytest.fixture
def key_material():
    return b"\x01" * 32


@pytest.fixture
def key_payload(key_material):
    return {
        "keyid": "test-key-id-12345",
        "key": base64.b64encode(key_material).decode("ascii"),
        "longsecret": "test-long-secret",
    }


@pytest.fixture
def make_client(configuration):
    """Build a client whose transport is answered by handler(request)."""

    def factory(handler, config=None):
        requests = []

        async def recording(request):
            requests.append(request)
            response = handler(request)
            if asyncio.iscoroutine(response):
                response = await response
            return response

        http_client = httpx.AsyncClient(transport=httpx.MockTransport(recording))
        client = KeyServiceClient(config or configuration, http_client)
        return client, requests

    return factory


@pytest.fixture
def ok_handler(key_payload):
    return lambda request: httpx.Response(200, json=key_payload)


@pytest.fixture
def recorder():
    """Factory for completion recorders, called inside the running loop."""
    return CompletionRecorder
