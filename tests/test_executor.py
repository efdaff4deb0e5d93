import errno
import json

import httpx
import pytest

from keyservice_client import (
    KeyModel,
    KeyNotFoundError,
    NoInternetConnectionError,
    UnableToDecodeError,
    UnknownKeyServiceError,
)
from keyservice_client.executor import KeyServiceRequestExecutor

URL = "https://id.example.com/auth/realms/demo/keyservice/v1/key"
PARAMETERS = {"secret": "s3cret", "keyid": "test-key-id-12345"}


def make_executor(handler):
    requests = []

    def recording(request):
        requests.append(request)
        return handler(request)

    http_client = httpx.AsyncClient(transport=httpx.MockTransport(recording))
    return KeyServiceRequestExecutor(http_client), requests


class TestRequestExecutor:

    @pytest.mark.asyncio
    async def test_posts_json_parameters(self, ok_handler):
        executor, requests = make_executor(ok_handler)

        await executor.execute(URL, PARAMETERS, KeyModel)

        assert len(requests) == 1
        request = requests[0]
        assert request.method == "POST"
        assert str(request.url) == URL
        assert request.headers["Content-Type"] == "application/json"
        assert json.loads(request.content) == PARAMETERS

    @pytest.mark.asyncio
    async def test_decodes_success_response(self, ok_handler, key_payload):
        executor, _ = make_executor(ok_handler)

        result = await executor.execute(URL, PARAMETERS, KeyModel)

        assert result.ok
        assert result.value.key_id == key_payload["keyid"]
        assert result.value.key == key_payload["key"]
        assert result.value.long_secret == key_payload["longsecret"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", [
        b"",
        b"not json",
        b"[]",
        b'{"keyid": "test-key-id-12345"}',
        b'{"keyid": 42, "key": "AAAA"}',
    ])
    async def test_undecodable_body(self, content):
        executor, _ = make_executor(lambda request: httpx.Response(200, content=content))

        result = await executor.execute(URL, PARAMETERS, KeyModel)

        assert not result.ok
        assert result.value is None
        assert isinstance(result.error, UnableToDecodeError)

    @pytest.mark.asyncio
    async def test_status_error_ignores_body(self, key_payload):
        executor, _ = make_executor(lambda request: httpx.Response(404, json=key_payload))

        result = await executor.execute(URL, PARAMETERS, KeyModel)

        assert result.value is None
        assert isinstance(result.error, KeyNotFoundError)
        assert result.error.status_code == 404

    @pytest.mark.asyncio
    async def test_unmapped_status(self):
        executor, _ = make_executor(lambda request: httpx.Response(503))

        result = await executor.execute(URL, PARAMETERS, KeyModel)

        assert isinstance(result.error, UnknownKeyServiceError)
        assert result.error.status_code == 503

    @pytest.mark.asyncio
    async def test_connect_error(self):
        def handler(request):
            raise httpx.ConnectError("Network is unreachable", request=request) from OSError(
                errno.ENETUNREACH, "Network is unreachable"
            )

        executor, requests = make_executor(handler)

        result = await executor.execute(URL, PARAMETERS, KeyModel)

        assert isinstance(result.error, NoInternetConnectionError)
        assert len(requests) == 1

    @pytest.mark.asyncio
    async def test_refused_connection(self):
        def handler(request):
            raise httpx.ConnectError("Connection refused", request=request) from ConnectionRefusedError(
                errno.ECONNREFUSED, "Connection refused"
            )

        executor, _ = make_executor(handler)

        result = await executor.execute(URL, PARAMETERS, KeyModel)

        assert isinstance(result.error, UnknownKeyServiceError)
        assert isinstance(result.error.cause, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        executor, _ = make_executor(handler)

        result = await executor.execute(URL, PARAMETERS, KeyModel)

        assert isinstance(result.error, UnknownKeyServiceError)
        assert isinstance(result.error.cause, httpx.ReadTimeout)
