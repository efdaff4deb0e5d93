import binascii

import pytest

from keyservice_client import (
    KeyModel,
    KeyNotFoundError,
    KeyServiceErrorKind,
    KeyServiceResult,
)


class TestKeyModel:

    def test_decode_server_payload(self, key_payload, key_material):
        key = KeyModel.model_validate(key_payload)
        assert key.key_id == "test-key-id-12345"
        assert key.long_secret == "test-long-secret"
        assert key.key_material() == key_material

    def test_long_secret_is_optional(self):
        key = KeyModel.model_validate_json('{"keyid": "k", "key": "AAAA"}')
        assert key.long_secret is None

    def test_populate_by_name(self):
        key = KeyModel(key_id="k", key="AAAA")
        assert key.key_id == "k"

    def test_repr_hides_secrets(self, key_payload):
        key = KeyModel.model_validate(key_payload)
        text = repr(key)
        assert key_payload["key"] not in text
        assert key_payload["longsecret"] not in text
        assert key_payload["keyid"] in text

    def test_invalid_base64_key(self):
        key = KeyModel(key_id="k", key="not base64!")
        with pytest.raises(binascii.Error):
            key.key_material()


class TestKeyServiceResult:

    def test_success(self):
        result = KeyServiceResult.success("value")
        assert result.ok
        assert result.unwrap() == "value"

    def test_failure(self):
        error = KeyNotFoundError(status_code=404)
        result = KeyServiceResult.failure(error)
        assert not result.ok
        assert result.value is None
        with pytest.raises(KeyNotFoundError):
            result.unwrap()

    def test_error_repr_names_kind(self):
        error = KeyNotFoundError(status_code=404)
        assert error.kind == KeyServiceErrorKind.KEY_NOT_FOUND
        assert "key_not_found" in repr(error)
        assert str(error) == "Key not found"
