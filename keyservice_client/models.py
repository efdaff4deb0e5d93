"""
Key Service Data Models
"""

import base64
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from .exceptions import KeyServiceError

T = TypeVar("T")


class KeyModel(BaseModel):
    """Key material bundle returned by the key service."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    key_id: str = Field(alias="keyid")
    key: str = Field(repr=False)
    long_secret: Optional[str] = Field(default=None, alias="longsecret", repr=False)

    def key_material(self) -> bytes:
        """Decode the base64 key."""
        return base64.b64decode(self.key, validate=True)


@dataclass(frozen=True)
class KeyServiceResult(Generic[T]):
    """Outcome of a single key service call: a value or an error."""
    value: Optional[T] = None
    error: Optional[KeyServiceError] = None

    @classmethod
    def success(cls, value: T) -> "KeyServiceResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: KeyServiceError) -> "KeyServiceResult[T]":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value, or raise the error."""
        if self.error is not None:
            raise self.error
        return self.value
