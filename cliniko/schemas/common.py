from typing import Generic, TypeVar

import httpx
from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class APIResponse(BaseModel, Generic[T]):
    """A Cliniko API response with its typed payload.

    ``parsed`` is only set when the endpoint answered with its documented
    success status; otherwise callers inspect ``status_code`` and ``body``.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    status_code: int
    body: bytes
    http_response: httpx.Response
    parsed: T | None = None


class Page(BaseModel, Generic[T]):
    items: list[T] = Field(default_factory=list)
    total_entries: int = 0
    links: dict[str, str] = Field(default_factory=dict)

    @property
    def next_url(self) -> str | None:
        return self.links.get("next")
