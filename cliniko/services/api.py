import logging
from typing import Any, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError

from cliniko.core.errors import APIStatusError, MalformedResponseError, TransportError
from cliniko.schemas import (
    APIResponse,
    PatientAttachment,
    PatientAttachmentCreate,
    PresignedPost,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class ClinikoAPI:
    """JSON API collaborator: one request per call, no retries."""

    def __init__(self, http_client: httpx.AsyncClient) -> None:
        self.http = http_client

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Any = None,
        json: Any = None,
    ) -> httpx.Response:
        try:
            return await self.http.request(method, path, params=params, json=json)
        except httpx.RequestError as exc:
            raise TransportError(f"{method} {path} failed: {exc!r}") from exc

    async def request_json(
        self,
        method: str,
        path: str,
        *,
        params: Any = None,
        json: Any = None,
        expected: int = 200,
    ) -> Any:
        """Perform a request and return the decoded body, raising on any other status."""
        response = await self.request(method, path, params=params, json=json)
        if response.status_code != expected:
            raise APIStatusError(
                f"{method} {path} returned {response.status_code}, "
                f"expected {expected}: {response.text}",
                response=response,
            )
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise MalformedResponseError(
                f"{method} {path} returned invalid JSON",
                response=response,
            ) from exc

    def _wrap(
        self,
        response: httpx.Response,
        model: type[ModelT],
        success_status: int,
    ) -> APIResponse[ModelT]:
        parsed = None
        if response.status_code == success_status:
            try:
                parsed = model.model_validate_json(response.content)
            except ValidationError as exc:
                raise MalformedResponseError(
                    f"{response.request.method} {response.request.url.path} "
                    f"returned an unexpected {model.__name__} payload",
                    response=response,
                ) from exc
        else:
            logger.debug(
                "%s %s answered %s, expected %s",
                response.request.method,
                response.request.url.path,
                response.status_code,
                success_status,
            )
        return APIResponse[model](
            status_code=response.status_code,
            body=response.content,
            http_response=response,
            parsed=parsed,
        )

    async def get_presigned_post(self, patient_id: str) -> APIResponse[PresignedPost]:
        path = f"/patients/{quote(patient_id, safe='')}/attachment_presigned_post"
        response = await self.request("GET", path)
        return self._wrap(response, PresignedPost, 200)

    async def create_patient_attachment(
        self,
        payload: PatientAttachmentCreate,
    ) -> APIResponse[PatientAttachment]:
        response = await self.request(
            "POST",
            "/patient_attachments",
            json=payload.model_dump(exclude_none=True),
        )
        return self._wrap(response, PatientAttachment, 201)
