from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx


class UploadStep(str, Enum):
    PRESIGNED_POST = "presigned_post"
    STORAGE_UPLOAD = "storage_upload"
    CREATE_ATTACHMENT = "create_attachment"


class ClinikoError(Exception):
    """Base class for every error raised or returned by this package."""

    step: UploadStep | None = None

    def __init__(self, message: str, *, step: UploadStep | None = None) -> None:
        super().__init__(message)
        if step is not None:
            self.step = step


class CredentialsError(ClinikoError):
    """Raised when the API key cannot be turned into request credentials."""


class TransportError(ClinikoError):
    """The remote side could not be reached (connection, TLS, timeout)."""


class UploadFormError(ClinikoError):
    """The multipart upload could not be built from the caller's content."""

    step = UploadStep.STORAGE_UPLOAD


class MalformedResponseError(ClinikoError):
    """A response announced a parseable body that failed to parse.

    ``response`` is the answer that could not be parsed, kept so the caller
    still sees its status and body.
    """

    def __init__(
        self,
        message: str,
        *,
        step: UploadStep | None = None,
        response: httpx.Response | None = None,
    ) -> None:
        super().__init__(message, step=step)
        self.response = response


class ProtocolRejectionError(ClinikoError):
    """The remote side answered without the expected success indicator."""

    def __init__(
        self,
        message: str,
        *,
        step: UploadStep | None = None,
        response: httpx.Response | None = None,
    ) -> None:
        super().__init__(message, step=step)
        self.response = response

    @property
    def status_code(self) -> int | None:
        return self.response.status_code if self.response is not None else None


class APIStatusError(ProtocolRejectionError):
    """Non-2xx answer from a Cliniko resource endpoint."""


class PresignedPostRejectedError(ProtocolRejectionError):
    step = UploadStep.PRESIGNED_POST


class StorageStatusError(ProtocolRejectionError):
    step = UploadStep.STORAGE_UPLOAD

    def __init__(
        self,
        actual: int,
        expected: str,
        body: bytes,
        *,
        response: httpx.Response | None = None,
    ) -> None:
        self.actual = actual
        self.expected = expected
        self.body = body
        super().__init__(
            "status code of storage response not correct: "
            f"{actual}, expected {expected}, response body: "
            f"{body.decode('utf-8', errors='replace')}",
            response=response,
        )


class StorageResponseMissingError(ProtocolRejectionError):
    step = UploadStep.STORAGE_UPLOAD


class AttachmentRejectedError(ProtocolRejectionError):
    step = UploadStep.CREATE_ATTACHMENT
