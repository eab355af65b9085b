from enum import Enum

from pydantic import BaseModel, ConfigDict

from cliniko.core.errors import ClinikoError, UploadStep
from cliniko.schemas.attachment import PatientAttachment
from cliniko.schemas.common import APIResponse
from cliniko.schemas.storage import PresignedPost, StorageUploadResponse


class AttachmentUploadStatus(str, Enum):
    SUCCEEDED = "succeeded"
    FAILED_AT_PRESIGNED_POST = "failed_at_presigned_post"
    FAILED_AT_STORAGE_UPLOAD = "failed_at_storage_upload"
    FAILED_AT_CREATE_ATTACHMENT = "failed_at_create_attachment"

    @classmethod
    def failed_at(cls, step: UploadStep) -> "AttachmentUploadStatus":
        return cls(f"failed_at_{step.value}")


class AttachmentUploadResult(BaseModel):
    """Everything the attachment workflow obtained, up to the step that failed.

    Values for steps that were never reached are ``None``; ``error`` is set
    whenever ``status`` is not ``SUCCEEDED``.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    status: AttachmentUploadStatus
    presigned_post: APIResponse[PresignedPost] | None = None
    storage_response: StorageUploadResponse | None = None
    attachment_response: APIResponse[PatientAttachment] | None = None
    upload_url: str | None = None
    error: ClinikoError | None = None

    @property
    def ok(self) -> bool:
        return self.status is AttachmentUploadStatus.SUCCEEDED

    @property
    def failed_step(self) -> UploadStep | None:
        return self.error.step if self.error is not None else None

    @property
    def attachment(self) -> PatientAttachment | None:
        if self.attachment_response is None:
            return None
        return self.attachment_response.parsed

    def raise_for_error(self) -> "AttachmentUploadResult":
        if self.error is not None:
            raise self.error
        return self
