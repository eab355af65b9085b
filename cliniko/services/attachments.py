from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

import httpx

from cliniko.core.errors import (
    AttachmentRejectedError,
    ClinikoError,
    MalformedResponseError,
    PresignedPostRejectedError,
    StorageResponseMissingError,
    StorageStatusError,
    TransportError,
    UploadStep,
)
from cliniko.schemas import (
    APIResponse,
    AttachmentUploadResult,
    AttachmentUploadStatus,
    PatientAttachment,
    PatientAttachmentCreate,
    PresignedPost,
    StorageUploadResponse,
)

if TYPE_CHECKING:
    from cliniko.interfaces import AttachmentAPI, StorageUploader
    from cliniko.services.storage import FileContent

logger = logging.getLogger(__name__)


def _unparsed(model: type, response: httpx.Response) -> APIResponse:
    return APIResponse[model](
        status_code=response.status_code,
        body=response.content,
        http_response=response,
        parsed=None,
    )


class AttachmentUploader:
    """Creates a patient attachment in three calls.

    1. ask the API for a presigned POST target for the patient,
    2. upload the file straight to the storage bucket with it,
    3. tell the API where the file now lives.

    Nothing is retried and nothing is rolled back: if the last call fails the
    uploaded object stays in the bucket without an attachment record.
    """

    def __init__(self, api: AttachmentAPI, storage: StorageUploader) -> None:
        self.api = api
        self.storage = storage

    async def create_attachment(
        self,
        patient_id: str,
        description: str | None,
        filename: str,
        content: FileContent,
        *,
        timeout: float | None = None,
    ) -> AttachmentUploadResult:
        """Run the three calls, within ``timeout`` seconds overall when given.

        A deadline that expires mid-upload is reported like any other
        transport failure of the step that was running.
        """
        presigned: APIResponse[PresignedPost] | None = None
        storage_response: StorageUploadResponse | None = None
        attachment_response: APIResponse[PatientAttachment] | None = None
        upload_url: str | None = None
        step = UploadStep.PRESIGNED_POST
        error: ClinikoError | None = None

        try:
            async with asyncio.timeout(timeout):
                logger.debug("Requesting presigned post for patient %s", patient_id)
                presigned = await self.api.get_presigned_post(patient_id)
                target = presigned.parsed
                if target is None:
                    raise PresignedPostRejectedError(
                        f"presigned post request for patient {patient_id} was unsuccessful "
                        f"(HTTP {presigned.status_code})",
                        response=presigned.http_response,
                    )

                step = UploadStep.STORAGE_UPLOAD
                response = await self.storage.upload(target, filename, content)
                expected = target.fields.success_action_status
                if str(response.status_code) != expected:
                    raise StorageStatusError(
                        response.status_code,
                        expected,
                        response.content,
                        response=response,
                    )

                storage_response = self.storage.parse_response(response)
                post_response = storage_response.xml_201
                if post_response is None:
                    raise StorageResponseMissingError(
                        "storage upload returned no PostResponse document",
                        response=response,
                    )
                if not post_response.key:
                    raise StorageResponseMissingError(
                        "storage PostResponse carries no Key",
                        response=response,
                    )

                step = UploadStep.CREATE_ATTACHMENT
                upload_url = f"{target.url}/{post_response.key}"
                attachment_response = await self.api.create_patient_attachment(
                    PatientAttachmentCreate(
                        patient_id=patient_id,
                        upload_url=upload_url,
                        description=description,
                    )
                )
                if attachment_response.parsed is None:
                    raise AttachmentRejectedError(
                        f"creating attachment for patient {patient_id} was unsuccessful "
                        f"(HTTP {attachment_response.status_code})",
                        response=attachment_response.http_response,
                    )
        except ClinikoError as exc:
            error = exc
        except TimeoutError as exc:
            error = TransportError(f"attachment upload did not finish within {timeout}s", step=step)
            error.__cause__ = exc

        if error is not None:
            if error.step is None:
                error.step = step
            if isinstance(error, MalformedResponseError) and error.response is not None:
                if step is UploadStep.PRESIGNED_POST:
                    presigned = _unparsed(PresignedPost, error.response)
                elif step is UploadStep.STORAGE_UPLOAD:
                    storage_response = StorageUploadResponse(
                        body=error.response.content,
                        http_response=error.response,
                        xml_201=None,
                    )
                else:
                    attachment_response = _unparsed(PatientAttachment, error.response)
            logger.warning("Attachment upload failed at %s (%s)", step.value, type(error).__name__)
            logger.debug("Attachment upload for patient %s failed: %s", patient_id, error)
            if step is UploadStep.CREATE_ATTACHMENT:
                logger.warning("Uploaded object %s has no attachment record", upload_url)
            return AttachmentUploadResult(
                status=AttachmentUploadStatus.failed_at(step),
                presigned_post=presigned,
                storage_response=storage_response,
                attachment_response=attachment_response,
                upload_url=upload_url,
                error=error,
            )

        logger.info("Created attachment record for %s", upload_url)
        return AttachmentUploadResult(
            status=AttachmentUploadStatus.SUCCEEDED,
            presigned_post=presigned,
            storage_response=storage_response,
            attachment_response=attachment_response,
            upload_url=upload_url,
        )
