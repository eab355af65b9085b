"""Narrow collaborator interfaces the attachment workflow depends on."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    import httpx

    from cliniko.schemas import (
        APIResponse,
        PatientAttachment,
        PatientAttachmentCreate,
        PresignedPost,
        StorageUploadResponse,
    )
    from cliniko.services.storage import FileContent


class AttachmentAPI(Protocol):
    """The two API operations needed to register an uploaded file."""

    async def get_presigned_post(self, patient_id: str) -> APIResponse[PresignedPost]: ...

    async def create_patient_attachment(
        self,
        payload: PatientAttachmentCreate,
    ) -> APIResponse[PatientAttachment]: ...


class StorageUploader(Protocol):
    """Direct-to-bucket upload using a presigned target."""

    async def upload(
        self,
        target: PresignedPost,
        filename: str,
        content: FileContent,
    ) -> httpx.Response: ...

    def parse_response(self, response: httpx.Response) -> StorageUploadResponse: ...
