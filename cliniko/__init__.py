"""Async client for the Cliniko practice-management API.

Create a client with the API key copied from Cliniko; the shard is read from
the key and the vendor name and email are sent as the ``User-Agent``::

    async with ClinikoClient("api-key-uk2", "vendor", "vendor@example.com") as client:
        page = await client.appointment_types.list(per_page=10, order="desc")

Creating an attachment takes three HTTP calls (presigned post, bucket upload,
attachment record) and returns whatever was obtained before any failure::

    result = await client.create_attachment(
        "patient-id",
        "file description as shown by Cliniko",
        "filename",
        b"\\x00",
    )
    if not result.ok:
        print(result.status, result.error)
"""

from cliniko.client import ClinikoClient
from cliniko.core.errors import (
    APIStatusError,
    AttachmentRejectedError,
    ClinikoError,
    CredentialsError,
    MalformedResponseError,
    PresignedPostRejectedError,
    ProtocolRejectionError,
    StorageResponseMissingError,
    StorageStatusError,
    TransportError,
    UploadFormError,
    UploadStep,
)
from cliniko.interfaces import AttachmentAPI, StorageUploader
from cliniko.schemas import AttachmentUploadResult, AttachmentUploadStatus

__all__ = [
    "ClinikoClient",
    "AttachmentUploadResult",
    "AttachmentUploadStatus",
    "UploadStep",
    "AttachmentAPI",
    "StorageUploader",
    "ClinikoError",
    "CredentialsError",
    "TransportError",
    "UploadFormError",
    "MalformedResponseError",
    "ProtocolRejectionError",
    "APIStatusError",
    "PresignedPostRejectedError",
    "StorageStatusError",
    "StorageResponseMissingError",
    "AttachmentRejectedError",
]
