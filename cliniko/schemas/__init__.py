from cliniko.schemas.attachment import PatientAttachment, PatientAttachmentCreate
from cliniko.schemas.common import APIResponse, Page
from cliniko.schemas.enums import (
    CancellationReason,
    PhoneType,
    SortOrder,
    StockAdjustmentType,
)
from cliniko.schemas.patient import (
    AppointmentType,
    Patient,
    PatientCreate,
    PatientPhoneNumber,
    PatientUpdate,
)
from cliniko.schemas.storage import (
    PresignedPost,
    PresignedPostFields,
    S3PostResponse,
    StorageUploadResponse,
)
from cliniko.schemas.upload import AttachmentUploadResult, AttachmentUploadStatus

__all__ = [
    "AttachmentUploadResult",
    "AttachmentUploadStatus",
    "APIResponse",
    "Page",
    "PresignedPost",
    "PresignedPostFields",
    "S3PostResponse",
    "StorageUploadResponse",
    "PatientAttachment",
    "PatientAttachmentCreate",
    "Patient",
    "PatientCreate",
    "PatientUpdate",
    "PatientPhoneNumber",
    "AppointmentType",
    "CancellationReason",
    "PhoneType",
    "SortOrder",
    "StockAdjustmentType",
]
