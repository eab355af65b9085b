from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class PatientAttachmentCreate(BaseModel):
    model_config = ConfigDict(frozen=True)

    patient_id: str
    upload_url: str = Field(..., min_length=1)
    description: str | None = None


class PatientAttachment(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    description: str | None = None
    filename: str | None = None
    content_type: str | None = None
    size: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    links: dict[str, str] = Field(default_factory=dict)
