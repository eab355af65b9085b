import httpx
from pydantic import BaseModel, ConfigDict, Field, field_validator


class PresignedPostFields(BaseModel):
    """Signed form fields the storage provider expects alongside the file."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    acl: str
    key: str
    policy: str
    success_action_status: str = Field(default="201")
    x_amz_algorithm: str = Field(alias="x-amz-algorithm")
    x_amz_credential: str = Field(alias="x-amz-credential")
    x_amz_signature: str = Field(alias="x-amz-signature")
    x_amz_date: str | None = Field(default=None, alias="x-amz-date")

    @field_validator("success_action_status", mode="before")
    @classmethod
    def _status_as_string(cls, value: object) -> object:
        if isinstance(value, int):
            return str(value)
        return value


class PresignedPost(BaseModel):
    """Upload target: a single-use presigned POST destination."""

    model_config = ConfigDict(frozen=True)

    url: str = Field(..., min_length=1)
    fields: PresignedPostFields


class S3PostResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    location: str = ""
    bucket: str = ""
    key: str = ""
    etag: str = ""


class StorageUploadResponse(BaseModel):
    """Outcome of the direct-to-storage upload."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    body: bytes
    http_response: httpx.Response
    xml_201: S3PostResponse | None = None

    @property
    def status_code(self) -> int:
        return self.http_response.status_code
