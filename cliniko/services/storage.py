import logging
from datetime import datetime, timezone
from typing import BinaryIO, Final
from xml.etree import ElementTree

import httpx

from cliniko.core.errors import MalformedResponseError, TransportError, UploadFormError
from cliniko.schemas import PresignedPost, PresignedPostFields, S3PostResponse, StorageUploadResponse

logger = logging.getLogger(__name__)

AMZ_DATE_FORMAT: Final[str] = "%Y%m%dT%H%M%SZ"
FILE_FIELD: Final[str] = "file"
FILE_CONTENT_TYPE: Final[str] = "application/octet-stream"

FileContent = bytes | bytearray | memoryview | BinaryIO


def amz_date(now: datetime | None = None) -> str:
    moment = now or datetime.now(timezone.utc)
    return moment.astimezone(timezone.utc).strftime(AMZ_DATE_FORMAT)


def build_form_fields(fields: PresignedPostFields, now: datetime | None = None) -> dict[str, str]:
    """Form fields in the order the storage provider's policy lists them."""
    return {
        "acl": fields.acl,
        "key": fields.key,
        "policy": fields.policy,
        "success_action_status": fields.success_action_status,
        "x-amz-date": fields.x_amz_date or amz_date(now),
        "x-amz-algorithm": fields.x_amz_algorithm,
        "x-amz-credential": fields.x_amz_credential,
        "x-amz-signature": fields.x_amz_signature,
    }


def read_content(content: FileContent) -> bytes:
    if isinstance(content, (bytes, bytearray, memoryview)):
        return bytes(content)
    try:
        data = content.read()
    except (OSError, ValueError) as exc:
        raise UploadFormError(f"could not read file content: {exc}") from exc
    if not isinstance(data, (bytes, bytearray)):
        raise UploadFormError("file content must be a binary stream")
    return bytes(data)


def _local_tag(tag: str) -> str:
    return tag.split("}")[-1] if "}" in tag else tag


def parse_post_response(body: bytes) -> S3PostResponse:
    """Parse an S3 ``PostResponse`` document, ignoring namespaces."""
    try:
        root = ElementTree.fromstring(body)
    except ElementTree.ParseError as exc:
        raise MalformedResponseError(f"storage returned unparseable XML: {exc}") from exc

    values: dict[str, str] = {}
    for child in root:
        values[_local_tag(child.tag)] = (child.text or "").strip()

    return S3PostResponse(
        location=values.get("Location", ""),
        bucket=values.get("Bucket", ""),
        key=values.get("Key", ""),
        etag=values.get("ETag", ""),
    )


class PresignedPostUploader:
    """Uploads a file straight to an S3-compatible bucket via presigned POST."""

    def __init__(self, http_client: httpx.AsyncClient) -> None:
        self.http = http_client

    def build_request(
        self,
        target: PresignedPost,
        filename: str,
        content: FileContent,
        now: datetime | None = None,
    ) -> httpx.Request:
        data = build_form_fields(target.fields, now)
        payload = read_content(content)
        try:
            return self.http.build_request(
                "POST",
                target.url,
                data=data,
                files={FILE_FIELD: (filename, payload, FILE_CONTENT_TYPE)},
                headers={"Accept": "application/xml"},
            )
        except (TypeError, ValueError) as exc:
            raise UploadFormError(f"could not build upload form: {exc}") from exc

    async def upload(
        self,
        target: PresignedPost,
        filename: str,
        content: FileContent,
    ) -> httpx.Response:
        request = self.build_request(target, filename, content)
        logger.debug("Uploading %s to %s as %s", filename, target.url, target.fields.key)
        try:
            return await self.http.send(request)
        except httpx.RequestError as exc:
            raise TransportError(f"upload to {target.url} failed: {exc!r}") from exc

    def parse_response(self, response: httpx.Response) -> StorageUploadResponse:
        body = response.content
        xml_201 = None
        content_type = response.headers.get("content-type", "")
        if "xml" in content_type and response.status_code == 201:
            try:
                xml_201 = parse_post_response(body)
            except MalformedResponseError as exc:
                exc.response = response
                raise
        return StorageUploadResponse(body=body, http_response=response, xml_201=xml_201)
