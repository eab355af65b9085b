import logging

import httpx

from cliniko.core.config import Settings, get_settings
from cliniko.core.security import api_base_url, api_headers
from cliniko.schemas import AttachmentUploadResult
from cliniko.services.api import ClinikoAPI
from cliniko.services.attachments import AttachmentUploader
from cliniko.services.resources import AppointmentTypes, PatientAttachments, Patients
from cliniko.services.storage import FileContent, PresignedPostUploader

logger = logging.getLogger(__name__)


class ClinikoClient:
    """Cliniko API client with the attachment upload workflow built in.

    Use as an async context manager so both HTTP connection pools are closed::

        async with ClinikoClient("MS0xLWFiYw-uk2", "My Clinic App", "dev@example.com") as client:
            result = await client.create_attachment("123", "Referral", "referral.pdf", data)
            result.raise_for_error()
    """

    def __init__(
        self,
        api_key: str | None = None,
        vendor_name: str | None = None,
        vendor_email: str | None = None,
        *,
        base_url: str | None = None,
        settings: Settings | None = None,
        api_transport: httpx.AsyncBaseTransport | None = None,
        storage_transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        key = api_key if api_key is not None else self.settings.api_key
        self.base_url = api_base_url(key, base_url or self.settings.base_url)

        self._api_http = httpx.AsyncClient(
            base_url=self.base_url,
            headers=api_headers(
                key,
                vendor_name or self.settings.vendor_name,
                vendor_email or self.settings.vendor_email,
            ),
            timeout=httpx.Timeout(self.settings.timeout),
            transport=api_transport,
        )
        self._storage_http = httpx.AsyncClient(
            timeout=httpx.Timeout(self.settings.upload_timeout),
            transport=storage_transport,
        )

        self.api = ClinikoAPI(self._api_http)
        self.storage = PresignedPostUploader(self._storage_http)
        self.attachments = AttachmentUploader(self.api, self.storage)

        self.patients = Patients(self.api)
        self.appointment_types = AppointmentTypes(self.api)
        self.patient_attachments = PatientAttachments(self.api)
        logger.debug("Cliniko client configured for %s", self.base_url)

    async def create_attachment(
        self,
        patient_id: str,
        description: str | None,
        filename: str,
        content: FileContent,
        *,
        timeout: float | None = None,
    ) -> AttachmentUploadResult:
        return await self.attachments.create_attachment(
            patient_id, description, filename, content, timeout=timeout
        )

    async def aclose(self) -> None:
        await self._api_http.aclose()
        await self._storage_http.aclose()

    async def __aenter__(self) -> "ClinikoClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
