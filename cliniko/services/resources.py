"""Declarative CRUD bindings, one class per Cliniko resource group.

Each group mixes in only the capabilities the API offers for it, so
``client.patients.delete`` simply does not exist.
"""

from typing import Any, ClassVar, Generic, TypeVar
from urllib.parse import quote

from pydantic import BaseModel

from cliniko.core.errors import MalformedResponseError
from cliniko.schemas import (
    AppointmentType,
    Page,
    Patient,
    PatientAttachment,
    SortOrder,
)
from cliniko.services.api import ClinikoAPI

ModelT = TypeVar("ModelT", bound=BaseModel)


class ResourceGroup(Generic[ModelT]):
    path: ClassVar[str]
    collection_key: ClassVar[str]
    model: ClassVar[type[BaseModel]]

    def __init__(self, api: ClinikoAPI) -> None:
        self.api = api

    def _item_path(self, resource_id: str) -> str:
        return f"{self.path}/{quote(str(resource_id), safe='')}"

    def _parse(self, data: Any) -> ModelT:
        if not isinstance(data, dict):
            raise MalformedResponseError(f"{self.path} returned a non-object payload")
        return self.model.model_validate(data)  # type: ignore[return-value]


class ListMixin(ResourceGroup[ModelT]):
    async def list(
        self,
        *,
        page: int | None = None,
        per_page: int | None = None,
        sort: list[str] | None = None,
        order: SortOrder | str | None = None,
        q: list[str] | None = None,
    ) -> Page[ModelT]:
        params: list[tuple[str, str | int]] = []
        if page is not None:
            params.append(("page", page))
        if per_page is not None:
            params.append(("per_page", per_page))
        if sort:
            params.append(("sort", ",".join(sort)))
        if order is not None:
            params.append(("order", SortOrder(order).value))
        for query in q or []:
            params.append(("q[]", query))

        data = await self.api.request_json("GET", self.path, params=params)
        if not isinstance(data, dict):
            raise MalformedResponseError(f"{self.path} returned a non-object payload")
        return Page(
            items=[self._parse(item) for item in data.get(self.collection_key, [])],
            total_entries=data.get("total_entries", 0),
            links=data.get("links") or {},
        )


class GetMixin(ResourceGroup[ModelT]):
    async def get(self, resource_id: str) -> ModelT:
        data = await self.api.request_json("GET", self._item_path(resource_id))
        return self._parse(data)


class CreateMixin(ResourceGroup[ModelT]):
    async def create(self, payload: BaseModel) -> ModelT:
        data = await self.api.request_json(
            "POST",
            self.path,
            json=payload.model_dump(mode="json", exclude_none=True),
            expected=201,
        )
        return self._parse(data)


class UpdateMixin(ResourceGroup[ModelT]):
    async def update(self, resource_id: str, payload: BaseModel) -> ModelT:
        data = await self.api.request_json(
            "PATCH",
            self._item_path(resource_id),
            json=payload.model_dump(mode="json", exclude_none=True),
        )
        return self._parse(data)


class DeleteMixin(ResourceGroup[ModelT]):
    async def delete(self, resource_id: str) -> None:
        await self.api.request_json("DELETE", self._item_path(resource_id), expected=204)


class Patients(ListMixin[Patient], GetMixin[Patient], CreateMixin[Patient], UpdateMixin[Patient]):
    path = "/patients"
    collection_key = "patients"
    model = Patient


class AppointmentTypes(
    ListMixin[AppointmentType],
    GetMixin[AppointmentType],
    CreateMixin[AppointmentType],
    UpdateMixin[AppointmentType],
    DeleteMixin[AppointmentType],
):
    path = "/appointment_types"
    collection_key = "appointment_types"
    model = AppointmentType


class PatientAttachments(
    ListMixin[PatientAttachment],
    GetMixin[PatientAttachment],
    DeleteMixin[PatientAttachment],
):
    """Attachments are created through :class:`AttachmentUploader`, not here."""

    path = "/patient_attachments"
    collection_key = "patient_attachments"
    model = PatientAttachment
