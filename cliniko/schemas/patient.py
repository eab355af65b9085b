from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from cliniko.schemas.enums import PhoneType


class PatientPhoneNumber(BaseModel):
    phone_type: PhoneType | None = None
    number: str


class PatientBase(BaseModel):
    first_name: str
    last_name: str
    email: str | None = None
    date_of_birth: date | None = None
    patient_phone_numbers: list[PatientPhoneNumber] = Field(default_factory=list)


class PatientCreate(PatientBase):
    pass


class PatientUpdate(BaseModel):
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    date_of_birth: date | None = None
    patient_phone_numbers: list[PatientPhoneNumber] | None = None


class Patient(PatientBase):
    model_config = ConfigDict(extra="allow")

    id: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
    archived_at: datetime | None = None


class AppointmentType(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    name: str
    description: str | None = None
    category: str | None = None
    color: str | None = None
    duration_in_minutes: int | None = None
