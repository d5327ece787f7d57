"""
Pydantic schemas for EHR Bridge API requests.
"""

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class EhrModel(BaseModel):
    """Base model: snake_case attributes, camelCase on the wire."""

    model_config = ConfigDict(populate_by_name=True)

    def to_payload(self) -> dict[str, Any]:
        """Serialize for a JSON body or query string, dropping unset fields."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class PhoneNumber(EhrModel):
    """A patient phone number."""

    phone_number: str = Field(..., alias="phoneNumber")
    type: str = Field(default="mobile", description="mobile, home or work")


class PatientCreate(EhrModel):
    """Body for POST /ehr/patients."""

    first_name: str = Field(..., alias="firstName")
    last_name: str = Field(..., alias="lastName")
    birthdate: datetime
    gender_identity: str = Field(..., alias="genderIdentity")
    email: str | None = None
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = Field(None, alias="zipCode")
    phone_numbers: list[PhoneNumber] = Field(default_factory=list, alias="phoneNumbers")
    ssn: str | None = None

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={"example": {
            "firstName": "John",
            "lastName": "Marico",
            "email": "john.marico@example.com",
            "birthdate": "1995-02-19T00:00:00.000Z",
            "genderIdentity": "male",
            "address": "123 Main St",
            "city": "Springfield",
            "state": "IL",
            "zipCode": "62701",
            "phoneNumbers": [{"phoneNumber": "321-555-1234", "type": "mobile"}],
        }},
    )


class PatientSearch(EhrModel):
    """Query for GET /ehr/patients."""

    name: str | None = None
    email: str | None = None
    phone: str | None = None
    birth_date: date | None = Field(None, alias="birthDate")


class PatientIds(EhrModel):
    """Body for POST /ehr/patients/by-ids."""

    ids: list[str]


class DocumentQuery(EhrModel):
    """Query for GET /ehr/patients/{id}/documents."""

    from_date: date | None = Field(None, alias="fromDate")
    to_date: date | None = Field(None, alias="toDate")
    type: str | None = None


class AppointmentQuery(EhrModel):
    """Query for GET /ehr/appointments."""

    patient_id: str | None = Field(None, alias="patientId")
    start_date: date | None = Field(None, alias="startDate")
    end_date: date | None = Field(None, alias="endDate")
