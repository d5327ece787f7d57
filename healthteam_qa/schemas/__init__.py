"""
Pydantic schemas for EHR Bridge requests.
"""

from healthteam_qa.schemas.ehr import (
    AppointmentQuery,
    DocumentQuery,
    PatientCreate,
    PatientIds,
    PatientSearch,
    PhoneNumber,
)

__all__ = [
    "AppointmentQuery",
    "DocumentQuery",
    "PatientCreate",
    "PatientIds",
    "PatientSearch",
    "PhoneNumber",
]
