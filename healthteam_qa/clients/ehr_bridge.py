"""
EHR Bridge API Client

Thin typed wrapper over Playwright's APIRequestContext for the EHR Bridge
REST API (patients, documents, medications, appointments). Every call returns
an ApiExchange describing the request and the response; status assertions
belong to the calling test.
"""

import json
import time
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any, AsyncGenerator
from urllib.parse import quote

import structlog
from playwright.async_api import APIRequestContext, APIResponse, Playwright

from healthteam_qa import __version__
from healthteam_qa.config import Settings
from healthteam_qa.schemas.ehr import (
    AppointmentQuery,
    DocumentQuery,
    PatientCreate,
    PatientIds,
    PatientSearch,
)

logger = structlog.get_logger()

API_PREFIX = "/api/v1/ehr"
BUSINESS_LOCATION_HEADER = "business-location-id"


@dataclass
class ApiExchange:
    """One request/response pair."""

    method: str
    path: str
    status: int
    ok: bool
    headers: dict[str, str] = field(default_factory=dict)
    body: Any = None
    params: dict[str, Any] = field(default_factory=dict)
    request_body: Any = None
    duration_ms: float = 0

    @property
    def content_type(self) -> str:
        return self.headers.get("content-type", "")

    def items(self) -> list[Any]:
        """List payload, whether returned bare or wrapped in {"data": [...]}."""
        if isinstance(self.body, list):
            return self.body
        if isinstance(self.body, dict) and isinstance(self.body.get("data"), list):
            return self.body["data"]
        return []


def _segment(value: str) -> str:
    return quote(str(value), safe="")


class EhrBridgeClient:
    """
    EHR Bridge endpoints.

    Usage:
        async with open_ehr_client(playwright, settings) as ehr:
            exchange = await ehr.get_patient("e63wRTbPfr1p8UW81d8Seiw3")
            assert exchange.status == 200
    """

    def __init__(
        self,
        request: APIRequestContext,
        business_location_id: str | None = None,
    ):
        self._request = request
        self.business_location_id = business_location_id

    # Patients

    async def get_patient(self, patient_id: str, **kwargs) -> ApiExchange:
        return await self.send("GET", f"patients/{_segment(patient_id)}", **kwargs)

    async def find_patients(
        self, search: PatientSearch | None = None, **kwargs
    ) -> ApiExchange:
        params = search.to_payload() if search else None
        return await self.send("GET", "patients", params=params, **kwargs)

    async def get_patients_by_ids(self, ids: list[str], **kwargs) -> ApiExchange:
        body = PatientIds(ids=ids).to_payload()
        return await self.send("POST", "patients/by-ids", json_body=body, **kwargs)

    async def create_patient(
        self, patient: PatientCreate | dict[str, Any], **kwargs
    ) -> ApiExchange:
        body = patient.to_payload() if isinstance(patient, PatientCreate) else patient
        return await self.send("POST", "patients", json_body=body, **kwargs)

    # Documents and medications

    async def find_patient_documents(
        self,
        patient_id: str,
        query: DocumentQuery | None = None,
        **kwargs,
    ) -> ApiExchange:
        params = query.to_payload() if query else None
        return await self.send(
            "GET",
            f"patients/{_segment(patient_id)}/documents",
            params=params,
            **kwargs,
        )

    async def get_patient_document(
        self, patient_id: str, document_id: str, **kwargs
    ) -> ApiExchange:
        return await self.send(
            "GET",
            f"patients/{_segment(patient_id)}/documents/{_segment(document_id)}",
            **kwargs,
        )

    async def get_patient_medications(self, patient_id: str, **kwargs) -> ApiExchange:
        return await self.send(
            "GET", f"patients/{_segment(patient_id)}/medications", **kwargs
        )

    # Appointments

    async def list_appointments(
        self, query: AppointmentQuery | None = None, **kwargs
    ) -> ApiExchange:
        params = query.to_payload() if query else None
        return await self.send("GET", "appointments", params=params, **kwargs)

    async def get_appointment(self, appointment_id: str, **kwargs) -> ApiExchange:
        return await self.send(
            "GET", f"appointments/{_segment(appointment_id)}", **kwargs
        )

    async def get_appointments_by_patient(
        self, patient_id: str, **kwargs
    ) -> ApiExchange:
        return await self.send(
            "GET", f"appointments/by-patient/{_segment(patient_id)}", **kwargs
        )

    async def send(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json_body: Any = None,
        headers: dict[str, str | None] | None = None,
        timeout: float | None = None,
    ) -> ApiExchange:
        """
        Send a request to API_PREFIX/path.

        Args:
            method: HTTP method
            path: Path relative to API_PREFIX, segments already encoded
            params: Query parameters
            json_body: JSON-serializable request body
            headers: Extra headers; a None value removes a default header
            timeout: Request timeout in ms
        """
        url = f"{API_PREFIX}/{path}"
        request_headers = self._build_headers(headers)

        options: dict[str, Any] = {"method": method, "headers": request_headers}
        if params:
            options["params"] = params
        if json_body is not None:
            options["data"] = json_body
        if timeout is not None:
            options["timeout"] = timeout

        log = logger.bind(method=method, path=url)
        start = time.time()

        response = await self._request.fetch(url, **options)
        body = await _read_body(response)
        duration_ms = (time.time() - start) * 1000

        log.info(
            "ehr_request_complete",
            status=response.status,
            duration_ms=round(duration_ms, 2),
        )

        return ApiExchange(
            method=method,
            path=url,
            status=response.status,
            ok=response.ok,
            headers=dict(response.headers),
            body=body,
            params=params or {},
            request_body=json_body,
            duration_ms=duration_ms,
        )

    def _build_headers(self, overrides: dict[str, str | None] | None) -> dict[str, str]:
        headers: dict[str, str] = {}
        if self.business_location_id:
            headers[BUSINESS_LOCATION_HEADER] = self.business_location_id

        for name, value in (overrides or {}).items():
            if value is None:
                headers.pop(name.lower(), None)
            else:
                headers[name.lower()] = value
        return headers


async def _read_body(response: APIResponse) -> Any:
    # Read once as text: response.json() would fetch the body again for the
    # non-JSON fallback.
    text = await response.text()
    if not text:
        return None

    content_type = response.headers.get("content-type", "")
    if "json" not in content_type:
        return text

    try:
        return json.loads(text)
    except ValueError:
        logger.warning("ehr_invalid_json_body", content_type=content_type)
        return text


@asynccontextmanager
async def open_ehr_client(
    playwright: Playwright,
    settings: Settings,
) -> AsyncGenerator[EhrBridgeClient, None]:
    """
    Create an API request context for the EHR Bridge and dispose it on exit.
    """
    request = await playwright.request.new_context(
        base_url=settings.ehr_base_url,
        extra_http_headers={
            "Accept": "application/json",
            "User-Agent": f"healthteam-qa/{__version__}",
        },
    )
    try:
        yield EhrBridgeClient(
            request,
            business_location_id=settings.ehr_business_location_id or None,
        )
    finally:
        await request.dispose()
