from __future__ import annotations

import logging
from datetime import date
from typing import Any

import httpx

from booking_intake.application.exceptions import BookingApiError
from booking_intake.application.ports.booking_api import BookingApiPort
from booking_intake.core.config import settings
from booking_intake.domain.entities.booking_type import BookingType


class HttpBookingApi(BookingApiPort):
    """Client for the booking backend's audit and consultation resources."""

    def __init__(
        self,
        base_url: str | None = None,
        revenue_audit_path: str | None = None,
        consultation_path: str | None = None,
        timeout: float | None = None,
        http: httpx.AsyncClient | None = None,
    ) -> None:
        self._roots = {
            BookingType.REVENUE_AUDIT: revenue_audit_path or settings.REVENUE_AUDIT_PATH,
            BookingType.CONSULTATION: consultation_path or settings.CONSULTATION_PATH,
        }
        self._http = http or httpx.AsyncClient(
            base_url=base_url or settings.BOOKING_API_BASE_URL,
            timeout=timeout or settings.BOOKING_API_TIMEOUT_SECONDS,
        )
        self._logger = logging.getLogger(__name__)

    async def aclose(self) -> None:
        await self._http.aclose()

    def resource_root(self, booking_type: BookingType) -> str:
        return self._roots[booking_type].rstrip("/")

    async def fetch_availability(self, booking_type: BookingType, selected_date: date) -> list[str]:
        path = f"{self.resource_root(booking_type)}/availability/{selected_date.isoformat()}"
        response = await self._request("GET", path)
        if not response.is_success:
            raise BookingApiError(
                f"availability_error_{response.status_code}",
                status_code=response.status_code,
                detail=_error_message(response),
            )

        data = _json_body(response)
        slots = data.get("availableSlots") if isinstance(data, dict) else None
        if not isinstance(slots, list):
            return []
        return [slot for slot in slots if isinstance(slot, str)]

    async def create_booking(
        self,
        booking_type: BookingType,
        payload: dict[str, Any],
        idempotency_key: str | None = None,
    ) -> dict[str, Any]:
        headers = {"Content-Type": "application/json"}
        if idempotency_key:
            headers["Idempotency-Key"] = idempotency_key

        response = await self._request("POST", self.resource_root(booking_type), json=payload, headers=headers)
        if not response.is_success:
            detail = _error_message(response)
            self._logger.error(
                "Booking backend rejected submission",
                extra={"status": response.status_code, "error": detail, "booking_type": booking_type.value},
            )
            raise BookingApiError(
                f"booking_error_{response.status_code}",
                status_code=response.status_code,
                detail=detail,
            )

        data = _json_body(response)
        if not isinstance(data, dict):
            raise BookingApiError("booking_response_not_an_object", status_code=response.status_code)
        return data

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            return await self._http.request(method, path, **kwargs)
        except httpx.TimeoutException as e:
            raise BookingApiError(f"booking_api_timeout: {method} {path}") from e
        except httpx.HTTPError as e:
            raise BookingApiError(f"booking_api_connection_failed: {e}") from e


def _json_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError as e:
        raise BookingApiError("booking_api_invalid_json", status_code=response.status_code) from e


def _error_message(response: httpx.Response) -> str | None:
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, str) and error.strip():
            return error
    return None
