"""Salon booking API client.

A thin wrapper around the salon REST API for scripts and other Python
callers.  It uses the ``requests`` library internally; any object with
a compatible ``request`` method (for example a ``requests.Session`` or
a test client) can be passed as ``session``.

Customer-facing calls:

* :meth:`SalonAPI.submit_booking` – book an appointment.
* :meth:`SalonAPI.get_services` – list the service catalogue.
* :meth:`SalonAPI.get_available_slots` – free start times for a day.

``submit_booking`` surfaces the server's error message when the booking
is refused.  The two read calls only report a generic message: a
failing catalogue or slot lookup is not something the caller can act
on, so server detail is not passed through.

Operator calls (:meth:`admin_login`, :meth:`list_bookings`,
:meth:`cancel_booking`, :meth:`set_booking_status`) surface the
server's error text as well.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import requests


logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 15


class SalonAPIError(Exception):
    """Raised when the API answers with a non-success status or is unreachable."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class SalonAPI:
    """Client for the salon booking API."""

    def __init__(
        self,
        *,
        base_url: str,
        token: Optional[str] = None,
        session: Optional[Any] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL of the API server, e.g.
                ``https://salon.example.com``.  Paths such as
                ``/api/services`` are appended to it.
            token: Optional bearer token sent with every request unless
                a call passes its own.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Per-request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(
        self,
        method: str,
        path: str,
        *,
        params: Dict[str, Any] | None = None,
        json_body: Any | None = None,
        token: Optional[str] = None,
        fallback_error: str,
        surface_server_error: bool = True,
    ) -> Any:
        """Perform an HTTP request and return the decoded JSON body.

        Raises:
            SalonAPIError: on transport failure or a status >= 400.  The
                message is the server's ``error``/``message`` field when
                ``surface_server_error`` is set, otherwise
                ``fallback_error``.
        """
        url = f"{self.base_url}{path}"
        headers: Dict[str, str] = {"Accept": "application/json"}
        bearer = token or self.token
        if bearer:
            headers["Authorization"] = f"Bearer {bearer}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method,
                url,
                params=params,
                json=json_body,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            raise SalonAPIError(fallback_error) from exc

        if response.status_code >= 400:
            message = fallback_error
            if surface_server_error:
                message = self._error_message(response) or fallback_error
            logger.error("API request %s %s failed (%s): %s", method, path, response.status_code, message)
            raise SalonAPIError(message, response.status_code)
        if not response.content:
            return None
        return response.json()

    @staticmethod
    def _error_message(response: Any) -> str:
        try:
            body = response.json()
        except ValueError:
            return ""
        if isinstance(body, dict):
            return body.get("error") or body.get("message") or ""
        return ""

    # ------------------------------------------------------------------
    # Customer-facing operations
    # ------------------------------------------------------------------
    def submit_booking(self, data: Dict[str, Any], token: Optional[str] = None) -> Dict[str, Any]:
        """Create a booking and return it.

        Args:
            data: Booking fields (``serviceId``, ``date``, ``time``,
                ``name``, ``email``, ``phone``, optional ``notes``).
            token: Customer token linking the booking to an account.
        """
        body = self._request(
            "POST",
            "/api/bookings",
            json_body=data,
            token=token,
            fallback_error="Failed to submit booking",
        )
        return body.get("booking", body)

    def get_services(self) -> List[Dict[str, Any]]:
        return self._request(
            "GET",
            "/api/services",
            fallback_error="Failed to fetch services",
            surface_server_error=False,
        )

    def get_available_slots(self, date: str, service_id: str) -> Dict[str, Any]:
        """Return ``{"slots": [...], "duration": minutes}`` for ``date``."""
        return self._request(
            "GET",
            "/api/bookings/available-slots",
            params={"date": date, "serviceId": service_id},
            fallback_error="Failed to fetch available slots",
            surface_server_error=False,
        )

    # ------------------------------------------------------------------
    # Operator operations
    # ------------------------------------------------------------------
    def admin_login(self, email: str, password: str) -> str:
        """Log in as an admin; the token is kept for later calls and returned."""
        body = self._request(
            "POST",
            "/api/admin/login",
            json_body={"email": email, "password": password},
            fallback_error="Login failed",
        )
        self.token = body["token"]
        return self.token

    def list_bookings(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/api/admin/bookings", fallback_error="Failed to fetch bookings")

    def cancel_booking(self, booking_id: str) -> Dict[str, Any]:
        return self._request(
            "PATCH",
            f"/api/admin/bookings/{booking_id}/cancel",
            fallback_error="Failed to cancel booking",
        )

    def set_booking_status(self, booking_id: str, status: str, date: Optional[str] = None) -> Dict[str, Any]:
        return self._request(
            "PATCH",
            f"/api/admin/bookings/{booking_id}/status/{status}",
            json_body={"date": date} if date else {},
            fallback_error="Failed to update booking",
        )
