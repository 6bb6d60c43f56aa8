"""
Upstream API client
===================

Thin wrapper around a requests session for the PointNow REST API.
Every analytics call carries the admin's bearer token; login does not.
"""

import requests
from typing import Optional, Dict, Any

from .logging_service import LoggingService


UPSTREAM_EXTENSION_KEY = 'pointnow_upstream'


class UpstreamUnavailable(Exception):
    """Raised when the upstream API cannot be reached or returns an unreadable body"""


class UpstreamError(Exception):
    """Raised when the upstream answers with a non-2xx status"""

    def __init__(self, status_code, message):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class UpstreamResponse:
    """Status code and decoded JSON body of an upstream call"""

    def __init__(self, status_code: int, data: Any):
        self.status_code = status_code
        self.data = data

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    def message(self, fallback: str) -> str:
        """Upstream-provided message, or the fallback when there is none"""
        if isinstance(self.data, dict) and self.data.get('message'):
            return self.data['message']
        return fallback

    def __repr__(self):
        return f"<UpstreamResponse {self.status_code}>"


class UpstreamClient:
    """Client for the PointNow REST API"""

    def __init__(self, base_url: str, timeout: Optional[float] = None,
                 session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()

    def url_for(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def request(self, method: str, path: str, params: Optional[Dict[str, str]] = None,
                json: Optional[Dict[str, Any]] = None, token: Optional[str] = None) -> UpstreamResponse:
        """
        Call the upstream API and decode its JSON body

        Args:
            method: HTTP method
            path: Upstream path, e.g. /analytics/business/summary
            params: Query parameters (already narrowed to the route's allow-list)
            json: Request body
            token: Bearer token; omitted from the headers when None

        Raises:
            UpstreamUnavailable: network failure or a body that is not JSON
        """
        headers = {'Content-Type': 'application/json'}
        if token:
            headers['Authorization'] = f'Bearer {token}'

        try:
            response = self.session.request(
                method,
                self.url_for(path),
                params=params or None,
                json=json,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise UpstreamUnavailable(f"{method} {path} failed: {e}") from e

        LoggingService.log_api_call('upstream', path, method, response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamUnavailable(
                f"{method} {path} returned a non-JSON body (status {response.status_code})"
            ) from e

        return UpstreamResponse(response.status_code, data)

    def get(self, path, params=None, token=None) -> UpstreamResponse:
        return self.request('GET', path, params=params, token=token)

    def post(self, path, json=None, token=None) -> UpstreamResponse:
        return self.request('POST', path, json=json, token=token)


def get_upstream_client():
    """The app's UpstreamClient, created on first use from API_URL / UPSTREAM_TIMEOUT"""
    from flask import current_app
    from .config import get_config_value

    client = current_app.extensions.get(UPSTREAM_EXTENSION_KEY)
    if client is None:
        client = UpstreamClient(get_config_value('API_URL'), timeout=get_config_value('UPSTREAM_TIMEOUT'))
        current_app.extensions[UPSTREAM_EXTENSION_KEY] = client
    return client
