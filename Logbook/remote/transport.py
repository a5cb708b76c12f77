"""
HTTP transport for the remote logbook store.
Performs the list/create/update/delete round trips and reports each outcome
as a RemoteResult. Deciding what an outcome means is left to the SyncManager.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests # Using requests library for HTTP communication

from ..config import Settings
from ..errors import TransportError

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class RemoteResult:
    ok: bool
    status_code: int = 0
    message: Optional[str] = None
    data: Any = None


class LogbookApiClient:
    """Thin requests wrapper around the /logbook endpoints."""

    def __init__(self, base_url: str, timeout: float = 30.0, session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_settings(cls, settings: Settings) -> "LogbookApiClient":
        return cls(settings.api_base_url, timeout=settings.request_timeout_s)

    def _headers(self) -> Dict[str, str]:
        return {"Content-Type": "application/json", "Accept": "application/json"}

    def _request(self, method: str, path: str, **kwargs) -> RemoteResult:
        url = f"{self.base_url}{path}"
        log.info(f"{method} {url}")
        try:
            response = self.session.request(method, url, headers=self._headers(), timeout=self.timeout, **kwargs)
        except requests.exceptions.RequestException as e: # Connection errors, timeouts, invalid URLs
            raise TransportError(f"{method} {url} failed: {e}", url=url) from e

        try:
            body = response.json()
        except ValueError:
            body = None # Error pages from proxies are often HTML

        message = body.get("message") if isinstance(body, dict) else None
        data = body.get("data") if isinstance(body, dict) else None

        if not response.ok:
            log.warning(f"{method} {url} rejected with {response.status_code}: {message or 'no message'}")
        else:
            log.debug(f"{method} {url} -> {response.status_code}")
        return RemoteResult(ok=response.ok, status_code=response.status_code, message=message, data=data)

    def list_entries(self, search_term: str = "", status_filter: str = "all", page: int = 1, limit: int = 99999) -> RemoteResult:
        params = {"page": page, "limit": limit, "search": search_term, "status": status_filter}
        return self._request("GET", "/logbook/list", params=params)

    def create_entry(self, payload: Dict[str, Any]) -> RemoteResult:
        return self._request("POST", "/logbook/create", json=payload)

    def update_entry(self, sequence_number: int, payload: Dict[str, Any]) -> RemoteResult:
        return self._request("PUT", f"/logbook/update/{sequence_number}", json=payload)

    def delete_entry(self, sequence_number: int) -> RemoteResult:
        return self._request("DELETE", f"/logbook/delete/{sequence_number}")

    def close(self):
        self.session.close()
