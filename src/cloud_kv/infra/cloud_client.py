"""requests-backed implementation of :class:`~cloud_kv.core.protocols.CloudClient`.

This module is the **only** place in the codebase that imports
``requests``.  Transport errors, non-2xx responses and malformed
payloads are caught here and re-raised as
:class:`~cloud_kv.exceptions.RemoteError` — nothing raw escapes the
infrastructure boundary.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import requests

from cloud_kv.config import DEFAULT_REQUEST_TIMEOUT
from cloud_kv.core.models import AppLink, ResourceItem
from cloud_kv.exceptions import RemoteError

logger = logging.getLogger(__name__)

_STORES_PATH = "/api/key-value-stores"


class HttpCloudClient:
    """Concrete :class:`CloudClient` talking to the cloud REST API.

    Usage::

        client = HttpCloudClient("https://cloud.example.com", token)
        stores = client.list_key_value_stores()

    This class satisfies the :class:`~cloud_kv.core.protocols.CloudClient`
    protocol structurally — no explicit inheritance required.
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        *,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        self._base_url: str = base_url.rstrip("/")
        self._timeout: float = timeout
        self._session: requests.Session = session or requests.Session()
        self._session.headers.update(
            {
                "Authorization": f"Bearer {token}",
                "Accept": "application/json",
            }
        )

    # ------------------------------------------------------------------
    # Protocol methods
    # ------------------------------------------------------------------

    def list_key_value_stores(self) -> list[ResourceItem]:
        """Fetch every key value store with its app links."""
        payload = self._get_json(_STORES_PATH)
        if isinstance(payload, dict):
            raw_stores = payload.get("keyValueStores", payload.get("key_value_stores"))
        else:
            raw_stores = payload
        if not isinstance(raw_stores, list):
            raise RemoteError("Unexpected response listing key value stores.")
        return [self._parse_store(entry) for entry in raw_stores]

    def create_key_value_store(
        self,
        name: str,
        resource_label: dict[str, Any] | None,
    ) -> None:
        body = {"resourceLabel": resource_label} if resource_label is not None else None
        self._request("POST", self._store_path(name), json=body)

    def delete_key_value_store(self, name: str) -> None:
        self._request("DELETE", self._store_path(name))

    def rename_key_value_store(self, name: str, new_name: str) -> None:
        self._request("PATCH", f"{self._store_path(name)}/rename", json={"newName": new_name})

    def add_key_value_pair(self, store: str, key: str, value: str) -> None:
        self._request("POST", f"{self._store_path(store)}/keys", json={"key": key, "value": value})

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    @staticmethod
    def _store_path(name: str) -> str:
        return f"{_STORES_PATH}/{quote(name, safe='')}"

    def _request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
    ) -> requests.Response:
        """Send one request and map every failure to :class:`RemoteError`."""
        url = f"{self._base_url}{path}"
        logger.debug("%s %s", method, url)
        try:
            response = self._session.request(method, url, json=json, timeout=self._timeout)
        except requests.exceptions.RequestException as exc:
            raise RemoteError(
                f"Could not reach {self._base_url}: {exc}",
                hint="Check your network connection and the configured cloud URL.",
            ) from exc

        logger.debug("%s %s -> %s", method, url, response.status_code)
        if not response.ok:
            self._raise_for_status(response)
        return response

    def _get_json(self, path: str) -> Any:
        response = self._request("GET", path)
        try:
            return response.json()
        except ValueError as exc:
            raise RemoteError(f"Invalid JSON in response from {path}") from exc

    # ------------------------------------------------------------------
    # Response mapping
    # ------------------------------------------------------------------

    @staticmethod
    def _raise_for_status(response: requests.Response) -> None:
        """Translate an HTTP error response into a :class:`RemoteError`.

        Always raises.
        """
        detail = response.text.strip() or response.reason or "no details"
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            detail = str(body.get("detail") or body.get("title") or body.get("message") or detail)

        hint = None
        if response.status_code == 401:
            hint = "Your access token may have expired. Log in again."
        raise RemoteError(f"HTTP {response.status_code}: {detail}", hint=hint)

    @staticmethod
    def _parse_store(raw: Any) -> ResourceItem:
        """Convert one raw store dict into a :class:`ResourceItem`."""
        if not isinstance(raw, dict) or "name" not in raw:
            raise RemoteError("Unexpected key value store entry in response.")
        links = tuple(
            AppLink(
                app_name=str(link.get("appName", link.get("app_name", ""))),
                label=str(link.get("label", "")),
            )
            for link in raw.get("links") or []
            if isinstance(link, dict)
        )
        return ResourceItem(name=str(raw["name"]), links=links)
