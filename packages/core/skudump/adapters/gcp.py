"""GCP Cloud Billing Catalog API client.

Lists SKUs for a service from the public catalog endpoint:
  https://cloudbilling.googleapis.com/v1/services/{service_id}/skus

Authenticated with an API key passed as the ``key`` query parameter.
"""

from __future__ import annotations

import json
import logging
import urllib.parse
import urllib.request
from typing import Any, Iterator

from skudump.adapters import CatalogClient, CatalogClientError, ErrorCallback, urlopen_safe

logger = logging.getLogger(__name__)

_BASE_URL = "https://cloudbilling.googleapis.com/v1"
_TIMEOUT = 30  # seconds
_PAGE_SIZE = 500

# Services fetched by default, in output order
SERVICE_IDS: dict[str, str] = {
    "6F81-5844-456A": "Compute Engine",
    "E505-1604-58F8": "Networking",
    "95FF-2EF5-5EA1": "Cloud Storage",
    "58CD-E7C3-72CA": "Cloud Monitoring",
    "9662-B51E-5089": "Cloud SQL",
    "CCD8-9BF1-090E": "Kubernetes Engine",
    "5490-F7B7-8DF6": "Cloud Logging",
}


class CloudCatalogClient(CatalogClient):
    """Pages through the Cloud Billing Catalog API with an API key.

    A page that cannot be fetched or decoded ends the listing for that
    service, since the next page token is lost with it. Entries that are not
    JSON objects are skipped. Both cases are logged and reported through the
    ``on_error`` callback rather than raised.
    """

    provider = "gcp"

    def __init__(self, api_key: str, timeout: int = _TIMEOUT, page_size: int = _PAGE_SIZE):
        if not api_key:
            raise CatalogClientError("Cannot create Cloud Billing client: API key is empty")
        self._api_key = api_key
        self._timeout = timeout
        self._page_size = page_size

    def list_skus(self, service_id: str, on_error: ErrorCallback | None = None) -> Iterator[dict]:
        page_token = ""
        while True:
            try:
                data = self._fetch_page(service_id, page_token)
            except (OSError, ValueError) as exc:
                # URLError and socket timeouts are OSErrors; JSONDecodeError is a ValueError
                self._report(service_id, f"Error fetching SKU page, skipping: {exc}", on_error)
                return

            for sku in data.get("skus") or []:
                if not isinstance(sku, dict):
                    self._report(service_id, f"Malformed SKU entry, skipping: {sku!r}", on_error)
                    continue
                yield sku

            page_token = data.get("nextPageToken", "")
            if not page_token:
                return

    # API helpers

    def _fetch_page(self, service_id: str, page_token: str) -> dict:
        params: dict[str, Any] = {
            "key": self._api_key,
            "pageSize": self._page_size,
        }
        if page_token:
            params["pageToken"] = page_token

        url = f"{_BASE_URL}/services/{service_id}/skus?" + urllib.parse.urlencode(params)
        logger.debug("Requesting SKU page for %s (token=%r)", service_id, page_token)
        data = json.loads(self._get(url))
        if not isinstance(data, dict):
            raise ValueError(f"unexpected response body of type {type(data).__name__}")
        return data

    def _get(self, url: str) -> bytes:
        req = urllib.request.Request(url, headers={"Accept": "application/json"})
        return urlopen_safe(req, timeout=self._timeout)

    @staticmethod
    def _report(service_id: str, message: str, on_error: ErrorCallback | None) -> None:
        logger.warning("%s: %s", service_id, message)
        if on_error is not None:
            on_error(service_id, message)
