"""Catalog client adapters — list raw SKUs from a billing catalog API."""

from __future__ import annotations

import ssl
import urllib.request
from abc import ABC, abstractmethod
from typing import Any, Callable, Iterator


def _ssl_context() -> ssl.SSLContext:
    """Create an SSL context using certifi CA bundle (macOS workaround)."""
    try:
        import certifi

        return ssl.create_default_context(cafile=certifi.where())
    except ImportError:
        return ssl.create_default_context()


def urlopen_safe(req: urllib.request.Request, timeout: int = 30) -> bytes:
    """urlopen with certifi SSL — use this instead of raw urllib.request.urlopen."""
    ctx = _ssl_context()
    with urllib.request.urlopen(req, timeout=timeout, context=ctx) as resp:
        return resp.read()


class CatalogClientError(ValueError):
    """Raised when a catalog client cannot be constructed."""


# Called with (service_id, message) for every skipped fetch error
ErrorCallback = Callable[[str, str], Any]


class CatalogClient(ABC):
    """Abstract base for billing catalog clients.

    Subclasses page through a provider's "list SKUs for service" call and
    yield the raw SKU entries as plain dicts, in API order.
    """

    provider: str

    @abstractmethod
    def list_skus(self, service_id: str, on_error: ErrorCallback | None = None) -> Iterator[dict]:
        """Lazily yield raw SKU entries for one service.

        The iterator is single-pass. Errors that only affect part of the
        listing are reported through ``on_error`` and skipped.
        """


__all__ = ["CatalogClient", "CatalogClientError", "ErrorCallback", "urlopen_safe"]
