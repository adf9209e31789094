"""Shared fixtures for core tests."""

from __future__ import annotations

import json

import pytest
from skudump.adapters.gcp import CloudCatalogClient


def pricing_info(
    units: int | str = 0,
    nanos: int = 0,
    currency: str = "USD",
    usage_unit: str = "h",
    usage_desc: str = "hour",
) -> list[dict]:
    """Build a catalog pricingInfo list with a single tiered rate."""
    return [
        {
            "summary": "",
            "pricingExpression": {
                "usageUnit": usage_unit,
                "usageUnitDescription": usage_desc,
                "baseUnit": "s",
                "baseUnitDescription": "second",
                "baseUnitConversionFactor": 3600,
                "displayQuantity": 1,
                "tieredRates": [
                    {
                        "startUsageAmount": 0,
                        "unitPrice": {"currencyCode": currency, "units": str(units), "nanos": nanos},
                    }
                ],
            },
            "currencyConversionRate": 1,
            "effectiveTime": "2024-01-01T00:00:00Z",
        }
    ]


def make_sku(
    sku_id: str = "SKU-001",
    regions: list[str] | None = None,
    description: str = "N2 Instance Core running in Dammam",
    units: int | str = 0,
    nanos: int = 31_000_000,
    pricing: list[dict] | None = None,
) -> dict:
    return {
        "name": f"services/6F81-5844-456A/skus/{sku_id}",
        "skuId": sku_id,
        "description": description,
        "category": {
            "serviceDisplayName": "Compute Engine",
            "resourceFamily": "Compute",
            "resourceGroup": "N2Standard",
            "usageType": "OnDemand",
        },
        "serviceRegions": ["me-central2"] if regions is None else regions,
        "pricingInfo": pricing_info(units, nanos) if pricing is None else pricing,
        "serviceProviderName": "Google",
        "geoTaxonomy": {"type": "REGIONAL", "regions": ["me-central2"]},
    }


def make_client(pages: list[dict | bytes | Exception], api_key: str = "test-key") -> CloudCatalogClient:
    """A client whose HTTP layer replays ``pages`` in order and records URLs."""
    client = CloudCatalogClient(api_key=api_key)
    queue = list(pages)
    client.requested_urls = []  # type: ignore[attr-defined]

    def _get(url: str) -> bytes:
        client.requested_urls.append(url)  # type: ignore[attr-defined]
        item = queue.pop(0)
        if isinstance(item, Exception):
            raise item
        if isinstance(item, bytes):
            return item
        return json.dumps(item).encode()

    client._get = _get
    return client


@pytest.fixture
def region_file(tmp_path):
    p = tmp_path / "gcp.yml"
    p.write_text("region:\n  me-central2:\n    location: Dammam\n  us-central1:\n    location: Iowa\n")
    return p


@pytest.fixture(name="make_sku")
def make_sku_fixture():
    return make_sku


@pytest.fixture(name="make_client")
def make_client_fixture():
    return make_client


@pytest.fixture(name="pricing_info")
def pricing_info_fixture():
    return pricing_info
