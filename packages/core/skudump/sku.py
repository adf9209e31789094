"""SkuRecord — the flattened catalog entry written to the pricing dump.

Also holds the two pure pieces of the pipeline: the region filter and the
first-tier price extractor.
"""

from __future__ import annotations

import copy
from typing import Any, NamedTuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_pascal

# Region tags that apply to every requested region
_WILDCARD_REGIONS = ("global", "multi-region")


def region_matches(service_regions: list[str], region: str) -> bool:
    """True if the SKU is priced for ``region``, globally, or multi-regionally."""
    for sr in service_regions:
        if sr == region or sr in _WILDCARD_REGIONS:
            return True
    return False


def _safe_int(val: Any) -> int:
    # int64 fields arrive as JSON strings
    try:
        return int(val)
    except (ValueError, TypeError):
        return 0


def _safe_float(val: Any) -> float:
    try:
        return float(val)
    except (ValueError, TypeError):
        return 0.0


class PriceInfo(NamedTuple):
    nanos: int = 0
    units: int = 0
    currency_code: str = ""
    price: float = 0.0
    price_per_unit: str = ""


def _as_dict(val: Any) -> dict:
    return val if isinstance(val, dict) else {}


def _pricing_expression(pricing_info: list[dict]) -> dict:
    if not pricing_info or not isinstance(pricing_info, list):
        return {}
    return _as_dict(_as_dict(pricing_info[0]).get("pricingExpression"))


def extract_price(pricing_info: list[dict]) -> PriceInfo:
    """Price the first tiered rate of the first pricing-info entry.

    Returns an all-zero PriceInfo when there is no tiered rate.
    """
    expr = _pricing_expression(pricing_info)
    tiers = expr.get("tieredRates") or []
    if not tiers or not isinstance(tiers, list):
        return PriceInfo()

    unit_price = _as_dict(_as_dict(tiers[0]).get("unitPrice"))
    nanos = _safe_int(unit_price.get("nanos", 0))
    units = _safe_int(unit_price.get("units", 0))
    currency_code = unit_price.get("currencyCode", "")
    price = units + nanos / 1e9
    usage_desc = expr.get("usageUnitDescription", "")
    return PriceInfo(
        nanos=nanos,
        units=units,
        currency_code=currency_code,
        price=price,
        price_per_unit=f"{price:.10f} {currency_code} per {usage_desc}",
    )


class SkuRecord(BaseModel):
    """One matching SKU. Serialized with PascalCase keys.

    Raw list and dict fields are deep copies of the API payload, so the
    record shares no mutable state with it.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_pascal, populate_by_name=True)

    name: str = ""
    sku_id: str = ""
    description: str = ""
    service_display_name: str = ""
    resource_family: str = ""
    resource_group: str = ""
    usage_type: str = ""
    service_regions: list[str] = Field(default_factory=list)
    pricing_info: list[dict[str, Any]] = Field(default_factory=list)
    service_provider_name: str = ""
    geo_taxonomy: dict[str, Any] | None = None
    # Always empty; kept so the key set matches earlier dumps
    mapping: str = ""
    nanos: int = 0
    units: int = 0
    currency_code: str = ""
    usage_unit: str = ""
    usage_unit_description: str = ""
    base_unit: str = ""
    base_unit_description: str = ""
    base_unit_conversion_factor: float = 0.0
    display_quantity: float = 0.0
    calculated_price: float = 0.0
    price_per_unit: str = ""

    @classmethod
    def from_api(cls, sku: dict) -> SkuRecord:
        """Flatten a raw catalog SKU into a record."""
        category = _as_dict(sku.get("category"))
        pricing_info = copy.deepcopy(sku.get("pricingInfo") or [])
        expr = _pricing_expression(pricing_info)
        price = extract_price(pricing_info)

        return cls(
            name=sku.get("name", ""),
            sku_id=sku.get("skuId", ""),
            description=sku.get("description", ""),
            service_display_name=category.get("serviceDisplayName", ""),
            resource_family=category.get("resourceFamily", ""),
            resource_group=category.get("resourceGroup", ""),
            usage_type=category.get("usageType", ""),
            service_regions=list(sku.get("serviceRegions") or []),
            pricing_info=pricing_info,
            service_provider_name=sku.get("serviceProviderName", ""),
            geo_taxonomy=copy.deepcopy(sku.get("geoTaxonomy")),
            nanos=price.nanos,
            units=price.units,
            currency_code=price.currency_code,
            usage_unit=expr.get("usageUnit", ""),
            usage_unit_description=expr.get("usageUnitDescription", ""),
            base_unit=expr.get("baseUnit", ""),
            base_unit_description=expr.get("baseUnitDescription", ""),
            base_unit_conversion_factor=_safe_float(expr.get("baseUnitConversionFactor", 0)),
            display_quantity=_safe_float(expr.get("displayQuantity", 0)),
            calculated_price=price.price,
            price_per_unit=price.price_per_unit,
        )

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)
