"""skudump — dump regional Google Cloud SKU pricing to JSON."""

from skudump.config import ConfigError, RegionConfig, load_region_config
from skudump.sku import PriceInfo, SkuRecord, extract_price, region_matches

__version__ = "0.1.0"

__all__ = [
    "CloudCatalogClient",
    "ConfigError",
    "FetchSummary",
    "PriceInfo",
    "RegionConfig",
    "SkuRecord",
    "extract_price",
    "fetch_pricing",
    "load_region_config",
    "region_matches",
    "write_pricing",
]


def __getattr__(name: str):
    # Lazy imports keep `import skudump` free of network modules
    if name == "CloudCatalogClient":
        from skudump.adapters.gcp import CloudCatalogClient

        return CloudCatalogClient
    if name == "FetchSummary":
        from skudump.pipeline import FetchSummary

        return FetchSummary
    if name == "fetch_pricing":
        from skudump.pipeline import fetch_pricing

        return fetch_pricing
    if name == "write_pricing":
        from skudump.pipeline import write_pricing

        return write_pricing
    raise AttributeError(f"module 'skudump' has no attribute {name!r}")
