"""Packaging acceptance tests — verify the package is usable after install."""

from __future__ import annotations

import pytest
import skudump


class TestImports:
    """Verify all public API symbols are importable."""

    def test_core_symbols_importable(self):
        from skudump import RegionConfig, SkuRecord, extract_price, region_matches

        assert RegionConfig is not None
        assert SkuRecord is not None
        assert extract_price is not None
        assert region_matches is not None

    def test_lazy_imports(self):
        from skudump import CloudCatalogClient, FetchSummary, fetch_pricing, write_pricing

        assert CloudCatalogClient is not None
        assert FetchSummary is not None
        assert fetch_pricing is not None
        assert write_pricing is not None

    def test_invalid_import_raises(self):
        with pytest.raises(AttributeError):
            _ = skudump.NoSuchThing  # type: ignore[attr-defined]


class TestVersion:
    def test_version_is_string(self):
        assert isinstance(skudump.__version__, str)
        assert "." in skudump.__version__
