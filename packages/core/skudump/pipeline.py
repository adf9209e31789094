"""Pricing dump pipeline — fetch catalog SKUs, keep the region's, write JSON."""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Callable, Iterable

from skudump.adapters import CatalogClient
from skudump.adapters.gcp import SERVICE_IDS
from skudump.sku import SkuRecord, region_matches

logger = logging.getLogger(__name__)

# Pause between services to stay under the catalog API rate limit
DEFAULT_SERVICE_DELAY = 3.0

_TIMESTAMP_FORMAT = "%Y-%m-%d-%H-%M-%S"


@dataclass
class FetchSummary:
    region: str
    records: list[SkuRecord] = field(default_factory=list)
    counts: dict[str, int] = field(default_factory=dict)
    errors: list[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.records)


def fetch_pricing(
    client: CatalogClient,
    region: str,
    service_ids: Iterable[str] | None = None,
    delay: float = DEFAULT_SERVICE_DELAY,
    sleep: Callable[[float], None] = time.sleep,
    on_service: Callable[[str], None] | None = None,
) -> FetchSummary:
    """Collect every SKU priced for ``region`` across the given services.

    Records keep arrival order: service order first, then API page order.
    Fetch errors are logged and collected in ``FetchSummary.errors``; they
    never abort the run.

    Args:
        client: Catalog client to list SKUs with.
        region: Target region, e.g. "me-central2".
        service_ids: Services to query. Defaults to SERVICE_IDS.
        delay: Seconds to wait between two services.
        sleep: Sleep function, replaceable in tests.
        on_service: Called with each service id before it is fetched.
    """
    ids = list(SERVICE_IDS if service_ids is None else service_ids)
    summary = FetchSummary(region=region)

    def _on_error(service_id: str, message: str) -> None:
        summary.errors.append(f"{service_id}: {message}")

    for i, service_id in enumerate(ids):
        if i and delay > 0:
            sleep(delay)

        if on_service is not None:
            on_service(service_id)

        matched = 0
        for sku in client.list_skus(service_id, on_error=_on_error):
            if not region_matches(sku.get("serviceRegions") or [], region):
                continue
            try:
                record = SkuRecord.from_api(sku)
            except (ValueError, TypeError, AttributeError) as exc:
                # pydantic ValidationError is a ValueError
                message = f"Malformed SKU {sku.get('skuId', '?')}, skipping: {exc}"
                logger.warning("%s: %s", service_id, message)
                _on_error(service_id, message)
                continue
            summary.records.append(record)
            matched += 1

        summary.counts[service_id] = matched
        logger.info("Matched %d SKUs for %s in %s", matched, service_id, region)

    logger.info("Fetched %d SKUs for %s (%d errors)", summary.total, region, len(summary.errors))
    return summary


def records_to_json(records: list[SkuRecord], indent: int = 2) -> str:
    """Serialize records as a JSON array. Raises ValueError on non-finite floats."""
    return json.dumps([r.to_dict() for r in records], indent=indent, allow_nan=False)


def output_filename(region: str, now: datetime | None = None) -> str:
    stamp = (now or datetime.now()).strftime(_TIMESTAMP_FORMAT)
    return f"pricing-{region}-{stamp}.json"


def write_pricing(
    records: list[SkuRecord],
    region: str,
    output_dir: str | Path = ".",
    now: datetime | None = None,
) -> Path:
    """Write records to ``pricing-<region>-<timestamp>.json`` and return its path.

    Serialization happens before the file is opened, so a failure there
    leaves nothing behind. OSError from the write propagates.
    """
    payload = records_to_json(records)
    path = Path(output_dir) / output_filename(region, now)
    path.write_text(payload)
    logger.info("Wrote %d SKUs to %s", len(records), path)
    return path
