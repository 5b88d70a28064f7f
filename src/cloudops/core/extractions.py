"""Template extraction workflows.

Functions here start CloudStack extractions and wait for their results.
Like the rest of the core they are synchronous and talk to CloudStack only
through an adapter, which keeps polling and concurrency explicit.
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any, Iterable, Protocol

from cloudops.core.cloudstack import ExtractMode, TemplateExtraction

logger = logging.getLogger(__name__)


class ExtractionAdapter(Protocol):
    """Interface for starting extractions and querying their jobs."""

    def extract_template(
        self, template_id: int, mode: ExtractMode, zone_id: int | None = None
    ) -> int:
        """Start an extraction and return its async job id."""
        ...

    def query_extraction(self, job_id: int) -> TemplateExtraction | None:
        """Return the finished extraction, or None while pending."""
        ...


def extract_templates_parallel(
    adapter: ExtractionAdapter,
    template_ids: list[int],
    mode: ExtractMode,
    max_parallel: int,
    zone_id: int | None = None,
) -> dict[int, int]:
    """
    Start several template extractions concurrently.

    Args:
        adapter: CloudStack adapter used to start the extractions.
        template_ids: Templates to extract.
        mode: Extraction mode for every template.
        max_parallel: Maximum number of requests in flight.
        zone_id: Optional zone to extract from.

    Returns:
        Mapping of template id to the async job id that extracts it.
    """
    if max_parallel < 1:
        raise ValueError("max_parallel must be >= 1")
    if not template_ids:
        return {}

    jobs: dict[int, int] = {}

    with ThreadPoolExecutor(max_workers=max_parallel) as pool:
        futures = {
            pool.submit(adapter.extract_template, template_id, mode, zone_id): template_id
            for template_id in template_ids
        }

        for f in as_completed(futures):
            jobs[futures[f]] = f.result()

    return jobs


def wait_for_extraction(
    adapter: ExtractionAdapter,
    job_id: int,
    poll_interval: float = 5,
) -> TemplateExtraction:
    """
    Block until an extraction job finishes and return its result.

    Args:
        adapter: CloudStack adapter used to query the job.
        job_id: Async job started by ``extract_template``.
        poll_interval: Seconds to wait between queries.

    Raises:
        AsyncJobError: If the job failed.
    """
    while True:
        extraction = adapter.query_extraction(job_id)
        if extraction is not None:
            return extraction

        logger.debug(f"Extraction job {job_id} still pending")
        time.sleep(poll_interval)


def extractions_from_document(document: Any) -> list[TemplateExtraction]:
    """
    Decode extractions from a CloudStack JSON document, sorted by id.

    Accepts a single extraction object, a list of them, an object wrapping
    one under ``template``, or a full ``queryasyncjobresultresponse``.
    """
    if isinstance(document, dict) and "queryasyncjobresultresponse" in document:
        response = document["queryasyncjobresultresponse"]
        if not isinstance(response, dict):
            raise ValueError(f"Expected a JSON object, got {type(response).__name__}")
        document = response.get("jobresult") or {}
    if isinstance(document, dict) and "template" in document:
        document = document["template"]

    items: Iterable[Any] = document if isinstance(document, list) else [document]
    extractions = []
    for item in items:
        if not isinstance(item, dict):
            raise ValueError(f"Expected a JSON object, got {type(item).__name__}")
        extractions.append(TemplateExtraction.from_wire(item))
    return sorted(extractions)
