from __future__ import annotations

import json
from typing import Any
from urllib.parse import urlencode

from cloudops.core.cloudstack import ExtractMode, TemplateExtraction
from cloudops.core.http import HttpHeaders, HttpRequest, MediaType
from cloudops.core.transport import HttpTransport

JOB_PENDING = 0
JOB_SUCCEEDED = 1
JOB_FAILED = 2


class AsyncJobError(RuntimeError):
    """Raised when a CloudStack asynchronous job ends in failure."""

    def __init__(self, job_id: int, message: str | None = None):
        super().__init__(f"Async job {job_id} failed: {message or 'unknown error'}")
        self.job_id = job_id


class CloudStackAdapter:
    """Adapter around the CloudStack template extraction APIs."""

    def __init__(self, transport: HttpTransport, endpoint: str) -> None:
        self.transport = transport
        self.endpoint = endpoint.rstrip("/")

    def _command(self, command: str, **params: Any) -> dict[str, Any]:
        """Issue a CloudStack command and return the decoded JSON body."""
        query = {"response": "json", "command": command}
        query.update({k: v for k, v in params.items() if v is not None})
        request = HttpRequest(
            method="GET",
            endpoint=f"{self.endpoint}?{urlencode(query)}",
            headers={HttpHeaders.ACCEPT: [MediaType.APPLICATION_JSON]},
        )
        response = self.transport.send(request)
        response.raise_for_status()
        return json.loads(response.text())

    def extract_template(
        self,
        template_id: int,
        mode: ExtractMode,
        zone_id: int | None = None,
    ) -> int:
        """Start extracting a template and return the async job id."""
        body = self._command(
            "extractTemplate",
            id=template_id,
            mode=mode.value,
            zoneid=zone_id,
        )
        return int(body["extracttemplateresponse"]["jobid"])

    def query_extraction(self, job_id: int) -> TemplateExtraction | None:
        """
        Return the extraction produced by a job, or None while it is pending.

        Raises:
            AsyncJobError: If the job failed.
        """
        body = self._command("queryAsyncJobResult", jobid=job_id)
        result = body["queryasyncjobresultresponse"]
        status = int(result.get("jobstatus", JOB_PENDING))

        if status == JOB_PENDING:
            return None
        if status == JOB_FAILED:
            job_result = result.get("jobresult") or {}
            raise AsyncJobError(job_id, job_result.get("errortext"))

        return TemplateExtraction.from_wire(result["jobresult"]["template"])
