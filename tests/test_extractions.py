import pytest

from cloudops.core.cloudstack import ExtractMode, TemplateExtraction
from cloudops.core.extractions import (
    extract_templates_parallel,
    extractions_from_document,
    wait_for_extraction,
)


class _ExtractionAdapterStub:
    def __init__(self, pending_polls: int = 0):
        self.pending_polls = pending_polls
        self.queries: list[int] = []

    def extract_template(self, template_id, mode, zone_id=None):
        return template_id * 10

    def query_extraction(self, job_id):
        self.queries.append(job_id)
        if len(self.queries) <= self.pending_polls:
            return None
        return TemplateExtraction.builder().id(job_id).status("Download Complete").build()


def test_extract_templates_parallel_rejects_non_positive_parallel():
    with pytest.raises(ValueError, match="max_parallel"):
        extract_templates_parallel(_ExtractionAdapterStub(), [1], ExtractMode.HTTP_DOWNLOAD, 0)


def test_extract_templates_parallel_returns_empty_on_empty_input():
    assert extract_templates_parallel(_ExtractionAdapterStub(), [], ExtractMode.HTTP_DOWNLOAD, 2) == {}


def test_extract_templates_parallel_starts_all_templates():
    jobs = extract_templates_parallel(
        _ExtractionAdapterStub(), [1, 2, 3], ExtractMode.HTTP_DOWNLOAD, 2
    )

    assert jobs == {1: 10, 2: 20, 3: 30}


def test_wait_for_extraction_polls_until_done():
    adapter = _ExtractionAdapterStub(pending_polls=2)

    extraction = wait_for_extraction(adapter, 7, poll_interval=0)

    assert extraction.id == 7
    assert adapter.queries == [7, 7, 7]


def test_extractions_from_document_sorts_by_id():
    extractions = extractions_from_document(
        [{"id": 5, "name": "b"}, {"id": 2, "name": "a"}]
    )

    assert [e.id for e in extractions] == [2, 5]


def test_extractions_from_document_unwraps_async_job_result():
    document = {
        "queryasyncjobresultresponse": {
            "jobstatus": 1,
            "jobresult": {"template": {"id": 3, "zonename": "Basic1"}},
        }
    }

    assert extractions_from_document(document) == [
        TemplateExtraction.builder().id(3).zone_name("Basic1").build()
    ]


def test_extractions_from_document_rejects_non_objects():
    with pytest.raises(ValueError, match="JSON object"):
        extractions_from_document([1, 2])


def test_extractions_from_document_rejects_non_object_job_response():
    with pytest.raises(ValueError, match="JSON object"):
        extractions_from_document({"queryasyncjobresultresponse": []})
