import pytest

from cloudops.core.binders import (
    NO_BUCKET_LOGGING_XML,
    BindBucketLoggingToXmlPayload,
    BindingError,
    BindNoBucketLoggingToXmlPayload,
)
from cloudops.core.http import HttpRequest
from cloudops.core.s3 import (
    BucketLogging,
    CanonicalUserGrantee,
    EmailAddressGrantee,
    Grant,
    GroupGrantee,
    Permission,
    parse_bucket_logging,
)

XSI = 'xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance"'


def _request() -> HttpRequest:
    return HttpRequest(method="PUT", endpoint="https://s3.amazonaws.com/logs?logging")


def _bind(payload) -> HttpRequest:
    return BindBucketLoggingToXmlPayload().bind_to_request(_request(), payload)


def test_bucket_logging_scenario_document():
    logging = BucketLogging(
        target_bucket="logs",
        target_prefix="access-",
        target_grants=[
            Grant(GroupGrantee("AllUsers"), Permission.READ),
            Grant(CanonicalUserGrantee("abc123", "Alice"), Permission.FULL_CONTROL),
        ],
    )

    request = _bind(logging)

    expected = (
        '<BucketLoggingStatus xmlns="http://s3.amazonaws.com/doc/2006-03-01/">'
        "<LoggingEnabled>"
        "<TargetBucket>logs</TargetBucket>"
        "<TargetPrefix>access-</TargetPrefix>"
        "<TargetGrants>"
        "<Grant>"
        f'<Grantee {XSI} xsi:type="Group"><URI>AllUsers</URI></Grantee>'
        "<Permission>READ</Permission>"
        "</Grant>"
        "<Grant>"
        f'<Grantee {XSI} xsi:type="CanonicalUser">'
        "<ID>abc123</ID><DisplayName>Alice</DisplayName>"
        "</Grantee>"
        "<Permission>FULL_CONTROL</Permission>"
        "</Grant>"
        "</TargetGrants>"
        "</LoggingEnabled>"
        "</BucketLoggingStatus>"
    )
    assert request.payload == expected
    assert request.headers["Content-Type"] == ["text/xml"]
    assert request.headers["Content-Length"] == [str(len(expected.encode("utf-8")))]


def test_each_grantee_variant_is_emitted_in_order():
    logging = BucketLogging(
        target_bucket="logs",
        target_grants=[
            Grant(GroupGrantee("http://acs.amazonaws.com/groups/s3/LogDelivery"), Permission.WRITE),
            Grant(CanonicalUserGrantee("id-with-name", "Bob"), Permission.READ_ACP),
            Grant(CanonicalUserGrantee("id-without-name"), Permission.WRITE_ACP),
            Grant(EmailAddressGrantee("carol@example.com"), Permission.READ),
        ],
    )

    body = _bind(logging).payload

    assert body.count("<Grant>") == 4
    positions = [
        body.index('xsi:type="Group"'),
        body.index("<ID>id-with-name</ID>"),
        body.index("<ID>id-without-name</ID>"),
        body.index('xsi:type="AmazonCustomerByEmail"'),
    ]
    assert positions == sorted(positions)
    assert "<EmailAddress>carol@example.com</EmailAddress>" in body
    assert body.count("<DisplayName>") == 1
    assert "<ID>id-without-name</ID></Grantee>" in body


def test_binding_is_deterministic():
    logging = BucketLogging(
        target_bucket="logs",
        target_prefix="p/",
        target_grants=[Grant(EmailAddressGrantee("a@example.com"), Permission.READ)],
    )

    first = _bind(logging)
    second = _bind(logging)

    assert first.payload == second.payload
    assert first.headers == second.headers


def test_empty_elements_close_like_the_disable_document():
    request = _bind(BucketLogging(target_bucket="logs"))

    assert "<TargetPrefix/>" in request.payload
    assert "<TargetGrants/>" in request.payload
    assert " />" not in request.payload


def test_content_length_counts_utf8_bytes():
    logging = BucketLogging(
        target_bucket="logs",
        target_grants=[Grant(CanonicalUserGrantee("id", "Zoë"), Permission.READ)],
    )

    request = _bind(logging)

    assert request.first_header("Content-Length") == str(len(request.payload.encode("utf-8")))
    assert int(request.first_header("Content-Length")) > len(request.payload)


def test_rebinding_replaces_headers():
    request = _request()
    request.add_header("Content-Type", "application/octet-stream")
    binder = BindBucketLoggingToXmlPayload()

    binder.bind_to_request(request, BucketLogging(target_bucket="a"))
    binder.bind_to_request(request, BucketLogging(target_bucket="b"))

    assert request.headers["Content-Type"] == ["text/xml"]
    assert len(request.headers["Content-Length"]) == 1
    assert "<TargetBucket>b</TargetBucket>" in request.payload


def test_bound_body_parses_back():
    logging = BucketLogging(
        target_bucket="logs",
        target_prefix="access-",
        target_grants=(
            Grant(GroupGrantee("AllUsers"), Permission.READ),
            Grant(CanonicalUserGrantee("abc123"), Permission.FULL_CONTROL),
            Grant(EmailAddressGrantee("a@example.com"), Permission.WRITE),
        ),
    )

    assert parse_bucket_logging(_bind(logging).payload) == logging


def test_unknown_grantee_type_raises_binding_error():
    class _RoleGrantee:
        identifier = "arn:aws:iam::123:role/logs"

    logging = BucketLogging(
        target_bucket="logs",
        target_grants=[Grant(_RoleGrantee(), Permission.READ)],  # type: ignore[arg-type]
    )

    with pytest.raises(BindingError) as excinfo:
        _bind(logging)

    assert "BucketLogging(" in str(excinfo.value)
    assert "_RoleGrantee" in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, TypeError)
    assert excinfo.value.payload is logging


def test_malformed_field_is_wrapped_with_cause():
    logging = BucketLogging(target_bucket=123)  # type: ignore[arg-type]
    request = _request()

    with pytest.raises(BindingError) as excinfo:
        BindBucketLoggingToXmlPayload().bind_to_request(request, logging)

    assert isinstance(excinfo.value.__cause__, TypeError)
    assert request.payload is None
    assert request.headers == {}


def test_runtime_errors_are_not_wrapped():
    class _ExplodingLogging:
        target_bucket = "logs"
        target_prefix = ""

        @property
        def target_grants(self):
            raise RuntimeError("backend unavailable")

    with pytest.raises(RuntimeError, match="backend unavailable") as excinfo:
        _bind(_ExplodingLogging())

    assert not isinstance(excinfo.value, BindingError)


@pytest.mark.parametrize(
    "payload",
    [None, "", BucketLogging(target_bucket="logs"), {"anything": 1}],
)
def test_disable_binder_emits_constant_body(payload):
    request = BindNoBucketLoggingToXmlPayload().bind_to_request(_request(), payload)

    assert request.payload == '<BucketLoggingStatus xmlns="http://s3.amazonaws.com/doc/2006-03-01/"/>'
    assert request.payload == NO_BUCKET_LOGGING_XML
    assert request.headers == {
        "Content-Type": ["text/xml"],
        "Content-Length": [str(len(NO_BUCKET_LOGGING_XML.encode("utf-8")))],
    }


def test_disabled_document_parses_to_none():
    assert parse_bucket_logging(NO_BUCKET_LOGGING_XML) is None
