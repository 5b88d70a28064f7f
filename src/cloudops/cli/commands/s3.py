"""Commands for Amazon S3 request bodies."""

import typer

from cloudops.cli.common.exits import die, exit_from_exc
from cloudops.cli.common.grant_builder import build_grants
from cloudops.cli.common.options import BucketOpt, DisableOpt, GrantOpt, PrefixOpt
from cloudops.cli.common.output import out
from cloudops.core.binders import (
    BindBucketLoggingToXmlPayload,
    BindingError,
    BindNoBucketLoggingToXmlPayload,
)
from cloudops.core.http import HttpRequest
from cloudops.core.s3 import BucketLogging

s3_app = typer.Typer(
    help="Render Amazon S3 request bodies.",
    no_args_is_help=True,
)


@s3_app.command("logging-body")
def logging_body(
    bucket: str | None = BucketOpt,
    prefix: str = PrefixOpt,
    grant: list[str] = GrantOpt,
    disable: bool = DisableOpt,
):
    """
    Print the PUT ?logging body and headers for a logging configuration.
    """
    request = HttpRequest(method="PUT", endpoint="?logging")

    if disable:
        BindNoBucketLoggingToXmlPayload().bind_to_request(request)
    else:
        if not bucket:
            die("Missing --bucket (required unless --disable is given).", code=2)

        try:
            grants = build_grants(grant)
        except ValueError as e:
            die(str(e), code=2)

        logging_config = BucketLogging(
            target_bucket=bucket, target_prefix=prefix, target_grants=tuple(grants)
        )
        try:
            BindBucketLoggingToXmlPayload().bind_to_request(request, logging_config)
        except BindingError as exc:
            exit_from_exc(exc, message=str(exc), code=1)

    out.kv({name: ", ".join(values) for name, values in request.headers.items()})
    out.raw(str(request.payload))
